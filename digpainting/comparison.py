"""Target image analysis: edge gradients, HSL values and difference scoring."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image as PILImage

DEFAULT_TARGET_PATH = "assets/targets/mona_lisa.jpg"


class SobelType(enum.Enum):
    """Direction of the gradient kernel."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


_KERNELS: dict[SobelType, tuple[tuple[tuple[int, int], int], ...]] = {
    SobelType.HORIZONTAL: (
        ((-1, -1), -1),
        ((1, -1), -1),
        ((-1, 0), 2),
        ((1, 0), -2),
        ((-1, 1), 1),
        ((1, 1), -1),
    ),
    SobelType.VERTICAL: (
        ((-1, -1), 1),
        ((0, -1), 2),
        ((1, -1), 1),
        ((-1, 1), -1),
        ((0, 1), -2),
        ((1, 1), -1),
    ),
}


def _hsl_array(rgb: np.ndarray) -> np.ndarray:
    """Convert an (N, 3) array of 0-255 RGB values to (N, 3) HSL.

    Hue is in degrees, saturation and lightness in percent.
    """
    c = np.asarray(rgb, dtype=np.float64).reshape(-1, 3) / 255.0
    r, g, b = c[:, 0], c[:, 1], c[:, 2]
    mx = c.max(axis=1)
    mn = c.min(axis=1)
    lightness = (mx + mn) / 2.0
    d = mx - mn
    chroma = d > 0
    with np.errstate(divide="ignore", invalid="ignore"):
        saturation = np.where(
            chroma,
            np.where(lightness > 0.5, d / (2.0 - mx - mn), d / (mx + mn)),
            0.0,
        )
        hue_r = (g - b) / d + np.where(g < b, 6.0, 0.0)
        hue_g = (b - r) / d + 2.0
        hue_b = (r - g) / d + 4.0
        hue = np.where(mx == r, hue_r, np.where(mx == g, hue_g, hue_b))
        hue = np.where(chroma, hue / 6.0, 0.0)
    return np.stack([hue * 360.0, saturation * 100.0, lightness * 100.0], axis=1)


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Return (hue in degrees, saturation %, lightness %) for an RGB colour."""
    h, s, l = _hsl_array(np.array([[r, g, b]]))[0]
    return float(h), float(s), float(l)


def sobel_filter(image, sobel_type: SobelType) -> np.ndarray:
    """Apply the gradient kernel to a 2-D grey image, clamping at the borders."""
    grey = np.asarray(image)
    if grey.ndim != 2:
        raise ValueError("sobel_filter expects a two-dimensional grey image")
    height, width = grey.shape
    out = np.zeros((height, width), dtype=np.int16)
    if height == 0 or width == 0:
        return out
    padded = np.pad(grey.astype(np.int16), 1, mode="edge")
    for (dx, dy), mult in _KERNELS[sobel_type]:
        out += padded[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width] * np.int16(mult)
    return out


def _to_luma(rgb: np.ndarray) -> np.ndarray:
    rgb = rgb.astype(np.uint32)
    luma = (2126 * rgb[..., 0] + 7152 * rgb[..., 1] + 722 * rgb[..., 2]) // 10000
    return luma.astype(np.uint8)


@dataclass(eq=False)
class Target:
    """The picture being painted, with its per-pixel analysis."""

    image: np.ndarray
    dimensions: tuple[int, int]
    hsls: np.ndarray
    magnitudes: np.ndarray
    angles: np.ndarray

    def compare(self, buf) -> float:
        """Sum the HSL difference between an RGBA pixel buffer and the target."""
        width, height = self.dimensions
        size = width * height
        if isinstance(buf, (bytes, bytearray, memoryview)):
            data = np.frombuffer(buf, dtype=np.uint8)
        else:
            data = np.asarray(buf, dtype=np.uint8).ravel()
        if data.size < size * 4:
            raise ValueError(
                f"buffer holds {data.size} bytes, {size * 4} are needed"
            )
        rgb = data[: size * 4].reshape(size, 4)[:, :3]
        delta = np.abs(self.hsls - _hsl_array(rgb))
        delta[:, 0] /= 4.0
        return float(delta.sum())


def target_from_image(img: PILImage.Image) -> Target:
    """Analyse a loaded picture as a painting target."""
    rgba = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    height, width = rgba.shape[:2]
    luma = _to_luma(rgba[..., :3])

    gx = sobel_filter(luma, SobelType.HORIZONTAL).astype(np.float32) / 255.0
    gy = sobel_filter(luma, SobelType.VERTICAL).astype(np.float32) / 255.0
    radius = np.sqrt(gx * gx + gy * gy)
    magnitudes = np.sqrt(radius).ravel()
    angles = (np.arctan2(gy, gx) * np.float32(math.pi) / np.float32(2.0)).ravel()

    hsls = _hsl_array(rgba[..., :3].reshape(-1, 3))
    return Target(
        image=rgba,
        dimensions=(width, height),
        hsls=hsls,
        magnitudes=magnitudes,
        angles=angles,
    )


def open_target_image(path: str | Path = DEFAULT_TARGET_PATH) -> Target:
    """Load and analyse the target picture at ``path``."""
    with PILImage.open(path) as img:
        img.load()
        return target_from_image(img)