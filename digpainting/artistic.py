"""Brushes, strokes, palettes and the painting that grows stroke by stroke."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path

from PIL import Image as PILImage

from digpainting.comparison import Target

LOD: tuple[tuple[float, float], ...] = (
    (0.5, 1.0),
    (0.2, 0.5),
    (0.1, 0.2),
    (0.05, 0.1),
    (0.01, 0.05),
    (0.004, 0.01),
)
MIN_MAGNITUDE: tuple[float, ...] = (-math.inf, 0.2, 0.3, 0.4, 0.5, 0.6)

BACKGROUND = (127, 127, 127)
PALETTE_CELL = 50
DEFAULT_BRUSH_DIR = "./assets/brushes"

Color = tuple[int, int, int]


@dataclass
class Palette:
    """Colours a stroke may be painted with."""

    colors: list[Color] = field(default_factory=list)


@dataclass(frozen=True)
class Brush:
    """A brush texture on disk and its pixel size."""

    texture_path: str
    dimensions: tuple[int, int]

    def __str__(self) -> str:
        return (
            f"texture_path: {self.texture_path}, "
            f"dimensions.x: {self.dimensions[0]}, dimensions.y: {self.dimensions[1]}"
        )


@dataclass
class Stroke:
    """One brush mark: centre, rotation (in turns), scale, colour and opacity."""

    position: tuple[int, int]
    rotation: float
    scale: float
    color: Color
    opacity: int

    def __str__(self) -> str:
        r, g, b = self.color
        return (
            f"position.x: {self.position[0]}, posistion.y: {self.position[1]}, "
            f"rotation: {self.rotation}, scale: {self.scale}, "
            f"color: {r} {g} {b}, opacity: {self.opacity}"
        )


@dataclass
class Image:
    """The painting: a background colour and the strokes laid on it."""

    dimensions: tuple[int, int]
    color: Color = BACKGROUND
    strokes: list[tuple[Stroke, Brush]] = field(default_factory=list)

    def paint(
        self,
        brushes: list[Brush],
        palette: Palette,
        target: Target,
        lod: int,
        rng: random.Random | None = None,
    ) -> Image:
        """Add one random stroke placed on an edge strong enough for ``lod``."""
        if not brushes:
            raise ValueError("no brushes to paint with")
        if not palette.colors:
            raise ValueError("palette has no colours")
        rng = rng if rng is not None else random.Random()
        level = min(lod, len(LOD) - 1)
        width, height = self.dimensions

        while True:
            x, y = rng.randrange(width), rng.randrange(height)
            index = y * width + x
            if target.magnitudes[index] >= MIN_MAGNITUDE[level]:
                break

        low, high = LOD[level]
        stroke = Stroke(
            position=(x, y),
            rotation=float(target.angles[index]) * 2.0,
            scale=low + rng.random() * (high - low),
            color=rng.choice(palette.colors),
            opacity=rng.randrange(55, 185),
        )
        self.strokes.append((stroke, rng.choice(brushes)))
        return self


def init_brushes(directory: str | Path = DEFAULT_BRUSH_DIR) -> list[Brush]:
    """Load every brush texture in ``directory``, in sorted path order."""
    brushes = []
    for path in sorted(Path(directory).iterdir()):
        with PILImage.open(path) as img:
            brush = Brush(texture_path=str(path), dimensions=img.size)
        print(brush)
        brushes.append(brush)
    return brushes


def init_image(target: Target) -> Image:
    """Start an empty grey painting the size of the target."""
    return Image(dimensions=tuple(target.dimensions), color=BACKGROUND, strokes=[])


def _blend(current: Color, pixel) -> Color:
    return tuple((int(a) + int(b)) // 2 for a, b in zip(current, pixel))


def init_palette(target: Target) -> Palette:
    """Take one running-average colour from every full 50x50 cell of the target."""
    width, height = target.dimensions
    colors = []
    for row in range(height // PALETTE_CELL):
        for col in range(width // PALETTE_CELL):
            cell = target.image[
                row * PALETTE_CELL : (row + 1) * PALETTE_CELL,
                col * PALETTE_CELL : (col + 1) * PALETTE_CELL,
                :3,
            ]
            colors.append(reduce(_blend, cell.reshape(-1, 3).tolist(), BACKGROUND))
    return Palette(colors=colors)