"""Window loop that paints the target stroke by stroke and keeps improvements."""

from __future__ import annotations

import argparse
import math
import random
from pathlib import Path
from typing import Mapping

import pygame

from digpainting.artistic import (
    DEFAULT_BRUSH_DIR,
    Image,
    init_brushes,
    init_image,
    init_palette,
)
from digpainting.comparison import DEFAULT_TARGET_PATH, open_target_image

WINDOW_TITLE = "dig painting"
START_LOD = 2


def frame_name(i: int) -> str:
    """Return the file name a rendered frame is saved under."""
    return f"./rendered/image-{i:04d}.png"


def should_raise_lod(i: int, last_increment: int) -> bool:
    """Tell whether enough iterations passed without improvement to refine strokes."""
    return i - last_increment > 15 * 2 ^ i


def _stroke_sprite(texture: pygame.Surface, stroke, dimensions) -> pygame.Surface:
    width = max(1, int(dimensions[0] * stroke.scale))
    height = max(1, int(dimensions[1] * stroke.scale))
    sprite = pygame.transform.smoothscale(texture.convert_alpha(texture), (width, height)) \
        if texture.get_flags() & pygame.SRCALPHA \
        else pygame.transform.scale(texture, (width, height))
    sprite = sprite.copy()
    if not sprite.get_flags() & pygame.SRCALPHA:
        sprite = sprite.convert_alpha(pygame.Surface((1, 1), pygame.SRCALPHA))
    r, g, b = stroke.color
    sprite.fill((r, g, b, stroke.opacity), special_flags=pygame.BLEND_RGBA_MULT)
    # Screen rotation is clockwise; pygame rotates counter-clockwise.
    return pygame.transform.rotate(sprite, -stroke.rotation * 360.0)


def render(
    surface: pygame.Surface,
    image: Image,
    brush_textures: Mapping[str, pygame.Surface],
) -> None:
    """Draw the background and every stroke of ``image`` onto ``surface``."""
    surface.fill(image.color)
    for stroke, brush in image.strokes:
        texture = brush_textures[brush.texture_path]
        sprite = _stroke_sprite(texture, stroke, brush.dimensions)
        surface.blit(sprite, sprite.get_rect(center=stroke.position))


def _parse_args(argv):
    parser = argparse.ArgumentParser(prog="digpainting", description=__doc__)
    parser.add_argument("--target", default=DEFAULT_TARGET_PATH, help="picture to paint")
    parser.add_argument("--brushes", default=DEFAULT_BRUSH_DIR, help="directory of brush textures")
    parser.add_argument(
        "--iterations", type=int, default=None, help="stop after this many strokes"
    )
    parser.add_argument("--save", action="store_true", help="save every improved frame")
    return parser.parse_args(argv)


def _quit_requested() -> bool:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return True
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return True
    return False


def main(argv=None) -> int:
    """Open the window and paint until it is closed or the iteration limit is hit."""
    args = _parse_args(argv)
    target = open_target_image(args.target)
    palette = init_palette(target)

    pygame.init()
    try:
        screen = pygame.display.set_mode(tuple(target.dimensions))
        pygame.display.set_caption(WINDOW_TITLE)

        brushes = init_brushes(args.brushes)
        brush_textures = {
            brush.texture_path: pygame.image.load(brush.texture_path).convert_alpha()
            for brush in brushes
        }

        image = init_image(target)
        rng = random.Random()
        delta = math.inf
        i = 0
        last_increment = 0
        lod = START_LOD

        while args.iterations is None or i < args.iterations:
            if _quit_requested():
                break

            image = image.paint(brushes, palette, target, lod, rng)
            render(screen, image, brush_textures)
            pygame.display.flip()

            i += 1
            diff = target.compare(pygame.image.tobytes(screen, "RGBA"))

            if diff >= delta:
                image.strokes.pop()

            if diff < delta and i > 1:
                last_increment = i
                delta = diff
                if args.save:
                    path = Path(frame_name(i))
                    path.parent.mkdir(parents=True, exist_ok=True)
                    pygame.image.save(screen, str(path))

            if should_raise_lod(i, last_increment):
                lod += 1
                last_increment = i
    finally:
        pygame.quit()
    return 0