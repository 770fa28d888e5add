# digpainting

`digpainting` paints a picture that looks like a target image. It works one brush stroke at a time.

Each step does the following:

1. It places a new stroke on the canvas. The stroke uses a random brush texture and a colour from the target's palette.
2. The stroke goes at a random point where the target's edge strength is high enough for the current level of detail. It is turned to follow the local gradient.
3. The canvas is rendered and compared with the target in HSL space.
4. If the new stroke does not bring the canvas closer to the target, it is removed again.

After a stretch of steps with no improvement, the level of detail goes up. Strokes then get smaller and are placed only on stronger edges.

## Installation

```
pip install .
```

To run the tests, install the test extra:

```
pip install ".[test]"
pytest
```

## Running

```
dig-painting
```

The command opens a window the size of the target picture and keeps painting until you close the window or press Escape.

Options:

- `--target PATH`: the picture to paint. The default is `assets/targets/mona_lisa.jpg`.
- `--brushes DIR`: a directory of brush textures. Every file in it is loaded, in sorted path order. The default is `./assets/brushes`.
- `--iterations N`: stop after `N` steps instead of running until the window is closed.
- `--save`: each time the canvas improves, save the frame as `./rendered/image-NNNN.png`. The directory is created if needed.

Relative paths are resolved against the working directory. Each brush is printed as it is loaded.

## Library use

The building blocks can be used without the window:

```python
from PIL import Image as PILImage
from digpainting.comparison import target_from_image
from digpainting.artistic import init_image, init_palette, init_brushes

target = target_from_image(PILImage.open("picture.png"))
palette = init_palette(target)
brushes = init_brushes("assets/brushes")
canvas = init_image(target)
canvas = canvas.paint(brushes, palette, target, lod=2, rng=None)
```

### `digpainting.comparison`

- `open_target_image(path)` loads a picture and analyses it.
- `target_from_image(img)` analyses a picture that is already open with Pillow. Both return a `Target`. A `Target` holds:
  - the RGBA pixels,
  - the dimensions,
  - per-pixel HSL values,
  - edge magnitudes and edge angles.
- `Target.compare(buf)` takes an RGBA pixel buffer (bytes or an array) at least as large as the target. It returns the summed HSL difference, with hue differences divided by four; lower means closer. A buffer that is too small raises `ValueError`.
- `sobel_filter(image, sobel_type)` gives the edge response of a 2-D grey image for `SobelType.HORIZONTAL` or `SobelType.VERTICAL`, clamping at the borders.
- `rgb_to_hsl(r, g, b)` returns hue in degrees and saturation and lightness in percent.

### `digpainting.artistic`

- `Brush`: a texture path and its pixel size.
- `Stroke`: position, rotation in turns, scale, colour and opacity.
- `Palette`: a list of colours.
- `Image`: the painting, a background colour plus a list of `(Stroke, Brush)` pairs.
- `Image.paint(brushes, palette, target, lod, rng)` appends one random stroke and returns the image.
  - `lod` above 5 is treated as 5.
  - `rng` may be a `random.Random` for reproducible results, or `None`.
  - Painting with no brushes or an empty palette raises `ValueError`.
- `init_image(target)` starts an empty grey (127, 127, 127) painting.
- `init_palette(target)` takes one colour from every full 50×50 cell of the target.
- `init_brushes(directory)` loads the brush textures.

### `digpainting.app`

- `render(surface, image, brush_textures)` draws a painting onto a pygame surface.
- `frame_name(i)` gives the file name a saved frame gets.
- `should_raise_lod(i, last_increment)` decides when the level of detail goes up.
- `main(argv)` is the `dig-painting` command.