"""Build up a painterly copy of a target image from randomly placed brush strokes."""

__version__ = "0.1.0"
__all__ = ["comparison", "artistic", "app"]