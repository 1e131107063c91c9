"""Vector drawing documents of circles, rectangles and paths, stored as zipped XML."""

__version__ = "0.1.0"