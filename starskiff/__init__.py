"""A 2D space shooter built on a small entity-component system, drawn with pygame."""

__version__ = "0.1.0"