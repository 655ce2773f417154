"""fretshapes: movable guitar shape resolution."""

__version__ = "0.1.0"
