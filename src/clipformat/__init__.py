"""clipformat: detect and transform clipboard expressions."""

__version__ = "1.0.0"
