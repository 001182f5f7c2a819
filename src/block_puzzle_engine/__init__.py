"""Board and piece engine for a grid-filling, line-clearing block puzzle."""

__version__ = "0.1.0"
