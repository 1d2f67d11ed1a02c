"""FixMe Grammar - clipboard grammar fixer for the macOS menu bar."""

__version__ = "1.0.0"
