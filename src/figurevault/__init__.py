"""FigureVault — Search backend for personal figure collections."""

__version__ = "0.1.0"
