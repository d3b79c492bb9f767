"""Cube Overview Builder - render CubeCobra cube overviews with Scryfall card images."""

__version__ = "0.1.0"
