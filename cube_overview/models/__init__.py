"""Data models for the cube overview."""

from cube_overview.models.overview import Deck, Overview

__all__ = [
    "Deck",
    "Overview",
]
