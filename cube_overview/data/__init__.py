"""Data fetching and caching modules."""

from cube_overview.data.cache import ResponseCache
from cube_overview.data.cubecobra import CubeCobraClient
from cube_overview.data.scryfall import ScryfallClient

__all__ = [
    "CubeCobraClient",
    "ScryfallClient",
    "ResponseCache",
]
