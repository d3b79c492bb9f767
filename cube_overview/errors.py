"""Error types raised while building a cube overview.

Every error carries the identifier that caused it (URL, card name, query,
count) as attributes so callers can report it without parsing messages.
"""

from typing import Optional


class CubeOverviewError(Exception):
    """Base class for all overview errors."""


class FetchError(CubeOverviewError):
    """Network or HTTP failure while retrieving a URL."""

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason

        detail = f"HTTP {status_code}" if status_code is not None else "request failed"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(f"Failed to fetch {url} ({detail})")


class CardNotFoundError(CubeOverviewError):
    """A card could not be found in the catalog or via search."""


class CatalogCardNotFoundError(CardNotFoundError):
    """No row in the cube catalog has the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Found no card in cube called "{name}"')


class SearchCardNotFoundError(CardNotFoundError):
    """A card search query matched no cards."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"Found no cards for search {query!r}")


class CardDataError(CubeOverviewError):
    """A catalog row or search result lacks a field needed to render it."""

    def __init__(self, source: str, field: str):
        self.source = source
        self.field = field
        super().__init__(f"Missing field {field!r} in data from {source}")


class TooManyCardsError(CubeOverviewError):
    """A card search query matched more than one card."""

    def __init__(self, query: str, count: int):
        self.query = query
        self.count = count
        super().__init__(f"Found {count} cards for search {query!r}")


class RepeatedCardError(CubeOverviewError):
    """The same card is used as an image in more than one deck."""

    def __init__(self, card: str, count: int):
        self.card = card
        self.count = count
        super().__init__(f"{card} is used as the image for {count} decks")


class ConfigError(CubeOverviewError):
    """An overview definition could not be loaded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid overview definition {path}: {reason}")
