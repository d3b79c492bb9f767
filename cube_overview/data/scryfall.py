"""Scryfall API client for resolving card printings."""

import json
import logging
from typing import Optional
from urllib.parse import quote_plus

from cube_overview.contracts import FetcherProtocol
from cube_overview.data.cache import ResponseCache
from cube_overview.errors import (
    CardDataError,
    FetchError,
    SearchCardNotFoundError,
    TooManyCardsError,
)

logger = logging.getLogger(__name__)


def build_search_query(name: str, set_code: str, collector_number: str) -> str:
    """Build a Scryfall query for one exact printing of a card.

    Examples:
        ("Card A", "XYZ", "7") → '!"Card A" s:XYZ cn:7'
    """
    quoted = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'!"{quoted}" s:{set_code} cn:{collector_number}'


def parse_search_response(body: str) -> dict:
    """Parse a search response body.

    Raises:
        ValueError: If the body is not a JSON object with a "data" list
    """
    data = json.loads(body)

    if not isinstance(data, dict) or not isinstance(data.get("data", []), list):
        raise ValueError("expected a JSON object with a \"data\" list")

    return data


class ScryfallClient:
    """Client for the Scryfall card search API."""

    BASE_URL = "https://api.scryfall.com"
    SEARCH_ENDPOINT = "/cards/search"

    def __init__(self, cache: Optional[FetcherProtocol] = None):
        """
        Initialize Scryfall client.

        Args:
            cache: Optional response cache
        """
        self.cache = cache or ResponseCache()

    def search_url(self, query: str) -> str:
        return f"{self.BASE_URL}{self.SEARCH_ENDPOINT}?q={quote_plus(query)}"

    def find_card_by(self, query: str) -> dict:
        """
        Find the single card matching a search query.

        Args:
            query: Scryfall search query (e.g. '!"Counterspell" s:7ed cn:67')

        Returns:
            Scryfall card object

        Raises:
            SearchCardNotFoundError: If nothing matches
            TooManyCardsError: If more than one card matches
            CardDataError: If the matching card has no id
            FetchError: If the request fails for any other reason
        """
        url = self.search_url(query)

        try:
            body = self.cache.fetch(url, validate=parse_search_response)
        except FetchError as e:
            # Scryfall answers an empty search with 404
            if e.status_code == 404:
                raise SearchCardNotFoundError(query) from e
            raise

        try:
            data = parse_search_response(body)
        except ValueError as e:
            raise FetchError(url, reason=f"unusable response: {e}") from e

        cards = data.get("data") or []

        if len(cards) == 1:
            card = cards[0]
            if not isinstance(card, dict) or "id" not in card:
                raise CardDataError(url, "id")
            return card

        if len(cards) > 1:
            count = max(len(cards), data.get("total_cards") or 0)
            logger.warning(f"Search {query!r} is ambiguous ({count} matches)")
            raise TooManyCardsError(query, count)

        raise SearchCardNotFoundError(query)
