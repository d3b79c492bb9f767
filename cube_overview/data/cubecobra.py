"""CubeCobra client for cube card lists."""

import csv
import io
import logging
import re
from typing import Optional

from cube_overview.contracts import FetcherProtocol
from cube_overview.data.cache import ResponseCache
from cube_overview.errors import CardDataError, CatalogCardNotFoundError

logger = logging.getLogger(__name__)

NON_DIGIT_PATTERN = re.compile(r"\D")


def normalize_collector_number(collector_number: str) -> str:
    """Strip every non-digit character from a collector number.

    Some printings are listed with a prefix, e.g. "XLN-1" for The List.

    Examples:
        "XLN-1" → "1"
        "42" → "42"
    """
    return NON_DIGIT_PATTERN.sub("", collector_number)


class CubeCobraClient:
    """Client for a single cube's CSV export on CubeCobra."""

    BASE_URL = "https://cubecobra.com"
    CSV_ENDPOINT = "/cube/download/csv"
    CSV_QUERY = (
        "primary=Color%20Category&secondary=Types-Multicolor"
        "&tertiary=Mana%20Value&quaternary=Alphabetical&showother=false"
    )

    def __init__(self, cube_id: str, cache: Optional[FetcherProtocol] = None):
        """
        Initialize CubeCobra client.

        Args:
            cube_id: CubeCobra cube id
            cache: Optional response cache
        """
        self.cube_id = cube_id
        self.cache = cache or ResponseCache()
        self._cards: Optional[list[dict]] = None

    @property
    def url(self) -> str:
        """CSV download URL for the cube."""
        return f"{self.BASE_URL}{self.CSV_ENDPOINT}/{self.cube_id}?{self.CSV_QUERY}"

    @property
    def is_loaded(self) -> bool:
        return self._cards is not None

    @property
    def cards(self) -> list[dict]:
        """All rows of the cube list, fetched and parsed on first access."""
        if self._cards is None:
            text = self.cache.fetch(self.url)
            self._cards = list(csv.DictReader(io.StringIO(text)))
            logger.info(f"Loaded {len(self._cards)} cards for cube {self.cube_id}")
        return self._cards

    def card_by_name(self, name: str) -> dict:
        """
        Get the cube's row for a card.

        Args:
            name: Exact, case-sensitive card name

        Returns:
            Copy of the row with "Collector Number" reduced to its digits

        Raises:
            CatalogCardNotFoundError: If no row has that name
            CardDataError: If the row lacks a set code or collector number
        """
        row = next((card for card in self.cards if card.get("name") == name), None)

        if row is None:
            raise CatalogCardNotFoundError(name)

        for column in ("Set", "Collector Number"):
            if row.get(column) is None:
                raise CardDataError(self.url, column)

        return {
            **row,
            "Collector Number": normalize_collector_number(row["Collector Number"]),
        }
