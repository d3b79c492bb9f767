"""Shared fixtures and fakes for the test suite."""

import json

import pytest
import requests

from cube_overview.data.cubecobra import CubeCobraClient
from cube_overview.data.scryfall import ScryfallClient
from cube_overview.errors import FetchError
from cube_overview.report.markdown_gen import DeckRenderer, OverviewRenderer

CUBE_ID = "test-cube"

CATALOG_CSV = (
    "name,CMC,Type,Color,Set,Collector Number,Rarity\n"
    "Card A,1,Creature,W,XYZ,XYZ-7,common\n"
    "Card B,2,Instant,U,abc,42,rare\n"
    '"Jace, Vryn\'s Prodigy",2,Creature,U,ori,60,mythic\n'
)


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, body=b"", status_code: int = 200):
        self.content = body if isinstance(body, bytes) else body.encode("utf-8")
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(
                f"{self.status_code} Error", response=self
            )


class FakeSession:
    """Records GET requests and answers them from a URL table."""

    def __init__(self, responses=None):
        self.headers = {}
        self.responses = responses or {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        result = self.responses.get(url, FakeResponse(status_code=404))
        if isinstance(result, Exception):
            raise result
        return result


class FakeFetcher:
    """In-memory fetcher answering from a URL table."""

    def __init__(self, bodies=None):
        self.bodies = bodies or {}
        self.calls = []

    def fetch(self, url: str, validate=None) -> str:
        self.calls.append(url)
        if url not in self.bodies:
            raise FetchError(url, status_code=404, reason="Not Found")
        return self.bodies[url]


def search_body(*ids: str) -> str:
    """Scryfall search response listing cards with the given ids."""
    cards = [{"object": "card", "id": card_id, "name": "Card"} for card_id in ids]
    return json.dumps({
        "object": "list",
        "total_cards": len(cards),
        "has_more": False,
        "data": cards,
    })


@pytest.fixture
def fetcher():
    """Fetcher preloaded with the test cube list."""
    catalog_url = CubeCobraClient(CUBE_ID, cache=FakeFetcher()).url
    return FakeFetcher({catalog_url: CATALOG_CSV})


@pytest.fixture
def cube_cobra(fetcher):
    return CubeCobraClient(CUBE_ID, cache=fetcher)


@pytest.fixture
def scryfall(fetcher):
    return ScryfallClient(cache=fetcher)


@pytest.fixture
def deck_renderer(cube_cobra, scryfall):
    return DeckRenderer(cube_cobra, scryfall)


@pytest.fixture
def overview_renderer(deck_renderer, tmp_path):
    return OverviewRenderer(deck_renderer, template_dir=str(tmp_path / "templates"))
