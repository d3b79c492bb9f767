"""Scryfall client tests."""

import json

import pytest

from conftest import FakeFetcher, FakeResponse, FakeSession, search_body
from cube_overview.data.cache import ResponseCache
from cube_overview.data.scryfall import ScryfallClient, build_search_query
from cube_overview.errors import (
    CardDataError,
    CardNotFoundError,
    FetchError,
    SearchCardNotFoundError,
    TooManyCardsError,
)

QUERY = '!"Card A" s:XYZ cn:7'


def client_with(body=None, status_code=None):
    client = ScryfallClient(cache=FakeFetcher())
    url = client.search_url(QUERY)
    if body is not None:
        client.cache.bodies[url] = body
    elif status_code is not None:
        def fail(fetch_url, validate=None):
            raise FetchError(fetch_url, status_code=status_code)
        client.cache.fetch = fail
    return client


class TestBuildSearchQuery:
    """Test query construction."""

    def test_exact_printing_query(self):
        assert build_search_query("Card A", "XYZ", "7") == QUERY

    def test_escapes_quotes(self):
        query = build_search_query('Kongming, "Sleeping Dragon"', "ptk", "6")
        assert query == '!"Kongming, \\"Sleeping Dragon\\"" s:ptk cn:6'


class TestSearchUrl:
    """Test search URL encoding."""

    def test_query_is_percent_encoded(self):
        client = ScryfallClient(cache=FakeFetcher())

        assert client.search_url(QUERY) == (
            "https://api.scryfall.com/cards/search?q=%21%22Card+A%22+s%3AXYZ+cn%3A7"
        )


class TestFindCardBy:
    """Test single-card search."""

    def test_single_match(self):
        client = client_with(search_body("abc123"))

        card = client.find_card_by(QUERY)
        assert card["id"] == "abc123"

    def test_no_matches(self):
        client = client_with(search_body())

        with pytest.raises(SearchCardNotFoundError) as exc_info:
            client.find_card_by(QUERY)

        assert exc_info.value.query == QUERY
        assert QUERY in str(exc_info.value)

    def test_not_found_status_means_no_matches(self):
        client = client_with(status_code=404)

        with pytest.raises(CardNotFoundError):
            client.find_card_by(QUERY)

    def test_other_fetch_errors_propagate(self):
        client = client_with(status_code=500)

        with pytest.raises(FetchError) as exc_info:
            client.find_card_by(QUERY)

        assert exc_info.value.status_code == 500

    def test_too_many_matches(self):
        client = client_with(search_body("one", "two", "three"))

        with pytest.raises(TooManyCardsError) as exc_info:
            client.find_card_by(QUERY)

        assert exc_info.value.count == 3
        assert exc_info.value.query == QUERY
        assert "Found 3 cards" in str(exc_info.value)

    def test_total_cards_reported_for_paginated_results(self):
        body = json.loads(search_body("one", "two"))
        body["total_cards"] = 250
        body["has_more"] = True
        client = client_with(json.dumps(body))

        with pytest.raises(TooManyCardsError) as exc_info:
            client.find_card_by(QUERY)

        assert exc_info.value.count == 250


class TestUnusableResponses:
    """Test responses that cannot be used to resolve a card."""

    def test_non_json_body(self):
        client = client_with("<html>maintenance</html>")

        with pytest.raises(FetchError, match="unusable response"):
            client.find_card_by(QUERY)

    def test_json_without_data_list(self):
        client = client_with(json.dumps({"object": "list", "data": "nope"}))

        with pytest.raises(FetchError):
            client.find_card_by(QUERY)

    def test_card_without_id(self):
        client = client_with(json.dumps({"data": [{"name": "Card A"}]}))

        with pytest.raises(CardDataError) as exc_info:
            client.find_card_by(QUERY)

        assert exc_info.value.field == "id"

    def test_maintenance_page_is_not_cached(self, tmp_path):
        url = ScryfallClient(cache=FakeFetcher()).search_url(QUERY)
        session = FakeSession({url: FakeResponse("<html>maintenance</html>")})
        client = ScryfallClient(cache=ResponseCache(cache_dir=str(tmp_path), session=session))

        with pytest.raises(FetchError):
            client.find_card_by(QUERY)

        assert not client.cache.is_cached(url)

        session.responses[url] = FakeResponse(search_body("abc123"))
        assert client.find_card_by(QUERY)["id"] == "abc123"
