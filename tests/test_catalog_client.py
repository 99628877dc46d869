"""
Tests for the TheCocktailDB catalog client using a mocked requests session.

These tests mock requests.Session to avoid making real API calls. They verify that:
- Each operation hits the right endpoint with a percent-encoded query
- Zero matches yields an empty list for the list operations
- fetch_by_id raises NotFoundError instead of returning nothing
- Transport, HTTP status, and decoding failures map onto distinct error kinds
"""

import os
from unittest.mock import Mock, patch

import pytest
import requests

from compass.catalog.base import (
    CatalogError,
    DecodeError,
    InvalidRequestError,
    NotFoundError,
    TransportError,
)
from compass.catalog.cocktaildb_client import CocktailDBClient

BASE_URL = "https://www.thecocktaildb.com/api/json/v1/1"


def make_session(payload=None, json_error=None, get_error=None, status_error=None):
    """Build a mock session whose get() returns a mock response."""
    response = Mock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload

    session = Mock()
    if get_error is not None:
        session.get.side_effect = get_error
    else:
        session.get.return_value = response
    return session


class TestCocktailDBClientInit:
    """Tests for client configuration."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        client = CocktailDBClient(session=Mock())
        assert client.base_url == BASE_URL
        assert client.timeout == 10.0
        assert client.source == "cocktaildb"

    @patch.dict(os.environ, {"COCKTAILDB_BASE_URL": "http://localhost:9000/api/", "COCKTAILDB_TIMEOUT_SECONDS": "3"})
    def test_reads_environment(self):
        client = CocktailDBClient(session=Mock())
        assert client.base_url == "http://localhost:9000/api"
        assert client.timeout == 3.0


class TestCocktailDBClientQueries:
    """Tests for the three query operations."""

    def test_search_by_name(self, margarita_raw):
        session = make_session({"drinks": [margarita_raw]})
        client = CocktailDBClient(base_url=BASE_URL, timeout=5, session=session)

        drinks = client.search_by_name("margarita")

        session.get.assert_called_once_with(f"{BASE_URL}/search.php?s=margarita", timeout=5)
        assert len(drinks) == 1
        assert drinks[0].id == "11007"
        assert drinks[0].ingredients == ["1 1/2 oz Tequila", "1/2 oz Triple sec", "1 oz Lime juice"]

    def test_query_is_percent_encoded(self):
        session = make_session({"drinks": None})
        client = CocktailDBClient(base_url=BASE_URL, session=session)

        client.search_by_name("gin & tonic/ä")

        url = session.get.call_args[0][0]
        assert url == f"{BASE_URL}/search.php?s=gin%20%26%20tonic%2F%C3%A4"

    def test_search_by_ingredient(self, gin_fizz_raw):
        session = make_session({"drinks": [gin_fizz_raw]})
        client = CocktailDBClient(base_url=BASE_URL, session=session)

        drinks = client.search_by_ingredient("Gin")

        assert session.get.call_args[0][0] == f"{BASE_URL}/filter.php?i=Gin"
        assert [d.name for d in drinks] == ["Gin Fizz"]
        assert drinks[0].ingredients == []

    @pytest.mark.parametrize("payload", [{"drinks": None}, {}, {"drinks": []}, {"drinks": "no data found"}])
    def test_zero_matches_is_empty_list(self, payload):
        client = CocktailDBClient(base_url=BASE_URL, session=make_session(payload))
        assert client.search_by_name("zzz") == []
        assert client.search_by_ingredient("zzz") == []

    def test_fetch_by_id(self, margarita_raw):
        session = make_session({"drinks": [margarita_raw]})
        client = CocktailDBClient(base_url=BASE_URL, session=session)

        drink = client.fetch_by_id("11007")

        assert session.get.call_args[0][0] == f"{BASE_URL}/lookup.php?i=11007"
        assert drink.name == "Margarita"

    @pytest.mark.parametrize("payload", [{"drinks": None}, {"drinks": []}])
    def test_fetch_by_id_empty_is_not_found(self, payload):
        client = CocktailDBClient(base_url=BASE_URL, session=make_session(payload))
        with pytest.raises(NotFoundError) as exc_info:
            client.fetch_by_id("0")
        assert exc_info.value.kind == "not_found"

    def test_fetch_by_id_requires_matching_id(self, margarita_raw):
        client = CocktailDBClient(base_url=BASE_URL, session=make_session({"drinks": [margarita_raw]}))
        with pytest.raises(NotFoundError):
            client.fetch_by_id("99999")


class TestCocktailDBClientErrors:
    """Tests for error kind mapping."""

    def test_unencodable_query_is_invalid_request(self):
        session = make_session({"drinks": None})
        client = CocktailDBClient(base_url=BASE_URL, session=session)

        with pytest.raises(InvalidRequestError) as exc_info:
            client.search_by_name("bad \ud800 surrogate")

        assert exc_info.value.kind == "invalid_request"
        session.get.assert_not_called()

    def test_malformed_base_url_is_invalid_request(self):
        session = make_session({"drinks": None})
        client = CocktailDBClient(base_url="not a url", session=session)

        with pytest.raises(InvalidRequestError):
            client.search_by_ingredient("Gin")
        session.get.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [
            requests.exceptions.Timeout("timed out"),
            requests.exceptions.ConnectionError("connection refused"),
            requests.exceptions.RequestException("boom"),
        ],
    )
    def test_network_failures_are_transport_errors(self, error):
        client = CocktailDBClient(base_url=BASE_URL, session=make_session(get_error=error))
        with pytest.raises(TransportError) as exc_info:
            client.search_by_name("margarita")
        assert exc_info.value.kind == "transport_failure"
        assert exc_info.value.status_code is None

    def test_http_error_status_is_transport_error(self):
        response = Mock(status_code=503)
        error = requests.exceptions.HTTPError("503 Server Error", response=response)
        client = CocktailDBClient(base_url=BASE_URL, session=make_session({}, status_error=error))

        with pytest.raises(TransportError) as exc_info:
            client.fetch_by_id("11007")
        assert exc_info.value.status_code == 503

    def test_invalid_json_is_decode_error(self):
        session = make_session(json_error=ValueError("Expecting value"))
        client = CocktailDBClient(base_url=BASE_URL, session=session)
        with pytest.raises(DecodeError) as exc_info:
            client.search_by_name("margarita")
        assert exc_info.value.kind == "decode_failure"

    @pytest.mark.parametrize(
        "payload",
        [[1, 2, 3], {"drinks": [{"strDrink": "No id"}]}, {"drinks": [{"idDrink": "", "strDrink": "Blank id"}]}, {"drinks": 5}],
    )
    def test_unexpected_shape_is_decode_error(self, payload):
        client = CocktailDBClient(base_url=BASE_URL, session=make_session(payload))
        with pytest.raises(DecodeError):
            client.search_by_name("margarita")

    def test_all_errors_share_a_base_class(self):
        for error_cls in (InvalidRequestError, TransportError, DecodeError, NotFoundError):
            assert issubclass(error_cls, CatalogError)
