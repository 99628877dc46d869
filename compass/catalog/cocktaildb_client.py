"""
TheCocktailDB catalog client using the public JSON API.

This client queries TheCocktailDB's free v1 endpoints and normalizes the
responses into Drink models.

The client:
- Uses a requests.Session with a per-request timeout
- Percent-encodes every query into the URL before sending it
- Validates the JSON envelope {"drinks": [...] | null} with pydantic
- Maps transport, HTTP status and decoding problems onto the CatalogError kinds

Endpoints:
- search.php?s=<name>      full-text search by drink name
- filter.php?i=<name>      filter by ingredient (id, name and thumbnail only)
- lookup.php?i=<id>        single drink with all ingredient slots

The base URL defaults to the public v1 key but can be overridden via the
COCKTAILDB_BASE_URL environment variable.
"""

import logging
from typing import List, Optional
from urllib.parse import quote, urlparse

import requests
from pydantic import ValidationError

from compass.config import CatalogConfig
from compass.models import Drink, DrinkResponse

from .base import (
    BaseCatalogClient,
    DecodeError,
    InvalidRequestError,
    NotFoundError,
    TransportError,
)

logger = logging.getLogger(__name__)

SEARCH_PATH = "search.php"
FILTER_PATH = "filter.php"
LOOKUP_PATH = "lookup.php"


class CocktailDBClient(BaseCatalogClient):
    """
    Catalog client for TheCocktailDB.

    No response caching, request deduplication or retry is performed; every
    call issues exactly one HTTP GET.
    """
    source = "cocktaildb"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: API base URL (optional, reads COCKTAILDB_BASE_URL or uses the public v1 URL)
            timeout: Request timeout in seconds (optional, reads COCKTAILDB_TIMEOUT_SECONDS)
            session: requests.Session to reuse (optional, a new one is created if not provided)
        """
        self.base_url = (base_url or CatalogConfig.get_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else CatalogConfig.get_timeout_seconds()
        self.session = session or requests.Session()

    def build_url(self, path: str, param: str, value: str) -> str:
        """
        Build a request URL with a percent-encoded query value.

        Args:
            path: Endpoint file name (e.g., "search.php")
            param: Query parameter name (e.g., "s")
            value: Raw query value

        Returns:
            Absolute URL string

        Raises:
            InvalidRequestError: If the value cannot be encoded or the URL is malformed
        """
        try:
            encoded = quote(value, safe="")
        except (TypeError, UnicodeEncodeError) as e:
            raise InvalidRequestError(f"Cannot encode query {value!r}: {e}") from e

        url = f"{self.base_url}/{path}?{param}={encoded}"
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidRequestError(f"Malformed request URL: {url!r}")
        return url

    def _get_drinks(self, url: str) -> List[Drink]:
        """
        Issue one GET and decode the drinks envelope.

        Returns:
            List of Drink (empty when the envelope holds no drinks)
        """
        logger.debug("Catalog request: %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema) as e:
            raise InvalidRequestError(f"Malformed request URL {url!r}: {e}") from e
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise TransportError(f"Catalog returned HTTP {status_code} for {url}", status_code=status_code) from e
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Catalog request timed out after {self.timeout}s: {url}") from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Could not connect to catalog: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Catalog request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"Catalog response is not valid JSON: {e}") from e

        try:
            envelope = DrinkResponse.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(f"Unexpected catalog response shape: {e}") from e

        drinks = envelope.drinks or []
        logger.info("Catalog returned %d drinks for %s", len(drinks), url)
        return drinks

    def search_by_name(self, query: str) -> List[Drink]:
        return self._get_drinks(self.build_url(SEARCH_PATH, "s", query))

    def search_by_ingredient(self, ingredient: str) -> List[Drink]:
        return self._get_drinks(self.build_url(FILTER_PATH, "i", ingredient))

    def fetch_by_id(self, drink_id: str) -> Drink:
        drinks = self._get_drinks(self.build_url(LOOKUP_PATH, "i", drink_id))
        for drink in drinks:
            if drink.id == drink_id:
                return drink
        raise NotFoundError(f"No drink with id {drink_id!r}")
