"""
Base catalog client abstract class and catalog error kinds.

This module defines the interface every recipe catalog client implements and
the error hierarchy raised at the catalog boundary. Screens only depend on this
interface, so a different recipe service can be plugged in without touching
the reconciling layer.

All clients must:
- Provide search_by_name and search_by_ingredient returning a (possibly empty) list of Drink
- Provide fetch_by_id returning exactly one Drink or raising NotFoundError
- Raise CatalogError subclasses only, never raw transport or parsing exceptions
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from compass.models import Drink


class CatalogError(Exception):
    """
    Base class for every error raised by a catalog client.

    Attributes:
        kind: Stable machine-readable error kind, exposed for diagnostics
    """
    kind = "catalog_error"


class InvalidRequestError(CatalogError):
    """The query could not be encoded into a valid request URL. Not retried."""
    kind = "invalid_request"


class TransportError(CatalogError):
    """
    Network-level failure (timeout, DNS, connection refused) or a non-2xx status.

    Attributes:
        status_code: HTTP status code when the server answered, otherwise None
    """
    kind = "transport_failure"

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(CatalogError):
    """The response body was not JSON or did not match the expected shape."""
    kind = "decode_failure"


class NotFoundError(CatalogError):
    """A by-id lookup returned no matching record."""
    kind = "not_found"


class BaseCatalogClient(ABC):
    """
    Abstract base class for recipe catalog clients.

    Operations block on the network round trip; callers that need asynchrony
    run them on an executor (see compass.reconciler).

    Attributes:
        source: String identifier for the catalog (e.g., "cocktaildb")
    """
    source: str

    @abstractmethod
    def search_by_name(self, query: str) -> List[Drink]:
        """
        Full-text search of drinks by name.

        Args:
            query: Search string (e.g., "margarita"). Must not be empty.

        Returns:
            List of Drink, empty when nothing matches

        Raises:
            InvalidRequestError, TransportError, DecodeError
        """

    @abstractmethod
    def search_by_ingredient(self, ingredient: str) -> List[Drink]:
        """
        Filter drinks by one ingredient.

        Args:
            ingredient: Ingredient name (e.g., "Gin"). Must not be empty.

        Returns:
            List of Drink, empty when nothing matches. Filter results usually
            carry only id, name and thumbnail.

        Raises:
            InvalidRequestError, TransportError, DecodeError
        """

    @abstractmethod
    def fetch_by_id(self, drink_id: str) -> Drink:
        """
        Look up exactly one drink by identifier.

        Args:
            drink_id: Drink identifier (e.g., "11007")

        Returns:
            The matching Drink with its full ingredient slots

        Raises:
            NotFoundError: If the response holds no record with this id
            InvalidRequestError, TransportError, DecodeError
        """
