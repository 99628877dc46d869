"""
Recipe catalog clients.

This package contains:
- base: BaseCatalogClient interface and the CatalogError kinds
- cocktaildb_client: TheCocktailDB implementation over requests
"""

from compass.catalog.base import (
    BaseCatalogClient,
    CatalogError,
    DecodeError,
    InvalidRequestError,
    NotFoundError,
    TransportError,
)
from compass.catalog.cocktaildb_client import CocktailDBClient

__all__ = [
    "BaseCatalogClient",
    "CatalogError",
    "CocktailDBClient",
    "DecodeError",
    "InvalidRequestError",
    "NotFoundError",
    "TransportError",
]
