"""
Configuration management for Cocktail Compass.

This module centralizes environment variable loading from the .env file at the
project root. It is imported early by the API (api/main.py) so .env is loaded
before any other code reads environment variables.

In production .env will not exist; load_dotenv() is safe to call and will no-op,
and platform environment variables are used instead.

Environment Variables:
- COCKTAILDB_BASE_URL: Optional, defaults to "https://www.thecocktaildb.com/api/json/v1/1"
- COCKTAILDB_TIMEOUT_SECONDS: Optional, request timeout in seconds (default: 10)
- FAVORITES_DATABASE_URL: Optional, SQLAlchemy URL for the favorites store
  (default: "sqlite:///favorites.db")
- NEARBY_STORE_QUERY: Optional, free-text category used for nearby store search
  (default: "Grocery Store, Liquor Store")
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_COCKTAILDB_BASE_URL = "https://www.thecocktaildb.com/api/json/v1/1"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_FAVORITES_DATABASE_URL = "sqlite:///favorites.db"
DEFAULT_STORE_QUERY = "Grocery Store, Liquor Store"


def load_env_file() -> None:
    """
    Load environment variables from .env at the project root.

    compass/config.py -> compass/ -> project root. Existing environment
    variables take precedence (override=False). Safe to call multiple times.
    """
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


load_env_file()


class CatalogConfig:
    """Configuration for the TheCocktailDB catalog client."""

    @staticmethod
    def get_base_url() -> str:
        """
        Get the catalog API base URL.

        Returns:
            Base URL with any trailing slash removed
        """
        return os.getenv("COCKTAILDB_BASE_URL", DEFAULT_COCKTAILDB_BASE_URL).rstrip("/")

    @staticmethod
    def get_timeout_seconds() -> float:
        """
        Get the HTTP timeout for catalog requests.

        Returns:
            Timeout in seconds. Falls back to the default on unparsable values.
        """
        raw = os.getenv("COCKTAILDB_TIMEOUT_SECONDS")
        if not raw:
            return DEFAULT_TIMEOUT_SECONDS
        try:
            timeout = float(raw)
        except ValueError:
            logger.warning("Invalid COCKTAILDB_TIMEOUT_SECONDS=%r, using %s", raw, DEFAULT_TIMEOUT_SECONDS)
            return DEFAULT_TIMEOUT_SECONDS
        return timeout if timeout > 0 else DEFAULT_TIMEOUT_SECONDS


class FavoritesConfig:
    """Configuration for the local favorites store."""

    @staticmethod
    def get_database_url() -> str:
        return os.getenv("FAVORITES_DATABASE_URL", DEFAULT_FAVORITES_DATABASE_URL)


class NearbyConfig:
    """Configuration for nearby store search."""

    @staticmethod
    def get_store_query() -> str:
        return os.getenv("NEARBY_STORE_QUERY", DEFAULT_STORE_QUERY)


def get_config_summary() -> dict:
    """
    Get the effective configuration (no secrets are involved).

    Returns:
        Dictionary with keys:
        - catalog_base_url: str
        - catalog_timeout_seconds: float
        - favorites_database_url: str
        - nearby_store_query: str
    """
    return {
        "catalog_base_url": CatalogConfig.get_base_url(),
        "catalog_timeout_seconds": CatalogConfig.get_timeout_seconds(),
        "favorites_database_url": FavoritesConfig.get_database_url(),
        "nearby_store_query": NearbyConfig.get_store_query(),
    }
