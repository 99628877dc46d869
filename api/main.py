"""
FastAPI application for the Cocktail Compass API.

This module defines the REST API endpoints over the drink catalog and the local
favorites store:
- GET /search: Search drinks by name
- GET /search/ingredient: Filter drinks by ingredient
- GET /drinks/{drink_id}: One drink with its full ingredient list
- GET /favorites: List saved favorites
- POST /favorites: Save a favorite (replaces an existing entry with the same id)
- DELETE /favorites/{drink_id}: Remove a favorite
- POST /favorites/{drink_id}/toggle: Flip a drink's favorite status

Search results carry is_favorite, reconciled against the favorites store on
every request.

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import compass.config  # noqa: F401

import logging
import time
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Query, status

from compass.catalog.base import (
    BaseCatalogClient,
    CatalogError,
    DecodeError,
    InvalidRequestError,
    NotFoundError,
    TransportError,
)
from compass.catalog.cocktaildb_client import CocktailDBClient
from compass.config import get_config_summary
from compass.favorites import FavoritesStore, UnrecoverableStoreError, build_favorites_store
from compass.models import Drink, FavoriteEntry
from compass.reconciler import FavoritesReconciler
from api.schemas import DrinkOut, FavoritesResponse, SearchResponse, ToggleFavoriteResponse

logger = logging.getLogger(__name__)

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

app = FastAPI(
    title="Cocktail Compass API",
    description="Browse TheCocktailDB recipes by name or ingredient and keep a local list of favorite drinks",
    version="1.0.0",
    tags_metadata=[
        {"name": "search", "description": "Search drinks by name or ingredient."},
        {"name": "favorites", "description": "Manage locally saved favorite drinks."},
        {"name": "health", "description": "Health check and monitoring endpoints."},
    ],
)


@lru_cache(maxsize=None)
def get_store() -> FavoritesStore:
    """The process-wide favorites store, built on first use."""
    return build_favorites_store()


@lru_cache(maxsize=None)
def get_catalog_client() -> BaseCatalogClient:
    """The process-wide catalog client, built on first use."""
    return CocktailDBClient()


def catalog_error_to_http(error: CatalogError) -> HTTPException:
    """
    Map a catalog error onto an HTTP error.

    - InvalidRequestError -> 400
    - NotFoundError -> 404
    - TransportError, DecodeError -> 502 (the upstream catalog misbehaved)
    """
    if isinstance(error, InvalidRequestError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (TransportError, DecodeError)):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail={"kind": error.kind, "message": str(error)})


def store_error_to_http(error: UnrecoverableStoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"kind": "store_failure", "message": str(error)},
    )


def _search_response(query: str, drinks, store: FavoritesStore) -> SearchResponse:
    reconciler = FavoritesReconciler(store)
    results = [DrinkOut.from_drink(d, is_favorite=reconciler.is_favorited(d.id)) for d in drinks]
    return SearchResponse(query=query, count=len(results), results=results)


@app.get(
    "/search",
    response_model=SearchResponse,
    tags=["search"],
    summary="Search drinks by name",
)
def search(
    q: str = Query(..., min_length=1, description="Drink name to search for (e.g., 'margarita')"),
    client: BaseCatalogClient = Depends(get_catalog_client),
    store: FavoritesStore = Depends(get_store),
) -> SearchResponse:
    """
    Search drinks by name.

    Returns:
        SearchResponse with every matching drink (possibly none), each annotated
        with is_favorite

    Raises:
        HTTPException 400: If the query cannot be encoded into a request
        HTTPException 502: If the catalog is unreachable or answers malformed data
    """
    try:
        drinks = client.search_by_name(q)
    except CatalogError as e:
        logger.warning("Name search %r failed (%s): %s", q, e.kind, e)
        raise catalog_error_to_http(e) from e
    return _search_response(q, drinks, store)


@app.get(
    "/search/ingredient",
    response_model=SearchResponse,
    tags=["search"],
    summary="Filter drinks by ingredient",
)
def search_by_ingredient(
    i: str = Query(..., min_length=1, description="Ingredient name (e.g., 'Gin')"),
    client: BaseCatalogClient = Depends(get_catalog_client),
    store: FavoritesStore = Depends(get_store),
) -> SearchResponse:
    """
    Filter drinks by ingredient.

    Filter results only carry id, name and thumbnail; their ingredient lists
    are empty until fetched through GET /drinks/{drink_id}.
    """
    try:
        drinks = client.search_by_ingredient(i)
    except CatalogError as e:
        logger.warning("Ingredient search %r failed (%s): %s", i, e.kind, e)
        raise catalog_error_to_http(e) from e
    return _search_response(i, drinks, store)


@app.get("/drinks/{drink_id}", response_model=DrinkOut, tags=["search"])
def get_drink(
    drink_id: str,
    client: BaseCatalogClient = Depends(get_catalog_client),
    store: FavoritesStore = Depends(get_store),
) -> DrinkOut:
    """
    Look up one drink with its full ingredient list.

    Raises:
        HTTPException 404: If the catalog has no drink with this id
    """
    try:
        drink = client.fetch_by_id(drink_id)
    except CatalogError as e:
        logger.warning("Lookup of %s failed (%s): %s", drink_id, e.kind, e)
        raise catalog_error_to_http(e) from e
    return DrinkOut.from_drink(drink, is_favorite=drink.id in store.favorite_ids())


@app.get("/favorites", response_model=FavoritesResponse, tags=["favorites"])
def list_favorites(store: FavoritesStore = Depends(get_store)) -> FavoritesResponse:
    """List every saved favorite (empty if the store cannot be read)."""
    return FavoritesResponse.from_entries(store.list())


@app.post("/favorites", response_model=FavoritesResponse, tags=["favorites"])
def add_favorite(entry: FavoriteEntry, store: FavoritesStore = Depends(get_store)) -> FavoritesResponse:
    """
    Save a favorite. An existing entry with the same id is replaced.

    Raises:
        HTTPException 500: If the favorite cannot be persisted
    """
    try:
        store.add(entry)
    except UnrecoverableStoreError as e:
        raise store_error_to_http(e) from e
    return FavoritesResponse.from_entries(store.list())


@app.delete("/favorites/{drink_id}", response_model=FavoritesResponse, tags=["favorites"])
def remove_favorite(drink_id: str, store: FavoritesStore = Depends(get_store)) -> FavoritesResponse:
    """
    Remove a favorite. Removing an unknown id is not an error.

    Raises:
        HTTPException 500: If the removal cannot be persisted
    """
    try:
        store.remove(drink_id)
    except UnrecoverableStoreError as e:
        raise store_error_to_http(e) from e
    return FavoritesResponse.from_entries(store.list())


@app.post("/favorites/{drink_id}/toggle", response_model=ToggleFavoriteResponse, tags=["favorites"])
def toggle_favorite(
    drink_id: str,
    client: BaseCatalogClient = Depends(get_catalog_client),
    store: FavoritesStore = Depends(get_store),
) -> ToggleFavoriteResponse:
    """
    Flip a drink's favorite status.

    Favoriting a drink looks it up in the catalog first so the saved entry
    carries its name, thumbnail and instructions.

    Raises:
        HTTPException 404: If the drink is not a favorite and the catalog doesn't know it
        HTTPException 500: If the change cannot be persisted
    """
    reconciler = FavoritesReconciler(store)
    try:
        saved = {entry.id: entry for entry in store.list()}
        if drink_id in saved:
            drink = Drink.from_favorite(saved[drink_id])
        else:
            drink = client.fetch_by_id(drink_id)
        is_favorite = reconciler.toggle_favorite(drink)
    except CatalogError as e:
        raise catalog_error_to_http(e) from e
    except UnrecoverableStoreError as e:
        raise store_error_to_http(e) from e
    return ToggleFavoriteResponse(id=drink_id, is_favorite=is_favorite)


@app.get("/health", tags=["health"])
def health():
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, API metadata, uptime and effective configuration.
        Always returns 200 OK if the endpoint is reachable.
    """
    return {
        "status": "ok",
        "name": "Cocktail Compass API",
        "version": "1.0.0",
        "uptime_seconds": int(time.time() - _APP_START_TIME),
        "config": get_config_summary(),
    }


@app.get("/")
def root():
    """
    Root endpoint providing API information.

    Returns:
        Dictionary with API name and version
    """
    return {
        "name": "Cocktail Compass API",
        "version": "1.0.0",
        "description": "Browse TheCocktailDB recipes and keep a local list of favorite drinks",
        "docs": "/docs",
    }
