"""
Shared fixtures for the Cocktail Compass tests.

Catalog access is faked (FakeCatalogClient) and every favorites store is a
throwaway SQLite file under tmp_path, so no test touches the network or the
real favorites database.
"""

from typing import Dict, List

import pytest

from compass.catalog.base import BaseCatalogClient, NotFoundError
from compass.favorites import FavoritesStore
from compass.models import Drink


def margarita_payload() -> Dict[str, object]:
    """Raw lookup/search payload for the Margarita, as TheCocktailDB returns it."""
    payload: Dict[str, object] = {
        "idDrink": "11007",
        "strDrink": "Margarita",
        "strDrinkThumb": "https://www.thecocktaildb.com/images/media/drink/5noda61589575158.jpg",
        "strInstructions": "Rub the rim of the glass with the lime slice to make the salt stick to it.",
        "strIngredient1": "Tequila",
        "strIngredient2": "Triple sec",
        "strIngredient3": "Lime juice",
        "strMeasure1": "1 1/2 oz ",
        "strMeasure2": "1/2 oz ",
        "strMeasure3": "1 oz ",
    }
    for i in range(4, 16):
        payload[f"strIngredient{i}"] = None
        payload[f"strMeasure{i}"] = None
    return payload


def gin_fizz_payload() -> Dict[str, object]:
    """Raw filter.php payload (id, name and thumbnail only)."""
    return {
        "idDrink": "11403",
        "strDrink": "Gin Fizz",
        "strDrinkThumb": "https://www.thecocktaildb.com/images/media/drink/drtihp1606768397.jpg",
    }


class FakeCatalogClient(BaseCatalogClient):
    """In-memory catalog that records every call."""
    source = "fake"

    def __init__(self, drinks: List[Drink] = None, ingredient_index: Dict[str, List[Drink]] = None) -> None:
        self.drinks = drinks or []
        self.ingredient_index = ingredient_index or {}
        self.calls: List[tuple] = []

    def search_by_name(self, query: str) -> List[Drink]:
        self.calls.append(("name", query))
        return [d for d in self.drinks if query.lower() in d.name.lower()]

    def search_by_ingredient(self, ingredient: str) -> List[Drink]:
        self.calls.append(("ingredient", ingredient))
        return list(self.ingredient_index.get(ingredient, []))

    def fetch_by_id(self, drink_id: str) -> Drink:
        self.calls.append(("id", drink_id))
        for drink in self.drinks:
            if drink.id == drink_id:
                return drink
        raise NotFoundError(f"No drink with id {drink_id!r}")


@pytest.fixture
def margarita() -> Drink:
    return Drink.model_validate(margarita_payload())


@pytest.fixture
def gin_fizz() -> Drink:
    return Drink.model_validate(gin_fizz_payload())


@pytest.fixture
def store(tmp_path):
    """A fresh favorites store backed by a temporary SQLite file."""
    favorites = FavoritesStore(f"sqlite:///{tmp_path / 'favorites.db'}")
    yield favorites
    favorites.close()


@pytest.fixture
def catalog(margarita, gin_fizz) -> FakeCatalogClient:
    return FakeCatalogClient(drinks=[margarita], ingredient_index={"Gin": [gin_fizz]})


@pytest.fixture
def margarita_raw() -> Dict[str, object]:
    return margarita_payload()


@pytest.fixture
def gin_fizz_raw() -> Dict[str, object]:
    return gin_fizz_payload()
