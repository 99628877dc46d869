"""
Drink, favorite and store models for the cocktail catalog.

This module defines the canonical schemas used throughout the catalog.
The catalog client validates raw TheCocktailDB payloads straight into Drink
(field aliases match the upstream keys), the favorites store persists the
FavoriteEntry subset, and the nearby-store ranking produces NearbyStore.

# NOTE: Drink keeps the upstream's fifteen ingredient/measure pairs as an ordered
    ingredient_slots list. The display list (Drink.ingredients) is derived from
    the slots on every access and is never stored.

Current field expectations:
- search.php / lookup.php return: idDrink, strDrink, strDrinkThumb, strInstructions,
  strIngredient1..15, strMeasure1..15
- filter.php returns: idDrink, strDrink, strDrinkThumb (no instructions, no slots)
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from compass.utils.ingredients import INGREDIENT_SLOT_COUNT, project_ingredients, slots_from_api

NO_INSTRUCTIONS_TEXT = "No instructions provided."
NO_ADDRESS_TEXT = "No Address"


class IngredientSlot(BaseModel):
    """One ingredient/measure pair; both components are optional."""
    ingredient: Optional[str] = None
    measure: Optional[str] = None


def _empty_slots() -> List[IngredientSlot]:
    return [IngredientSlot() for _ in range(INGREDIENT_SLOT_COUNT)]


class Drink(BaseModel):
    """
    Normalized representation of one drink and its ingredient slots.

    Accepts either the raw upstream shape (idDrink, strDrink, strIngredientN, ...)
    or the Python field names (id, name, ingredient_slots, ...).
    """
    id: str = Field(..., alias="idDrink", min_length=1, description="Upstream drink identifier")
    name: str = Field(..., alias="strDrink", description="Display name")
    thumbnail_url: Optional[str] = Field(None, alias="strDrinkThumb", description="Thumbnail image URL")
    instructions: Optional[str] = Field(None, alias="strInstructions", description="Preparation instructions")
    ingredient_slots: List[IngredientSlot] = Field(
        default_factory=_empty_slots,
        description=f"Exactly {INGREDIENT_SLOT_COUNT} ordered ingredient/measure pairs",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _collect_upstream_slots(cls, data: Any) -> Any:
        """Fold flat strIngredientN / strMeasureN keys into ingredient_slots."""
        if isinstance(data, dict) and "ingredient_slots" not in data:
            data = dict(data)
            data["ingredient_slots"] = [
                {"ingredient": ingredient, "measure": measure}
                for ingredient, measure in slots_from_api(data)
            ]
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # The upstream occasionally serializes ids as numbers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("ingredient_slots")
    @classmethod
    def _fixed_slot_count(cls, slots: List[IngredientSlot]) -> List[IngredientSlot]:
        if len(slots) > INGREDIENT_SLOT_COUNT:
            raise ValueError(f"at most {INGREDIENT_SLOT_COUNT} ingredient slots are allowed, got {len(slots)}")
        return slots + [IngredientSlot() for _ in range(INGREDIENT_SLOT_COUNT - len(slots))]

    @property
    def ingredients(self) -> List[str]:
        """Ordered display strings derived from ingredient_slots."""
        return project_ingredients((slot.ingredient, slot.measure) for slot in self.ingredient_slots)

    @property
    def instructions_text(self) -> str:
        """Instructions for display; absent and empty read the same."""
        return self.instructions or NO_INSTRUCTIONS_TEXT

    def to_favorite(self) -> "FavoriteEntry":
        """Project this drink onto the persisted favorite subset."""
        return FavoriteEntry(
            id=self.id,
            name=self.name,
            thumbnail_url=self.thumbnail_url,
            instructions=self.instructions,
        )

    @classmethod
    def from_favorite(cls, entry: "FavoriteEntry") -> "Drink":
        """Rebuild a drink from a favorite entry. Ingredient slots stay empty."""
        return cls(
            id=entry.id,
            name=entry.name,
            thumbnail_url=entry.thumbnail_url,
            instructions=entry.instructions,
        )


class FavoriteEntry(BaseModel):
    """Persisted subset of a Drink representing a user's saved drink."""
    id: str = Field(..., min_length=1, description="Drink identifier")
    name: str = Field(..., description="Display name")
    thumbnail_url: Optional[str] = Field(None, description="Thumbnail image URL")
    instructions: Optional[str] = Field(None, description="Preparation instructions")

    model_config = ConfigDict(from_attributes=True)


class DrinkResponse(BaseModel):
    """
    Response envelope shared by every TheCocktailDB endpoint.

    A null or absent drinks list means zero results.
    """
    drinks: Optional[List[Drink]] = None

    @field_validator("drinks", mode="before")
    @classmethod
    def _no_data_marker(cls, value: Any) -> Any:
        # filter.php answers an unknown ingredient with the string "no data found"
        if isinstance(value, str):
            return None
        return value


class DrinkListing(BaseModel):
    """A drink annotated with the user's favorite status."""
    drink: Drink
    is_favorite: bool = False


class Coordinate(BaseModel):
    """A WGS84 latitude/longitude pair in degrees."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class PlaceResult(BaseModel):
    """One raw result from the nearby-places collaborator."""
    name: Optional[str] = None
    address: Optional[str] = None
    coordinate: Coordinate


class NearbyStore(BaseModel):
    """A store near the user, with its straight-line distance in metres."""
    name: str
    address: str = NO_ADDRESS_TEXT
    coordinate: Coordinate
    distance_m: Optional[float] = Field(None, ge=0, description="Distance from the user location in metres")
