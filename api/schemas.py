"""
Pydantic schemas for FastAPI request and response models.

This module defines the models used for API request validation and response
serialization. Drinks are flattened for the client: the ingredient slots are
replaced by the projected ingredient list and each drink carries its favorite
status.

The schemas include:
- DrinkOut: One drink with ingredients and favorite status
- SearchResponse: Drinks matching a name or ingredient query
- FavoritesResponse: The saved favorites list
- ToggleFavoriteResponse: New favorite status after a toggle
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from compass.models import Drink, FavoriteEntry


class DrinkOut(BaseModel):
    """Drink as returned to clients."""
    id: str = Field(..., description="Drink identifier")
    name: str = Field(..., description="Drink name")
    thumbnail_url: Optional[str] = Field(None, description="Thumbnail image URL")
    instructions: str = Field(..., description="Preparation instructions, or a placeholder when none are known")
    ingredients: List[str] = Field(default_factory=list, description="Ingredients with measures, in recipe order")
    is_favorite: bool = Field(False, description="Whether the drink is in the user's favorites")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "11007",
                "name": "Margarita",
                "thumbnail_url": "https://www.thecocktaildb.com/images/media/drink/5noda61589575158.jpg",
                "instructions": "Rub the rim of the glass with the lime slice...",
                "ingredients": ["1 1/2 oz Tequila", "1/2 oz Triple sec", "1 oz Lime juice", "Salt"],
                "is_favorite": False,
            }
        }
    )

    @classmethod
    def from_drink(cls, drink: Drink, is_favorite: bool = False) -> "DrinkOut":
        return cls(
            id=drink.id,
            name=drink.name,
            thumbnail_url=drink.thumbnail_url,
            instructions=drink.instructions_text,
            ingredients=drink.ingredients,
            is_favorite=is_favorite,
        )


class SearchResponse(BaseModel):
    """Response model for the name and ingredient search endpoints."""
    query: str = Field(..., description="Query as submitted")
    count: int = Field(..., ge=0, description="Number of drinks returned")
    results: List[DrinkOut] = Field(default_factory=list)


class FavoritesResponse(BaseModel):
    """Response model for the favorites endpoints."""
    count: int = Field(..., ge=0)
    favorites: List[FavoriteEntry] = Field(default_factory=list)

    @classmethod
    def from_entries(cls, entries: List[FavoriteEntry]) -> "FavoritesResponse":
        return cls(count=len(entries), favorites=entries)


class ToggleFavoriteResponse(BaseModel):
    """Response model for POST /favorites/{drink_id}/toggle."""
    id: str
    is_favorite: bool
