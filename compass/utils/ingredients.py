"""
Ingredient slot projection utilities.

TheCocktailDB stores up to fifteen ingredients per drink as flat
strIngredient1..15 / strMeasure1..15 field pairs. This module turns those
flat fields into ordered slots and projects the slots into display strings.
All functions are pure (no I/O, no network calls).

Example:
    slots: [("Tequila", "1 1/2 oz "), ("Salt", None), ("", "1 dash")]
    projection: ["1 1/2 oz Tequila", "Salt"]
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

# Number of ingredient/measure pairs the upstream schema carries per drink
INGREDIENT_SLOT_COUNT = 15

Slot = Tuple[Optional[str], Optional[str]]


def _clean(value: Any) -> Optional[str]:
    """Return value if it is a string, otherwise None."""
    return value if isinstance(value, str) else None


def slots_from_api(raw: Dict[str, Any]) -> List[Slot]:
    """
    Build the fixed-size slot list from a raw drink dictionary.

    Args:
        raw: Drink object as returned by the API (keys strIngredientN / strMeasureN)

    Returns:
        List of exactly INGREDIENT_SLOT_COUNT (ingredient, measure) tuples.
        Missing or non-string values become None.
    """
    return [
        (_clean(raw.get(f"strIngredient{i}")), _clean(raw.get(f"strMeasure{i}")))
        for i in range(1, INGREDIENT_SLOT_COUNT + 1)
    ]


def format_ingredient(ingredient: str, measure: Optional[str]) -> str:
    """Format one included slot as '<measure> <ingredient>' or '<ingredient>'."""
    measurement = (measure or "").strip()
    return f"{measurement} {ingredient}" if measurement else ingredient


def project_ingredients(slots: Iterable[Slot]) -> List[str]:
    """
    Project ingredient slots into an ordered list of display strings.

    Slots are scanned in order. A slot whose ingredient name is missing or empty
    contributes nothing; otherwise the trimmed measure (when non-empty) is
    prefixed to the ingredient name.

    Args:
        slots: Iterable of (ingredient, measure) pairs, each component optional

    Returns:
        List of formatted ingredient strings, in slot order

    Examples:
        >>> project_ingredients([("Tequila", "1 1/2 oz "), ("Lime juice", "")])
        ['1 1/2 oz Tequila', 'Lime juice']
    """
    result: List[str] = []
    for slot in slots:
        try:
            ingredient, measure = slot
        except (TypeError, ValueError):
            # Malformed slot shape
            continue
        if not isinstance(ingredient, str) or not ingredient:
            continue
        result.append(format_ingredient(ingredient, measure if isinstance(measure, str) else None))
    return result
