"""Recipe record mappers.

Two directions are covered here:

- Construction: building the ingredients display string once, when a
  recipe is attached to an event.
- Reconstruction: turning a stored recipe row (columns plus the optional
  JSON sidecar) back into the catalog-shaped ``RecipeView`` on read.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from event_recipes.mappers.sidecar import (
    SidecarInvalid,
    SidecarParsed,
    parse_sidecar,
)
from event_recipes.observability.logging import get_logger
from event_recipes.observability.metrics import SIDECAR_PARSE_FAILURES
from event_recipes.schemas.recipe import RecipeView


if TYPE_CHECKING:
    from event_recipes.schemas.recipe import CustomIngredient


logger = get_logger(__name__)

INGREDIENT_SLOTS = 20
UNKNOWN = "Unknown"

# Sidecar key -> RecipeView field, for values that replace the column only when set
_TEXT_OVERRIDES = {
    "strTags": "str_tags",
    "strYoutube": "str_youtube",
    "strSource": "str_source",
    "strInstructions": "str_instructions",
}

# Sidecar key -> RecipeView field, for values that default to "Unknown"
_LABEL_OVERRIDES = {
    "strCategory": "str_category",
    "strArea": "str_area",
}

_SLOT_PREFIXES = ("strIngredient", "strMeasure")


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def format_ingredient_line(ingredient: Any, measure: Any = None) -> str | None:
    """Format one ingredient as ``"<measure> <ingredient>"``.

    Returns:
        The formatted line, or None when the ingredient name is empty.
    """
    name = _clean(ingredient)
    if not name:
        return None
    amount = _clean(measure)
    return f"{amount} {name}" if amount else name


def build_ingredients_string(meal: Mapping[str, Any]) -> str:
    """Build the ingredients display string from a catalog payload.

    Scans ``strIngredient1..20`` with the matching ``strMeasureN``.

    Example:
        >>> build_ingredients_string(
        ...     {"strIngredient1": "Flour", "strMeasure1": "200g", "strIngredient2": ""}
        ... )
        '200g Flour'
    """
    lines = (
        format_ingredient_line(meal.get(f"strIngredient{i}"), meal.get(f"strMeasure{i}"))
        for i in range(1, INGREDIENT_SLOTS + 1)
    )
    return ", ".join(line for line in lines if line)


def build_custom_ingredients_string(ingredients: Iterable[CustomIngredient]) -> str:
    """Build the ingredients display string for a user-authored recipe."""
    lines = (format_ingredient_line(i.ingredient, i.measure) for i in ingredients)
    return ", ".join(line for line in lines if line)


def _meal_id(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _column_fields(row: Mapping[str, Any]) -> dict[str, Any]:
    """Fields of a RecipeView taken from columns alone, with defaults applied."""
    return {
        "id": row.get("id"),
        "id_meal": _meal_id(row.get("meal_id")),
        "str_meal": row.get("title") or "",
        "str_meal_thumb": row.get("image"),
        "str_category": row.get("category") or UNKNOWN,
        "str_area": row.get("area") or UNKNOWN,
        "str_tags": row.get("tags") or "",
        "str_youtube": row.get("youtube") or "",
        "str_source": row.get("source") or "",
        "str_instructions": row.get("instructions") or "",
        "ingredients": row.get("ingredients") or "",
        "is_custom": bool(row.get("is_custom") or False),
    }


def _merge_sidecar(fields: dict[str, Any], sidecar: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay sidecar values onto column fields.

    Returns:
        The ``strIngredientN`` / ``strMeasureN`` entries found in the sidecar.
    """
    for key, field in _LABEL_OVERRIDES.items():
        value = sidecar.get(key)
        if value and value != UNKNOWN:
            fields[field] = str(value)

    for key, field in _TEXT_OVERRIDES.items():
        value = sidecar.get(key)
        if value:
            fields[field] = str(value)

    return {
        key: value
        for key, value in sidecar.items()
        if isinstance(key, str) and key.startswith(_SLOT_PREFIXES) and value
    }


def _fallback(row: Mapping[str, Any]) -> RecipeView:
    """Minimal record from columns, built without validation.

    Values of the wrong type are replaced so the record still serializes.
    """
    get = getattr(row, "get", None)
    if get is None:
        return RecipeView.model_construct(id=0, is_custom=False)
    row_id = get("id")
    title = get("title")
    image = get("image")
    ingredients = get("ingredients")
    return RecipeView.model_construct(
        id=row_id if isinstance(row_id, int) and not isinstance(row_id, bool) else 0,
        id_meal=_meal_id(get("meal_id")),
        str_meal=title if isinstance(title, str) else "",
        str_meal_thumb=image if isinstance(image, str) else None,
        ingredients=ingredients if isinstance(ingredients, str) else "",
        is_custom=bool(get("is_custom")),
    )


def reconstruct_recipe(row: Mapping[str, Any]) -> RecipeView:
    """Rebuild the catalog-shaped view of a stored recipe.

    Columns are authoritative for identity and the ingredients string. When
    the sidecar parses to an object, its category and area replace the
    column values unless they are empty or "Unknown", its tags, video,
    source and instructions replace the columns whenever set, and its
    numbered ingredient/measure slots are copied as stored. This function
    never raises.

    Args:
        row: A ``recipes`` row, either an asyncpg Record or a mapping decoded
            from an aggregated JSON document.

    Returns:
        The reconstructed recipe view.
    """
    try:
        fields = _column_fields(row)
        slots: dict[str, Any] = {}

        result = parse_sidecar(row.get("meal_data"))
        if isinstance(result, SidecarInvalid):
            SIDECAR_PARSE_FAILURES.inc()
            logger.warning(
                "Ignoring unparseable recipe payload",
                recipe_id=fields["id"],
                reason=result.reason,
            )
        elif isinstance(result, SidecarParsed):
            slots = _merge_sidecar(fields, result.data)

        return RecipeView.model_validate({**slots, **fields})
    except Exception as e:
        logger.opt(exception=e).error(
            "Recipe reconstruction failed, using column fallback",
            recipe_id=getattr(row, "get", lambda _: None)("id"),
        )
        return _fallback(row)


__all__ = [
    "INGREDIENT_SLOTS",
    "build_custom_ingredients_string",
    "build_ingredients_string",
    "format_ingredient_line",
    "reconstruct_recipe",
]
