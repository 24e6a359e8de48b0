"""Recipe schemas.

Recipe responses keep the key names of the external meal catalog
(``idMeal``, ``strMeal``, ``strIngredient1``...) so clients can render
imported and stored recipes with the same code.
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from event_recipes.schemas.base import APIRequest, APIResponse


class RecipeView(APIResponse):
    """Normalized view of a stored recipe.

    Besides the declared fields, the model carries the numbered
    ``strIngredientN`` / ``strMeasureN`` keys copied from the stored
    external payload.
    """

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., description="Recipe row identifier")
    id_meal: str | None = Field(
        default=None,
        description="External catalog identifier; null for custom recipes",
        examples=["52977"],
    )
    str_meal: str = Field(default="", description="Recipe title", examples=["Corba"])
    str_meal_thumb: str | None = Field(default=None, description="Image URL")
    str_category: str = Field(default="Unknown", description="Recipe category")
    str_area: str = Field(default="Unknown", description="Cuisine area")
    str_tags: str = Field(default="", description="Comma-separated tags")
    str_youtube: str = Field(default="", description="External video link")
    str_source: str = Field(default="", description="External source link")
    str_instructions: str = Field(default="", description="Preparation instructions")
    ingredients: str = Field(
        default="",
        description="Display string of measures and ingredients",
        examples=["200g Flour, 2 Eggs"],
    )
    is_custom: bool = Field(default=False, description="True for user-authored recipes")


class ImportRecipeRequest(APIRequest):
    """Attach a recipe imported from the external catalog.

    The payload is stored verbatim; only ``idMeal`` and ``strMeal`` are
    required and those are checked by the event service.
    """

    recipe: dict[str, Any] = Field(
        ...,
        description="Full recipe object as returned by the external catalog",
    )


class CustomIngredient(APIRequest):
    """One line of a user-authored ingredient list."""

    ingredient: str = Field(..., min_length=1, examples=["Flour"])
    measure: str = Field(default="", examples=["200g"])


class CustomRecipeRequest(APIRequest):
    """Attach a user-authored recipe to an event."""

    title: str = Field(..., min_length=1, max_length=255)
    image: str | None = None
    category: str | None = None
    area: str | None = None
    tags: str | None = None
    youtube: str | None = None
    source: str | None = None
    instructions: str | None = None
    ingredients: list[CustomIngredient] = Field(default_factory=list, max_length=50)
