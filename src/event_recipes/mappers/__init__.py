"""Data mappers between storage rows and API schemas."""

from event_recipes.mappers.event import map_event_row
from event_recipes.mappers.recipe import (
    build_custom_ingredients_string,
    build_ingredients_string,
    format_ingredient_line,
    reconstruct_recipe,
)
from event_recipes.mappers.sidecar import (
    SidecarInvalid,
    SidecarMissing,
    SidecarParsed,
    parse_sidecar,
)


__all__ = [
    "SidecarInvalid",
    "SidecarMissing",
    "SidecarParsed",
    "build_custom_ingredients_string",
    "build_ingredients_string",
    "format_ingredient_line",
    "map_event_row",
    "parse_sidecar",
    "reconstruct_recipe",
]
