from .json_format import (
    COMBINATION_TYPE,
    GRIST_COST_TYPE,
    dump_recipe,
    recipe_from_json,
    recipe_to_json,
)
from .models import (
    CombinationMode,
    CombinationRecipe,
    GristCostRecipe,
    Ingredient,
    Recipe,
    ResultItem,
    primary_item,
    recipe_is_valid,
)

__all__ = [
    "COMBINATION_TYPE",
    "GRIST_COST_TYPE",
    "CombinationMode",
    "CombinationRecipe",
    "GristCostRecipe",
    "Ingredient",
    "Recipe",
    "ResultItem",
    "dump_recipe",
    "primary_item",
    "recipe_from_json",
    "recipe_is_valid",
    "recipe_to_json",
]
