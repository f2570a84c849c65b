from __future__ import annotations

from typing import Any

import yaml

from ..errors import RecipeFormatError
from .models import (
    ITEM,
    TAG,
    CombinationMode,
    CombinationRecipe,
    GristCostRecipe,
    Ingredient,
    Recipe,
    ResultItem,
)

GRIST_COST_TYPE = "minestuck:grist_cost"
COMBINATION_TYPE = "minestuck:combination"


def recipe_to_json(recipe: Recipe) -> dict[str, Any]:
    if isinstance(recipe, GristCostRecipe):
        data: dict[str, Any] = {"type": GRIST_COST_TYPE}
        if recipe.priority is not None:
            data["priority"] = recipe.priority
        data["ingredient"] = _ingredient_to_json(recipe.ingredient)
        data["grist_cost"] = {name: recipe.grist_cost[name] for name in sorted(recipe.grist_cost)}
        return data
    if isinstance(recipe, CombinationRecipe):
        return {
            "type": COMBINATION_TYPE,
            "input1": _ingredient_to_json(recipe.input1),
            "input2": _ingredient_to_json(recipe.input2),
            "mode": str(recipe.mode),
            "output": {ITEM: recipe.output.item},
        }
    raise TypeError(f"Not a recipe: {recipe!r}")


def recipe_from_json(data: Any) -> Recipe:
    if not isinstance(data, dict):
        raise RecipeFormatError("recipe must be a JSON object")
    kind = data.get("type")
    if kind == GRIST_COST_TYPE:
        return GristCostRecipe(
            ingredient=_ingredient_from_json(_require(data, "ingredient")),
            grist_cost=_grist_cost_from_json(_require(data, "grist_cost")),
            priority=_priority_from_json(data.get("priority")),
        )
    if kind == COMBINATION_TYPE:
        mode_text = _require(data, "mode")
        mode = CombinationMode.parse(mode_text) if isinstance(mode_text, str) else None
        if mode is None:
            raise RecipeFormatError(f"unknown combination mode {mode_text!r}")
        return CombinationRecipe(
            input1=_ingredient_from_json(_require(data, "input1")),
            input2=_ingredient_from_json(_require(data, "input2")),
            mode=mode,
            output=_result_from_json(_require(data, "output")),
        )
    raise RecipeFormatError(f"unknown recipe type {kind!r}")


def dump_recipe(recipe: Recipe) -> str:
    """Render a recipe's full structure for diagnostics."""
    body = recipe_to_json(recipe)
    return yaml.safe_dump({type(recipe).__name__: body}, sort_keys=False).rstrip()


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise RecipeFormatError(f"missing field {key!r}")
    return data[key]


def _ingredient_to_json(ingredient: Ingredient) -> dict[str, str]:
    return {ingredient.kind: ingredient.id}


def _ingredient_from_json(value: Any) -> Ingredient:
    if isinstance(value, dict) and len(value) == 1:
        kind, ident = next(iter(value.items()))
        if kind in (ITEM, TAG) and isinstance(ident, str):
            return Ingredient(kind, ident)
    raise RecipeFormatError(f"invalid ingredient {value!r}")


def _result_from_json(value: Any) -> ResultItem:
    if isinstance(value, dict) and set(value) == {ITEM} and isinstance(value[ITEM], str):
        return ResultItem(value[ITEM])
    raise RecipeFormatError(f"invalid result {value!r}")


def _grist_cost_from_json(value: Any) -> dict[str, int]:
    if not isinstance(value, dict):
        raise RecipeFormatError("grist_cost must be an object")
    costs: dict[str, int] = {}
    for name, amount in value.items():
        if not _is_int(amount):
            raise RecipeFormatError(f"grist amount for {name!r} must be an integer")
        costs[name] = amount
    return costs


def _priority_from_json(value: Any) -> int | None:
    if value is None:
        return None
    if not _is_int(value):
        raise RecipeFormatError("priority must be an integer")
    return value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
