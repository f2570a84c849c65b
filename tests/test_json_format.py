from __future__ import annotations

import pytest
import yaml

from minestuck_datagen.domain import (
    COMBINATION_TYPE,
    GRIST_COST_TYPE,
    CombinationMode,
    CombinationRecipe,
    GristCostRecipe,
    Ingredient,
    ResultItem,
    dump_recipe,
    recipe_from_json,
    recipe_to_json,
)
from minestuck_datagen.errors import RecipeFormatError


def test_grist_cost_to_json() -> None:
    recipe = GristCostRecipe(
        ingredient=Ingredient.item("minestuck:build"),
        grist_cost={"minestuck:cruxite": 50, "minestuck:artifact": 50},
        priority=101,
    )
    data = recipe_to_json(recipe)
    assert data == {
        "type": GRIST_COST_TYPE,
        "priority": 101,
        "ingredient": {"item": "minestuck:build"},
        "grist_cost": {"minestuck:artifact": 50, "minestuck:cruxite": 50},
    }
    assert list(data["grist_cost"]) == ["minestuck:artifact", "minestuck:cruxite"]


def test_grist_cost_without_priority_omits_field() -> None:
    recipe = GristCostRecipe(ingredient=Ingredient.item("minestuck:build"), grist_cost={"minestuck:build": 1})
    data = recipe_to_json(recipe)
    assert "priority" not in data
    assert recipe_from_json(data).priority is None


def test_combination_to_json() -> None:
    recipe = CombinationRecipe(
        input1=Ingredient.item("minestuck:sample"),
        input2=Ingredient.item("minestuck:other"),
        mode=CombinationMode.OR,
        output=ResultItem("minestuck:result"),
    )
    assert recipe_to_json(recipe) == {
        "type": COMBINATION_TYPE,
        "input1": {"item": "minestuck:sample"},
        "input2": {"item": "minestuck:other"},
        "mode": "or",
        "output": {"item": "minestuck:result"},
    }


def test_recipe_from_json_reads_tag_ingredient() -> None:
    recipe = recipe_from_json(
        {"type": GRIST_COST_TYPE, "ingredient": {"tag": "minecraft:logs"}, "grist_cost": {"minestuck:build": 2}}
    )
    assert isinstance(recipe, GristCostRecipe)
    assert recipe.ingredient == Ingredient.tag("minecraft:logs")
    assert not recipe.is_valid()


def test_recipe_from_json_mode_case_insensitive() -> None:
    recipe = recipe_from_json(
        {
            "type": COMBINATION_TYPE,
            "input1": {"item": "minestuck:a"},
            "input2": {"item": "minestuck:b"},
            "mode": "AND",
            "output": {"item": "minestuck:c"},
        }
    )
    assert isinstance(recipe, CombinationRecipe)
    assert recipe.mode is CombinationMode.AND


@pytest.mark.parametrize(
    "data",
    [
        [],
        {},
        {"type": "minecraft:crafting_shaped"},
        {"type": GRIST_COST_TYPE, "grist_cost": {}},
        {"type": GRIST_COST_TYPE, "ingredient": {"item": "minestuck:a"}, "grist_cost": {"minestuck:b": "5"}},
        {"type": GRIST_COST_TYPE, "ingredient": {"item": "minestuck:a"}, "grist_cost": {"minestuck:b": True}},
        {"type": GRIST_COST_TYPE, "ingredient": {"item": "minestuck:a"}, "grist_cost": []},
        {"type": GRIST_COST_TYPE, "ingredient": {"block": "minestuck:a"}, "grist_cost": {}},
        {"type": GRIST_COST_TYPE, "ingredient": {"item": "minestuck:a"}, "grist_cost": {}, "priority": 1.5},
        {
            "type": COMBINATION_TYPE,
            "input1": {"item": "minestuck:a"},
            "input2": {"item": "minestuck:b"},
            "mode": "xor",
            "output": {"item": "minestuck:c"},
        },
        {
            "type": COMBINATION_TYPE,
            "input1": {"item": "minestuck:a"},
            "input2": {"item": "minestuck:b"},
            "mode": "and",
            "output": {"tag": "minestuck:c"},
        },
    ],
)
def test_recipe_from_json_rejects_malformed(data: object) -> None:
    with pytest.raises(RecipeFormatError):
        recipe_from_json(data)


def test_recipe_to_json_rejects_non_recipe() -> None:
    with pytest.raises(TypeError):
        recipe_to_json({"type": GRIST_COST_TYPE})  # type: ignore[arg-type]


def test_dump_recipe_includes_full_structure() -> None:
    recipe = GristCostRecipe(ingredient=Ingredient.item("Bad Item"), grist_cost={"minestuck:build": 3}, priority=101)
    text = dump_recipe(recipe)
    assert yaml.safe_load(text) == {"GristCostRecipe": recipe_to_json(recipe)}
    assert "Bad Item" in text
