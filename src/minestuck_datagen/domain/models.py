from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ..identifiers import grist_resource, validate_resource_location

ITEM = "item"
TAG = "tag"


@dataclass(frozen=True)
class Ingredient:
    """A recipe input: a concrete item, or a tag (reserved, never valid)."""

    kind: str
    id: str

    @classmethod
    def item(cls, item_id: str) -> Ingredient:
        return cls(ITEM, item_id)

    @classmethod
    def tag(cls, tag_id: str) -> Ingredient:
        return cls(TAG, tag_id)

    def is_valid(self) -> bool:
        return self.kind == ITEM and validate_resource_location(self.id)


@dataclass(frozen=True)
class ResultItem:
    item: str

    def is_valid(self) -> bool:
        return validate_resource_location(self.item)


class CombinationMode(Enum):
    AND = "and"
    OR = "or"

    @classmethod
    def parse(cls, text: str) -> Optional[CombinationMode]:
        return _MODE_ALIASES.get(text.strip().lower())

    def __str__(self) -> str:
        return self.value


_MODE_ALIASES = {
    "and": CombinationMode.AND,
    "&&": CombinationMode.AND,
    "or": CombinationMode.OR,
    "||": CombinationMode.OR,
}


@dataclass
class GristCostRecipe:
    ingredient: Ingredient
    grist_cost: dict[str, int] = field(default_factory=dict)
    priority: Optional[int] = None

    def is_valid(self) -> bool:
        if not self.ingredient.is_valid():
            return False
        return all(validate_resource_location(grist_resource(name)) for name in self.grist_cost)


@dataclass
class CombinationRecipe:
    input1: Ingredient
    input2: Ingredient
    mode: CombinationMode
    output: ResultItem

    def is_valid(self) -> bool:
        return self.input1.is_valid() and self.input2.is_valid() and self.output.is_valid()


Recipe = Union[GristCostRecipe, CombinationRecipe]


def recipe_is_valid(recipe: Recipe) -> bool:
    if isinstance(recipe, GristCostRecipe):
        return recipe.is_valid()
    if isinstance(recipe, CombinationRecipe):
        return recipe.is_valid()
    return False


def primary_item(recipe: Recipe) -> str:
    """The identifier a recipe is filed under: ingredient for grist costs, output for combinations."""
    if isinstance(recipe, GristCostRecipe):
        return recipe.ingredient.id
    return recipe.output.item
