from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .datapack import Datapack, grist_cost_location
from .domain import CombinationRecipe, GristCostRecipe, Ingredient
from .domain.models import ITEM
from .identifiers import DEFAULT_NAMESPACE, grist_resource, validate_resource_location
from .parsers import AMOUNT_RE, DEFAULT_PRIORITY

NAMESPACE_PREFIX = f"{DEFAULT_NAMESPACE}:"


@dataclass
class GristField:
    name: str = ""
    amount_text: str = ""

    def set_name(self, text: str) -> None:
        self.name = text.strip().lower()

    @property
    def valid_name(self) -> bool:
        return validate_resource_location(grist_resource(self.name))

    @property
    def amount(self) -> Optional[int]:
        text = self.amount_text.strip()
        if not AMOUNT_RE.match(text):
            return None
        return int(text)

    def is_blank(self) -> bool:
        return not self.name and not self.amount_text.strip()


@dataclass
class CostEntry:
    item_id: str = ""
    grist: list[GristField] = field(default_factory=list)

    def set_item_id(self, text: str) -> None:
        self.item_id = text.strip().lower()

    @property
    def valid_item(self) -> bool:
        return validate_resource_location(self.item_id)

    def filled_grist(self) -> list[GristField]:
        return [g for g in self.grist if not g.is_blank()]

    def is_blank(self) -> bool:
        return not self.item_id and not self.filled_grist()


@dataclass(frozen=True)
class ExportError:
    text: str
    position: int
    invalid: bool = True


def entries_from_datapack(datapack: Datapack) -> list[CostEntry]:
    entries: list[CostEntry] = []
    for location in sorted(datapack.recipes):
        recipe = datapack.recipes[location]
        if not isinstance(recipe, GristCostRecipe) or recipe.ingredient.kind != ITEM:
            continue
        grist = [
            GristField(name=_display_grist_name(name), amount_text=str(amount))
            for name, amount in sorted(recipe.grist_cost.items())
        ]
        entries.append(CostEntry(item_id=recipe.ingredient.id, grist=grist))
    return entries


def export_entries(
    entries: list[CostEntry],
    priority: Optional[int] = DEFAULT_PRIORITY,
    base: Datapack | None = None,
) -> tuple[Datapack, list[ExportError]]:
    """Build a datapack from editor entries.

    Blank entries are dropped from ``entries`` in place. Combination recipes of
    ``base`` are carried over untouched. When two entries name the same item the
    first one is kept and the later one is reported as a duplicate.
    """
    entries[:] = [entry for entry in entries if not entry.is_blank()]
    datapack = Datapack()
    if base is not None:
        datapack.metadata = base.metadata
        datapack.recipes = {
            location: recipe
            for location, recipe in base.recipes.items()
            if isinstance(recipe, CombinationRecipe)
        }

    errors: list[ExportError] = []
    for position, entry in enumerate(entries):
        if not entry.valid_item:
            errors.append(ExportError(f"Invalid item {entry.item_id}", position))
            continue
        grist = entry.filled_grist()
        if not all(g.valid_name and g.amount is not None for g in grist):
            errors.append(ExportError(f"Invalid grist for {entry.item_id}", position))
            continue
        location = grist_cost_location(entry.item_id)
        if location in datapack.recipes:
            errors.append(ExportError(f"Duplicate item {entry.item_id}", position))
            continue
        datapack.recipes[location] = GristCostRecipe(
            ingredient=Ingredient.item(entry.item_id),
            grist_cost={grist_resource(g.name): g.amount for g in grist if g.amount is not None},
            priority=priority,
        )
        if not grist:
            errors.append(ExportError(f"No grist for {entry.item_id}", position, invalid=False))
    return datapack, errors


def _display_grist_name(name: str) -> str:
    if name.startswith(NAMESPACE_PREFIX):
        return name[len(NAMESPACE_PREFIX):]
    return name
