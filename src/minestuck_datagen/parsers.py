from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Optional

from .domain import CombinationMode, CombinationRecipe, GristCostRecipe, Ingredient, Recipe, ResultItem
from .identifiers import grist_resource

DEFAULT_PRIORITY = 101
COMBINATION_FIELDS = 4

AMOUNT_RE = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class LineResult:
    """Outcome of parsing one input line.

    Both fields are None for lines that are skipped silently (blank lines).
    """

    recipe: Optional[Recipe] = None
    error: Optional[str] = None


def parse_grist_line(line: str, priority: Optional[int] = DEFAULT_PRIORITY) -> LineResult:
    """Parse ``item, grist=amount, grist:amount, ...`` into a grist cost recipe."""
    columns = line.rstrip("\r\n").split(",")
    item = columns[0].strip()
    costs: dict[str, int] = {}
    for column in columns[1:]:
        if "=" in column:
            name, _, amount = column.partition("=")
        elif ":" in column:
            name, _, amount = column.rpartition(":")
        else:
            return LineResult(error=f"Error: invalid grist cost format: {column!r} in {line.strip()!r}")
        amount = amount.strip()
        if not AMOUNT_RE.match(amount):
            return LineResult(error=f"Error: invalid grist amount {amount!r} in {line.strip()!r}")
        costs[grist_resource(name.strip())] = int(amount)
    if not costs:
        return LineResult()
    return LineResult(
        recipe=GristCostRecipe(ingredient=Ingredient.item(item), grist_cost=costs, priority=priority)
    )


def parse_combination_line(line: str) -> LineResult:
    """Parse ``input1, mode, input2, output`` into a combination recipe."""
    text = line.rstrip("\r\n")
    columns = [column.strip() for column in text.split(",")]
    if len(columns) < COMBINATION_FIELDS:
        if len(columns) == 1 and not columns[0]:
            return LineResult()
        return LineResult(error=f"{text} only has {len(columns)} fields, needs {COMBINATION_FIELDS}")
    input1, mode_text, input2, output = columns[:COMBINATION_FIELDS]
    mode = CombinationMode.parse(mode_text)
    if mode is None:
        return LineResult(error=f"Invalid mode {mode_text} in {text!r}")
    return LineResult(
        recipe=CombinationRecipe(
            input1=Ingredient.item(input1),
            input2=Ingredient.item(input2),
            mode=mode,
            output=ResultItem(output),
        )
    )
