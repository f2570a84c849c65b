from __future__ import annotations

from ..editor import CostEntry, GristField
from .textual import Button, Horizontal, Input, Static, Vertical


def parse_field_id(widget_id: str | None) -> tuple[str, int, int]:
    """Split ``kind-i[-j]`` widget ids back into their entry/grist indexes."""
    parts = (widget_id or "").split("-")
    kind = parts[0] if parts else ""
    numbers = [int(p) for p in parts[1:] if p.isdigit()]
    entry = numbers[0] if numbers else -1
    grist = numbers[1] if len(numbers) > 1 else -1
    return kind, entry, grist


def grist_row(i: int, j: int, grist: GristField) -> Horizontal:
    name = Input(value=grist.name, placeholder="grist", id=f"grist-{i}-{j}", classes="grist-input")
    amount = Input(value=grist.amount_text, placeholder="amount", id=f"amount-{i}-{j}", classes="amount-input")
    mark_valid(name, grist.name == "" or grist.valid_name)
    mark_valid(amount, grist.amount_text == "" or grist.amount is not None)
    return Horizontal(name, Static(" = "), amount, classes="grist-row")


def entry_row(i: int, entry: CostEntry) -> Vertical:
    item = Input(value=entry.item_id, placeholder="modid:itemname", id=f"item-{i}", classes="item-input")
    mark_valid(item, entry.item_id == "" or entry.valid_item)
    rows = [grist_row(i, j, grist) for j, grist in enumerate(entry.grist)]
    classes = "entry even" if i % 2 == 0 else "entry"
    return Vertical(
        item,
        Vertical(*rows, id=f"gristlist-{i}"),
        Button("+ grist", id=f"addgrist-{i}"),
        id=f"entry-{i}",
        classes=classes,
    )


def mark_valid(widget: Input, valid: bool) -> None:
    if valid:
        widget.remove_class("invalid")
    else:
        widget.add_class("invalid")
