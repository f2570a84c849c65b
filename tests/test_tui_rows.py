from __future__ import annotations

import pytest

pytest.importorskip("textual")

from minestuck_datagen.tui.rows import parse_field_id


def test_parse_field_id() -> None:
    assert parse_field_id("item-3") == ("item", 3, -1)
    assert parse_field_id("grist-1-4") == ("grist", 1, 4)
    assert parse_field_id("amount-0-0") == ("amount", 0, 0)
    assert parse_field_id("export") == ("export", -1, -1)
    assert parse_field_id(None) == ("", -1, -1)
