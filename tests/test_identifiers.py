from __future__ import annotations

import pytest

from minestuck_datagen.identifiers import (
    DEFAULT_NAMESPACE,
    grist_resource,
    split_location,
    validate_resource_location,
)


@pytest.mark.parametrize(
    "location",
    [
        "minestuck:build",
        "minecraft:diamond_sword",
        "my-mod.extra:items/sub_dir/thing-1",
        "a:b",
        "0_9:path.with.dots",
    ],
)
def test_valid_locations(location: str) -> None:
    assert validate_resource_location(location)


@pytest.mark.parametrize(
    "location",
    [
        "",
        "no_colon",
        "items/no_colon",
        ":path",
        "namespace:",
        "Minestuck:build",
        "minestuck:Build",
        "mine/stuck:build",
        "minestuck:build item",
        "minestuck:über",
    ],
)
def test_invalid_locations(location: str) -> None:
    assert not validate_resource_location(location)


def test_split_happens_at_first_colon() -> None:
    assert not validate_resource_location("minestuck:build:extra")
    assert split_location("minestuck:build:extra") == ("minestuck", "build:extra")


def test_grist_resource_adds_default_namespace() -> None:
    assert grist_resource("cruxite") == f"{DEFAULT_NAMESPACE}:cruxite"
    assert grist_resource("othermod:cruxite") == "othermod:cruxite"


@pytest.mark.parametrize("name", ["build", "minestuck:build", "", "x:y:z", "Caps"])
def test_grist_resource_is_idempotent(name: str) -> None:
    assert grist_resource(grist_resource(name)) == grist_resource(name)
