from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from pathlib import Path, PurePath, PurePosixPath
import shutil
from typing import Any

from .domain import (
    CombinationRecipe,
    GristCostRecipe,
    Recipe,
    dump_recipe,
    primary_item,
    recipe_from_json,
    recipe_is_valid,
    recipe_to_json,
)
from .errors import RecipeFormatError
from .identifiers import split_location

logger = logging.getLogger(__name__)

MCMETA_NAME = "pack.mcmeta"
DATA_DIR = "data"
GRIST_COSTS_DIR = "data/minestuck/recipes/grist_costs"
COMBINATION_DIR = "data/minestuck/recipes/combination"
OWNED_DIRS = (GRIST_COSTS_DIR, COMBINATION_DIR)

DEFAULT_PACK_FORMAT = 10
DEFAULT_DESCRIPTION = "Created by Minestuck Datapack Generator"


@dataclass
class PackMetadata:
    pack_format: int = DEFAULT_PACK_FORMAT
    description: str = DEFAULT_DESCRIPTION

    def to_json(self) -> dict[str, Any]:
        return {"pack": {"pack_format": self.pack_format, "description": self.description}}

    @classmethod
    def from_json(cls, data: Any) -> PackMetadata:
        pack = data.get("pack") if isinstance(data, dict) else None
        if not isinstance(pack, dict):
            raise RecipeFormatError("pack.mcmeta is missing the 'pack' object")
        pack_format = pack.get("pack_format")
        description = pack.get("description")
        if not isinstance(pack_format, int) or isinstance(pack_format, bool):
            raise RecipeFormatError("pack_format must be an integer")
        if not isinstance(description, str):
            raise RecipeFormatError("description must be a string")
        return cls(pack_format=pack_format, description=description)


@dataclass(frozen=True)
class SaveResult:
    written: list[Path]
    rejected: list[str]


def grist_cost_location(item_id: str) -> str:
    namespace, path = split_location(item_id)
    return f"{GRIST_COSTS_DIR}/{namespace}/{path}"


def combination_location(output_id: str) -> str:
    namespace, path = split_location(output_id)
    return f"{COMBINATION_DIR}/{namespace}/{path}"


def location_for(recipe: Recipe) -> str:
    if isinstance(recipe, GristCostRecipe):
        return grist_cost_location(primary_item(recipe))
    if isinstance(recipe, CombinationRecipe):
        return combination_location(primary_item(recipe))
    raise TypeError(f"Not a recipe: {recipe!r}")


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


@dataclass
class Datapack:
    """Pack metadata plus recipes keyed by their location inside the pack."""

    metadata: PackMetadata = field(default_factory=PackMetadata)
    recipes: dict[str, Recipe] = field(default_factory=dict)

    def add(self, recipe: Recipe) -> str | None:
        """Insert ``recipe`` under its derived location; an existing entry wins."""
        location = location_for(recipe)
        if location in self.recipes:
            return None
        self.recipes[location] = recipe
        return location

    @classmethod
    def load(cls, root: str | Path, default_metadata: PackMetadata | None = None) -> Datapack:
        root = Path(root)
        metadata = _load_metadata(root / MCMETA_NAME, default_metadata or PackMetadata())
        recipes: dict[str, Recipe] = {}
        data_dir = root / DATA_DIR
        if not data_dir.is_dir():
            logger.info("No existing recipes in %s", root)
            return cls(metadata=metadata, recipes=recipes)

        for path in sorted(data_dir.rglob("*.json")):
            if path.suffix != ".json" or not path.is_file():
                continue
            location = path.relative_to(root).with_suffix("").as_posix()
            try:
                recipes[location] = recipe_from_json(json.loads(path.read_text(encoding="utf-8")))
            except (OSError, ValueError, RecursionError, RecipeFormatError) as exc:
                logger.error("Failed to parse json at %s: %s", path, exc)
        logger.debug("Loaded %d recipes from %s", len(recipes), root)
        return cls(metadata=metadata, recipes=recipes)

    def save(self, root: str | Path) -> SaveResult:
        root = Path(root)
        write_metadata(root, self.metadata)

        # Removed entries must not survive on disk, so the owned trees start empty.
        for owned in OWNED_DIRS:
            shutil.rmtree(root / owned, ignore_errors=True)

        written: list[Path] = []
        rejected: list[str] = []
        for location in sorted(self.recipes):
            recipe = self.recipes[location]
            if not _is_safe_location(location):
                logger.error("Refusing to write recipe outside the pack: %r", location)
                rejected.append(location)
                continue
            if not recipe_is_valid(recipe):
                logger.error("Invalid recipe at %s:\n%s", location, dump_recipe(recipe))
                rejected.append(location)
                continue
            path = root / f"{location}.json"
            write_json(path, recipe_to_json(recipe))
            written.append(path)
        return SaveResult(written=written, rejected=rejected)


def write_metadata(root: str | Path, metadata: PackMetadata) -> bool:
    """Write pack.mcmeta unless one already exists; return whether it was written."""
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)
    try:
        with (root / MCMETA_NAME).open("x", encoding="utf-8") as fh:
            fh.write(json.dumps(metadata.to_json(), indent=2) + "\n")
    except FileExistsError:
        logger.debug("Keeping existing %s", root / MCMETA_NAME)
        return False
    return True


def _load_metadata(path: Path, fallback: PackMetadata) -> PackMetadata:
    try:
        return PackMetadata.from_json(json.loads(path.read_text(encoding="utf-8")))
    except FileNotFoundError:
        return fallback
    except (OSError, ValueError, RecursionError, RecipeFormatError) as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return fallback


def _is_safe_location(location: str) -> bool:
    if not location or location.startswith("/") or PurePath(location).is_absolute():
        return False
    # Checked with host separators too, so a backslash only splits on Windows.
    for parts in (PurePosixPath(location).parts, PurePath(location).parts):
        if any(part in ("", ".", "..") for part in parts):
            return False
    return True
