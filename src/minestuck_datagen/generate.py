from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Optional

from .datapack import COMBINATION_DIR, GRIST_COSTS_DIR, location_for, write_json
from .domain import Recipe, dump_recipe, recipe_is_valid, recipe_to_json
from .parsers import DEFAULT_PRIORITY, LineResult, parse_combination_line, parse_grist_line

logger = logging.getLogger(__name__)


@dataclass
class GenerateReport:
    written: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def write_recipe_file(recipe: Recipe, pack_root: str | Path) -> Path:
    path = Path(pack_root) / f"{location_for(recipe)}.json"
    write_json(path, recipe_to_json(recipe))
    return path


def generate_grist_costs(
    lines: Iterable[str], pack_root: str | Path, priority: Optional[int] = DEFAULT_PRIORITY
) -> GenerateReport:
    return _generate(lines, Path(pack_root), GRIST_COSTS_DIR, lambda line: parse_grist_line(line, priority))


def generate_combinations(lines: Iterable[str], pack_root: str | Path) -> GenerateReport:
    return _generate(lines, Path(pack_root), COMBINATION_DIR, parse_combination_line)


def _generate(
    lines: Iterable[str],
    pack_root: Path,
    owned_dir: str,
    parse: Callable[[str], LineResult],
) -> GenerateReport:
    report = GenerateReport()
    (pack_root / owned_dir).mkdir(parents=True, exist_ok=True)
    for line in lines:
        result = parse(line)
        if result.error is not None:
            _report(report, result.error)
            continue
        recipe = result.recipe
        if recipe is None:
            continue
        if not recipe_is_valid(recipe):
            _report(report, f"Invalid recipe:\n{dump_recipe(recipe)}")
            continue
        path = write_recipe_file(recipe, pack_root)
        logger.debug("Wrote %s", path)
        report.written.append(path)
    return report


def _report(report: GenerateReport, message: str) -> None:
    logger.error("%s", message)
    report.errors.append(message)
