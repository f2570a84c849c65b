from __future__ import annotations

import argparse
from collections.abc import Callable, Iterator
import contextlib
import json
import logging
from pathlib import Path
import sys
from typing import TextIO

from .config import PROJECT_CONFIG_NAME, EffectiveConfig, config_to_toml, resolve_config
from .datapack import Datapack, PackMetadata, write_metadata
from .domain import dump_recipe, recipe_is_valid, recipe_to_json
from .errors import ConfigError, DatagenError, MissingFileError, ValidationError
from .generate import GenerateReport, generate_combinations, generate_grist_costs
from .paths import resolve_pack_paths

LOG_FORMAT = "%(message)s"


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))

    if args.tui or not args.command:
        return _cmd_edit(args)

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "grist": _cmd_grist,
        "combination": _cmd_combination,
        "alchemy": _cmd_combination,
        "list": _cmd_list,
        "check": _cmd_check,
        "resave": _cmd_resave,
        "init": _cmd_init,
        "config": _cmd_config,
        "edit": _cmd_edit,
    }

    handler = handlers.get(args.command)
    if handler is None:  # pragma: no cover
        return 1  # pragma: no cover

    try:
        return handler(args)
    except DatagenError as exc:
        print(str(exc), file=sys.stderr)
        return _exit_code(exc)


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--project")
    common.add_argument("--pack-dir", dest="pack_dir")
    common.add_argument("--verbose", action="store_true")

    parser = argparse.ArgumentParser(prog="minestuck-datagen", parents=[common])
    parser.add_argument("--tui", action="store_true", help="Launch the grist cost editor")
    sub = parser.add_subparsers(dest="command")

    grist = sub.add_parser("grist", parents=[common], help="Generate grist cost recipes from lines")
    grist.add_argument("input", nargs="?")
    grist.add_argument("--priority", type=int)

    for name in ("combination", "alchemy"):
        combination = sub.add_parser(name, parents=[common], help="Generate combination recipes from lines")
        combination.add_argument("input", nargs="?")

    listing = sub.add_parser("list", parents=[common])
    listing.add_argument("--json", action="store_true")

    sub.add_parser("check", parents=[common])
    sub.add_parser("resave", parents=[common])

    init = sub.add_parser("init", parents=[common])
    init.add_argument("--force", action="store_true")

    sub.add_parser("config", parents=[common])
    sub.add_parser("edit", parents=[common])

    return parser


def _cmd_grist(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    root = resolve_pack_paths(cfg).root
    with _open_input(args.input) as lines:
        report = generate_grist_costs(lines, root, priority=cfg.priority)
    return _print_report(report)


def _cmd_combination(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    root = resolve_pack_paths(cfg).root
    with _open_input(args.input) as lines:
        report = generate_combinations(lines, root)
    return _print_report(report)


def _cmd_list(args: argparse.Namespace) -> int:
    datapack = _load_pack(_resolve_cfg(args))
    if args.json:
        payload = {location: recipe_to_json(recipe) for location, recipe in sorted(datapack.recipes.items())}
        print(json.dumps(payload, indent=2))
    else:
        for location, recipe in sorted(datapack.recipes.items()):
            print(f"{location}: {recipe_to_json(recipe)['type']}")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    datapack = _load_pack(_resolve_cfg(args))
    invalid = [location for location, recipe in sorted(datapack.recipes.items()) if not recipe_is_valid(recipe)]
    for location in invalid:
        print(f"{location}: invalid\n{dump_recipe(datapack.recipes[location])}", file=sys.stderr)
    if invalid:
        raise ValidationError(f"{len(invalid)} of {len(datapack.recipes)} recipes are invalid")
    print(f"{len(datapack.recipes)} recipes ok")
    return 0


def _cmd_resave(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    root = resolve_pack_paths(cfg).root
    result = _load_pack(cfg).save(root)
    print(f"Wrote {len(result.written)} recipes, rejected {len(result.rejected)}")
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    paths = resolve_pack_paths(cfg)
    config_path = Path(cfg.project_dir) / PROJECT_CONFIG_NAME
    if config_path.exists() and not args.force:
        raise ConfigError(f"{config_path} already exists (use --force to overwrite)")
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(config_to_toml(cfg), encoding="utf-8")
    if not write_metadata(paths.root, _default_metadata(cfg)):
        print(f"Keeping existing {paths.mcmeta}")
    paths.grist_costs_dir.mkdir(parents=True, exist_ok=True)
    paths.combination_dir.mkdir(parents=True, exist_ok=True)
    print(paths.root)
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    print(config_to_toml(_resolve_cfg(args)), end="")
    return 0


def _cmd_edit(args: argparse.Namespace) -> int:
    from .tui import run_tui

    return run_tui(_cli_args_dict(args))


def _resolve_cfg(args: argparse.Namespace) -> EffectiveConfig:
    return resolve_config(_cli_args_dict(args))


def _default_metadata(cfg: EffectiveConfig) -> PackMetadata:
    return PackMetadata(pack_format=cfg.pack.pack_format, description=cfg.pack.description)


def _load_pack(cfg: EffectiveConfig) -> Datapack:
    return Datapack.load(resolve_pack_paths(cfg).root, _default_metadata(cfg))


@contextlib.contextmanager
def _open_input(path: str | None) -> Iterator[TextIO]:
    if not path or path == "-":
        yield sys.stdin
        return
    try:
        fh = open(path, encoding="utf-8")
    except OSError as exc:
        raise MissingFileError(f"Cannot read input file: {path}") from exc
    with fh:
        yield fh


def _print_report(report: GenerateReport) -> int:
    for path in report.written:
        print(path)
    return 0


def _configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("minestuck_datagen")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def _cli_args_dict(args: argparse.Namespace) -> dict[str, object]:
    return vars(args).copy()


def _exit_code(exc: DatagenError) -> int:
    if isinstance(exc, ConfigError):
        return 2
    if isinstance(exc, MissingFileError):
        return 3
    if isinstance(exc, ValidationError):
        return 4
    return 1
