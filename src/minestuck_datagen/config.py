from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib
from typing import Any

from .datapack import DEFAULT_DESCRIPTION, DEFAULT_PACK_FORMAT
from .errors import ConfigError
from .parsers import DEFAULT_PRIORITY

APP_NAME = "minestuck-datagen"
PROJECT_CONFIG_NAME = f"{APP_NAME}.toml"
DEFAULT_PACK_DIR = "datapack"


@dataclass(frozen=True)
class PackConfig:
    pack_format: int = DEFAULT_PACK_FORMAT
    description: str = DEFAULT_DESCRIPTION


@dataclass(frozen=True)
class EffectiveConfig:
    project_dir: str
    pack_dir: str
    priority: int
    pack: PackConfig


def _config_root() -> Path:
    return Path(os.path.expanduser(f"~/.config/{APP_NAME}"))


def load_global_config() -> dict[str, Any]:
    path = _config_root() / "config.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def load_project_config(project_dir: str) -> dict[str, Any]:
    path = Path(project_dir) / PROJECT_CONFIG_NAME
    if not path.exists():
        return {}
    return _load_toml(path)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config: {path}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(cli: dict[str, Any], project: dict[str, Any], global_cfg: dict[str, Any]) -> dict[str, Any]:
    merged = _deep_merge(global_cfg, project)
    return _deep_merge(merged, cli)


def resolve_config(cli_args: dict[str, Any]) -> EffectiveConfig:
    global_cfg = load_global_config()
    project_dir = cli_args.get("project") or os.getcwd()
    project_cfg = load_project_config(project_dir)
    merged = merge_config(_cli_to_dict(cli_args), project_cfg, global_cfg)

    pack_cfg = merged.get("pack", {})
    if not isinstance(pack_cfg, dict):
        raise ConfigError("[pack] must be a table")

    return EffectiveConfig(
        project_dir=str(project_dir),
        pack_dir=str(merged.get("pack_dir", DEFAULT_PACK_DIR)),
        priority=_int_setting(merged, "priority", DEFAULT_PRIORITY),
        pack=PackConfig(
            pack_format=_int_setting(pack_cfg, "pack_format", DEFAULT_PACK_FORMAT),
            description=str(pack_cfg.get("description", DEFAULT_DESCRIPTION)),
        ),
    )


def _int_setting(cfg: dict[str, Any], key: str, default: int) -> int:
    value = cfg.get(key, default)
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from exc


def _cli_to_dict(cli_args: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in ("pack_dir", "priority"):
        if cli_args.get(key) is not None:
            out[key] = cli_args[key]
    return out


def config_to_toml(cfg: EffectiveConfig) -> str:
    lines = [
        f"pack_dir = {cfg.pack_dir!r}",
        f"priority = {cfg.priority}",
        "",
        "[pack]",
        f"pack_format = {cfg.pack.pack_format}",
        f"description = {cfg.pack.description!r}",
    ]
    return "\n".join(lines) + "\n"
