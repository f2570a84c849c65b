from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import EffectiveConfig
from .datapack import COMBINATION_DIR, GRIST_COSTS_DIR, MCMETA_NAME


@dataclass(frozen=True)
class PackPaths:
    root: Path
    mcmeta: Path
    grist_costs_dir: Path
    combination_dir: Path


def resolve_pack_paths(cfg: EffectiveConfig) -> PackPaths:
    pack_dir = Path(cfg.pack_dir)
    root = pack_dir if pack_dir.is_absolute() else Path(cfg.project_dir) / pack_dir
    return PackPaths(
        root=root,
        mcmeta=root / MCMETA_NAME,
        grist_costs_dir=root / GRIST_COSTS_DIR,
        combination_dir=root / COMBINATION_DIR,
    )
