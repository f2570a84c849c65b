from __future__ import annotations

import logging
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture()
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture()
def pack_root(tmp_path: Path) -> Path:
    return tmp_path / "datapack"


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("minestuck_datagen")
    logger.handlers[:] = []
    logger.setLevel(logging.NOTSET)


def write_global_config(home: Path, content: str) -> Path:
    cfg_dir = home / ".config" / "minestuck-datagen"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    path = cfg_dir / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path
