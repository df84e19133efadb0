# tests/conftest.py

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# Ensure src/ is on sys.path for test imports like `import semantics`, and
# tests/ for the shared `fakes` helpers.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
TESTS_ROOT = PROJECT_ROOT / "tests"

for _p in (SRC_ROOT, TESTS_ROOT):
    if str(_p) not in sys.path:
        sys.path.insert(0, str(_p))

from fakes.mod_archives import write_mod_archive  # noqa: E402


@pytest.fixture
def mods_dir(tmp_path: Path) -> Path:
    path = tmp_path / "mods"
    path.mkdir()
    return path


@pytest.fixture
def make_mod(mods_dir: Path) -> Callable[..., Path]:
    """
    Build a mod archive inside `mods_dir`.

        make_mod("a_mod.jar", {"data/mod/recipes/x.json": {...}})
        make_mod("unpacked", {...}, folder=True)
    """

    def _make(name: str, files: Dict[str, Any], *, folder: bool = False) -> Path:
        return write_mod_archive(mods_dir / name, files, folder=folder)

    return _make
