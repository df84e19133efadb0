# path: tests/test_cli_datagen.py

from __future__ import annotations

from pathlib import Path

import pytest

import cli.datagen as cli_module
import settings.loader as loader_module
from cli.datagen import build_parser, main
from semantics.errors import MalformedDocumentError
from fakes.mod_archives import slab_recipe, tag_doc


SLABS_TAG = "data/minecraft/tags/items/slabs.json"


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch) -> None:
    # no repo config: built-in defaults only
    monkeypatch.setattr(loader_module, "CONFIG_ROOT", tmp_path / "no-config", raising=True)


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])

    assert args.config is None
    assert args.mods is None
    assert not args.dry_run


def test_main_generates_and_prints_summary(make_mod, mods_dir: Path, tmp_path: Path, capsys) -> None:
    make_mod("m.jar", {SLABS_TAG: tag_doc("mod:x_slab"), "data/mod/recipes/x.json": slab_recipe("mod:x", "mod:x_slab")})
    out = tmp_path / "out"

    code = main(["--mods", str(mods_dir), "--out", str(out)])

    assert code == 0
    assert (out / "data" / "slab-to-block" / "recipes" / "mod__x_slab.json").exists()
    assert "Variant recipes" in capsys.readouterr().out


def test_main_returns_one_on_fatal_tag(make_mod, mods_dir: Path, tmp_path: Path) -> None:
    make_mod("bad.jar", {SLABS_TAG: tag_doc("mod:x_slab", replace="true")})

    assert main(["--mods", str(mods_dir), "--out", str(tmp_path / "out")]) == 1


def test_main_returns_one_without_mods_dir(tmp_path: Path) -> None:
    assert main(["--mods", str(tmp_path / "missing"), "--out", str(tmp_path / "out")]) == 1


def test_main_reads_explicit_config(make_mod, mods_dir: Path, tmp_path: Path) -> None:
    make_mod("m.jar", {SLABS_TAG: tag_doc("mod:x_slab"), "data/mod/recipes/x.json": slab_recipe("mod:x", "mod:x_slab")})
    out = tmp_path / "out"
    cfg = tmp_path / "datagen.yaml"
    cfg.write_text(
        f'mods_dir: "{mods_dir.as_posix()}"\n'
        f'output_dir: "{out.as_posix()}"\n'
        "kinds:\n"
        "  slab:\n"
        '    output_namespace: "halves"\n',
        encoding="utf-8",
    )

    assert main(["--config", str(cfg)]) == 0
    assert (out / "data" / "halves" / "recipes" / "mod__x_slab.json").exists()


def test_main_lets_non_fatal_errors_propagate(mods_dir: Path, tmp_path: Path, monkeypatch) -> None:
    def _boom(config, **kwargs):
        raise MalformedDocumentError("should have been handled by the run", archive="m.jar")

    monkeypatch.setattr(cli_module, "run_datagen", _boom, raising=True)

    with pytest.raises(MalformedDocumentError):
        main(["--mods", str(mods_dir), "--out", str(tmp_path / "out")])
