# src/settings/loader.py
"""
Datagen configuration loader.

Reads config/datagen.yaml:

    mods_dir: "mods"
    output_dir: "generated"
    vanilla_namespace: "minecraft"
    condition_type: "forge:mod_loaded"
    recipe_types:
      shaped: "minecraft:crafting_shaped"
      stonecutting: "minecraft:stonecutting"
    kinds:
      slab:
        tag: "minecraft:slabs"
        group: "slab_to_block"
        output_namespace: "slab-to-block"
        pattern: ["##"]
        seeds:
          "minecraft:petrified_oak_slab": "minecraft:oak_planks"
      stair:
        ...
    increased_stair_yield:
      enabled: true
      namespace: "increased-stair-yield"
      count: 8

Every key is optional; missing keys fall back to the defaults in
settings.schema. Relative paths are resolved against the working directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from semantics.schema import VariantKind
from .schema import DatagenConfig, IncreasedYieldConfig, KindConfig, default_kind_configs


log = logging.getLogger(__name__)

# Default config directory; tests monkeypatch this to point at a temp dir.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_NAME = "datagen.yaml"

DEFAULT_MODS_DIR = "mods"
DEFAULT_OUTPUT_DIR = "generated"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML config file; an empty file is an empty mapping."""
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data).__name__}")
    return data


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _parse_pattern(kind: VariantKind, value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list) or not value:
        raise ValueError(f"kinds.{kind.value}.pattern must be a non-empty list of strings")
    rows = tuple(value)
    for row in rows:
        if not isinstance(row, str) or not row or set(row) - {"#", " "}:
            raise ValueError(f"kinds.{kind.value}.pattern rows may only contain '#' and ' ': {row!r}")
    if not any("#" in row for row in rows):
        raise ValueError(f"kinds.{kind.value}.pattern has no '#' cell")
    return rows


def _parse_seeds(kind: VariantKind, value: Any) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"kinds.{kind.value}.seeds must be a mapping of variant -> base block")
    seeds: Dict[str, str] = {}
    for variant_id, base_id in value.items():
        if not isinstance(variant_id, str) or not isinstance(base_id, str):
            raise ValueError(f"kinds.{kind.value}.seeds entries must be strings: {variant_id!r}: {base_id!r}")
        seeds[variant_id] = base_id
    return seeds


def _parse_kinds(raw: Dict[str, Any]) -> Dict[VariantKind, KindConfig]:
    kinds = default_kind_configs()
    for name, entry in _section(raw, "kinds").items():
        try:
            kind = VariantKind(name)
        except ValueError:
            known = ", ".join(k.value for k in VariantKind)
            raise ValueError(f"Unknown variant kind '{name}' (expected one of: {known})") from None

        entry = entry or {}
        if not isinstance(entry, dict):
            raise ValueError(f"kinds.{name} must be a mapping")

        cfg = kinds[kind]
        cfg.tag = str(entry.get("tag", cfg.tag))
        cfg.group = str(entry.get("group", cfg.group))
        cfg.output_namespace = str(entry.get("output_namespace", cfg.output_namespace))
        if "pattern" in entry:
            cfg.pattern = _parse_pattern(kind, entry["pattern"])
        if "seeds" in entry:
            cfg.seeds = _parse_seeds(kind, entry["seeds"])
    return kinds


def _parse_increased_yield(raw: Dict[str, Any]) -> IncreasedYieldConfig:
    section = _section(raw, "increased_stair_yield")
    cfg = IncreasedYieldConfig()
    cfg.enabled = bool(section.get("enabled", cfg.enabled))
    cfg.namespace = str(section.get("namespace", cfg.namespace))
    count = section.get("count", cfg.count)
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise ValueError(f"increased_stair_yield.count must be a positive integer, got {count!r}")
    cfg.count = count
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def config_from_mapping(raw: Dict[str, Any]) -> DatagenConfig:
    """Build a DatagenConfig from an already-loaded mapping."""
    recipe_types = _section(raw, "recipe_types")
    defaults = DatagenConfig(mods_dir=Path(DEFAULT_MODS_DIR), output_dir=Path(DEFAULT_OUTPUT_DIR), kinds={})

    return DatagenConfig(
        mods_dir=Path(str(raw.get("mods_dir", DEFAULT_MODS_DIR))).expanduser(),
        output_dir=Path(str(raw.get("output_dir", DEFAULT_OUTPUT_DIR))).expanduser(),
        kinds=_parse_kinds(raw),
        vanilla_namespace=str(raw.get("vanilla_namespace", defaults.vanilla_namespace)),
        condition_type=str(raw.get("condition_type", defaults.condition_type)),
        shaped_type=str(recipe_types.get("shaped", defaults.shaped_type)),
        stonecutting_type=str(recipe_types.get("stonecutting", defaults.stonecutting_type)),
        increased_yield=_parse_increased_yield(raw),
    )


def default_config() -> DatagenConfig:
    return config_from_mapping({})


def load_datagen_config(path: Optional[Path] = None) -> DatagenConfig:
    """
    Main entry point: returns a fully resolved DatagenConfig.

    - path given: the file must exist.
    - path None: CONFIG_ROOT/datagen.yaml if present, otherwise built-in
      defaults.
    """
    if path is None:
        path = CONFIG_ROOT / DEFAULT_CONFIG_NAME
        if not path.exists():
            log.info("No %s found, using built-in defaults", path)
            return default_config()
    elif not Path(path).exists():
        raise FileNotFoundError(f"Missing config file: {path}")

    log.debug("Loading datagen config from %s", path)
    return config_from_mapping(_load_yaml(Path(path)))
