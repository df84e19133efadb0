# DatagenConfig, KindConfig dataclasses
# src/settings/schema.py

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

from semantics.ids import VANILLA_NAMESPACE
from semantics.recipes import SHAPED_CRAFTING, STONECUTTING
from semantics.schema import VariantKind
from synthesis.recipes import (
    DEFAULT_SHAPES,
    INCREASED_STAIR_YIELD,
    INCREASED_YIELD_NAMESPACE,
    MOD_LOADED_CONDITION,
    VariantRecipeShape,
)


@dataclass
class KindConfig:
    """Everything that differs between slabs and stairs."""
    kind: VariantKind
    tag: str                      # root item tag, e.g. "minecraft:slabs"
    group: str                    # recipe book group of generated recipes
    output_namespace: str         # data/<output_namespace>/recipes/...
    pattern: Tuple[str, ...]      # variant -> block grid, '#' = one variant
    seeds: Dict[str, str] = field(default_factory=dict)

    @property
    def shape(self) -> VariantRecipeShape:
        return VariantRecipeShape(pattern=self.pattern, group=self.group, namespace=self.output_namespace)


@dataclass
class IncreasedYieldConfig:
    """Raised-yield copies of block -> stair recipes."""
    enabled: bool = True
    namespace: str = INCREASED_YIELD_NAMESPACE
    count: int = INCREASED_STAIR_YIELD


@dataclass
class DatagenConfig:
    """Top-level resolved datagen configuration."""
    mods_dir: Path
    output_dir: Path
    kinds: Dict[VariantKind, KindConfig]
    vanilla_namespace: str = VANILLA_NAMESPACE
    condition_type: str = MOD_LOADED_CONDITION
    shaped_type: str = SHAPED_CRAFTING
    stonecutting_type: str = STONECUTTING
    increased_yield: IncreasedYieldConfig = field(default_factory=IncreasedYieldConfig)


# Slabs with no classifiable recipe of their own.
DEFAULT_SLAB_SEEDS: Dict[str, str] = {
    "minecraft:petrified_oak_slab": "minecraft:oak_planks",
}


def default_kind_configs() -> Dict[VariantKind, KindConfig]:
    return {
        VariantKind.SLAB: KindConfig(
            kind=VariantKind.SLAB,
            tag="minecraft:slabs",
            group=DEFAULT_SHAPES[VariantKind.SLAB].group,
            output_namespace=DEFAULT_SHAPES[VariantKind.SLAB].namespace,
            pattern=DEFAULT_SHAPES[VariantKind.SLAB].pattern,
            seeds=dict(DEFAULT_SLAB_SEEDS),
        ),
        VariantKind.STAIR: KindConfig(
            kind=VariantKind.STAIR,
            tag="minecraft:stairs",
            group=DEFAULT_SHAPES[VariantKind.STAIR].group,
            output_namespace=DEFAULT_SHAPES[VariantKind.STAIR].namespace,
            pattern=DEFAULT_SHAPES[VariantKind.STAIR].pattern,
        ),
    }
