# src/synthesis/recipes.py
"""
Build the generated recipe documents.

Two families:

  variant -> block
    2 slabs  ("##")        -> 1 block
    4 stairs ("##", "##")  -> 1 block
    written to data/<slab-to-block|stair-to-block>/recipes/<ns>__<name>.json
    gated on forge:mod_loaded for every non-vanilla namespace involved

  block -> stair, raised yield
    the matched stair recipe, unchanged except result.count = 8
    written to data/increased-stair-yield/recipes/<ns>/<original path>
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from semantics.ids import VANILLA_NAMESPACE, file_safe_id, namespace_of
from semantics.recipes import SHAPED_CRAFTING, split_recipe_path
from semantics.schema import ShapedRecipe, VariantKind, VariantMatch


log = logging.getLogger(__name__)


MOD_LOADED_CONDITION = "forge:mod_loaded"
INGREDIENT_SYMBOL = "#"
INCREASED_STAIR_YIELD = 8
INCREASED_YIELD_NAMESPACE = "increased-stair-yield"


@dataclass(frozen=True)
class VariantRecipeShape:
    """How many variants go back into one block, and where the output lives."""
    pattern: Tuple[str, ...]
    group: str
    namespace: str

    @property
    def consumed(self) -> int:
        return sum(row.count(INGREDIENT_SYMBOL) for row in self.pattern)


DEFAULT_SHAPES: Dict[VariantKind, VariantRecipeShape] = {
    VariantKind.SLAB: VariantRecipeShape(pattern=("##",), group="slab_to_block", namespace="slab-to-block"),
    VariantKind.STAIR: VariantRecipeShape(pattern=("##", "##"), group="stair_to_block", namespace="stair-to-block"),
}


@dataclass
class GeneratedRecipe:
    """One output document and its output-root-relative path."""
    path: str
    document: Dict[str, Any]
    variant_id: Optional[str] = None


@dataclass
class SynthesisResult:
    kind: VariantKind
    recipes: List[GeneratedRecipe] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Gating
# ---------------------------------------------------------------------------

def mod_loaded_conditions(
    variant_id: str,
    base_id: str,
    *,
    vanilla_namespace: str = VANILLA_NAMESPACE,
    condition_type: str = MOD_LOADED_CONDITION,
) -> List[Dict[str, str]]:
    """
    One condition per non-vanilla namespace, variant namespace first, no
    duplicates.
    """
    mods: List[str] = []
    for ident in (variant_id, base_id):
        mod = namespace_of(ident, vanilla_namespace)
        if mod == vanilla_namespace or mod in mods:
            continue
        mods.append(mod)
    return [{"type": condition_type, "modid": mod} for mod in mods]


# ---------------------------------------------------------------------------
# Variant -> block
# ---------------------------------------------------------------------------

def variant_to_block_path(kind: VariantKind, variant_id: str, shape: Optional[VariantRecipeShape] = None) -> str:
    shape = shape or DEFAULT_SHAPES[kind]
    return f"data/{shape.namespace}/recipes/{file_safe_id(variant_id)}.json"


def variant_to_block_recipe(
    kind: VariantKind,
    variant_id: str,
    base_id: str,
    *,
    shape: Optional[VariantRecipeShape] = None,
    vanilla_namespace: str = VANILLA_NAMESPACE,
    condition_type: str = MOD_LOADED_CONDITION,
) -> Dict[str, Any]:
    shape = shape or DEFAULT_SHAPES[kind]
    recipe: Dict[str, Any] = {
        "type": SHAPED_CRAFTING,
        "group": shape.group,
        "pattern": list(shape.pattern),
        "key": {
            INGREDIENT_SYMBOL: {"item": variant_id},
        },
        "result": {
            "item": base_id,
            "count": 1,
        },
    }

    conditions = mod_loaded_conditions(
        variant_id,
        base_id,
        vanilla_namespace=vanilla_namespace,
        condition_type=condition_type,
    )
    if conditions:
        recipe["conditions"] = conditions
    return recipe


def synthesize_variant_to_block(
    kind: VariantKind,
    mapping: Mapping[str, str],
    declared: Iterable[str],
    *,
    shape: Optional[VariantRecipeShape] = None,
    vanilla_namespace: str = VANILLA_NAMESPACE,
    condition_type: str = MOD_LOADED_CONDITION,
) -> SynthesisResult:
    """
    One recipe per declared variant that has a base block. Declared variants
    without one are logged and listed in `unresolved`.
    """
    shape = shape or DEFAULT_SHAPES[kind]
    result = SynthesisResult(kind=kind)

    for variant_id in sorted(set(declared)):
        base_id = mapping.get(variant_id)
        if not base_id:
            log.warning("Could not find matching block for %s %s", kind.value, variant_id)
            result.unresolved.append(variant_id)
            continue

        result.recipes.append(
            GeneratedRecipe(
                path=variant_to_block_path(kind, variant_id, shape),
                document=variant_to_block_recipe(
                    kind,
                    variant_id,
                    base_id,
                    shape=shape,
                    vanilla_namespace=vanilla_namespace,
                    condition_type=condition_type,
                ),
                variant_id=variant_id,
            )
        )

    return result


# ---------------------------------------------------------------------------
# Block -> stair with raised yield
# ---------------------------------------------------------------------------

def increased_yield_path(source_path: str, namespace: str = INCREASED_YIELD_NAMESPACE) -> str:
    """
    "data/mod/recipes/oak_stairs.json" ->
    "data/increased-stair-yield/recipes/mod/oak_stairs.json"
    """
    parts = split_recipe_path(source_path)
    if parts is None:
        raise ValueError(f"Not a recipe path: {source_path!r}")
    recipe_namespace, rest = parts
    return f"data/{namespace}/recipes/{recipe_namespace}/{rest}"


def increased_yield_recipe(document: Dict[str, Any], count: int = INCREASED_STAIR_YIELD) -> Dict[str, Any]:
    """Deep copy of a stair recipe with only result.count replaced."""
    out = copy.deepcopy(document)
    result = out.get("result")
    if not isinstance(result, dict):
        raise ValueError("Stair recipe has no result object")
    result["count"] = count
    return out


def synthesize_increased_yield(
    matches: Iterable[VariantMatch],
    *,
    namespace: str = INCREASED_YIELD_NAMESPACE,
    count: int = INCREASED_STAIR_YIELD,
) -> List[GeneratedRecipe]:
    """
    One raised-yield copy per matched shaped stair recipe. When two archives
    ship a recipe at the same path, the first one wins.
    """
    out: List[GeneratedRecipe] = []
    seen: Dict[str, str] = {}

    for match in matches:
        if match.kind is not VariantKind.STAIR or not isinstance(match.recipe, ShapedRecipe):
            continue

        path = increased_yield_path(match.recipe.source_path, namespace)
        if path in seen:
            log.warning(
                "Stair recipe %s from %s collides with the one from %s; keeping the first",
                match.recipe.source_path,
                match.archive or "<source>",
                seen[path],
            )
            continue
        seen[path] = match.archive or "<source>"

        out.append(
            GeneratedRecipe(
                path=path,
                document=increased_yield_recipe(match.recipe.document, count),
                variant_id=match.variant_id,
            )
        )

    return out
