# tests/test_synthesis_recipes.py
"""
Generated recipes: variant -> block, mod-loaded gating, raised stair yield.
"""

from __future__ import annotations

import copy
import logging

import pytest

from semantics.classify import classify_document
from semantics.schema import VariantKind
from synthesis.recipes import (
    increased_yield_path,
    increased_yield_recipe,
    mod_loaded_conditions,
    synthesize_increased_yield,
    synthesize_variant_to_block,
    variant_to_block_path,
    variant_to_block_recipe,
)
from fakes.mod_archives import stair_recipe


# ---------------------------------------------------------------------------
# Gating
# ---------------------------------------------------------------------------

def test_vanilla_base_only_gates_the_mod() -> None:
    assert mod_loaded_conditions("modA:thing_slab", "minecraft:thing") == [
        {"type": "forge:mod_loaded", "modid": "modA"},
    ]


def test_vanilla_variant_only_gates_the_base_mod() -> None:
    assert mod_loaded_conditions("minecraft:x_slab", "modB:x") == [
        {"type": "forge:mod_loaded", "modid": "modB"},
    ]


def test_two_mods_are_gated_variant_first() -> None:
    conditions = mod_loaded_conditions("modA:x_slab", "modB:x")

    assert [c["modid"] for c in conditions] == ["modA", "modB"]


def test_same_mod_is_gated_once() -> None:
    assert [c["modid"] for c in mod_loaded_conditions("modA:x_slab", "modA:x")] == ["modA"]


def test_all_vanilla_needs_no_gate() -> None:
    assert mod_loaded_conditions("minecraft:oak_slab", "minecraft:oak_planks") == []


def test_custom_condition_type_and_vanilla_namespace() -> None:
    conditions = mod_loaded_conditions(
        "base:x_slab",
        "modB:x",
        vanilla_namespace="base",
        condition_type="neoforge:mod_loaded",
    )
    assert conditions == [{"type": "neoforge:mod_loaded", "modid": "modB"}]


# ---------------------------------------------------------------------------
# Variant -> block
# ---------------------------------------------------------------------------

def test_slab_to_block_recipe_shape() -> None:
    recipe = variant_to_block_recipe(VariantKind.SLAB, "minecraft:oak_slab", "minecraft:oak_planks")

    assert recipe == {
        "type": "minecraft:crafting_shaped",
        "group": "slab_to_block",
        "pattern": ["##"],
        "key": {"#": {"item": "minecraft:oak_slab"}},
        "result": {"item": "minecraft:oak_planks", "count": 1},
    }
    assert "conditions" not in recipe


def test_stair_to_block_recipe_uses_four_stairs() -> None:
    recipe = variant_to_block_recipe(VariantKind.STAIR, "modA:marble_stairs", "modA:marble")

    assert recipe["pattern"] == ["##", "##"]
    assert recipe["group"] == "stair_to_block"
    assert recipe["result"] == {"item": "modA:marble", "count": 1}
    assert recipe["conditions"] == [{"type": "forge:mod_loaded", "modid": "modA"}]


def test_output_paths_are_scoped_by_purpose() -> None:
    assert variant_to_block_path(VariantKind.SLAB, "modA:x_slab") == "data/slab-to-block/recipes/modA__x_slab.json"
    assert variant_to_block_path(VariantKind.STAIR, "modA:x_stairs") == "data/stair-to-block/recipes/modA__x_stairs.json"


def test_unresolved_variants_are_reported_not_dropped(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="synthesis.recipes"):
        result = synthesize_variant_to_block(
            VariantKind.SLAB,
            {"mod:v1": "mod:b1"},
            {"mod:v1", "mod:v2"},
        )

    assert [r.variant_id for r in result.recipes] == ["mod:v1"]
    assert result.unresolved == ["mod:v2"]
    assert "mod:v2" in caplog.text


def test_mapped_but_undeclared_variants_are_not_generated() -> None:
    result = synthesize_variant_to_block(VariantKind.SLAB, {"mod:v1": "mod:b1", "mod:x": "mod:y"}, ["mod:v1"])

    assert [r.variant_id for r in result.recipes] == ["mod:v1"]


def test_synthesis_is_deterministic() -> None:
    mapping = {f"mod:v{i}": f"mod:b{i}" for i in range(10)}
    declared_a = list(mapping)
    declared_b = list(reversed(declared_a))

    a = synthesize_variant_to_block(VariantKind.SLAB, mapping, declared_a)
    b = synthesize_variant_to_block(VariantKind.SLAB, mapping, set(declared_b))

    assert [(r.path, r.document) for r in a.recipes] == [(r.path, r.document) for r in b.recipes]


# ---------------------------------------------------------------------------
# Raised stair yield
# ---------------------------------------------------------------------------

def test_increased_yield_only_changes_the_count() -> None:
    original = stair_recipe("mod:brick", "mod:brick_stairs")
    original["group"] = "brick_stairs"
    snapshot = copy.deepcopy(original)

    out = increased_yield_recipe(original)

    expected = copy.deepcopy(snapshot)
    expected["result"]["count"] = 8
    assert out == expected
    # source document untouched
    assert original == snapshot


def test_increased_yield_path_keeps_original_location() -> None:
    assert (
        increased_yield_path("data/mod/recipes/blocks/brick_stairs.json")
        == "data/increased-stair-yield/recipes/mod/blocks/brick_stairs.json"
    )
    with pytest.raises(ValueError):
        increased_yield_path("assets/mod/brick_stairs.json")


def test_synthesize_increased_yield_skips_slabs_and_duplicates(caplog) -> None:
    stair_a = classify_document(stair_recipe("mod:brick", "mod:brick_stairs"), "data/mod/recipes/brick_stairs.json")
    stair_a.archive = "a.jar"
    stair_b = classify_document(stair_recipe("mod:brick", "mod:brick_stairs"), "data/mod/recipes/brick_stairs.json")
    stair_b.archive = "b.jar"
    other = classify_document(
        stair_recipe("minecraft:stone", "minecraft:stone_stairs", mirrored=True),
        "data/minecraft/recipes/stone_stairs.json",
    )
    slab = classify_document(
        {
            "type": "minecraft:stonecutting",
            "ingredient": {"item": "mod:brick"},
            "result": "mod:brick_slab",
            "count": 2,
        },
        "data/mod/recipes/brick_slab_cut.json",
    )

    with caplog.at_level(logging.WARNING, logger="synthesis.recipes"):
        out = synthesize_increased_yield([stair_a, slab, stair_b, other])

    assert [r.path for r in out] == [
        "data/increased-stair-yield/recipes/mod/brick_stairs.json",
        "data/increased-stair-yield/recipes/minecraft/stone_stairs.json",
    ]
    assert all(r.document["result"]["count"] == 8 for r in out)
    assert "a.jar" in caplog.text
