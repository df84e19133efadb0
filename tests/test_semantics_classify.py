# tests/test_semantics_classify.py
"""
Recipe parsing and slab / stair classification.
"""

from __future__ import annotations

import pytest

from semantics.classify import classify_document, classify_recipe
from semantics.recipes import concrete_item, is_recipe_path, parse_recipe, split_recipe_path
from semantics.schema import (
    ShapedRecipe,
    StonecuttingRecipe,
    UnrecognizedRecipe,
    VariantKind,
)
from fakes.mod_archives import shaped, slab_recipe, stair_recipe, stonecutting


# ---------------------------------------------------------------------------
# Slabs (shaped)
# ---------------------------------------------------------------------------

def test_shaped_slab_is_classified() -> None:
    doc = {
        "type": "minecraft:crafting_shaped",
        "pattern": ["###"],
        "key": {"#": {"item": "mod:stone"}},
        "result": {"item": "mod:stone_slab", "count": 6},
    }

    match = classify_document(doc)

    assert match is not None
    assert match.kind is VariantKind.SLAB
    assert match.as_pair() == ("mod:stone_slab", "mod:stone")
    assert not match.is_stonecutting


def test_shaped_slab_with_wrong_count_is_ignored() -> None:
    assert classify_document(slab_recipe("mod:stone", "mod:stone_slab", count=4)) is None


def test_shaped_slab_without_count_defaults_to_one() -> None:
    doc = shaped(["###"], {"#": "mod:stone"}, "mod:stone_slab", None)

    recipe = parse_recipe(doc)
    assert isinstance(recipe, ShapedRecipe)
    assert recipe.result_count == 1
    assert classify_recipe(recipe) is None


@pytest.mark.parametrize(
    "pattern",
    [
        ["#X#"],       # two symbols
        ["## "],       # short row
        ["##"],        # two wide
        ["###", "###"],
        ["####"],
    ],
)
def test_non_slab_rows_are_ignored(pattern) -> None:
    key = {"#": "mod:stone", "X": "mod:other"}
    assert classify_document(shaped(pattern, key, "mod:thing", 6)) is None


def test_slab_symbol_must_map_to_an_item() -> None:
    doc = {
        "type": "minecraft:crafting_shaped",
        "pattern": ["###"],
        "key": {"#": {"tag": "forge:stone"}},
        "result": {"item": "mod:stone_slab", "count": 6},
    }
    assert classify_document(doc) is None


def test_base_comes_from_the_pattern_symbol_not_the_first_key() -> None:
    doc = shaped(["SSS"], {"A": "mod:unused", "S": "mod:sandstone"}, "mod:sandstone_slab", 6)

    match = classify_document(doc)

    assert match is not None
    assert match.base_id == "mod:sandstone"


# ---------------------------------------------------------------------------
# Stairs
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("mirrored", [False, True])
def test_both_stair_orientations_are_classified(mirrored) -> None:
    match = classify_document(stair_recipe("mod:brick", "mod:brick_stairs", mirrored=mirrored))

    assert match is not None
    assert match.kind is VariantKind.STAIR
    assert match.as_pair() == ("mod:brick_stairs", "mod:brick")


def test_stair_with_x_as_its_own_symbol() -> None:
    doc = shaped(["X  ", "XX ", "XXX"], {"X": "mod:brick"}, "mod:brick_stairs", 4)

    match = classify_document(doc)

    assert match is not None and match.kind is VariantKind.STAIR


@pytest.mark.parametrize(
    "pattern",
    [
        ["X  ", "X X", "XXX"],   # gap
        ["X  ", "XX ", "XX "],   # incomplete bottom row
        ["XXX", "XX ", "X  "],   # upside down
        ["X", "XX", "XXX"],      # ragged rows
        ["X  ", "XX "],          # two rows
    ],
)
def test_non_stair_shapes_are_ignored(pattern) -> None:
    assert classify_document(shaped(pattern, {"X": "mod:brick"}, "mod:brick_stairs", 4)) is None


def test_stair_with_two_symbols_is_ignored() -> None:
    doc = shaped(["X  ", "XY ", "XXX"], {"X": "mod:brick", "Y": "mod:stone"}, "mod:brick_stairs", 4)
    assert classify_document(doc) is None


@pytest.mark.parametrize("count", [1, 6, 8])
def test_stair_with_wrong_count_is_ignored(count) -> None:
    assert classify_document(stair_recipe("mod:brick", "mod:brick_stairs", count=count)) is None


# ---------------------------------------------------------------------------
# Stonecutting
# ---------------------------------------------------------------------------

def test_stonecutting_slab_is_classified() -> None:
    match = classify_document(stonecutting("mod:stone", "mod:stone_slab", count=2))

    assert match is not None
    assert match.kind is VariantKind.SLAB
    assert match.as_pair() == ("mod:stone_slab", "mod:stone")
    assert match.is_stonecutting


@pytest.mark.parametrize("count", [1, 3])
def test_stonecutting_with_other_counts_is_ignored(count) -> None:
    assert classify_document(stonecutting("mod:stone", "mod:stone_slab", count=count)) is None


def test_stonecutting_never_yields_a_stair() -> None:
    assert classify_document(stonecutting("mod:stone", "mod:stone_stairs", count=1)) is None

    match = classify_document(stonecutting("mod:stone", "mod:stone_stairs", count=2))
    assert match is not None and match.kind is VariantKind.SLAB


def test_stonecutting_with_object_result() -> None:
    doc = {
        "type": "minecraft:stonecutting",
        "ingredient": {"item": "mod:stone"},
        "result": {"id": "mod:stone_slab", "count": 2},
    }

    recipe = parse_recipe(doc)

    assert isinstance(recipe, StonecuttingRecipe)
    assert recipe.result_count == 2
    assert classify_recipe(recipe) is not None


@pytest.mark.parametrize(
    "ingredient",
    [
        {"tag": "forge:stone"},
        {"item": "minecraft:air"},
        {"item": ""},
        {},
        [{"item": "mod:a"}, {"item": "mod:b"}],
    ],
)
def test_stonecutting_needs_a_concrete_ingredient(ingredient) -> None:
    assert classify_document(stonecutting(ingredient, "mod:stone_slab", count=2)) is None


def test_single_option_ingredient_list_counts_as_concrete() -> None:
    assert concrete_item([{"item": "mod:stone"}]) == "mod:stone"


# ---------------------------------------------------------------------------
# Everything else
# ---------------------------------------------------------------------------

def test_unknown_type_is_unrecognized() -> None:
    doc = {"type": "minecraft:smelting", "ingredient": {"item": "mod:ore"}, "result": "mod:ingot"}

    recipe = parse_recipe(doc, "data/mod/recipes/ingot.json")

    assert isinstance(recipe, UnrecognizedRecipe)
    assert recipe.recipe_type == "minecraft:smelting"
    assert classify_recipe(recipe) is None


def test_malformed_shaped_recipe_is_unrecognized() -> None:
    doc = {"type": "minecraft:crafting_shaped", "pattern": "###", "key": {}, "result": {"item": "x"}}

    assert isinstance(parse_recipe(doc), UnrecognizedRecipe)


def test_configured_type_ids_are_respected() -> None:
    doc = slab_recipe("mod:stone", "mod:stone_slab")
    doc["type"] = "custom:shaped"

    assert isinstance(parse_recipe(doc), UnrecognizedRecipe)
    assert isinstance(parse_recipe(doc, shaped_type="custom:shaped"), ShapedRecipe)


def test_recipe_paths() -> None:
    assert is_recipe_path("data/mod/recipes/oak_slab.json")
    assert is_recipe_path("data/mod/recipes/nested/dir/oak_slab.json")
    assert not is_recipe_path("data/mod/tags/items/slabs.json")
    assert not is_recipe_path("assets/mod/recipes/oak_slab.json")
    assert not is_recipe_path("data/mod/recipes/readme.txt")

    assert split_recipe_path("data/mod/recipes/a/b.json") == ("mod", "a/b.json")
    assert split_recipe_path("pack.mcmeta") is None
