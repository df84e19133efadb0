# src/semantics/classify.py
"""
Recognize slab and stair recipes.

    classify_recipe(recipe) -> VariantMatch | None

Rules:
  - stonecutting, 1 block -> 2 of X               => X is a slab of the block
  - shaped ["XXX"], 3 blocks -> 6 of X            => X is a slab of the block
  - shaped staircase (either mirror), 6 -> 4 of X => X is a stair of the block

Shaped patterns are compared after masking their single symbol to "X", so
"###", "ooo" and "SSS" all match the slab template. Stair matching is tried
before slab matching; the two templates never overlap.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .recipes import pattern_symbols, parse_recipe
from .schema import (
    Recipe,
    ShapedRecipe,
    StonecuttingRecipe,
    VariantKind,
    VariantMatch,
)


MASK = "X"

STAIR_SHAPES: Tuple[Tuple[str, ...], ...] = (
    ("X  ", "XX ", "XXX"),
    ("  X", " XX", "XXX"),
)
SLAB_SHAPES: Tuple[Tuple[str, ...], ...] = (
    ("XXX",),
)

STAIR_CRAFT_COUNT = 4
SLAB_CRAFT_COUNT = 6
SLAB_CUT_COUNT = 2


def _single_symbol(recipe: ShapedRecipe) -> Optional[str]:
    symbols = pattern_symbols(recipe.pattern)
    if len(symbols) != 1:
        return None
    return symbols[0]


def _masked(recipe: ShapedRecipe, symbol: str) -> Tuple[str, ...]:
    return tuple(row.replace(symbol, MASK) for row in recipe.pattern)


def _match_shaped(
    recipe: ShapedRecipe,
    kind: VariantKind,
    shapes: Tuple[Tuple[str, ...], ...],
    count: int,
) -> Optional[VariantMatch]:
    symbol = _single_symbol(recipe)
    if symbol is None:
        return None
    if _masked(recipe, symbol) not in shapes:
        return None

    base_id = recipe.key.get(symbol)
    if not base_id:
        return None
    if recipe.result_count != count:
        return None

    return VariantMatch(kind=kind, variant_id=recipe.result_item, base_id=base_id, recipe=recipe)


def classify_stair(recipe: Recipe) -> Optional[VariantMatch]:
    if not isinstance(recipe, ShapedRecipe):
        return None
    return _match_shaped(recipe, VariantKind.STAIR, STAIR_SHAPES, STAIR_CRAFT_COUNT)


def classify_slab(recipe: Recipe) -> Optional[VariantMatch]:
    if isinstance(recipe, ShapedRecipe):
        return _match_shaped(recipe, VariantKind.SLAB, SLAB_SHAPES, SLAB_CRAFT_COUNT)

    if isinstance(recipe, StonecuttingRecipe):
        if recipe.result_count != SLAB_CUT_COUNT:
            return None
        if not recipe.ingredient_item:
            return None
        return VariantMatch(
            kind=VariantKind.SLAB,
            variant_id=recipe.result_item,
            base_id=recipe.ingredient_item,
            recipe=recipe,
        )

    return None


def classify_recipe(recipe: Recipe) -> Optional[VariantMatch]:
    """Stair first, then slab. None for every other recipe."""
    return classify_stair(recipe) or classify_slab(recipe)


def classify_document(doc: dict, source_path: str = "") -> Optional[VariantMatch]:
    """Parse and classify a raw recipe document in one go."""
    return classify_recipe(parse_recipe(doc, source_path))
