# src/synthesis/__init__.py
"""
Recipe synthesis: turn resolved variant mappings into datapack recipes.
"""

from .recipes import (
    DEFAULT_SHAPES,
    GeneratedRecipe,
    SynthesisResult,
    VariantRecipeShape,
    increased_yield_path,
    increased_yield_recipe,
    mod_loaded_conditions,
    synthesize_increased_yield,
    synthesize_variant_to_block,
    variant_to_block_path,
    variant_to_block_recipe,
)
from .writer import RecipeWriter, dump_json

__all__ = [
    "DEFAULT_SHAPES",
    "GeneratedRecipe",
    "RecipeWriter",
    "SynthesisResult",
    "VariantRecipeShape",
    "dump_json",
    "increased_yield_path",
    "increased_yield_recipe",
    "mod_loaded_conditions",
    "synthesize_increased_yield",
    "synthesize_variant_to_block",
    "variant_to_block_path",
    "variant_to_block_recipe",
]
