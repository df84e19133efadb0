# src/semantics/recipes.py
"""
Turn raw recipe JSON into typed recipe objects.

    parse_recipe(doc, source_path) -> ShapedRecipe | StonecuttingRecipe | UnrecognizedRecipe

Recognized shapes:

  minecraft:crafting_shaped
    {
      "type": "minecraft:crafting_shaped",
      "pattern": ["###"],
      "key": {"#": {"item": "minecraft:stone"}},
      "result": {"item": "minecraft:stone_slab", "count": 6}
    }

  minecraft:stonecutting (both the flat and the object result forms)
    {
      "type": "minecraft:stonecutting",
      "ingredient": {"item": "minecraft:stone"},
      "result": "minecraft:stone_slab",
      "count": 2
    }

Anything else, including a recognized type with malformed fields, parses to
UnrecognizedRecipe. That is the normal outcome for most recipes in a mod.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional, Tuple

from .errors import MalformedDocumentError
from .schema import Recipe, ShapedRecipe, StonecuttingRecipe, UnrecognizedRecipe


SHAPED_CRAFTING = "minecraft:crafting_shaped"
STONECUTTING = "minecraft:stonecutting"

AIR_ITEMS = frozenset({"minecraft:air", "air"})

RECIPE_PATH_RE = re.compile(r"^data/([^/]+)/recipes?/(.+\.json)$")


def is_recipe_path(path: str) -> bool:
    """True for "data/<namespace>/recipes/**/*.json" archive members."""
    return RECIPE_PATH_RE.match(path) is not None


def split_recipe_path(path: str) -> Optional[Tuple[str, str]]:
    """
    "data/mod/recipes/blocks/oak_stairs.json" -> ("mod", "blocks/oak_stairs.json")
    """
    m = RECIPE_PATH_RE.match(path)
    if not m:
        return None
    return m.group(1), m.group(2)


def load_recipe_document(text: str, source_path: str, *, archive: Optional[str] = None) -> Dict[str, Any]:
    """
    Decode one recipe file. Raises MalformedDocumentError when it is not a
    JSON object.
    """
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(f"Invalid JSON in recipe: {exc}", archive=archive, path=source_path) from exc
    if not isinstance(doc, dict):
        raise MalformedDocumentError("Recipe must be a JSON object", archive=archive, path=source_path)
    return doc


def _count(value: Any, default: int = 1) -> Optional[int]:
    if value is None:
        return default
    # bool is an int subclass; "count": true is not a count
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def concrete_item(ingredient: Any) -> Optional[str]:
    """
    Return the single concrete item an ingredient stands for, or None.

    Accepts {"item": "mod:x"} and a one-element list of that. Tags,
    multi-choice lists, air and empty strings give None.
    """
    if isinstance(ingredient, list):
        if len(ingredient) != 1:
            return None
        ingredient = ingredient[0]

    if isinstance(ingredient, str):
        item = ingredient
    elif isinstance(ingredient, dict):
        item = ingredient.get("item")
    else:
        return None

    if not isinstance(item, str):
        return None
    item = item.strip()
    if not item or item.startswith("#") or item in AIR_ITEMS:
        return None
    return item


def _result_item(result: Any) -> Optional[str]:
    if isinstance(result, str):
        return result.strip() or None
    if isinstance(result, dict):
        item = result.get("item") or result.get("id")
        if isinstance(item, str) and item.strip():
            return item.strip()
    return None


def _parse_shaped(doc: Dict[str, Any], source_path: str) -> Recipe:
    pattern = doc.get("pattern")
    key_raw = doc.get("key")
    result = doc.get("result")

    if not isinstance(pattern, list) or not all(isinstance(row, str) for row in pattern):
        return UnrecognizedRecipe(source_path=source_path, document=doc, recipe_type=SHAPED_CRAFTING)
    if not isinstance(key_raw, dict) or not isinstance(result, dict):
        return UnrecognizedRecipe(source_path=source_path, document=doc, recipe_type=SHAPED_CRAFTING)

    result_item = _result_item(result)
    result_count = _count(result.get("count"))
    if result_item is None or result_count is None:
        return UnrecognizedRecipe(source_path=source_path, document=doc, recipe_type=SHAPED_CRAFTING)

    key: Dict[str, str] = {}
    for symbol, ingredient in key_raw.items():
        item = concrete_item(ingredient)
        if item is not None:
            key[symbol] = item

    return ShapedRecipe(
        source_path=source_path,
        document=doc,
        pattern=list(pattern),
        key=key,
        result_item=result_item,
        result_count=result_count,
    )


def _parse_stonecutting(doc: Dict[str, Any], source_path: str) -> Recipe:
    result = doc.get("result")
    result_item = _result_item(result)
    if result_item is None:
        return UnrecognizedRecipe(source_path=source_path, document=doc, recipe_type=STONECUTTING)

    # Older format keeps the count beside the result; newer nests it.
    if isinstance(result, dict) and "count" in result:
        count = _count(result.get("count"))
    else:
        count = _count(doc.get("count"))
    if count is None:
        return UnrecognizedRecipe(source_path=source_path, document=doc, recipe_type=STONECUTTING)

    return StonecuttingRecipe(
        source_path=source_path,
        document=doc,
        ingredient_item=concrete_item(doc.get("ingredient")),
        result_item=result_item,
        result_count=count,
    )


def parse_recipe(
    doc: Dict[str, Any],
    source_path: str = "",
    *,
    shaped_type: str = SHAPED_CRAFTING,
    stonecutting_type: str = STONECUTTING,
) -> Recipe:
    """Dispatch on the recipe "type" field."""
    recipe_type = doc.get("type")
    if recipe_type == shaped_type:
        return _parse_shaped(doc, source_path)
    if recipe_type == stonecutting_type:
        return _parse_stonecutting(doc, source_path)
    return UnrecognizedRecipe(
        source_path=source_path,
        document=doc,
        recipe_type=recipe_type if isinstance(recipe_type, str) else None,
    )


def pattern_symbols(pattern: List[str]) -> List[str]:
    """Distinct non-blank symbols of a pattern, in reading order."""
    seen: List[str] = []
    for row in pattern:
        for ch in row:
            if ch != " " and ch not in seen:
                seen.append(ch)
    return seen
