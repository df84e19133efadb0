# Tag, recipe and mapping types
# src/semantics/schema.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Variant kinds
# ---------------------------------------------------------------------------

class VariantKind(str, Enum):
    """
    Shaped sub-units of a full block that the datagen knows how to reverse.

    - SLAB:  half block, crafted 3 blocks -> 6 slabs, cut 1 block -> 2 slabs
    - STAIR: crafted 6 blocks -> 4 stairs
    """
    SLAB = "slab"
    STAIR = "stair"


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------

@dataclass
class TagDeclaration:
    """
    One item tag document as found in an archive.

    - tag_id: "minecraft:slabs"
    - path: archive-relative document path
    - replace: raw "replace" value (bool, string or None when absent)
    - values: ordered item ids and "#namespace:tag" references
    """
    tag_id: str
    path: str
    replace: Any = False
    values: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------

@dataclass
class ShapedRecipe:
    """
    minecraft:crafting_shaped

    - pattern: grid rows, ' ' is an empty cell
    - key: symbol -> concrete item id (symbols whose ingredient is a tag or a
      multi-choice list are left out)
    - result_item / result_count: what one craft yields
    """
    source_path: str
    document: Dict[str, Any]
    pattern: List[str]
    key: Dict[str, str]
    result_item: str
    result_count: int = 1


@dataclass
class StonecuttingRecipe:
    """
    minecraft:stonecutting

    - ingredient_item: None when the ingredient is a tag, a list of options,
      air or empty
    """
    source_path: str
    document: Dict[str, Any]
    ingredient_item: Optional[str]
    result_item: str
    result_count: int = 1


@dataclass
class UnrecognizedRecipe:
    """Any recipe this tool does not understand. Not an error."""
    source_path: str
    document: Dict[str, Any]
    recipe_type: Optional[str] = None


Recipe = Union[ShapedRecipe, StonecuttingRecipe, UnrecognizedRecipe]


# ---------------------------------------------------------------------------
# Classification / reconciliation
# ---------------------------------------------------------------------------

@dataclass
class VariantMatch:
    """
    A recipe recognized as producing a slab or stair from a base block.
    """
    kind: VariantKind
    variant_id: str
    base_id: str
    recipe: Union[ShapedRecipe, StonecuttingRecipe]
    archive: Optional[str] = None

    @property
    def is_stonecutting(self) -> bool:
        return isinstance(self.recipe, StonecuttingRecipe)

    def as_pair(self) -> Tuple[str, str]:
        return self.variant_id, self.base_id


@dataclass
class MappingConflict:
    """
    Two non-stonecutting recipes disagree on a variant's base block.
    The kept base is always the first one seen.
    """
    kind: VariantKind
    variant_id: str
    kept_base_id: str
    rejected_base_id: str
    source_path: Optional[str] = None
    archive: Optional[str] = None
