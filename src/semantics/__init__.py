# semantics package
# src/semantics/__init__.py

"""
Tag and recipe semantics for the variant datagen.

Small, stable surface for consumers:

- TagResolver / resolve_tag  -> flat item sets from (nested) item tags
- TagCollection              -> tag documents of every archive, merged by tag id
- parse_recipe               -> typed recipe (shaped / stonecutting / other)
- classify_recipe            -> VariantMatch for slab / stair recipes
- MappingReconciler          -> first-seen-wins variant -> base mappings
"""

from __future__ import annotations

from .classify import classify_document, classify_recipe
from .errors import (
    DatagenError,
    MalformedDocumentError,
    TagCycleError,
    TagNotFoundError,
    TagReplaceError,
)
from .reconcile import MappingReconciler, RecordOutcome
from .recipes import parse_recipe
from .schema import (
    MappingConflict,
    Recipe,
    ShapedRecipe,
    StonecuttingRecipe,
    TagDeclaration,
    UnrecognizedRecipe,
    VariantKind,
    VariantMatch,
)
from .tags import TagCollection, TagResolver, resolve_tag, tag_document_path


__all__ = [
    "DatagenError",
    "MalformedDocumentError",
    "TagCycleError",
    "TagNotFoundError",
    "TagReplaceError",
    "MappingConflict",
    "MappingReconciler",
    "RecordOutcome",
    "Recipe",
    "ShapedRecipe",
    "StonecuttingRecipe",
    "TagCollection",
    "TagDeclaration",
    "TagResolver",
    "UnrecognizedRecipe",
    "VariantKind",
    "VariantMatch",
    "classify_document",
    "classify_recipe",
    "parse_recipe",
    "resolve_tag",
    "tag_document_path",
]
