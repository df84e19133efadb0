# src/semantics/tags.py
"""
Item tag resolution.

A tag document looks like:

    {
      "replace": false,
      "values": [
        "minecraft:oak_slab",
        "#minecraft:wooden_slabs",
        {"id": "othermod:marble_slab", "required": false}
      ]
    }

TagResolver expands a tag into the flat set of concrete item ids it denotes,
following "#namespace:name" references. Only the additive ("append")
semantics are supported: a declaration asking for replace semantics aborts
the run.

The resolver is given a single capability, either `load_text(path) -> str | None`
(a mounted archive, or a plain dict in tests) or
`load_declaration(tag_id) -> TagDeclaration | None`.

TagCollection gathers the tag documents of every archive in a run. Documents
sharing a tag path are merged into one declaration, so a mod can add to a tag
that another archive references.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Set, Tuple

from .errors import DatagenError, MalformedDocumentError, TagCycleError, TagNotFoundError, TagReplaceError
from .ids import is_tag_reference, split_id, strip_tag_prefix
from .schema import TagDeclaration


log = logging.getLogger(__name__)

LoadText = Callable[[str], Optional[str]]
LoadDeclaration = Callable[[str], Optional[TagDeclaration]]

TAG_PATH_TEMPLATE = "data/{namespace}/tags/items/{name}.json"
TAG_PATH_RE = re.compile(r"^data/([^/]+)/tags/items/(.+)\.json$")

REPLACE_MARKER = "true"


def normalize_tag_id(tag_id: str) -> str:
    namespace, name = split_id(strip_tag_prefix(tag_id))
    return f"{namespace}:{name}"


def tag_document_path(tag_id: str, template: str = TAG_PATH_TEMPLATE) -> str:
    """
    Map "minecraft:slabs" to "data/minecraft/tags/items/slabs.json".

    A leading '#' is accepted and ignored.
    """
    namespace, name = split_id(strip_tag_prefix(tag_id))
    return template.format(namespace=namespace, name=name)


def tag_id_from_path(path: str) -> Optional[str]:
    """Inverse of tag_document_path; None for anything that is not an item tag."""
    m = TAG_PATH_RE.match(path)
    if not m:
        return None
    return f"{m.group(1)}:{m.group(2)}"


def is_tag_path(path: str) -> bool:
    return TAG_PATH_RE.match(path) is not None


def is_replace_declaration(value: Any) -> bool:
    # Only the literal string is rejected; a boolean true is tolerated.
    return value == REPLACE_MARKER


def _value_to_str(entry: Any) -> Optional[str]:
    # Plain "mod:item" / "#mod:tag", or {"id": ..., "required": bool}
    if isinstance(entry, str):
        return entry.strip() or None
    if isinstance(entry, dict):
        ident = entry.get("id")
        if isinstance(ident, str) and ident.strip():
            return ident.strip()
    return None


def parse_tag_declaration(tag_id: str, path: str, text: str, *, archive: Optional[str] = None) -> TagDeclaration:
    """
    Parse a tag document. Raises MalformedDocumentError on bad JSON or shape,
    TagReplaceError when the declaration asks for replace semantics.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(f"Invalid JSON in tag {tag_id}: {exc}", archive=archive, path=path) from exc

    if not isinstance(raw, dict):
        raise MalformedDocumentError(f"Tag {tag_id} must be a JSON object", archive=archive, path=path)

    replace = raw.get("replace", False)
    if is_replace_declaration(replace):
        raise TagReplaceError(
            f"Tag {tag_id} declares replace={replace!r}; only additive tags are supported",
            archive=archive,
            path=path,
        )

    values_raw = raw.get("values", [])
    if not isinstance(values_raw, list):
        raise MalformedDocumentError(f"Tag {tag_id} 'values' must be a list", archive=archive, path=path)

    values: List[str] = []
    for entry in values_raw:
        value = _value_to_str(entry)
        if value is None:
            log.debug("Ignoring unusable value %r in tag %s", entry, tag_id)
            continue
        values.append(value)

    return TagDeclaration(tag_id=tag_id, path=path, replace=replace, values=values)


class TagResolver:
    """
    Expand tags against one source of documents.

    Results are memoized per tag id for the lifetime of the resolver, so a
    tag referenced from several places is read and expanded once.
    """

    def __init__(
        self,
        load_text: Optional[LoadText] = None,
        *,
        archive: Optional[str] = None,
        path_template: str = TAG_PATH_TEMPLATE,
        load_declaration: Optional[LoadDeclaration] = None,
    ) -> None:
        if (load_text is None) == (load_declaration is None):
            raise ValueError("TagResolver needs exactly one of load_text or load_declaration")
        self._load_text = load_text
        self._load_declaration = load_declaration
        self._archive = archive
        self._path_template = path_template
        self._resolved: Dict[str, FrozenSet[str]] = {}
        self._in_progress: List[str] = []

    def load(self, tag_id: str) -> Optional[TagDeclaration]:
        """Read and parse a tag document, or None when it is absent."""
        tag_id = normalize_tag_id(tag_id)
        if self._load_declaration is not None:
            return self._load_declaration(tag_id)

        path = tag_document_path(tag_id, self._path_template)
        text = self._load_text(path)
        if text is None:
            return None
        return parse_tag_declaration(tag_id, path, text, archive=self._archive)

    def resolve(self, tag_id: str) -> FrozenSet[str]:
        """
        Resolve a root tag. Raises TagNotFoundError when the root document
        itself is missing; missing nested tags only log a warning.
        """
        tag_id = normalize_tag_id(tag_id)
        if tag_id in self._resolved:
            return self._resolved[tag_id]

        declaration = self.load(tag_id)
        if declaration is None:
            raise TagNotFoundError(
                f"Tag {tag_id} not found",
                archive=self._archive,
                path=tag_document_path(tag_id, self._path_template),
            )
        return self._expand(declaration)

    def _resolve_nested(self, tag_id: str, parent: str) -> FrozenSet[str]:
        tag_id = normalize_tag_id(tag_id)
        if tag_id in self._in_progress:
            start = self._in_progress.index(tag_id)
            raise TagCycleError(self._in_progress[start:] + [tag_id], archive=self._archive)
        if tag_id in self._resolved:
            return self._resolved[tag_id]

        declaration = self.load(tag_id)
        if declaration is None:
            log.warning(
                "Tag %s referenced from %s not found in %s",
                tag_id,
                parent,
                self._archive or "any archive",
            )
            self._resolved[tag_id] = frozenset()
            return self._resolved[tag_id]
        return self._expand(declaration)

    def _expand(self, declaration: TagDeclaration) -> FrozenSet[str]:
        self._in_progress.append(declaration.tag_id)
        try:
            items: Set[str] = set()
            for value in declaration.values:
                if is_tag_reference(value):
                    items |= self._resolve_nested(value, declaration.tag_id)
                else:
                    items.add(value)
        finally:
            self._in_progress.pop()

        result = frozenset(items)
        self._resolved[declaration.tag_id] = result
        return result


def resolve_tag(load_text: LoadText, tag_id: str, *, archive: Optional[str] = None) -> FrozenSet[str]:
    """One-shot convenience wrapper around TagResolver.resolve()."""
    return TagResolver(load_text, archive=archive).resolve(tag_id)


class TagCollection:
    """
    Tag documents from every archive of a run, merged by tag id.

    Documents are kept as text and parsed only when a tag is loaded, so a
    tag nobody references never fails the run. Contributions are merged in
    the order their archives were added.
    """

    def __init__(self) -> None:
        # tag id -> [(archive, path, text)]
        self._documents: Dict[str, List[Tuple[str, str, str]]] = {}
        self._merged: Dict[str, TagDeclaration] = {}
        self.skipped: List[DatagenError] = []

    def add(self, archive: str, path: str, text: str) -> Optional[str]:
        """Register one tag document; returns its tag id, or None for non-tag paths."""
        tag_id = tag_id_from_path(path)
        if tag_id is None:
            return None
        self._documents.setdefault(tag_id, []).append((archive, path, text))
        self._merged.pop(tag_id, None)
        return tag_id

    def __contains__(self, tag_id: str) -> bool:
        return normalize_tag_id(tag_id) in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def sources(self, tag_id: str) -> List[str]:
        return [archive for archive, _, _ in self._documents.get(normalize_tag_id(tag_id), [])]

    def declaration(self, tag_id: str) -> Optional[TagDeclaration]:
        """
        Merged declaration for `tag_id`, or None when no archive has it.

        A replace declaration in any contributor raises TagReplaceError.
        Malformed contributors are logged, recorded in `skipped`, and left out.
        """
        tag_id = normalize_tag_id(tag_id)
        if tag_id in self._merged:
            return self._merged[tag_id]

        documents = self._documents.get(tag_id)
        if not documents:
            return None

        values: List[str] = []
        for archive, path, text in documents:
            try:
                part = parse_tag_declaration(tag_id, path, text, archive=archive)
            except DatagenError as exc:
                if exc.fatal:
                    raise
                log.warning("Ignoring tag document: %s", exc)
                self.skipped.append(exc)
                continue
            values.extend(part.values)

        merged = TagDeclaration(tag_id=tag_id, path=documents[0][1], replace=False, values=values)
        self._merged[tag_id] = merged
        return merged

    def resolver(self) -> TagResolver:
        return TagResolver(load_declaration=self.declaration)
