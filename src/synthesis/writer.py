# src/synthesis/writer.py
"""
File writer for generated recipes.

Paths handed to RecipeWriter are relative to the output root and always use
forward slashes (they mirror datapack layout).
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .recipes import GeneratedRecipe


log = logging.getLogger(__name__)


def dump_json(document: Dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


class RecipeWriter:
    """
    Write JSON documents under an output root.

    - dry_run: record paths, touch nothing on disk.
    """

    def __init__(self, root: Path, *, dry_run: bool = False) -> None:
        self.root = Path(root)
        self.dry_run = dry_run
        self.written: List[str] = []

    def clean(self) -> None:
        """Remove the output root (only the generated tree, nothing else)."""
        if self.dry_run or not self.root.exists():
            return
        log.info("Removing previous output at %s", self.root)
        shutil.rmtree(self.root)

    def _target(self, rel_path: str) -> Path:
        rel = Path(*rel_path.split("/"))
        if rel.is_absolute() or ".." in rel.parts:
            raise ValueError(f"Refusing to write outside the output root: {rel_path!r}")
        return self.root / rel

    def write(self, rel_path: str, document: Dict[str, Any]) -> Path:
        target = self._target(rel_path)
        self.written.append(rel_path)
        if self.dry_run:
            log.debug("[dry-run] would write %s", target)
            return target

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(dump_json(document), encoding="utf-8")
        log.debug("Wrote %s", target)
        return target

    def write_all(self, recipes: Iterable[GeneratedRecipe]) -> int:
        count = 0
        for recipe in recipes:
            self.write(recipe.path, recipe.document)
            count += 1
        return count
