# src/archives/reader.py
"""
Read-only access to a mod archive.

A mod is either a .jar / .zip file or an unpacked folder. Both are exposed
through the same three primitives:

    archive.names()             -> sorted member paths ("data/mod/recipes/x.json")
    archive.has(path)           -> bool
    archive.read_text(path)     -> str | None  (None when the member is absent)

read_text decodes strictly; bytes that are not valid UTF-8 raise
MalformedDocumentError.

Member paths always use forward slashes, whatever the host OS.
"""

from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path
from typing import Iterator, List, Optional

from semantics.errors import DatagenError, MalformedDocumentError
from semantics.recipes import is_recipe_path
from semantics.tags import is_tag_path


log = logging.getLogger(__name__)

ARCHIVE_SUFFIXES = (".jar", ".zip")


class ArchiveError(DatagenError):
    """The archive could not be opened or a member could not be read."""


class ModArchive:
    """
    Mounted mod archive (zip-like file or folder).

    Use as a context manager so the underlying zip handle is released:

        with ModArchive(path) as archive:
            text = archive.read_text("data/minecraft/tags/items/slabs.json")
    """

    def __init__(self, path: Path, *, encoding: str = "utf-8-sig") -> None:
        self.path = Path(path)
        self.name = self.path.name
        self.encoding = encoding

        self.mode: str = ""  # 'zip' | 'folder'
        self._zip: Optional[zipfile.ZipFile] = None
        self._names: List[str] = []

        if self.path.is_dir():
            self.mode = "folder"
            self._names = self._walk_folder(self.path)
        else:
            try:
                self._zip = zipfile.ZipFile(self.path, "r")
            except (OSError, zipfile.BadZipFile) as exc:
                raise ArchiveError(f"Cannot open archive: {exc}", archive=self.name) from exc
            self.mode = "zip"
            self._names = sorted(n for n in self._zip.namelist() if not n.endswith("/"))

        self._name_set = frozenset(self._names)

    # --------------------------------------------------------
    # Context manager
    # --------------------------------------------------------

    def __enter__(self) -> "ModArchive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    # --------------------------------------------------------
    # Listing
    # --------------------------------------------------------

    @staticmethod
    def _walk_folder(folder: Path) -> List[str]:
        out: List[str] = []
        for root, _, files in os.walk(folder):
            for name in files:
                full = os.path.join(root, name)
                out.append(os.path.relpath(full, folder).replace("\\", "/"))
        return sorted(out)

    def names(self) -> List[str]:
        return list(self._names)

    def has(self, member: str) -> bool:
        return member in self._name_set

    def recipe_paths(self) -> List[str]:
        """Every data/<ns>/recipes/**/*.json member, sorted."""
        return [n for n in self._names if is_recipe_path(n)]

    def tag_paths(self) -> List[str]:
        """Every data/<ns>/tags/items/**/*.json member, sorted."""
        return [n for n in self._names if is_tag_path(n)]

    # --------------------------------------------------------
    # IO
    # --------------------------------------------------------

    def read_text(self, member: str) -> Optional[str]:
        if member not in self._name_set:
            return None

        try:
            if self._zip is not None:
                data = self._zip.read(member)
            else:
                data = (self.path / Path(*member.split("/"))).read_bytes()
        except (OSError, KeyError, zipfile.BadZipFile) as exc:
            raise ArchiveError(f"Cannot read member: {exc}", archive=self.name, path=member) from exc

        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise MalformedDocumentError(f"Not valid {self.encoding}: {exc}", archive=self.name, path=member) from exc

    def __repr__(self) -> str:
        return f"ModArchive({self.name!r}, mode={self.mode!r}, members={len(self._names)})"


def iter_mod_archives(mods_dir: Path) -> Iterator[Path]:
    """
    Yield mod archives and unpacked mod folders in `mods_dir`, sorted by name
    so every run visits them in the same order.
    """
    mods_dir = Path(mods_dir)
    if not mods_dir.is_dir():
        raise FileNotFoundError(f"Mods directory does not exist: {mods_dir}")

    for entry in sorted(mods_dir.iterdir(), key=lambda p: p.name):
        if entry.name.startswith("."):
            continue
        if entry.is_dir() or entry.suffix.lower() in ARCHIVE_SUFFIXES:
            yield entry
        else:
            log.debug("Skipping non-archive %s", entry.name)
