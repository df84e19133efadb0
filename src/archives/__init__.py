# src/archives/__init__.py
"""
Mod archive reading (zip / jar files and unpacked folders).
"""

from .reader import ARCHIVE_SUFFIXES, ArchiveError, ModArchive, iter_mod_archives

__all__ = [
    "ARCHIVE_SUFFIXES",
    "ArchiveError",
    "ModArchive",
    "iter_mod_archives",
]
