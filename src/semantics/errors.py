# src/semantics/errors.py
"""
Domain errors raised while reading tag and recipe data.

Fatal (abort the run):
  - TagReplaceError: a tag declaration asks for replace semantics.
  - TagCycleError:   a tag references itself, directly or transitively.

Recoverable (the caller logs and moves on):
  - TagNotFoundError:       the tag document is absent from an archive.
  - MalformedDocumentError: a document is not valid JSON or has the wrong shape.
"""

from __future__ import annotations

from typing import Optional, Sequence


class DatagenError(RuntimeError):
    """Base class for every error raised by the datagen pipeline."""

    fatal = False

    def __init__(self, message: str, *, archive: Optional[str] = None, path: Optional[str] = None) -> None:
        self.archive = archive
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        msg = super().__str__()
        where = [part for part in (self.archive, self.path) if part]
        if where:
            return f"{msg} ({' :: '.join(where)})"
        return msg


class TagReplaceError(DatagenError):
    """Tag declaration uses replace semantics, which are not supported."""

    fatal = True


class TagCycleError(DatagenError):
    """Tag graph contains a cycle."""

    fatal = True

    def __init__(self, chain: Sequence[str], *, archive: Optional[str] = None) -> None:
        self.chain = list(chain)
        super().__init__(
            "Tag reference cycle: " + " -> ".join(self.chain),
            archive=archive,
            path=self.chain[-1] if self.chain else None,
        )


class TagNotFoundError(DatagenError):
    """Tag document does not exist in the archive."""


class MalformedDocumentError(DatagenError):
    """Document could not be parsed or does not have the expected shape."""
