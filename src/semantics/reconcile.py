# src/semantics/reconcile.py
"""
Aggregate (variant -> base block) pairs into one mapping per variant kind.

Policy (first-seen wins, always):
  - unmapped variant             -> map it
  - same base as already mapped  -> no-op
  - different base               -> conflict, keep the existing base
      * the new pair came from stonecutting: silent. A block can legitimately
        be cut from several sources ("stone" and "cobblestone" both cut into
        the same slab in some packs).
      * otherwise: logged as a warning and kept in `conflicts`.

Seeds (hand-written overrides for variants whose recipe cannot be
classified) go in before any recipe and follow the same rule.
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from .schema import MappingConflict, VariantKind, VariantMatch


log = logging.getLogger(__name__)


class RecordOutcome(str, Enum):
    ADDED = "added"
    DUPLICATE = "duplicate"
    CONFLICT = "conflict"
    SUPPRESSED = "suppressed"


class MappingReconciler:
    """
    Per-kind variant -> base mappings for one datagen run.
    """

    def __init__(self, kinds: Iterable[VariantKind] = tuple(VariantKind)) -> None:
        self._mappings: Dict[VariantKind, Dict[str, str]] = {kind: {} for kind in kinds}
        self.conflicts: List[MappingConflict] = []

    def _table(self, kind: VariantKind) -> Dict[str, str]:
        try:
            return self._mappings[kind]
        except KeyError:
            raise ValueError(f"Variant kind {kind!r} is not tracked by this reconciler") from None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def seed(self, kind: VariantKind, overrides: Mapping[str, str]) -> None:
        """Pre-load known variant -> base pairs."""
        for variant_id, base_id in overrides.items():
            self.record_pair(kind, variant_id, base_id, source="seed")

    def record(self, match: VariantMatch) -> RecordOutcome:
        return self.record_pair(
            match.kind,
            match.variant_id,
            match.base_id,
            stonecutting=match.is_stonecutting,
            source=match.recipe.source_path,
            archive=match.archive,
        )

    def record_pair(
        self,
        kind: VariantKind,
        variant_id: str,
        base_id: str,
        *,
        stonecutting: bool = False,
        source: Optional[str] = None,
        archive: Optional[str] = None,
    ) -> RecordOutcome:
        table = self._table(kind)
        existing = table.get(variant_id)

        if existing is None:
            table[variant_id] = base_id
            return RecordOutcome.ADDED

        if existing == base_id:
            return RecordOutcome.DUPLICATE

        if stonecutting:
            return RecordOutcome.SUPPRESSED

        log.warning(
            "%s %s is already mapped to %s, but %s maps it to %s",
            kind.value.capitalize(),
            variant_id,
            existing,
            source or "another recipe",
            base_id,
        )
        self.conflicts.append(
            MappingConflict(
                kind=kind,
                variant_id=variant_id,
                kept_base_id=existing,
                rejected_base_id=base_id,
                source_path=source,
                archive=archive,
            )
        )
        return RecordOutcome.CONFLICT

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def mapping(self, kind: VariantKind) -> Mapping[str, str]:
        return MappingProxyType(self._table(kind))

    def base_of(self, kind: VariantKind, variant_id: str) -> Optional[str]:
        return self._table(kind).get(variant_id)

    def __len__(self) -> int:
        return sum(len(t) for t in self._mappings.values())
