# path: src/runtime/datagen.py

"""
One datagen run, start to finish.

Pipeline:
  1. For every archive in mods_dir (sorted by file name):
       - collect its item tag documents into the run's TagCollection
       - parse + classify every recipe (sorted by path), feed matches to the
         MappingReconciler
  2. Resolve each kind's root tag once over the merged tags of all
     archives, so a mod can extend a tag another archive references.
  3. Synthesize variant -> block recipes per kind, plus raised-yield copies
     of the matched block -> stair recipes.
  4. Write everything under output_dir.

All state lives on a DatagenRun instance; nothing is global, so tests can
drive a run with fabricated archives.

Only fatal DatagenErrors (TagReplaceError, TagCycleError) abort a run.
Everything else (missing tags, bad JSON, unreadable archives, mapping
conflicts, unresolved variants) is logged and collected in the run
diagnostics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Set, Tuple

from archives.reader import ArchiveError, ModArchive, iter_mod_archives
from semantics.classify import classify_recipe
from semantics.errors import DatagenError, TagNotFoundError
from semantics.reconcile import MappingReconciler
from semantics.recipes import load_recipe_document, parse_recipe
from semantics.schema import MappingConflict, VariantKind, VariantMatch
from semantics.tags import TagCollection, tag_document_path
from settings.schema import DatagenConfig
from synthesis.recipes import (
    GeneratedRecipe,
    SynthesisResult,
    synthesize_increased_yield,
    synthesize_variant_to_block,
)
from synthesis.writer import RecipeWriter


log = logging.getLogger(__name__)


@dataclass
class SkippedDocument:
    """A document that could not be used, and why."""
    archive: str
    path: Optional[str]
    reason: str


@dataclass
class DatagenResult:
    """Everything a run produced, for reporting."""
    by_kind: Dict[VariantKind, SynthesisResult] = field(default_factory=dict)
    increased_yield: List[GeneratedRecipe] = field(default_factory=list)
    declared: Dict[VariantKind, int] = field(default_factory=dict)
    mapped: Dict[VariantKind, int] = field(default_factory=dict)
    conflicts: List[MappingConflict] = field(default_factory=list)
    missing_tags: List[Tuple[str, str]] = field(default_factory=list)
    skipped: List[SkippedDocument] = field(default_factory=list)
    archives: List[str] = field(default_factory=list)
    written: List[str] = field(default_factory=list)

    def all_recipes(self) -> List[GeneratedRecipe]:
        out: List[GeneratedRecipe] = []
        for kind in sorted(self.by_kind, key=lambda k: k.value):
            out.extend(self.by_kind[kind].recipes)
        out.extend(self.increased_yield)
        return out

    @property
    def unresolved(self) -> Dict[VariantKind, List[str]]:
        return {kind: res.unresolved for kind, res in self.by_kind.items()}


class DatagenRun:
    """
    Accumulated state of a single pass over the mod archives.
    """

    def __init__(self, config: DatagenConfig) -> None:
        self.config = config
        self.reconciler = MappingReconciler(config.kinds.keys())
        self.tags = TagCollection()
        self.declared: Dict[VariantKind, Set[str]] = {kind: set() for kind in config.kinds}
        self.stair_matches: List[VariantMatch] = []
        self.missing_tags: List[Tuple[str, str]] = []
        self.skipped: List[SkippedDocument] = []
        self.archives: List[str] = []

        for kind, kind_cfg in config.kinds.items():
            if kind_cfg.seeds:
                log.debug("Seeding %d %s mapping(s)", len(kind_cfg.seeds), kind.value)
                self.reconciler.seed(kind, kind_cfg.seeds)

    # ------------------------------------------------------------------
    # Per-archive processing
    # ------------------------------------------------------------------

    def process_archive(self, archive: ModArchive) -> None:
        log.info("Processing %s", archive.name)
        self.archives.append(archive.name)
        self._collect_tags(archive)
        self._scan_recipes(archive)

    def _collect_tags(self, archive: ModArchive) -> None:
        for path in archive.tag_paths():
            try:
                text = archive.read_text(path)
            except DatagenError as exc:
                if exc.fatal:
                    raise
                log.warning("Skipping tag document: %s", exc)
                self.skipped.append(SkippedDocument(archive.name, path, str(exc)))
                continue
            if text is not None:
                self.tags.add(archive.name, path, text)

        for kind_cfg in self.config.kinds.values():
            if not archive.has(tag_document_path(kind_cfg.tag)):
                log.warning("%s tag not found for mod %s", kind_cfg.tag, archive.name)
                self.missing_tags.append((archive.name, kind_cfg.tag))

    def _scan_recipes(self, archive: ModArchive) -> None:
        for path in archive.recipe_paths():
            try:
                text = archive.read_text(path)
                if text is None:
                    continue
                doc = load_recipe_document(text, path, archive=archive.name)
            except DatagenError as exc:
                if exc.fatal:
                    raise
                log.warning("Skipping recipe: %s", exc)
                self.skipped.append(SkippedDocument(archive.name, path, str(exc)))
                continue

            recipe = parse_recipe(
                doc,
                path,
                shaped_type=self.config.shaped_type,
                stonecutting_type=self.config.stonecutting_type,
            )
            match = classify_recipe(recipe)
            if match is None or match.kind not in self.config.kinds:
                continue

            match.archive = archive.name
            self.record(match)

    def record(self, match: VariantMatch) -> None:
        self.reconciler.record(match)
        if match.kind is VariantKind.STAIR:
            self.stair_matches.append(match)

    def resolve_declared(self) -> None:
        """
        Flatten each kind's root tag over the tags of every archive seen so far.

        Raises the fatal DatagenErrors (replace semantics, cycles).
        """
        resolver = self.tags.resolver()
        for kind, kind_cfg in self.config.kinds.items():
            try:
                items = resolver.resolve(kind_cfg.tag)
            except TagNotFoundError:
                log.warning("%s tag not found in any archive", kind_cfg.tag)
                items = frozenset()
            log.debug("%s: %d declared item(s) from %s", kind.value, len(items), self.tags.sources(kind_cfg.tag))
            self.declared[kind] = set(items)

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    def mapping(self, kind: VariantKind) -> Mapping[str, str]:
        return self.reconciler.mapping(kind)

    def synthesize(self) -> DatagenResult:
        cfg = self.config
        self.resolve_declared()

        skipped = list(self.skipped)
        skipped.extend(SkippedDocument(exc.archive or "", exc.path, str(exc)) for exc in self.tags.skipped)

        result = DatagenResult(
            conflicts=list(self.reconciler.conflicts),
            missing_tags=list(self.missing_tags),
            skipped=skipped,
            archives=list(self.archives),
        )

        for kind, kind_cfg in cfg.kinds.items():
            mapping = self.reconciler.mapping(kind)
            result.declared[kind] = len(self.declared[kind])
            result.mapped[kind] = len(mapping)
            result.by_kind[kind] = synthesize_variant_to_block(
                kind,
                mapping,
                self.declared[kind],
                shape=kind_cfg.shape,
                vanilla_namespace=cfg.vanilla_namespace,
                condition_type=cfg.condition_type,
            )

        if cfg.increased_yield.enabled and VariantKind.STAIR in cfg.kinds:
            result.increased_yield = synthesize_increased_yield(
                self.stair_matches,
                namespace=cfg.increased_yield.namespace,
                count=cfg.increased_yield.count,
            )

        return result


def run_datagen(config: DatagenConfig, *, clean: bool = False, dry_run: bool = False) -> DatagenResult:
    """
    Main entry point: scan config.mods_dir, write into config.output_dir.

    Raises FileNotFoundError when mods_dir is missing, and the fatal
    DatagenErrors (TagReplaceError, TagCycleError) unchanged.
    """
    run = DatagenRun(config)

    for path in iter_mod_archives(config.mods_dir):
        try:
            archive = ModArchive(path)
        except ArchiveError as exc:
            log.warning("Skipping archive: %s", exc)
            run.skipped.append(SkippedDocument(path.name, None, str(exc)))
            continue

        with archive:
            run.process_archive(archive)

    result = run.synthesize()

    writer = RecipeWriter(config.output_dir, dry_run=dry_run)
    if clean:
        writer.clean()
    writer.write_all(result.all_recipes())
    result.written = list(writer.written)

    log.info(
        "Generated %d recipe(s) from %d archive(s) into %s",
        len(result.written),
        len(result.archives),
        config.output_dir,
    )
    return result
