# src/cli/datagen.py

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from runtime.datagen import DatagenResult, run_datagen
from runtime.logging_config import configure_logging
from semantics.errors import DatagenError
from settings.loader import load_datagen_config


log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="variant-datagen",
        description="Generate slab/stair -> block recipes from the recipes shipped in mod archives.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to datagen.yaml (default: config/datagen.yaml)")
    parser.add_argument("--mods", type=Path, default=None, help="Directory of mod archives (overrides mods_dir)")
    parser.add_argument("--out", type=Path, default=None, help="Output directory (overrides output_dir)")
    parser.add_argument("--clean", action="store_true", help="Delete the output directory before writing")
    parser.add_argument("--dry-run", action="store_true", help="Report what would be written without writing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def render_summary(result: DatagenResult, console: Optional[Console] = None) -> None:
    console = console or Console()

    table = Table(title="Variant recipes", border_style="blue")
    table.add_column("Kind", style="cyan")
    table.add_column("Declared", justify="right")
    table.add_column("Mapped", justify="right")
    table.add_column("Generated", justify="right", style="green")
    table.add_column("Unresolved", justify="right")

    for kind in sorted(result.by_kind, key=lambda k: k.value):
        synth = result.by_kind[kind]
        unresolved = len(synth.unresolved)
        table.add_row(
            kind.value,
            str(result.declared.get(kind, 0)),
            str(result.mapped.get(kind, 0)),
            str(len(synth.recipes)),
            f"[red]{unresolved}[/red]" if unresolved else "0",
        )
    console.print(table)

    console.print(f"Increased stair yield copies: [bold]{len(result.increased_yield)}[/bold]")
    console.print(f"Archives scanned: {len(result.archives)}")
    if result.conflicts:
        console.print(f"[yellow]Mapping conflicts: {len(result.conflicts)}[/yellow]")
    if result.missing_tags:
        console.print(f"[yellow]Archives without a root tag: {len(result.missing_tags)}[/yellow]")
    if result.skipped:
        console.print(f"[yellow]Skipped documents: {len(result.skipped)}[/yellow]")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    config = load_datagen_config(args.config)
    if args.mods is not None:
        config.mods_dir = args.mods
    if args.out is not None:
        config.output_dir = args.out

    try:
        result = run_datagen(config, clean=args.clean, dry_run=args.dry_run)
    except DatagenError as exc:
        if not exc.fatal:
            raise
        log.error("Aborting: %s", exc)
        return 1
    except FileNotFoundError as exc:
        log.error("%s", exc)
        return 1

    render_summary(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
