from pathlib import Path
from typing import Annotated

import typer

from alignment_sanity.cli.common import console, read_source
from alignment_sanity.core.engine import PREVIEW_MARKER, align_source
from alignment_sanity.core.materialize import apply_padding_operations
from alignment_sanity.core.settings import get_settings


def align(
    path: Annotated[Path, typer.Argument(help="Source file to align.")],
    language: Annotated[str | None, typer.Option(help="Language name or alias (e.g. python, ts, json).")] = None,
    write: Annotated[bool, typer.Option("--write", help="Insert the padding into the file.")] = False,
    check: Annotated[bool, typer.Option("--check", help="Exit with code 1 if the file is not aligned.")] = False,
    marker: Annotated[str, typer.Option(help="Character shown for padding in the preview.")] = PREVIEW_MARKER,
) -> None:
    """Preview, check or write alignment padding for a file."""
    if write and check:
        console.print("[red]--write and --check are mutually exclusive.[/red]")
        raise typer.Exit(2)

    source, resolved_language = read_source(path, language)
    report = align_source(source, resolved_language, respect_existing_padding=get_settings().respect_existing_padding)

    if check:
        if report.changed:
            console.print(f"[yellow]{path}[/yellow] needs alignment on {len(report.changed_lines)} line(s)")
            raise typer.Exit(1)
        console.print(f"[green]{path} is aligned[/green]")
        return

    if write:
        if report.changed:
            path.write_text(report.aligned_text, encoding="utf-8")
        console.print(f"[green]Aligned[/green] {len(report.changed_lines)} line(s) in {path}")
        return

    preview = apply_padding_operations(source.split("\n"), report.operations, fill=marker)
    console.print("\n".join(preview), markup=False, highlight=False, soft_wrap=True)
