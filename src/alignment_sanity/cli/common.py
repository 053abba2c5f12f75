from collections.abc import Sequence
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from alignment_sanity.core.languages import resolve_language

console = Console()


def render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def read_source(path: Path, language: str | None) -> tuple[str, str]:
    """Return ``(source, resolved_language)`` or exit with code 2 on unusable input."""
    try:
        resolved_language = resolve_language(language, path)
        source = path.read_text(encoding="utf-8")
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(2) from None
    except (FileNotFoundError, IsADirectoryError):
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(2) from None
    return source, resolved_language
