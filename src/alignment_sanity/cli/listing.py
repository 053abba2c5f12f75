from pathlib import Path
from typing import Annotated

import typer

from alignment_sanity.cli.common import read_source, render_table
from alignment_sanity.core.settings import get_settings
from alignment_sanity.core.shift import padding_hints, resolve_alignment
from alignment_sanity.core.tokenizer import tokenize


def tokens(
    path: Annotated[Path, typer.Argument(help="Source file to tokenize.")],
    language: Annotated[str | None, typer.Option(help="Language name or alias (e.g. python, ts, json).")] = None,
) -> None:
    """List the alignment tokens of a file."""
    source, resolved_language = read_source(path, language)
    rows = [
        (t.line, t.column, t.text, t.category.value, t.indent, t.parent_context, t.ordinal, t.scope)
        for t in tokenize(source, resolved_language)
    ]
    render_table(["line", "column", "text", "category", "indent", "parent", "ordinal", "scope"], rows)


def groups(
    path: Annotated[Path, typer.Argument(help="Source file to group.")],
    language: Annotated[str | None, typer.Option(help="Language name or alias (e.g. python, ts, json).")] = None,
) -> None:
    """List the resolved alignment groups of a file."""
    source, resolved_language = read_source(path, language)
    result = resolve_alignment(tokenize(source, resolved_language))
    rows = [
        (
            g.id,
            g.category.value,
            ",".join(str(t.line) for t in g.members),
            g.target_column,
            "after" if g.pad_after else "before",
        )
        for g in result.all_groups
    ]
    render_table(["id", "category", "lines", "target", "pad"], rows)


def hints(
    path: Annotated[Path, typer.Argument(help="Source file to inspect.")],
    language: Annotated[str | None, typer.Option(help="Language name or alias (e.g. python, ts, json).")] = None,
) -> None:
    """List the virtual padding hints a renderer would draw."""
    source, resolved_language = read_source(path, language)
    result = resolve_alignment(tokenize(source, resolved_language))
    rows = [(h.line, h.column, h.spaces) for h in padding_hints(result, max_padding=get_settings().max_padding)]
    render_table(["line", "column", "spaces"], rows)
