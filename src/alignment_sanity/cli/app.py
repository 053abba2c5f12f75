import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from alignment_sanity.cli.align import align
from alignment_sanity.cli.common import console
from alignment_sanity.cli.listing import groups, hints, tokens
from alignment_sanity.cli.watch import watch
from alignment_sanity.core.settings import get_settings

app = typer.Typer(
    name="alignment-sanity",
    help="Alignment Sanity CLI: align operators, separators and trailing comments.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    try:
        settings = get_settings()
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(2) from None
    level = "DEBUG" if verbose else settings.log_level
    logging.basicConfig(level=level, format="%(message)s", handlers=[RichHandler(show_path=False)], force=True)


app.command("align")(align)
app.command("tokens")(tokens)
app.command("groups")(groups)
app.command("hints")(hints)
app.command("watch")(watch)


def main() -> None:
    app()
