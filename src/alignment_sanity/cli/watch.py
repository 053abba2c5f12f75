import asyncio
import contextlib
from pathlib import Path
from typing import Annotated

import typer

from alignment_sanity.cli.common import console
from alignment_sanity.core.engine import align_file
from alignment_sanity.core.ports.watcher import FileWatcherPort
from alignment_sanity.core.settings import get_settings
from alignment_sanity.watcher.watchfiles_adapter import WatchfilesWatcher


def watch(
    directory: Annotated[Path, typer.Argument(help="Directory to watch.")] = Path("."),
) -> None:
    """Report alignment status of files as they change."""
    settings = get_settings()

    async def _on_change(paths: set[Path]) -> None:
        for path in sorted(paths):
            if not path.is_file():
                continue
            report = align_file(str(path), respect_existing_padding=settings.respect_existing_padding)
            if report.changed:
                console.print(f"[yellow]{path}[/yellow] needs alignment on {len(report.changed_lines)} line(s)")
            else:
                console.print(f"[green]{path} is aligned[/green]")

    watcher: FileWatcherPort = WatchfilesWatcher(directory, _on_change, debounce_ms=settings.debounce_ms)

    async def _run() -> None:
        await watcher.start()
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    console.print(f"[green]Watching[/green] {directory} (Ctrl+C to stop)")
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run())
