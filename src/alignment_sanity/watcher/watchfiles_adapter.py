from __future__ import annotations

import asyncio
import contextlib
import logging
from pathlib import Path

from watchfiles import awatch

from alignment_sanity.core.languages import is_supported_path
from alignment_sanity.core.ports.watcher import ChangeCallback

logger = logging.getLogger(__name__)


class WatchfilesWatcher:
    """Watch a directory for changes to alignable files and trigger a callback.

    Rapid successive edits are coalesced by ``debounce_ms`` before the callback
    runs, so one alignment pass covers a burst of saves.

    Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: ChangeCallback,
        debounce_ms: int = 100,
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._debounce_ms = debounce_ms
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watcher started for %s", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Watcher stopped for %s", self._directory)

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    async def _watch(self) -> None:
        async for changes in awatch(self._directory, debounce=self._debounce_ms):
            paths = {Path(p) for _, p in changes if is_supported_path(Path(p))}
            if paths:
                logger.info("Detected changes in %d file(s)", len(paths))
                try:
                    await self._on_change(paths)
                except Exception:
                    logger.exception("Error in watcher callback")
