from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any, Protocol

# Receives the alignable files changed within one debounce window.
ChangeCallback = Callable[[set[Path]], Coroutine[Any, Any, None]]


class FileWatcherPort(Protocol):
    """Source of changed-file batches that the ``watch`` command re-checks."""

    async def start(self) -> None: ...

    async def stop(self) -> None: ...

    async def wait(self) -> None:
        """Block until the watch loop ends or is cancelled."""
        ...
