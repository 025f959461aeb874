"""Console reporting for gallery builds: folder progress plus status lines."""

from __future__ import annotations

import sys
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO

from tqdm import tqdm


def format_status(action: str, detail: str) -> str:
    """Return a standardized status message."""

    action = action.strip()
    detail = detail.strip()
    if not action:
        return detail
    if not detail:
        return action
    return f"{action} {detail}"


def printable(text: str) -> str:
    """Escape characters (such as undecodable filename bytes) a UTF-8 stream rejects."""

    return text.encode("utf-8", "backslashreplace").decode("utf-8")


@dataclass
class StatusReporter(AbstractContextManager["StatusReporter"]):
    """Report per-folder progress while keeping a progress bar at the bottom.

    The bar counts folders; one tick is added per :meth:`folder_done` call.
    Messages are written above the bar, or printed directly when no bar was
    started. The bar is disabled automatically when ``stream`` is not a TTY.
    """

    description: str = "Galleries"
    disable: Optional[bool] = None
    stream: Optional[TextIO] = None
    skipped: int = field(default=0, init=False)
    completed: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.stream is None:
            self.stream = sys.stdout
        if self.disable is None:
            isatty = getattr(self.stream, "isatty", None)
            self.disable = not (isatty and isatty())
        self._bar = None

    def start(self, total: int) -> None:
        """Begin counting ``total`` folders."""

        if self._bar is not None:
            self._bar.total = total
            self._bar.refresh()
            return
        self._bar = tqdm(
            total=total,
            desc=self.description,
            unit="folder",
            dynamic_ncols=True,
            leave=False,
            file=self.stream,
            disable=self.disable,
        )

    def log(self, message: str) -> None:
        """Write ``message`` above the progress bar."""

        message = printable(message)
        if self._bar is not None:
            tqdm.write(message, file=self.stream)
        else:
            print(message, file=self.stream, flush=True)

    def log_status(self, action: str, detail: str) -> None:
        self.log(format_status(action, detail))

    def folder_started(self, folder: Path) -> None:
        self.log_status("Processing", str(folder))

    def document_written(self, document: Path, images: int) -> None:
        self.log_status("Wrote", f"{document} ({images} images)")

    def folder_empty(self, folder: Path) -> None:
        self.log_status("Skipping", f"{folder}: no images found")

    def skip(self, error: Exception) -> None:
        """Report a failure that was contained to one folder or image."""

        self.skipped += 1
        self.log_status("Skipping", str(error))

    def folder_done(self) -> None:
        self.completed += 1
        if self._bar is not None:
            self._bar.update(1)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def __exit__(self, exc_type, exc, exc_tb):
        self.close()
        return False
