"""Exceptions raised while building galleries."""

from __future__ import annotations

from pathlib import Path


class GalleryError(Exception):
    """Base class for failures tied to a filesystem path."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class WalkError(GalleryError):
    """The root folder (or a walked directory) could not be listed."""


class ScanError(GalleryError):
    """A folder inside the tree could not be listed."""


class RelocationError(GalleryError):
    """No relative path could be computed for an image."""


class WriteError(GalleryError):
    """The gallery document could not be written."""
