"""Rewrite scanned image references relative to the gallery document."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePath

from .errors import RelocationError
from .scanner import ImageRef
from .status import StatusReporter

HTML_SUFFIX = ".html"


@dataclass(frozen=True)
class GalleryEntry:
    """One image as referenced from the gallery document."""

    path: str
    label: str


def gallery_path_for(folder: Path | str) -> Path:
    """Return the document path for ``folder``: a sibling named ``<folder>.html``."""

    folder = Path(os.path.normpath(folder))
    return folder.parent / f"{folder.name}{HTML_SUFFIX}"


def relative_image_path(folder: Path | str, ref: ImageRef) -> str:
    """Return the forward-slash path from the document directory to ``ref``."""

    if not ref:
        raise RelocationError(folder, "empty image reference")
    folder = Path(os.path.normpath(folder))
    target = folder.joinpath(*ref)
    try:
        rel = os.path.relpath(target, gallery_path_for(folder).parent)
    except ValueError as exc:
        raise RelocationError(target, str(exc)) from exc
    posix = PurePath(rel).as_posix()
    try:
        posix.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise RelocationError(target, "name is not valid UTF-8") from exc
    return posix


def relocate(
    folder: Path | str,
    refs: Iterable[ImageRef],
    *,
    reporter: StatusReporter | None = None,
) -> list[GalleryEntry]:
    """Pair each reference with its document-relative path and label.

    Entries whose path cannot be computed are dropped and reported.
    """

    entries: list[GalleryEntry] = []
    for ref in refs:
        try:
            path = relative_image_path(folder, ref)
        except RelocationError as exc:
            if reporter is not None:
                reporter.skip(exc)
            continue
        entries.append(GalleryEntry(path=path, label=ref[-1]))
    return entries
