"""Recursive discovery of images below a gallery folder."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .classifier import extract_order_key, is_excluded, is_image
from .errors import ScanError
from .status import StatusReporter

ImageRef = tuple[str, ...]


@dataclass(frozen=True)
class Entry:
    """A single directory listing entry."""

    name: str
    is_dir: bool


@dataclass
class OrderedBuckets:
    """Image references grouped by order key.

    Keys are sorted explicitly when flattening; references sharing a key keep
    the order in which they were added.
    """

    _buckets: dict[int, list[ImageRef]] = field(default_factory=dict)

    def add(self, key: int, refs: Iterable[ImageRef]) -> None:
        self._buckets.setdefault(key, []).extend(refs)

    def __len__(self) -> int:
        return sum(len(refs) for refs in self._buckets.values())

    def flatten(self) -> list[ImageRef]:
        ordered: list[ImageRef] = []
        for key in sorted(self._buckets):
            ordered.extend(self._buckets[key])
        return ordered


def list_entries(folder: Path) -> list[Entry]:
    """Return the immediate entries of ``folder`` sorted by name.

    Raises :class:`ScanError` when the folder cannot be listed.
    """

    entries: list[Entry] = []
    try:
        with os.scandir(folder) as it:
            for item in it:
                try:
                    is_dir = item.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                entries.append(Entry(item.name, is_dir))
    except OSError as exc:
        raise ScanError(folder, exc.strerror or str(exc)) from exc
    entries.sort(key=lambda e: e.name)
    return entries


def scan_folder(
    folder: Path | str, *, reporter: StatusReporter | None = None
) -> list[ImageRef]:
    """Return every image below ``folder`` in reading order.

    Each reference is a tuple of path segments relative to ``folder``. Files
    are keyed by the first number in their own name; images found in a
    subfolder are keyed by the first number in the subfolder's name and
    prefixed with it. Subfolders that cannot be listed are reported and
    skipped, while a failure to list ``folder`` itself raises
    :class:`ScanError`.
    """

    folder = Path(folder)
    buckets = OrderedBuckets()

    for entry in list_entries(folder):
        if is_excluded(entry.name):
            continue
        if not entry.is_dir:
            if is_image(entry.name):
                buckets.add(extract_order_key(entry.name), [(entry.name,)])
            continue

        try:
            nested = scan_folder(folder / entry.name, reporter=reporter)
        except ScanError as exc:
            if reporter is not None:
                reporter.skip(exc)
            continue
        buckets.add(
            extract_order_key(entry.name),
            ((entry.name, *ref) for ref in nested),
        )

    return buckets.flatten()
