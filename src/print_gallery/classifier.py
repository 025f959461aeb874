"""Name-based classification of gallery entries."""

from __future__ import annotations

import os
import re
from pathlib import PurePath

IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
}

# Folder created by the macOS archive utility next to extracted files.
EXCLUDED_MARKER = "__MACOSX"

_DIGITS = re.compile(r"[0-9]+")


def is_image(name: str) -> bool:
    """Return ``True`` when ``name`` has a supported image extension."""

    return os.path.splitext(name)[1].lower() in IMAGE_EXTENSIONS


def extract_order_key(name: str) -> int:
    """Return the first run of digits in ``name`` as an integer.

    Names without digits sort under ``0``::

        >>> extract_order_key("img12b34.png")
        12
        >>> extract_order_key("cover.jpg")
        0
    """

    match = _DIGITS.search(name)
    if match is None:
        return 0
    return int(match.group(0))


def is_excluded(path: str | PurePath) -> bool:
    """Return ``True`` if any component of ``path`` carries the system marker."""

    return any(EXCLUDED_MARKER in part for part in PurePath(path).parts)
