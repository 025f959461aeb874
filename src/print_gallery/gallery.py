"""Render gallery entries into a printable HTML document."""

from __future__ import annotations

import html
from collections.abc import Iterable
from importlib import resources
from string import Template

from .relocator import GalleryEntry

TEMPLATE_NAME = "gallery_page.html"


def _load_template() -> Template:
    text = (
        resources.files("print_gallery")
        .joinpath(TEMPLATE_NAME)
        .read_text(encoding="utf-8")
    )
    return Template(text)


def render_page(entry: GalleryEntry) -> str:
    """Return the markup for a single printed page."""

    src = html.escape(entry.path, quote=True)
    label = html.escape(entry.label, quote=True)
    return (
        '<section class="page">\n'
        "  <figure>\n"
        f'    <img src="{src}" title="{label}" alt="{label}">\n'
        f"    <figcaption>{label}</figcaption>\n"
        "  </figure>\n"
        "</section>"
    )


def render_gallery(entries: Iterable[GalleryEntry], *, title: str = "") -> bytes:
    """Return the UTF-8 encoded gallery document for ``entries``.

    Each entry becomes one page when printed, in the order given.
    """

    pages = "\n".join(render_page(entry) for entry in entries)
    document = _load_template().substitute(
        title=html.escape(title or "Gallery"), pages=pages
    )
    return document.encode("utf-8")
