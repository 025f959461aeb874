"""Drive scanning, relocation and rendering for folders below a root."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from .classifier import is_excluded
from .errors import ScanError, WalkError, WriteError
from .gallery import render_gallery
from .relocator import gallery_path_for, relocate
from .scanner import list_entries, scan_folder
from .status import StatusReporter


@dataclass
class BuildSummary:
    """Outcome of a run over a root folder."""

    written: list[Path] = field(default_factory=list)
    empty: list[Path] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_document(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data``.

    The bytes go to a temporary file next to ``path`` which is then renamed
    over it, so a failed write leaves any previous document untouched.
    """

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as exc:
        raise WriteError(path, exc.strerror or str(exc)) from exc
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.chmod(tmp_name, _default_mode())
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise WriteError(path, exc.strerror or str(exc)) from exc


def process_folder(
    folder: Path | str, *, reporter: StatusReporter | None = None
) -> Path | None:
    """Write the gallery document for ``folder``.

    Returns the document path, or ``None`` when the folder holds no images.
    Raises :class:`ScanError` if ``folder`` cannot be listed and
    :class:`WriteError` if the document cannot be written.
    """

    folder = Path(os.path.normpath(folder))
    refs = scan_folder(folder, reporter=reporter)
    if not refs:
        return None

    entries = relocate(folder, refs, reporter=reporter)
    if not entries:
        return None

    target = gallery_path_for(folder)
    write_document(target, render_gallery(entries, title=folder.name))
    if reporter is not None:
        reporter.document_written(target, len(entries))
    return target


def _top_level_folders(root: Path) -> list[Path]:
    try:
        entries = list_entries(root)
    except ScanError as exc:
        raise WalkError(root, exc.reason) from exc
    return [
        root / entry.name
        for entry in entries
        if entry.is_dir and not is_excluded(entry.name)
    ]


def _nested_folders(root: Path) -> list[Path]:
    """Return every directory below ``root`` in depth-first pre-order."""

    folders: list[Path] = []
    for child in _top_level_folders(root):
        folders.append(child)
        folders.extend(_nested_folders(child))
    return folders


def build_galleries(
    root: Path | str,
    *,
    nested: bool = False,
    reporter: StatusReporter | None = None,
) -> BuildSummary:
    """Process every subfolder of ``root`` one after another.

    Only the immediate subfolders are processed unless ``nested`` is set, in
    which case every directory below ``root`` gets its own document. Failures
    confined to one folder are recorded in the summary; a :class:`WalkError`
    is raised when the tree itself cannot be listed.
    """

    root = Path(os.path.normpath(root))
    summary = BuildSummary()
    if is_excluded(root):
        return summary

    folders = _nested_folders(root) if nested else _top_level_folders(root)
    if reporter is not None:
        reporter.start(len(folders))

    for folder in folders:
        if reporter is not None:
            reporter.folder_started(folder)
        try:
            written = process_folder(folder, reporter=reporter)
        except (ScanError, WriteError) as exc:
            summary.failed[folder] = exc.reason
            if reporter is not None:
                reporter.skip(exc)
        else:
            if written is None:
                summary.empty.append(folder)
                if reporter is not None:
                    reporter.folder_empty(folder)
            else:
                summary.written.append(written)
        if reporter is not None:
            reporter.folder_done()

    return summary
