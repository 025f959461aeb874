import io

import pytest
from PIL import Image


def _sample_png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 100, 50)).save(buf, format="PNG")
    return buf.getvalue()


PNG_BYTES = _sample_png()


class RecordingReporter:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.total: int = 0
        self.advanced: int = 0

    def start(self, total: int) -> None:
        self.total = total

    def folder_started(self, folder) -> None:
        self.messages.append(("Processing", str(folder)))

    def document_written(self, document, images: int) -> None:
        self.messages.append(("Wrote", f"{document} ({images} images)"))

    def folder_empty(self, folder) -> None:
        self.messages.append(("Skipping", f"{folder}: no images found"))

    def skip(self, error: Exception) -> None:
        self.messages.append(("Skipping", str(error)))

    def folder_done(self) -> None:
        self.advanced += 1


@pytest.fixture
def make_tree(tmp_path):
    """Create files below ``tmp_path`` from relative paths."""

    def _make(*paths: str):
        for rel in paths:
            target = tmp_path / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(PNG_BYTES)
        return tmp_path

    return _make


@pytest.fixture
def reporter():
    return RecordingReporter()
