"""In-memory stand-ins for the file system, codec and resizer capabilities."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from console_bg_maker.adapters import LanczosResizer


ENV_VARS = (
    "CCBM_PRESET",
    "CCBM_TARGET_SIZE",
    "CCBM_GRID_SIZE",
    "CCBM_TILE_SIZE",
    "CCBM_SPACING",
)


class TrackedStream(io.BytesIO):
    def __init__(self, content: bytes = b"") -> None:
        super().__init__(content)
        self.close_count = 0

    def close(self) -> None:
        self.close_count += 1
        super().close()


class RecordingSink(io.BytesIO):
    def __init__(self, fs: "FakeFileSystem", path: str) -> None:
        super().__init__()
        self._fs = fs
        self._path = path

    def close(self) -> None:
        if not self.closed:
            self._fs.written[self._path] = self.getvalue()
        super().close()


class FakeFileSystem:
    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.written: dict[str, bytes] = {}
        self.create_errors: dict[str, OSError] = {}
        self.opened: list[TrackedStream] = []
        self.created: list[RecordingSink] = []

    def add_file(self, path: str, content: bytes = b"fake image bytes") -> None:
        self.files[path] = content

    def open(self, path: str) -> TrackedStream:
        if path not in self.files:
            raise FileNotFoundError(f"No such file: {path}")
        stream = TrackedStream(self.files[path])
        self.opened.append(stream)
        return stream

    def create(self, path: str) -> RecordingSink:
        if path in self.create_errors:
            raise self.create_errors[path]
        sink = RecordingSink(self, path)
        self.created.append(sink)
        return sink


class FakeDecoder:
    def __init__(
        self,
        img: Image.Image | None = None,
        image_format: str = "png",
        error: Exception | None = None,
    ) -> None:
        self.img = img
        self.image_format = image_format
        self.error = error
        self.calls = 0

    def decode(self, stream) -> tuple[Image.Image, str]:
        self.calls += 1
        stream.read()
        if self.error is not None:
            raise self.error
        return self.img, self.image_format


class FakeEncoder:
    """Writes real PNG bytes, or fails on the ``fail_on``-th call."""

    def __init__(self, fail_on: int | None = None, error: Exception | None = None) -> None:
        self.fail_on = fail_on
        self.error = error or OSError("encoder exploded")
        self.encoded_sizes: list[tuple[int, int]] = []

    def encode(self, sink, img: Image.Image) -> None:
        if self.fail_on is not None and len(self.encoded_sizes) + 1 == self.fail_on:
            raise self.error
        self.encoded_sizes.append(img.size)
        img.save(sink, format="PNG")


class FakeResizer:
    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []
        self._delegate = LanczosResizer()

    def resize(self, width: int, height: int, img: Image.Image) -> Image.Image:
        self.calls.append((width, height))
        return self._delegate.resize(width, height, img)


def make_img(w: int = 100, h: int = 80, color=(255, 0, 0, 255)) -> Image.Image:
    """Return a solid-colour RGBA test image."""
    return Image.new("RGBA", (w, h), color)


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem()


@pytest.fixture
def fake_resizer() -> FakeResizer:
    return FakeResizer()


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so monkeypatch remembers to remove anything a .env file adds
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
