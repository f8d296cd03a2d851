from __future__ import annotations

from typing import BinaryIO, Protocol

from PIL import Image


class FileSystemInterface(Protocol):
    def open(self, path: str) -> BinaryIO:
        ...

    def create(self, path: str) -> BinaryIO:
        ...


class ImageDecoderInterface(Protocol):
    def decode(self, stream: BinaryIO) -> tuple[Image.Image, str]:
        ...


class ImageEncoderInterface(Protocol):
    def encode(self, sink: BinaryIO, img: Image.Image) -> None:
        ...


class ImageResizerInterface(Protocol):
    def resize(self, width: int, height: int, img: Image.Image) -> Image.Image:
        ...
