from __future__ import annotations

from typing import BinaryIO

from .interfaces import FileSystemInterface


class OSFileSystem(FileSystemInterface):
    """Plain local files. ``create`` truncates existing files and never makes directories."""

    def open(self, path: str) -> BinaryIO:
        return open(path, "rb")

    def create(self, path: str) -> BinaryIO:
        return open(path, "wb")
