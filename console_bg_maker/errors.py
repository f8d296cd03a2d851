from __future__ import annotations

from pathlib import Path


class ConfigError(ValueError):
    pass


class ProcessingError(Exception):
    """Base class for every failure raised by the split pipeline."""


class ImageOpenError(ProcessingError):
    pass


class ImageDecodeError(ProcessingError):
    pass


class TileSaveError(ProcessingError):
    """A tile could not be written; earlier tiles stay on disk."""

    def __init__(self, message: str, tile_number: int, path: Path) -> None:
        super().__init__(message)
        self.tile_number = tile_number
        self.path = path


class TileCreateError(TileSaveError):
    pass


class TileEncodeError(TileSaveError):
    pass
