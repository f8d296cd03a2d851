from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from PIL import Image


@dataclass(frozen=True)
class TileCoordinate:
    row: int
    col: int
    # 1-based, row-major
    number: int


@dataclass
class ProcessingResult:
    tiles: list[Image.Image] = field(default_factory=list)
    tile_coords: list[TileCoordinate] = field(default_factory=list)

    def add(self, tile: Image.Image, coord: TileCoordinate) -> None:
        self.tiles.append(tile)
        self.tile_coords.append(coord)

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[tuple[Image.Image, TileCoordinate]]:
        return iter(zip(self.tiles, self.tile_coords))


@dataclass
class ProcessedImage:
    original: Image.Image
    resized: Image.Image | None = None
    squared: Image.Image | None = None
    result: ProcessingResult | None = None
