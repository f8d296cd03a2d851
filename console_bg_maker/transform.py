"""Resize, center-crop and grid-slice steps of the split pipeline.

All three steps return new RGBA images. Regions that fall outside the
source image come back fully transparent instead of raising.
"""

from __future__ import annotations

import logging
from typing import Iterator

from PIL import Image

from .config import GridConfig
from .interfaces import ImageResizerInterface
from .models import ProcessingResult, TileCoordinate

Box = tuple[int, int, int, int]


def _center_offset(size: int, target_size: int) -> int:
    # Truncates toward zero so undersized images shift by the same amount on both sides.
    return int((size - target_size) / 2)


def _copy_region(img: Image.Image, box: Box) -> Image.Image:
    # Image.crop pads out-of-bounds areas with zeros, transparent once in RGBA.
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img.crop(box)


def resize_image(
    img: Image.Image, target_size: int, resizer: ImageResizerInterface
) -> Image.Image:
    """Scale *img* so one axis equals *target_size*, keeping the aspect ratio.

    Landscape images get their height fixed; portrait and square images get
    their width fixed. The other axis is passed as 0 and left to the resizer.
    """
    if img.width > img.height:
        return resizer.resize(0, target_size, img)
    return resizer.resize(target_size, 0, img)


def crop_to_square(img: Image.Image, target_size: int) -> Image.Image:
    start_x = _center_offset(img.width, target_size)
    start_y = _center_offset(img.height, target_size)
    if start_x < 0 or start_y < 0:
        logging.debug(
            "Image %sx%s is smaller than the %s square, padding with transparency.",
            img.width,
            img.height,
            target_size,
        )
    box = (start_x, start_y, start_x + target_size, start_y + target_size)
    return _copy_region(img, box)


def tile_boxes(config: GridConfig) -> Iterator[tuple[TileCoordinate, Box]]:
    """Yield each tile's grid position and source box, row by row."""
    number = 1
    for row in range(config.grid_size):
        for col in range(config.grid_size):
            x = col * config.stride
            y = row * config.stride
            yield (
                TileCoordinate(row=row, col=col, number=number),
                (x, y, x + config.tile_size, y + config.tile_size),
            )
            number += 1


def split_into_tiles(img: Image.Image, config: GridConfig) -> ProcessingResult:
    result = ProcessingResult()
    for coord, box in tile_boxes(config):
        result.add(_copy_region(img, box), coord)
    return result
