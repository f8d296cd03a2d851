from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image

from .adapters import LanczosResizer, PillowImageDecoder, PNGEncoder
from .config import GridConfig
from .errors import (
    ImageDecodeError,
    ImageOpenError,
    TileCreateError,
    TileEncodeError,
    TileSaveError,
)
from .interfaces import (
    FileSystemInterface,
    ImageDecoderInterface,
    ImageEncoderInterface,
    ImageResizerInterface,
)
from .models import ProcessedImage
from .storage import OSFileSystem
from .transform import crop_to_square, resize_image, split_into_tiles


def tile_output_path(image_path: str | Path, number: int) -> Path:
    """Return ``<dir>/<name without extension>_<number>.png`` for *image_path*.

    Everything from the last dot of the file name is the extension, so
    ``.hidden`` gives ``_1.png`` and ``photo.`` gives ``photo_1.png``.
    """
    source = Path(image_path)
    name = source.name
    dot = name.rfind(".")
    if dot != -1:
        name = name[:dot]
    return source.parent / f"{name}_{number}.png"


class SplitService:
    """Loads one image, cuts it into key tiles and writes them next to it.

    Every collaborator can be swapped out; anything left as ``None`` falls
    back to local files, Pillow and the default 3x3 geometry.
    """

    def __init__(
        self,
        file_system: FileSystemInterface | None = None,
        decoder: ImageDecoderInterface | None = None,
        encoder: ImageEncoderInterface | None = None,
        resizer: ImageResizerInterface | None = None,
        config: GridConfig | None = None,
    ) -> None:
        self.file_system = file_system or OSFileSystem()
        self.decoder = decoder or PillowImageDecoder()
        self.encoder = encoder or PNGEncoder()
        self.resizer = resizer or LanczosResizer()
        self.config = (config or GridConfig.default()).validate()

    def process_image(self, image_path: str | Path) -> list[Path]:
        processed = self.load_image(image_path)
        self.transform(processed)
        return self.save_tiles(processed, image_path)

    def load_image(self, image_path: str | Path) -> ProcessedImage:
        try:
            stream = self.file_system.open(str(image_path))
        except OSError as exc:
            raise ImageOpenError(f"error opening image: {exc}") from exc

        with stream:
            try:
                img, image_format = self.decoder.decode(stream)
            except (OSError, ValueError, Image.DecompressionBombError) as exc:
                raise ImageDecodeError(f"error decoding image: {exc}") from exc

        logging.info(
            "Loaded %s image %s (%sx%s).", image_format or "unknown", image_path, img.width, img.height
        )
        return ProcessedImage(original=img)

    def transform(self, processed: ProcessedImage) -> ProcessedImage:
        config = self.config
        processed.resized = resize_image(processed.original, config.target_size, self.resizer)
        logging.debug(
            "Resized to %sx%s.", processed.resized.width, processed.resized.height
        )
        processed.squared = crop_to_square(processed.resized, config.target_size)
        processed.result = split_into_tiles(processed.squared, config)
        logging.debug(
            "Split into %s tiles of %spx (spacing %spx).",
            len(processed.result),
            config.tile_size,
            config.spacing,
        )
        return processed

    def save_tiles(self, processed: ProcessedImage, image_path: str | Path) -> list[Path]:
        if processed.result is None:
            raise ValueError("transform() must run before save_tiles()")

        written: list[Path] = []
        for tile, coord in processed.result:
            output_path = tile_output_path(image_path, coord.number)
            try:
                self.save_tile(tile, output_path, coord.number)
            except TileSaveError:
                if written:
                    logging.warning(
                        "Stopped at tile %s; %s earlier tile(s) were left on disk.",
                        coord.number,
                        len(written),
                    )
                raise
            written.append(output_path)
            logging.debug("Saved tile %s to %s.", coord.number, output_path)

        logging.info("Wrote %s tiles next to %s.", len(written), image_path)
        return written

    def save_tile(self, tile: Image.Image, output_path: Path, number: int) -> None:
        # Encode before touching the disk so a bad tile never leaves an empty file behind.
        buffer = io.BytesIO()
        try:
            self.encoder.encode(buffer, tile)
        except Exception as exc:
            raise TileEncodeError(
                f"error saving tile {number}: error encoding tile: {exc}", number, output_path
            ) from exc

        try:
            with self.file_system.create(str(output_path)) as sink:
                sink.write(buffer.getvalue())
        except OSError as exc:
            raise TileCreateError(
                f"error saving tile {number}: error creating output file {output_path}: {exc}",
                number,
                output_path,
            ) from exc
