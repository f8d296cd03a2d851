from __future__ import annotations

from typing import BinaryIO

from PIL import Image, ImageOps

from .interfaces import ImageDecoderInterface, ImageEncoderInterface, ImageResizerInterface


class PillowImageDecoder(ImageDecoderInterface):
    def decode(self, stream: BinaryIO) -> tuple[Image.Image, str]:
        with Image.open(stream) as img:
            img.load()
            image_format = (img.format or "").lower()
            # Phone photos carry their rotation in EXIF.
            decoded = ImageOps.exif_transpose(img)
        return decoded, image_format


class PNGEncoder(ImageEncoderInterface):
    def encode(self, sink: BinaryIO, img: Image.Image) -> None:
        img.save(sink, format="PNG")


class LanczosResizer(ImageResizerInterface):
    """Lanczos resampling; a zero width or height is derived from the aspect ratio.

    Derived sides are rounded as int(0.7 + x), so anything from .3 up rounds up.
    """

    def resize(self, width: int, height: int, img: Image.Image) -> Image.Image:
        if width == 0 and height == 0:
            return img.copy()
        if width == 0:
            width = max(1, int(0.7 + img.width / (img.height / height)))
        elif height == 0:
            height = max(1, int(0.7 + img.height / (img.width / width)))
        # Pillow falls back to NEAREST for palette and bilevel images.
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA")
        return img.resize((width, height), Image.LANCZOS)
