from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .config import GridConfig
from .errors import ConfigError, ProcessingError
from .service import SplitService


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ccbm",
        description=(
            "Split an image into a 3x3 grid of PNG key backgrounds. "
            "The tiles are written next to the input as <name>_1.png ... <name>_9.png."
        ),
        epilog=(
            "Geometry comes from CCBM_PRESET (default|wide) or CCBM_TARGET_SIZE, "
            "CCBM_GRID_SIZE, CCBM_TILE_SIZE and CCBM_SPACING, also read from .env."
        ),
    )
    parser.add_argument("image_path", help="Path to the source image (JPG/PNG/GIF/BMP)")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="More verbose output"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    print("Source: ", args.image_path)

    try:
        service = SplitService(config=GridConfig.from_env())
        service.process_image(args.image_path)
    except (ConfigError, ProcessingError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
