from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from .errors import ConfigError


ENV_PREFIX = "CCBM_"


def load_dotenv(path: Path, prefix: str = ENV_PREFIX) -> dict[str, str]:
    """Copy the *prefix* settings from a ``.env`` file into the environment.

    Variables that are already set win over the file. Lines may start with
    ``export``. Returns the entries that were actually applied.
    """
    applied: dict[str, str] = {}
    if not path.is_file():
        return applied
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key.startswith(prefix) or key in os.environ:
            continue
        value = value.strip().strip('"').strip("'")
        os.environ[key] = value
        applied[key] = value
    return applied


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class GridConfig:
    """Geometry of the square and the key grid cut out of it.

    The defaults describe a 3x3 keypad: 3 * 116 + 2 * 15 == 378, so the
    tiles and the gaps between them exactly cover the square.
    """

    target_size: int = 378
    grid_size: int = 3
    tile_size: int = 116
    spacing: int = 15

    @classmethod
    def default(cls) -> "GridConfig":
        return cls()

    @property
    def stride(self) -> int:
        return self.tile_size + self.spacing

    @property
    def footprint(self) -> int:
        return self.grid_size * self.tile_size + (self.grid_size - 1) * self.spacing

    @property
    def tile_count(self) -> int:
        return self.grid_size * self.grid_size

    def validate(self) -> "GridConfig":
        for name in ("target_size", "grid_size", "tile_size", "spacing"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{name} must be an integer")
        if self.target_size <= 0 or self.grid_size <= 0 or self.tile_size <= 0:
            raise ConfigError("target_size, grid_size and tile_size must be positive")
        if self.spacing < 0:
            raise ConfigError("spacing must be 0 or positive")
        if self.footprint > self.target_size:
            raise ConfigError(
                f"Grid footprint ({self.grid_size}x{self.tile_size} + "
                f"{self.grid_size - 1}x{self.spacing} = {self.footprint}) "
                f"exceeds target_size ({self.target_size})"
            )
        return self

    @classmethod
    def from_env(cls) -> "GridConfig":
        load_dotenv(Path(".env"))
        preset_name = os.getenv("CCBM_PRESET", "default").strip().lower() or "default"
        preset = PRESETS.get(preset_name)
        if preset is None:
            raise ConfigError(
                f"Unknown CCBM_PRESET {preset_name!r}, expected one of: {', '.join(sorted(PRESETS))}"
            )
        config = cls(
            target_size=_env_int("CCBM_TARGET_SIZE", preset.target_size),
            grid_size=_env_int("CCBM_GRID_SIZE", preset.grid_size),
            tile_size=_env_int("CCBM_TILE_SIZE", preset.tile_size),
            spacing=_env_int("CCBM_SPACING", preset.spacing),
        )
        return config.validate()


# Wider gaps between keys, same tile size.
LARGE_SPACING_PRESET = GridConfig(target_size=484, grid_size=3, tile_size=116, spacing=68)

PRESETS: dict[str, GridConfig] = {
    "default": GridConfig(),
    "wide": LARGE_SPACING_PRESET,
}
