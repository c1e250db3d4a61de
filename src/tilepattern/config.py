import json
import logging
import os
import random
import string
import time
from dataclasses import asdict, dataclass, field, replace

logger = logging.getLogger(__name__)

DEFAULT_ROWS = 5
DEFAULT_COLS = 8
DEFAULT_TILE_SIZE = 200  # 8 x 5 at 200px -> 1600 x 1000 output
DEFAULT_SEED = "pattern-2024"
SETTINGS_FILE = "tilepattern.json"

_BASE36 = string.digits + string.ascii_lowercase

def check_grid(rows: int, cols: int, tile_size: int) -> None:
    if rows < 1 or cols < 1:
        raise ValueError(f"grid must be at least 1x1 (got {rows}x{cols})")
    if tile_size <= 0:
        raise ValueError(f"tile size must be positive (got {tile_size})")

@dataclass(frozen=True)
class PatternOptions:
    random_rotation: bool = True
    allow_flips: bool = False
    enable_clustering: bool = True

@dataclass
class PatternSettings:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    tile_size: int = DEFAULT_TILE_SIZE
    seed: str = DEFAULT_SEED
    options: PatternOptions = field(default_factory=PatternOptions)

    def check(self) -> None:
        check_grid(self.rows, self.cols, self.tile_size)

    def with_options(self, **changes) -> "PatternSettings":
        return replace(self, options=replace(self.options, **changes))

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PatternSettings":
        """Known keys override the defaults; anything else is ignored."""
        base = cls()
        opts = data.get("options") or {}
        flags = {}
        for k in asdict(base.options):
            if k not in opts:
                continue
            if isinstance(opts[k], bool):
                flags[k] = opts[k]
            else:
                logger.warning("Ignoring non-boolean option %s=%r", k, opts[k])
        options = PatternOptions(**flags)
        return cls(
            rows=int(data.get("rows", base.rows)),
            cols=int(data.get("cols", base.cols)),
            tile_size=int(data.get("tile_size", base.tile_size)),
            seed=str(data.get("seed", base.seed)),
            options=options,
        )

def load_settings(path: str = SETTINGS_FILE) -> PatternSettings:
    if not os.path.exists(path):
        return PatternSettings()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("settings root must be an object")
        return PatternSettings.from_dict(data)
    except (OSError, ValueError, TypeError) as e:
        logger.warning("Failed to load saved settings from %s: %s", path, e)
        return PatternSettings()

def save_settings(settings: PatternSettings, path: str = SETTINGS_FILE) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, indent=2)

def random_seed_text() -> str:
    """Fresh seed text for the "randomize" action: pattern-<epoch ms>-<9 base36 chars>."""
    suffix = "".join(random.choice(_BASE36) for _ in range(9))
    return f"pattern-{int(time.time() * 1000)}-{suffix}"
