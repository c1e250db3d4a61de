# Tile catalog: descriptors, footprint validation and the built-in fallback tiles.
# The generator only ever reads ids and footprints from here.

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

SMALL, LARGE = 1, 2
UNIT_PX = 200  # declared pixel side of a 1x1 asset

PATTERN_FRAME = 100  # built-in patterns are drawn in a 100x100 frame

Stripe = Tuple[int, int, str]  # (x, width, fill), full frame height

class InvalidTileError(ValueError):
    """A candidate asset whose footprint is not exactly 1x1 or 2x2 grid units."""

@dataclass
class TileDescriptor:
    tile_id: str
    size: int
    label: str = ""
    # Exactly one payload is normally set; renderers pick what they can draw.
    svg_body: Optional[str] = None
    source_size: Tuple[float, float] = (0.0, 0.0)
    image: object = None  # PIL.Image.Image
    pattern: Optional[Tuple[Stripe, ...]] = None

    @property
    def display_name(self) -> str:
        return self.label or self.tile_id

def footprint_for_dimensions(width: float, height: float, unit: int = UNIT_PX) -> int:
    if width == unit and height == unit:
        return SMALL
    if width == 2 * unit and height == 2 * unit:
        return LARGE
    raise InvalidTileError(
        f"Must be exactly {unit}x{unit} or {2 * unit}x{2 * unit} pixels (got {width:g}x{height:g})"
    )

class TileCatalog:
    def __init__(self, unit: int = UNIT_PX):
        self.unit = unit
        self._tiles: Dict[str, TileDescriptor] = {}
        self._next_id = 0

    def add(self, size: int, label: str = "", **payload) -> TileDescriptor:
        if size not in (SMALL, LARGE):
            raise InvalidTileError(f"unsupported footprint {size!r}; expected 1 or 2")
        tile_id = f"tile-{self._next_id}"
        self._next_id += 1
        tile = TileDescriptor(tile_id=tile_id, size=size, label=label, **payload)
        self._tiles[tile_id] = tile
        logger.debug("Registered %s (%s, size %d)", tile_id, tile.display_name, size)
        return tile

    def remove(self, tile_id: str) -> bool:
        return self._tiles.pop(tile_id, None) is not None

    def remove_newest(self) -> Optional[TileDescriptor]:
        if not self._tiles:
            return None
        tile = self._tiles[list(self._tiles)[-1]]
        self.remove(tile.tile_id)
        return tile

    def clear(self) -> None:
        self._tiles.clear()
        self._next_id = 0

    def get(self, tile_id: str) -> TileDescriptor:
        return self._tiles[tile_id]

    @property
    def small_ids(self) -> List[str]:
        return [t.tile_id for t in self._tiles.values() if t.size == SMALL]

    @property
    def large_ids(self) -> List[str]:
        return [t.tile_id for t in self._tiles.values() if t.size == LARGE]

    def registry(self) -> Dict[str, int]:
        """Tile id -> footprint, in registration order."""
        return {t.tile_id: t.size for t in self._tiles.values()}

    def summary(self) -> str:
        u = self.unit
        return (f"{len(self.small_ids)} small ({u}x{u}), "
                f"{len(self.large_ids)} large ({2 * u}x{2 * u})")

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[TileDescriptor]:
        return iter(list(self._tiles.values()))

    def __contains__(self, tile_id: str) -> bool:
        return tile_id in self._tiles

# --- Built-in fallback tiles ---

def _alternating(width: int, step: int) -> Tuple[Stripe, ...]:
    out = []
    for x in range(0, PATTERN_FRAME, step * 2):
        out.append((x, width, "#000"))
        out.append((x + width, width, "#fff"))
    return tuple(out)

def _thin_stripes() -> Tuple[Stripe, ...]:
    colours = ("#000", "#fff")
    return tuple((x, 2, colours[(x // 2) % 2]) for x in range(0, PATTERN_FRAME, 2))

def _variable_stripes() -> Tuple[Stripe, ...]:
    out = []
    x, black = 0, True
    for w in (3, 7, 2, 12, 4, 8, 5, 6):
        if x >= PATTERN_FRAME:
            break
        out.append((x, min(w, PATTERN_FRAME - x), "#000" if black else "#fff"))
        x += w
        black = not black
    if x < PATTERN_FRAME:
        out.append((x, PATTERN_FRAME - x, "#000" if black else "#fff"))
    return tuple(out)

FALLBACK_PATTERNS = (
    ("Fallback: Solid Black", ((0, PATTERN_FRAME, "#000"),)),
    ("Fallback: Solid Gray", ((0, PATTERN_FRAME, "#666"),)),
    ("Fallback: Solid White", ((0, PATTERN_FRAME, "#fff"),)),
    ("Fallback: Thin Stripes", _thin_stripes()),
    ("Fallback: Medium Stripes", _alternating(5, 5)),
    ("Fallback: Thick Stripes", _alternating(10, 10)),
    ("Fallback: Variable Stripes", _variable_stripes()),
)

def add_fallback_tiles(catalog: TileCatalog) -> List[TileDescriptor]:
    return [catalog.add(SMALL, label, pattern=stripes) for label, stripes in FALLBACK_PATTERNS]
