# src/tilepattern/mapgen/placement.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple

from ..grid import Cell, any_in, block_cells
from ..tiles import LARGE, SMALL

if TYPE_CHECKING:
    from .generator import GenerationPass

ROTATIONS = (0, 90, 180, 270)
LARGE_CHANCE = 0.3
FLIP_THRESHOLD = 0.5

@dataclass(frozen=True)
class Placement:
    row: int
    col: int
    size: int
    tile_id: str
    rotation: int = 0
    flipped: bool = False

    def cells(self) -> List[Cell]:
        return list(block_cells(self.row, self.col, self.size))

    def pixel_box(self, unit: int) -> Tuple[int, int, int]:
        """(x, y, side) of the placement in output pixels."""
        return (self.col * unit, self.row * unit, self.size * unit)

    def svg_transform(self, unit: int) -> str:
        """
        Centre-anchored transform: move to the block centre, rotate, flip,
        then step back by half the block so content spins about its own centre.
        """
        x, y, side = self.pixel_box(unit)
        half = side / 2
        parts = [f"translate({_num(x + half)}, {_num(y + half)})"]
        if self.rotation:
            parts.append(f"rotate({self.rotation})")
        if self.flipped:
            parts.append("scale(-1, 1)")
        parts.append(f"translate({_num(-half)}, {_num(-half)})")
        return " ".join(parts)

    def as_row(self) -> Tuple[int, int, int, str, int, bool]:
        return (self.row, self.col, self.size, self.tile_id, self.rotation, self.flipped)

def _num(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)

def _large_fits(gp: GenerationPass, row: int, col: int) -> bool:
    return (gp.occupancy.can_place_large(row, col, gp.rows, gp.cols)
            and not any_in(block_cells(row, col, 2), gp.empty))

def place_cell(
    gp: GenerationPass,
    row: int,
    col: int,
    small: Sequence[str],
    large: Sequence[str],
    registry: Dict[str, int],
) -> Placement:
    """
    Decide one free cell. Draw order per cell:
      1) large roll (only if a 2x2 is eligible here), 2) tile index,
      3) rotation (if enabled), 4) flip (if enabled).
    """
    rng = gp.rng
    eligible = bool(large) and _large_fits(gp, row, col)

    if eligible and rng() < LARGE_CHANCE:
        size = LARGE
        tile_id = large[rng.index(len(large))]
    elif small:
        size = SMALL
        tile_id = small[rng.index(len(small))]
    else:
        # Nothing small registered: pick from everything. The declared
        # footprint is honoured only where a 2x2 actually fits.
        ids = list(registry)
        tile_id = ids[rng.index(len(ids))]
        size = registry[tile_id]
        if size == LARGE and not _large_fits(gp, row, col):
            size = SMALL
    gp.occupancy.mark_occupied(row, col, size)

    rotation = 0
    if gp.options.random_rotation:
        rotation = ROTATIONS[rng.index(len(ROTATIONS))]

    flipped = False
    if gp.options.allow_flips and rng() > FLIP_THRESHOLD:
        flipped = True

    return Placement(row, col, size, tile_id, rotation, flipped)

def plan_placements(
    gp: GenerationPass,
    small: Sequence[str],
    large: Sequence[str],
    registry: Dict[str, int],
) -> List[Placement]:
    placements: List[Placement] = []
    for row in range(gp.rows):
        for col in range(gp.cols):
            if gp.occupancy.is_occupied(row, col):
                continue
            if (row, col) in gp.empty:
                continue
            placements.append(place_cell(gp, row, col, small, large, registry))
    return placements
