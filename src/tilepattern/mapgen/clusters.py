# src/tilepattern/mapgen/clusters.py
# Empty-cell clusters: patches where the dark background shows through.
# Draw order here is part of the reproducible stream; keep it exactly.

import math
from typing import List, Set

from ..grid import Cell
from ..rng import Mulberry32

CLUSTER_DENSITY = 0.12    # share of cells that become cluster seeds
CLUSTER_RADIUS = 1
MAX_DISTANCE = CLUSTER_RADIUS * 1.5
SPREAD_CHANCE = 0.35

def cluster_count(rows: int, cols: int) -> int:
    return math.floor(rows * cols * CLUSTER_DENSITY)

def draw_cluster_seeds(rows: int, cols: int, rng: Mulberry32) -> List[Cell]:
    """
    Seed points: row in 1..rows-2 (never the top or bottom row), col in 0..cols-1.
    Two draws per seed, row first. With fewer than 3 rows the row range is
    empty, so there are no seeds and nothing is drawn.
    """
    if rows < 3:
        return []
    seeds: List[Cell] = []
    for _ in range(cluster_count(rows, cols)):
        row = int(rng() * (rows - 2)) + 1
        col = int(rng() * cols)
        seeds.append((row, col))
    return seeds

def spread_probability(distance: float) -> float:
    return max(0.0, 1 - distance / MAX_DISTANCE)

def generate_empty_clusters(rows: int, cols: int, rng: Mulberry32) -> Set[Cell]:
    empty: Set[Cell] = set()
    for seed_row, seed_col in draw_cluster_seeds(rows, cols, rng):
        empty.add((seed_row, seed_col))

        r_lo = max(1, seed_row - CLUSTER_RADIUS)
        r_hi = min(rows - 2, seed_row + CLUSTER_RADIUS)
        c_lo = max(0, seed_col - CLUSTER_RADIUS)
        c_hi = min(cols - 1, seed_col + CLUSTER_RADIUS)
        for r in range(r_lo, r_hi + 1):
            for c in range(c_lo, c_hi + 1):
                # Already-empty cells are skipped without consuming a draw.
                if (r, c) in empty:
                    continue
                d = math.sqrt((r - seed_row) ** 2 + (c - seed_col) ** 2)
                if rng() < spread_probability(d) * SPREAD_CHANCE:
                    empty.add((r, c))
    return empty
