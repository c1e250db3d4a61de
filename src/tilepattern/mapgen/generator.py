# src/tilepattern/mapgen/generator.py
# Canonical pattern generator: seed text -> cluster set -> ordered placement plan.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Set

from ..config import PatternOptions, PatternSettings, check_grid
from ..grid import Cell, Occupancy
from ..rng import Mulberry32, hash_seed, make_rng
from ..tiles import LARGE, SMALL, TileCatalog
from .clusters import generate_empty_clusters
from .placement import Placement, plan_placements

logger = logging.getLogger(__name__)

@dataclass
class GenerationPass:
    """Everything one pass owns; built fresh per call and thrown away after."""
    rows: int
    cols: int
    rng: Mulberry32
    options: PatternOptions
    occupancy: Optional[Occupancy] = None
    empty: Set[Cell] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.occupancy is None:
            self.occupancy = Occupancy(self.rows, self.cols)

    @classmethod
    def start(cls, rows: int, cols: int, seed_text: str, options: PatternOptions) -> "GenerationPass":
        gp = cls(rows=rows, cols=cols, rng=make_rng(hash_seed(seed_text)), options=options)
        if options.enable_clustering:
            gp.empty = generate_empty_clusters(rows, cols, gp.rng)
        return gp

def _registry_from_lists(small: Sequence[str], large: Sequence[str]) -> Dict[str, int]:
    reg = {tid: SMALL for tid in small}
    reg.update((tid, LARGE) for tid in large)
    return reg

def generate(
    rows: int,
    cols: int,
    tile_size: int,
    seed_text: str,
    options: PatternOptions,
    small_tiles: Sequence[str],
    large_tiles: Sequence[str],
    registry: Optional[Mapping[str, int]] = None,
) -> List[Placement]:
    """
    Build the ordered placement plan for one pass.

    tile_size is part of the grid contract but does not influence any
    decision; renderers use it via Placement.pixel_box(). An empty catalog
    yields an empty plan.
    """
    check_grid(rows, cols, tile_size)
    small = list(small_tiles)
    large = list(large_tiles)
    reg = dict(registry) if registry else _registry_from_lists(small, large)
    if not small and not large and not reg:
        logger.debug("No tiles registered; empty plan for seed %r", seed_text)
        return []

    gp = GenerationPass.start(rows, cols, seed_text, options)
    placements = plan_placements(gp, small, large, reg)
    logger.debug(
        "seed=%r grid=%dx%d empty=%d placements=%d (large=%d)",
        seed_text, rows, cols, len(gp.empty), len(placements),
        sum(1 for p in placements if p.size == LARGE),
    )
    return placements

def generate_from_catalog(settings: PatternSettings, catalog: TileCatalog) -> List[Placement]:
    return generate(
        settings.rows, settings.cols, settings.tile_size, settings.seed, settings.options,
        catalog.small_ids, catalog.large_ids, catalog.registry(),
    )

def empty_cells_for(settings: PatternSettings) -> Set[Cell]:
    """The cluster set the matching generate() call would use (for renderers/tests)."""
    if not settings.options.enable_clustering:
        return set()
    rng = make_rng(hash_seed(settings.seed))
    return generate_empty_clusters(settings.rows, settings.cols, rng)
