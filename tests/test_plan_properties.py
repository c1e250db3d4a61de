# tests/test_plan_properties.py
import pytest

from tilepattern.config import PatternOptions, PatternSettings
from tilepattern.mapgen.generator import empty_cells_for, generate, generate_from_catalog
from tilepattern.tiles import TileCatalog, add_fallback_tiles

SEEDS = ["pattern-2024", "", "a", "zebra", "pattern-1700000000000-abc123xyz", "ünïcode"]
GRIDS = [(5, 8), (2, 2), (3, 7), (7, 3), (10, 12)]
ALL_ON = PatternOptions(random_rotation=True, allow_flips=True, enable_clustering=True)

def plans():
    for seed in SEEDS:
        for rows, cols in GRIDS:
            settings = PatternSettings(rows=rows, cols=cols, seed=seed, options=ALL_ON)
            plan = generate(rows, cols, 100, seed, ALL_ON, ["a", "b", "c"], ["X", "Y"])
            yield settings, plan

def test_determinism():
    opts = PatternOptions()
    a = generate(5, 8, 200, "pattern-2024", opts, ["a", "b"], ["X"])
    b = generate(5, 8, 200, "pattern-2024", opts, ["a", "b"], ["X"])
    assert a == b

def test_different_seeds_differ():
    a = generate(5, 8, 200, "one", ALL_ON, ["a", "b", "c"], ["X"])
    b = generate(5, 8, 200, "two", ALL_ON, ["a", "b", "c"], ["X"])
    assert a != b

def test_no_overlap_bounds_and_coverage():
    for settings, plan in plans():
        rows, cols = settings.rows, settings.cols
        empty = empty_cells_for(settings)
        seen = {}
        for p in plan:
            if p.size == 2:
                assert p.row + 1 < rows and p.col + 1 < cols
            for cell in p.cells():
                r, c = cell
                assert 0 <= r < rows and 0 <= c < cols, f"{p} out of bounds"
                assert cell not in seen, f"{p} overlaps {seen.get(cell)}"
                assert cell not in empty, f"{p} covers empty cell {cell}"
                seen[cell] = p
        for r in range(rows):
            for c in range(cols):
                assert ((r, c) in seen) != ((r, c) in empty), f"cell {(r, c)} dropped or doubled"

def test_rotation_and_flip_domains():
    for _, plan in plans():
        assert all(p.rotation in (0, 90, 180, 270) for p in plan)
    off = PatternOptions(random_rotation=False, allow_flips=False, enable_clustering=True)
    for seed in SEEDS:
        plan = generate(6, 6, 100, seed, off, ["a", "b"], ["X"])
        assert all(p.rotation == 0 and p.flipped is False for p in plan)

def test_clustering_off_covers_everything():
    opts = PatternOptions(enable_clustering=False)
    plan = generate(4, 5, 100, "x", opts, ["a"], [])
    assert len(plan) == 20

def test_empty_catalog_gives_empty_plan():
    assert generate(5, 8, 200, "pattern-2024", ALL_ON, [], []) == []
    assert generate(5, 8, 200, "pattern-2024", ALL_ON, [], [], {}) == []

@pytest.mark.parametrize("rows,cols", [(1, 1), (1, 9), (9, 1), (2, 10)])
def test_thin_grids(rows, cols):
    plan = generate(rows, cols, 100, "x", ALL_ON, ["a"], ["X"])
    settings = PatternSettings(rows=rows, cols=cols, seed="x", options=ALL_ON)
    empty = empty_cells_for(settings)
    if rows < 3:
        assert empty == set()
    covered = sum(p.size * p.size for p in plan)
    assert covered + len(empty) == rows * cols

def test_fallback_uses_registry_when_no_small_tiles():
    # Only large tiles: cells where a 2x2 cannot go still get a tile, as 1x1.
    opts = PatternOptions(enable_clustering=False)
    plan = generate(3, 3, 100, "fallback", opts, [], ["X", "Y"])
    assert {p.tile_id for p in plan} <= {"X", "Y"}
    assert sum(p.size * p.size for p in plan) == 9
    edge = [p for p in plan if p.row == 2 or p.col == 2]
    assert edge and all(p.size == 1 for p in edge)

def test_fallback_honours_declared_footprint_where_it_fits():
    opts = PatternOptions(random_rotation=False, enable_clustering=False)
    sizes = set()
    for seed in SEEDS:
        plan = generate(5, 5, 100, seed, opts, [], [], {"X": 2})
        sizes.update(p.size for p in plan)
        assert sum(p.size * p.size for p in plan) == 25
    assert sizes == {1, 2}

def test_invalid_grid_rejected():
    with pytest.raises(ValueError):
        generate(0, 5, 100, "x", ALL_ON, ["a"], [])
    with pytest.raises(ValueError):
        generate(5, 5, 0, "x", ALL_ON, ["a"], [])

def test_generate_from_catalog_uses_fallback_tiles():
    catalog = TileCatalog()
    add_fallback_tiles(catalog)
    plan = generate_from_catalog(PatternSettings(), catalog)
    assert len(plan) == 36
    assert {p.tile_id for p in plan} <= set(catalog.small_ids)
    # catalog ids are tile-0..tile-6, so this is the pinned default plan renamed
    assert plan[0].tile_id == "tile-6" and plan[0].rotation == 90
