from tilepattern.grid import Occupancy, block_cells

def test_mark_small_and_large():
    occ = Occupancy(rows=4, cols=4)
    occ.mark_occupied(0, 0, 1)
    assert occ.is_occupied(0, 0)
    assert not occ.is_occupied(0, 1)
    occ.mark_occupied(1, 1, 2)
    assert occ.cells == {(0, 0), (1, 1), (1, 2), (2, 1), (2, 2)}

def test_can_place_large_respects_bounds():
    occ = Occupancy(rows=3, cols=3)
    assert occ.can_place_large(0, 0, 3, 3)
    assert occ.can_place_large(1, 1, 3, 3)
    assert not occ.can_place_large(2, 0, 3, 3)   # bottom edge
    assert not occ.can_place_large(0, 2, 3, 3)   # right edge
    # defaults to the tracker's own dimensions
    assert not occ.can_place_large(2, 2)

def test_can_place_large_rejects_any_overlap():
    for cell in block_cells(0, 0, 2):
        occ = Occupancy(rows=4, cols=4)
        occ.mark_occupied(*cell, 1)
        assert not occ.can_place_large(0, 0, 4, 4), f"overlap at {cell} not detected"
