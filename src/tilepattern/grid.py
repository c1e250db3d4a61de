from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Set, Tuple

Cell = Tuple[int, int]  # (row, col)

def block_cells(row: int, col: int, size: int) -> Iterator[Cell]:
    """Cells of the size x size block whose top-left is (row, col), row-major."""
    for r in range(row, row + size):
        for c in range(col, col + size):
            yield (r, c)

@dataclass
class Occupancy:
    rows: int
    cols: int
    cells: Set[Cell] = field(default_factory=set)

    def is_occupied(self, row: int, col: int) -> bool:
        return (row, col) in self.cells

    def mark_occupied(self, row: int, col: int, size: int) -> None:
        self.cells.update(block_cells(row, col, size))

    def can_place_large(self, row: int, col: int, rows: Optional[int] = None, cols: Optional[int] = None) -> bool:
        # A 2x2 must stay inside the grid and land on four free cells.
        rows = self.rows if rows is None else rows
        cols = self.cols if cols is None else cols
        if row + 1 >= rows or col + 1 >= cols:
            return False
        return not any(self.is_occupied(r, c) for r, c in block_cells(row, col, 2))

def any_in(cells: Iterable[Cell], members: Set[Cell]) -> bool:
    return any(cell in members for cell in cells)
