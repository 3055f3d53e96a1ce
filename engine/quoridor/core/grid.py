"""
Grid geometry and wall blocking for Quoridor.

Board layout (9 rows x 9 cols = 81 cells, packed index = row * 9 + col):

  9 | 72 73 74 75 76 77 78 79 80   <- player 0 goal row (row 8)
  8 | 63 64 65 66 67 68 69 70 71
  7 | 54 55 56 57 58 59 60 61 62
  6 | 45 46 47 48 49 50 51 52 53
  5 | 36 37 38 39 40 41 42 43 44
  4 | 27 28 29 30 31 32 33 34 35
  3 | 18 19 20 21 22 23 24 25 26
  2 |  9 10 11 12 13 14 15 16 17
  1 |  0  1  2  3  4  5  6  7  8   <- player 1 goal row (row 0)
    +---------------------------
       a  b  c  d  e  f  g  h  i

Walls sit on the lattice between cells and are two cells long. A wall
anchor (row, col) names the top-left cell of the 2x2 block it splits:

- Horizontal wall at (r, c) blocks vertical steps between rows r and r+1
  in columns c and c+1.
- Vertical wall at (r, c) blocks horizontal steps between cols c and c+1
  in rows r and r+1.
"""

from __future__ import annotations
from typing import Iterable, Iterator, TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Position, Wall

# Board dimensions
ROWS = 9
COLS = 9
NUM_CELLS = ROWS * COLS  # 81

# Wall anchors live on the (ROWS - 1) x (COLS - 1) lattice
ANCHOR_ROWS = ROWS - 1
ANCHOR_COLS = COLS - 1

# Step directions in enumeration order: up, down, left, right.
# Every BFS and the move generator iterate in this order, so ties are
# broken consistently.
DIRECTIONS: tuple[tuple[int, int], ...] = (
    (-1, 0),  # up
    (1, 0),   # down
    (0, -1),  # left
    (0, 1),   # right
)

COL_LETTERS = "abcdefghi"


def cell_index(row: int, col: int) -> int:
    """Pack (row, col) into a single cell index."""
    return row * COLS + col


def cell_to_rowcol(idx: int) -> tuple[int, int]:
    """Unpack a cell index into (row, col)."""
    return idx // COLS, idx % COLS


def is_valid_cell(row: int, col: int) -> bool:
    """Check if (row, col) is on the board."""
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_anchor(row: int, col: int) -> bool:
    """Check if (row, col) is a legal wall anchor."""
    return 0 <= row < ANCHOR_ROWS and 0 <= col < ANCHOR_COLS


def _wall_blocks(wall: Wall, fr: int, fc: int, tr: int, tc: int) -> bool:
    dr = tr - fr
    dc = tc - fc
    if wall.is_horizontal:
        if dc != 0:
            return False
        # Wall row is the upper of the two rows it separates
        upper_row, col = (fr, fc) if dr == 1 else (tr, tc)
        return wall.row == upper_row and (wall.col == col or wall.col == col - 1)
    if dr != 0:
        return False
    left_col, row = (fc, fr) if dc == 1 else (tc, tr)
    return wall.col == left_col and (wall.row == row or wall.row == row - 1)


def is_step_blocked(walls: Iterable[Wall], src: Position, dst: Position) -> bool:
    """
    Check whether a wall blocks the step from src to an adjacent dst.

    Only meaningful when dst is orthogonally adjacent to src and on the
    board; bounds are not checked here (see can_step).
    """
    fr, fc = src
    tr, tc = dst
    for wall in walls:
        if _wall_blocks(wall, fr, fc, tr, tc):
            return True
    return False


def can_step(walls: Iterable[Wall], src: Position, dst: Position) -> bool:
    """Check that dst is on the board and the edge src -> dst is open."""
    if not is_valid_cell(dst[0], dst[1]):
        return False
    return not is_step_blocked(walls, src, dst)


def neighbors(walls: Iterable[Wall], row: int, col: int) -> Iterator[tuple[int, int]]:
    """Yield open orthogonal neighbours of (row, col) in DIRECTIONS order."""
    walls = tuple(walls)
    for dr, dc in DIRECTIONS:
        r, c = row + dr, col + dc
        if not is_valid_cell(r, c):
            continue
        if is_step_blocked(walls, (row, col), (r, c)):
            continue
        yield r, c


def col_letter(col: int) -> str:
    """Column index to file letter (0 -> 'a')."""
    return COL_LETTERS[col]


def cell_to_algebraic(row: int, col: int) -> str:
    """Convert (row, col) to notation like 'e1'."""
    return col_letter(col) + str(row + 1)


def algebraic_to_cell(s: str) -> tuple[int, int]:
    """Convert notation like 'e1' to (row, col)."""
    s = s.strip().lower()
    if len(s) != 2 or s[0] not in COL_LETTERS or not s[1].isdigit():
        raise ValueError(f"Invalid cell: {s!r}")
    col = COL_LETTERS.index(s[0])
    row = int(s[1]) - 1
    if not is_valid_cell(row, col):
        raise ValueError(f"Cell off board: {s!r}")
    return row, col
