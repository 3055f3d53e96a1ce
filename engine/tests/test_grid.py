"""Tests for grid geometry and wall blocking."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from quoridor.core.grid import (
    ROWS, COLS, NUM_CELLS,
    cell_index, cell_to_rowcol, is_valid_cell, is_valid_anchor,
    is_step_blocked, can_step, neighbors,
    cell_to_algebraic, algebraic_to_cell
)
from quoridor.core.state import Wall


class TestCellIndex:
    def test_cell_index(self):
        assert cell_index(0, 0) == 0
        assert cell_index(0, 8) == 8
        assert cell_index(1, 0) == 9
        assert cell_index(8, 8) == NUM_CELLS - 1

    def test_cell_to_rowcol(self):
        assert cell_to_rowcol(0) == (0, 0)
        assert cell_to_rowcol(40) == (4, 4)
        assert cell_to_rowcol(80) == (8, 8)

    def test_bounds(self):
        assert is_valid_cell(0, 0)
        assert is_valid_cell(ROWS - 1, COLS - 1)
        assert not is_valid_cell(-1, 0)
        assert not is_valid_cell(0, 9)

    def test_anchor_bounds(self):
        assert is_valid_anchor(0, 0)
        assert is_valid_anchor(7, 7)
        assert not is_valid_anchor(8, 0)
        assert not is_valid_anchor(0, -1)


class TestHorizontalWall:
    wall = Wall.horizontal(3, 4)

    def test_blocks_step_down(self):
        assert is_step_blocked([self.wall], (3, 4), (4, 4))

    def test_blocks_step_up(self):
        assert is_step_blocked([self.wall], (4, 4), (3, 4))

    def test_blocks_second_column(self):
        assert is_step_blocked([self.wall], (3, 5), (4, 5))
        assert is_step_blocked([self.wall], (4, 5), (3, 5))

    def test_sideways_step_open(self):
        assert not is_step_blocked([self.wall], (3, 3), (3, 4))
        assert not is_step_blocked([self.wall], (4, 4), (4, 5))

    def test_other_columns_open(self):
        assert not is_step_blocked([self.wall], (3, 3), (4, 3))
        assert not is_step_blocked([self.wall], (3, 6), (4, 6))

    def test_other_rows_open(self):
        assert not is_step_blocked([self.wall], (2, 4), (3, 4))
        assert not is_step_blocked([self.wall], (4, 4), (5, 4))


class TestVerticalWall:
    wall = Wall.vertical(2, 5)

    def test_blocks_step_right(self):
        assert is_step_blocked([self.wall], (2, 5), (2, 6))
        assert is_step_blocked([self.wall], (3, 5), (3, 6))

    def test_blocks_step_left(self):
        assert is_step_blocked([self.wall], (2, 6), (2, 5))
        assert is_step_blocked([self.wall], (3, 6), (3, 5))

    def test_other_rows_open(self):
        assert not is_step_blocked([self.wall], (1, 5), (1, 6))
        assert not is_step_blocked([self.wall], (4, 5), (4, 6))

    def test_vertical_step_open(self):
        assert not is_step_blocked([self.wall], (2, 5), (3, 5))


class TestCanStep:
    def test_off_board(self):
        assert not can_step([], (0, 0), (-1, 0))
        assert not can_step([], (8, 8), (8, 9))

    def test_open(self):
        assert can_step([], (4, 4), (5, 4))

    def test_blocked(self):
        assert not can_step([Wall.horizontal(4, 4)], (4, 4), (5, 4))


class TestNeighbors:
    def test_corner(self):
        # up and left are off board; order is down, right
        assert list(neighbors([], 0, 0)) == [(1, 0), (0, 1)]

    def test_center_order(self):
        assert list(neighbors([], 4, 4)) == [(3, 4), (5, 4), (4, 3), (4, 5)]

    def test_walls_removed(self):
        walls = [Wall.horizontal(4, 4), Wall.vertical(3, 4)]
        assert list(neighbors(walls, 4, 4)) == [(3, 4), (4, 3)]


class TestAlgebraic:
    def test_to_algebraic(self):
        assert cell_to_algebraic(0, 0) == 'a1'
        assert cell_to_algebraic(0, 4) == 'e1'
        assert cell_to_algebraic(8, 8) == 'i9'

    def test_from_algebraic(self):
        assert algebraic_to_cell('e1') == (0, 4)
        assert algebraic_to_cell('I9') == (8, 8)

    @pytest.mark.parametrize("bad", ['j1', 'a0', 'e', 'e10', ''])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            algebraic_to_cell(bad)
