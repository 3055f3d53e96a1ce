"""
Breadth-first search over the 9x9 grid.

Only walls are obstacles: pawns never block these searches. Visited
cells are tracked in a flat array keyed by cell_index(row, col).
"""

from __future__ import annotations
from collections import deque
from typing import Iterable, Optional
import math

from .grid import NUM_CELLS, cell_index, cell_to_rowcol, neighbors
from .state import Position, Wall

UNREACHABLE = math.inf


def _bfs_parents(walls: tuple[Wall, ...], start: Position,
                 target_row: int) -> tuple[Optional[int], list[int], list[int]]:
    """
    Run BFS from start until a cell on target_row is dequeued.

    Returns (goal_idx, parent, depth) where goal_idx is None if the
    target row is unreachable. parent[i] == -1 marks unvisited cells and
    the start cell points to itself.
    """
    parent = [-1] * NUM_CELLS
    depth = [0] * NUM_CELLS

    start_idx = cell_index(start[0], start[1])
    parent[start_idx] = start_idx
    queue = deque([(start[0], start[1])])

    while queue:
        row, col = queue.popleft()
        idx = cell_index(row, col)
        if row == target_row:
            return idx, parent, depth
        for r, c in neighbors(walls, row, col):
            nxt = cell_index(r, c)
            if parent[nxt] != -1:
                continue
            parent[nxt] = idx
            depth[nxt] = depth[idx] + 1
            queue.append((r, c))

    return None, parent, depth


def has_path(walls: Iterable[Wall], start: Position, target_row: int) -> bool:
    """Check whether any cell on target_row is reachable from start."""
    goal, _, _ = _bfs_parents(tuple(walls), start, target_row)
    return goal is not None


def distance_to_goal(walls: Iterable[Wall], start: Position, target_row: int) -> float:
    """
    Length of the shortest path from start to target_row.

    Returns an int, or UNREACHABLE (math.inf) if the row is sealed off.
    """
    goal, _, depth = _bfs_parents(tuple(walls), start, target_row)
    if goal is None:
        return UNREACHABLE
    return depth[goal]


def shortest_path(walls: Iterable[Wall], start: Position, target_row: int) -> Optional[list[Position]]:
    """
    Cells on a shortest path from start to target_row, start included.

    Ties are broken by BFS visitation order (up, down, left, right).
    Returns None if target_row is unreachable.
    """
    goal, parent, _ = _bfs_parents(tuple(walls), start, target_row)
    if goal is None:
        return None

    path = []
    idx = goal
    while True:
        path.append(Position(*cell_to_rowcol(idx)))
        if parent[idx] == idx:
            break
        idx = parent[idx]
    path.reverse()
    return path


def next_step_toward(walls: Iterable[Wall], start: Position, target_row: int) -> Optional[Position]:
    """
    First hop on a shortest path toward target_row.

    Returns None when start is already on target_row or the row is
    unreachable.
    """
    path = shortest_path(walls, start, target_row)
    if path is None or len(path) < 2:
        return None
    return path[1]
