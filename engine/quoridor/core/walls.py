"""
Wall legality for Quoridor.

A wall is legal when it lies on the anchor lattice, the player still has
walls, it neither overlaps nor crosses a placed wall, and both pawns can
still reach their goal rows afterwards. The path check is rerun for every
candidate; nothing is cached between calls.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Optional
import logging

from .grid import ANCHOR_ROWS, ANCHOR_COLS
from .paths import has_path
from .state import GameState, Orientation, Wall, goal_row

logger = logging.getLogger(__name__)

# Rejection reasons, in the order the checks run
OUT_OF_BOUNDS = "out of bounds"
NO_WALLS_LEFT = "no walls left"
OVERLAP = "overlaps an existing wall"
BLOCKS_PATH = "blocks a player's path to goal"


def walls_conflict(a: Wall, b: Wall) -> bool:
    """
    Check whether two walls overlap or cross.

    Parallel walls conflict when they share the perpendicular coordinate
    and their anchors are less than a wall length apart. A horizontal and
    a vertical wall conflict only when they share an anchor.
    """
    if a.orientation is b.orientation:
        if a.is_horizontal:
            return a.row == b.row and abs(a.col - b.col) < 2
        return a.col == b.col and abs(a.row - b.row) < 2
    return a.row == b.row and a.col == b.col


def walls_overlap(existing: Iterable[Wall], wall: Wall) -> bool:
    """Check wall against every placed wall."""
    return any(walls_conflict(e, wall) for e in existing)


def wall_rejection_reason(state: GameState, wall: Wall, player: int) -> Optional[str]:
    """
    Return why wall may not be placed by player, or None if it may.

    Checks short-circuit in order: bounds, allotment, overlap, paths.
    """
    if not wall.in_bounds:
        return OUT_OF_BOUNDS
    if state.walls_left(player) <= 0:
        return NO_WALLS_LEFT
    if walls_overlap(state.walls, wall):
        return OVERLAP

    new_walls = state.walls + (wall,)
    for idx in (0, 1):
        if not has_path(new_walls, state.position(idx), goal_row(idx)):
            return BLOCKS_PATH
    return None


def is_legal_wall(state: GameState, wall: Wall, player: int) -> bool:
    """Check whether player may place wall in state."""
    reason = wall_rejection_reason(state, wall, player)
    if reason is not None:
        logger.debug("wall %s rejected for player %d: %s", wall, player, reason)
        return False
    return True


def iter_anchors(rows: Iterable[int] = range(ANCHOR_ROWS),
                 cols: Iterable[int] = range(ANCHOR_COLS)) -> Iterator[Wall]:
    """Yield walls of both orientations over the given anchor rows and cols."""
    cols = tuple(cols)
    for row in rows:
        for col in cols:
            for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
                yield Wall(row, col, orientation)


def legal_walls(state: GameState, player: int) -> list[Wall]:
    """All walls player may place, in anchor order (row, col, h before v)."""
    if state.walls_left(player) <= 0:
        return []
    return [w for w in iter_anchors() if wall_rejection_reason(state, w, player) is None]
