"""
Pawn move generation for Quoridor.

Handles single steps, straight jumps over an adjacent opponent and the
diagonal side-steps allowed when a straight jump is blocked.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from .grid import DIRECTIONS, can_step
from .state import GameState, Position, Wall


@dataclass(frozen=True)
class MoveAction:
    """Move the acting pawn to pos."""
    pos: Position
    player: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "pos", Position(*self.pos))


@dataclass(frozen=True)
class WallAction:
    """Place wall on behalf of the acting player."""
    wall: Wall
    player: Optional[int] = None


Action = Union[MoveAction, WallAction]


class MoveGenerator:
    """Generates valid pawn destinations for a game state."""

    @staticmethod
    def iter_moves(state: GameState, player: int):
        """
        Yield pawn destinations in enumeration order (may repeat).

        Directions are tried up, down, left, right. Walls are the only
        thing blocking an edge; the opponent's cell is never a destination.
        """
        walls = state.walls
        me = state.players[player].pos
        opp = state.players[1 - player].pos

        for dr, dc in DIRECTIONS:
            target = me.offset(dr, dc)
            if not can_step(walls, me, target):
                continue

            if target != opp:
                yield target
                continue

            # Opponent is adjacent: straight jump first
            jump = opp.offset(dr, dc)
            if can_step(walls, opp, jump):
                yield jump
                continue

            # Straight jump blocked or off board: side-steps from the opponent
            side_dirs = ((-1, 0), (1, 0)) if dr == 0 else ((0, -1), (0, 1))
            for sdr, sdc in side_dirs:
                side = opp.offset(sdr, sdc)
                if can_step(walls, opp, side):
                    yield side

    @staticmethod
    def valid_moves(state: GameState, player: int) -> list[Position]:
        """Deduplicated pawn destinations for player, in enumeration order."""
        seen = set()
        moves = []
        for pos in MoveGenerator.iter_moves(state, player):
            if pos not in seen:
                seen.add(pos)
                moves.append(pos)
        return moves


# Convenience functions
def get_valid_moves(state: GameState, player: int) -> list[Position]:
    """Get all valid pawn destinations for player."""
    return MoveGenerator.valid_moves(state, player)


def is_valid_move(state: GameState, player: int, pos: Position) -> bool:
    """Check if player may move their pawn to pos."""
    return Position(*pos) in MoveGenerator.valid_moves(state, player)
