"""
Shortest-path position evaluation.

Measures how far each pawn is from its goal row, counting walls as the
only obstacles, under the placed walls or a hypothetical set.
"""

from __future__ import annotations
from typing import Iterable, Optional

from ..core.paths import distance_to_goal
from ..core.state import GameState, Position, Wall, goal_row


class PathEvaluator:
    """Distance oracle for the bot. Stateless; one instance can be shared."""

    def distance(self, state: GameState, player: int,
                 walls: Optional[Iterable[Wall]] = None,
                 pos: Optional[Position] = None) -> float:
        """
        Shortest distance from player's pawn (or pos) to their goal row.

        walls overrides state.walls, for scoring hypothetical placements.
        """
        if walls is None:
            walls = state.walls
        if pos is None:
            pos = state.position(player)
        return distance_to_goal(walls, pos, goal_row(player))

    def distances(self, state: GameState, player: int,
                  walls: Optional[Iterable[Wall]] = None) -> tuple[float, float]:
        """Return (own distance, opponent distance) for player."""
        walls = tuple(state.walls if walls is None else walls)
        return self.distance(state, player, walls), self.distance(state, 1 - player, walls)

