"""
Greedy one-ply decision procedure for Quoridor.

Each turn the bot either places the wall that most lengthens the
opponent's shortest path relative to its own, or steps toward its goal
row. Wall search is limited to a window around the opponent's pawn, so
the cost per turn is bounded by window size times a few BFS runs.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import logging
import numpy as np

from ..core.errors import NoLegalActionAvailable
from ..core.grid import ANCHOR_ROWS, ANCHOR_COLS
from ..core.moves import Action, MoveAction, WallAction, MoveGenerator
from ..core.rules import apply_action
from ..core.state import GameState, Wall
from ..core.walls import iter_anchors, wall_rejection_reason
from .evaluator import PathEvaluator

logger = logging.getLogger(__name__)


@dataclass
class GreedyConfig:
    """Configuration for the greedy bot."""
    window: int = 2  # Anchor rows/cols searched on each side of the opponent
    benefit_threshold: int = 2  # Minimum net benefit to spend a wall
    urgency_distance: int = 4  # Consider walls once the opponent is this close
    use_walls: bool = True  # False = pure racing bot


@dataclass(frozen=True)
class WallCandidate:
    """A scored hypothetical wall placement."""
    wall: Wall
    own_distance: float
    opp_distance: float
    net_benefit: float


@dataclass
class Decision:
    """The chosen action plus what was looked at to choose it."""
    action: Action
    own_distance: float
    opp_distance: float
    considered_walls: bool = False
    candidates_scored: int = 0
    best_wall: Optional[WallCandidate] = None
    move_scores: list[tuple] = field(default_factory=list)


class GreedyAI:
    """
    Greedy wall-or-move bot.

    Args:
        config: Tunable heuristic constants
        rng: Source for the random fallback; pass a seeded generator
            for reproducible play
        evaluator: Distance oracle
    """

    def __init__(
        self,
        config: Optional[GreedyConfig] = None,
        rng: Optional[np.random.Generator] = None,
        evaluator: Optional[PathEvaluator] = None
    ):
        self.config = config or GreedyConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.evaluator = evaluator or PathEvaluator()

    @classmethod
    def from_seed(cls, seed: int, config: Optional[GreedyConfig] = None) -> GreedyAI:
        return cls(config, np.random.default_rng(seed))

    def candidate_walls(self, state: GameState, bot: int) -> list[Wall]:
        """Walls of both orientations anchored within the window around the opponent."""
        opp = state.position(1 - bot)
        w = self.config.window
        rows = range(max(0, opp.row - w), min(ANCHOR_ROWS - 1, opp.row + w) + 1)
        cols = range(max(0, opp.col - w), min(ANCHOR_COLS - 1, opp.col + w) + 1)
        return list(iter_anchors(rows, cols))

    def score_walls(self, state: GameState, bot: int,
                    own_dist: float, opp_dist: float) -> list[WallCandidate]:
        """Score every legal candidate wall by net benefit to the bot."""
        scored = []
        for wall in self.candidate_walls(state, bot):
            if wall_rejection_reason(state, wall, bot) is not None:
                continue
            new_own, new_opp = self.evaluator.distances(state, bot, state.walls + (wall,))
            benefit = (new_opp - opp_dist) - (new_own - own_dist)
            scored.append(WallCandidate(wall, new_own, new_opp, benefit))
        return scored

    def best_wall(self, state: GameState, bot: int,
                  own_dist: float, opp_dist: float) -> tuple[Optional[WallCandidate], int]:
        """Highest net-benefit candidate (first found wins ties) and how many were scored."""
        best = None
        scored = self.score_walls(state, bot, own_dist, opp_dist)
        for cand in scored:
            if best is None or cand.net_benefit > best.net_benefit:
                best = cand
        return best, len(scored)

    def wants_wall(self, state: GameState, bot: int, own_dist: float, opp_dist: float) -> bool:
        """Walls are only spent when the opponent leads or is close to goal."""
        if not self.config.use_walls or state.walls_left(bot) <= 0:
            return False
        return opp_dist <= own_dist or opp_dist <= self.config.urgency_distance

    def decide(self, state: GameState, bot: int) -> Decision:
        """Choose an action for bot and report how it was chosen."""
        own_dist, opp_dist = self.evaluator.distances(state, bot)

        if self.wants_wall(state, bot, own_dist, opp_dist):
            best, count = self.best_wall(state, bot, own_dist, opp_dist)
            if best is not None and best.net_benefit >= self.config.benefit_threshold:
                return Decision(
                    action=WallAction(best.wall, bot),
                    own_distance=own_dist,
                    opp_distance=opp_dist,
                    considered_walls=True,
                    candidates_scored=count,
                    best_wall=best,
                )
            decision = self._decide_move(state, bot, own_dist, opp_dist)
            decision.considered_walls = True
            decision.candidates_scored = count
            decision.best_wall = best
            return decision

        return self._decide_move(state, bot, own_dist, opp_dist)

    def _decide_move(self, state: GameState, bot: int,
                     own_dist: float, opp_dist: float) -> Decision:
        moves = MoveGenerator.valid_moves(state, bot)
        if not moves:
            raise NoLegalActionAvailable(f"Player {bot} has no valid pawn move")

        scores = [(pos, self.evaluator.distance(state, bot, pos=pos)) for pos in moves]

        best_pos = None
        best_dist = np.inf
        for pos, dist in scores:
            if dist < best_dist:
                best_pos, best_dist = pos, dist

        if best_pos is None:
            # Every destination is sealed off from the goal row
            best_pos = moves[int(self.rng.integers(len(moves)))]

        return Decision(
            action=MoveAction(best_pos, bot),
            own_distance=own_dist,
            opp_distance=opp_dist,
            move_scores=scores,
        )

    def choose_action(self, state: GameState, bot: int) -> Action:
        """Pick an action for bot. Always legal while the path invariant holds."""
        decision = self.decide(state, bot)
        logger.debug(
            "player %d plays %s (own=%s opp=%s walls_considered=%s best_wall=%s)",
            bot, decision.action, decision.own_distance, decision.opp_distance,
            decision.considered_walls, decision.best_wall,
        )
        return decision.action


def choose_action(state: GameState, bot: int, ai: Optional[GreedyAI] = None) -> Action:
    """Pick an action for bot with a default-configured GreedyAI."""
    return (ai or GreedyAI()).choose_action(state, bot)


def play_move(state: GameState, bot: int, ai: Optional[GreedyAI] = None) -> Optional[GameState]:
    """
    One bot driver step.

    Returns the state after the bot acts, or None when the game is not
    being played or it is not the bot's turn.
    """
    if not state.is_playing or state.current_turn != bot:
        return None
    action = choose_action(state, bot, ai)
    return apply_action(state, action)
