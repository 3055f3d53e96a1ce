"""
Turn-based state transitions for Quoridor.

apply_action never mutates its input: an accepted action returns a new
GameState and a rejected one raises an IllegalActionError subclass.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Optional
import logging

from .errors import (
    IllegalActionError, IllegalMoveError, IllegalWallPlacementError,
    OutOfTurnError, GameNotPlayingError
)
from .moves import Action, MoveAction, WallAction, MoveGenerator
from .state import GameState, Status, goal_row
from .walls import wall_rejection_reason, legal_walls

logger = logging.getLogger(__name__)


def _check_turn(state: GameState, action: Action) -> int:
    if not state.is_playing:
        raise GameNotPlayingError(f"Game is {state.status.value}")
    player = state.current_turn
    if action.player is not None and action.player != player:
        raise OutOfTurnError(f"Player {action.player} acted on player {player}'s turn")
    return player


def apply_move(state: GameState, action: MoveAction) -> GameState:
    """Move the acting pawn. Reaching the goal row finishes the game."""
    player = _check_turn(state, action)
    if action.pos not in MoveGenerator.valid_moves(state, player):
        raise IllegalMoveError(f"Player {player} cannot move to {action.pos}")

    new_state = state.with_player(player, pos=action.pos)

    if action.pos.row == goal_row(player):
        # Winner keeps the turn; no further actions are accepted
        return replace(new_state, status=Status.FINISHED, winner=player)

    return replace(new_state, current_turn=1 - player)


def apply_wall(state: GameState, action: WallAction) -> GameState:
    """Place a wall and spend one from the acting player's allotment."""
    player = _check_turn(state, action)
    reason = wall_rejection_reason(state, action.wall, player)
    if reason is not None:
        raise IllegalWallPlacementError(f"Wall {action.wall} rejected: {reason}")

    new_state = state.with_player(player, walls_left=state.walls_left(player) - 1)
    return replace(new_state, walls=state.walls + (action.wall,), current_turn=1 - player)


def apply_action(state: GameState, action: Action) -> GameState:
    """
    Apply action for the player to move.

    Raises:
        GameNotPlayingError: status is not playing
        OutOfTurnError: action.player is set and is not current_turn
        IllegalMoveError: destination is not a valid move
        IllegalWallPlacementError: wall fails a legality check
    """
    if isinstance(action, MoveAction):
        return apply_move(state, action)
    if isinstance(action, WallAction):
        return apply_wall(state, action)
    raise TypeError(f"Unknown action type: {type(action).__name__}")


def try_apply_action(state: GameState, action: Action) -> Optional[GameState]:
    """Like apply_action but returns None on rejection."""
    try:
        return apply_action(state, action)
    except IllegalActionError as e:
        logger.debug("rejected %s: %s", action, e)
        return None


def legal_actions(state: GameState) -> list[Action]:
    """Every action the player to move may take: pawn moves first, then walls."""
    if not state.is_playing:
        return []
    player = state.current_turn
    actions: list[Action] = [MoveAction(pos, player) for pos in MoveGenerator.valid_moves(state, player)]
    actions.extend(WallAction(w, player) for w in legal_walls(state, player))
    return actions


def is_legal_action(state: GameState, action: Action) -> bool:
    """Check if action would be accepted by apply_action."""
    return try_apply_action(state, action) is not None
