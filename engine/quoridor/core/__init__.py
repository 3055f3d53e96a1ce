"""Core game logic: grid, state, paths, moves, walls and transitions."""

from .grid import *
from .state import GameState, PlayerState, Position, Wall, Orientation, Status, goal_row
from .moves import MoveGenerator, MoveAction, WallAction, get_valid_moves
from .walls import is_legal_wall, legal_walls
from .rules import apply_action, try_apply_action, legal_actions
from .errors import (
    IllegalActionError, IllegalMoveError, IllegalWallPlacementError,
    OutOfTurnError, GameNotPlayingError, NoLegalActionAvailable
)
