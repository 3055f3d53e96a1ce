"""Rejection types raised by the rules engine."""


class IllegalActionError(ValueError):
    """An action was rejected; the input state is unchanged."""


class IllegalMoveError(IllegalActionError):
    """Destination is not among the acting player's valid moves."""


class IllegalWallPlacementError(IllegalActionError):
    """Wall is off the lattice, overlaps another, exceeds the allotment, or seals a player in."""


class OutOfTurnError(IllegalActionError):
    """Action submitted on behalf of the player who is not to move."""


class GameNotPlayingError(IllegalActionError):
    """Action submitted while the game is waiting or finished."""


class NoLegalActionAvailable(AssertionError):
    """The AI found nothing to play. Unreachable while the path invariant holds."""
