"""
Game state representation for Quoridor.

All state objects are immutable; transitions build new values through
dataclasses.replace and the helpers below.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, NamedTuple, Optional

from .grid import (
    ROWS, COLS, is_valid_cell, is_valid_anchor, is_step_blocked, cell_to_algebraic
)

WALLS_PER_PLAYER = 10

P0_START = (0, COLS // 2)
P1_START = (ROWS - 1, COLS // 2)


def goal_row(player: int) -> int:
    """Row a player must reach to win: row 8 for player 0, row 0 for player 1."""
    if player not in (0, 1):
        raise ValueError(f"Invalid player index: {player}")
    return ROWS - 1 if player == 0 else 0


class Position(NamedTuple):
    """A cell on the board."""
    row: int
    col: int

    def offset(self, dr: int, dc: int) -> Position:
        return Position(self.row + dr, self.col + dc)

    def __str__(self) -> str:
        if is_valid_cell(self.row, self.col):
            return cell_to_algebraic(self.row, self.col)
        return f"({self.row},{self.col})"


class Orientation(str, Enum):
    HORIZONTAL = "h"
    VERTICAL = "v"


class Status(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass(frozen=True)
class Wall:
    """
    A two-cell wall anchored at (row, col).

    Out-of-range anchors can be constructed so that legality checks can
    reject them; a GameState only ever holds in-range walls.
    """
    row: int
    col: int
    orientation: Orientation

    def __post_init__(self):
        # Accept the raw 'h' / 'v' strings
        object.__setattr__(self, "orientation", Orientation(self.orientation))

    @classmethod
    def horizontal(cls, row: int, col: int) -> Wall:
        return cls(row, col, Orientation.HORIZONTAL)

    @classmethod
    def vertical(cls, row: int, col: int) -> Wall:
        return cls(row, col, Orientation.VERTICAL)

    @property
    def is_horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    @property
    def in_bounds(self) -> bool:
        return is_valid_anchor(self.row, self.col)

    def __str__(self) -> str:
        if self.in_bounds:
            return f"{cell_to_algebraic(self.row, self.col)}{self.orientation.value}"
        return f"({self.row},{self.col}){self.orientation.value}"


@dataclass(frozen=True)
class PlayerState:
    """
    One seat at the table.

    Attributes:
        pos: Current pawn position
        walls_left: Walls this player may still place
        user_id: Seat owner, None while the seat is open
    """
    pos: Position
    walls_left: int = WALLS_PER_PLAYER
    user_id: Optional[str] = None

    def __post_init__(self):
        pos = Position(*self.pos)
        if not is_valid_cell(pos.row, pos.col):
            raise ValueError(f"Position off board: {tuple(pos)}")
        if self.walls_left < 0:
            raise ValueError(f"walls_left must be >= 0, got {self.walls_left}")
        object.__setattr__(self, "pos", pos)


def _dedupe_walls(walls: Iterable[Wall]) -> tuple[Wall, ...]:
    seen = set()
    out = []
    for w in walls:
        if w not in seen:
            seen.add(w)
            out.append(w)
    return tuple(out)


@dataclass(frozen=True)
class GameState:
    """
    Complete state of a Quoridor game.

    Attributes:
        players: Exactly two PlayerStates (index 0 and 1)
        walls: Placed walls, deduplicated, insertion order kept
        current_turn: Index of the player to act
        status: waiting, playing or finished
        winner: Winning player index once finished
        name: Optional display name carried through transitions
    """
    players: tuple[PlayerState, PlayerState] = field(
        default_factory=lambda: (PlayerState(Position(*P0_START)), PlayerState(Position(*P1_START)))
    )
    walls: tuple[Wall, ...] = ()
    current_turn: int = 0
    status: Status = Status.PLAYING
    winner: Optional[int] = None
    name: Optional[str] = None

    def __post_init__(self):
        players = tuple(self.players)
        if len(players) != 2:
            raise ValueError(f"Expected 2 players, got {len(players)}")
        if self.current_turn not in (0, 1):
            raise ValueError(f"current_turn must be 0 or 1, got {self.current_turn}")
        if self.winner is not None and self.winner not in (0, 1):
            raise ValueError(f"winner must be 0, 1 or None, got {self.winner}")
        walls = _dedupe_walls(self.walls)
        for w in walls:
            if not w.in_bounds:
                raise ValueError(f"Wall anchor off board: {w}")
        object.__setattr__(self, "players", players)
        object.__setattr__(self, "walls", walls)
        object.__setattr__(self, "status", Status(self.status))

    @classmethod
    def new_game(cls, user0: Optional[str] = None, user1: Optional[str] = None,
                 name: Optional[str] = None) -> GameState:
        """
        Create a game in the starting position.

        When a user id is given for seat 0 but not seat 1, the game waits
        for an opponent; otherwise it starts immediately.
        """
        status = Status.WAITING if user0 is not None and user1 is None else Status.PLAYING
        return cls(
            players=(
                PlayerState(Position(*P0_START), WALLS_PER_PLAYER, user0),
                PlayerState(Position(*P1_START), WALLS_PER_PLAYER, user1),
            ),
            status=status,
            name=name,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status is Status.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.status is Status.PLAYING

    def position(self, player: int) -> Position:
        return self.players[player].pos

    def walls_left(self, player: int) -> int:
        return self.players[player].walls_left

    def player_index(self, user_id: str) -> int:
        """Seat index of user_id, or -1 if they are not seated."""
        for idx, p in enumerate(self.players):
            if p.user_id == user_id:
                return idx
        return -1

    def with_player(self, idx: int, **changes: Any) -> GameState:
        """Return a copy with fields of one player replaced."""
        players = list(self.players)
        players[idx] = replace(players[idx], **changes)
        return replace(self, players=tuple(players))

    def seat_player(self, user_id: str) -> GameState:
        """Fill the open seat and start the game."""
        if self.status is not Status.WAITING:
            raise ValueError(f"Cannot seat a player while {self.status.value}")
        for idx, p in enumerate(self.players):
            if p.user_id is None:
                return replace(self.with_player(idx, user_id=user_id), status=Status.PLAYING)
        raise ValueError("No open seat")

    def to_dict(self) -> dict:
        """Plain JSON-compatible representation."""
        data = {
            "players": [
                {
                    "userId": p.user_id,
                    "pos": {"row": p.pos.row, "col": p.pos.col},
                    "wallsLeft": p.walls_left,
                }
                for p in self.players
            ],
            "walls": [
                {"row": w.row, "col": w.col, "orientation": w.orientation.value}
                for w in self.walls
            ],
            "currentTurn": self.current_turn,
            "status": self.status.value,
        }
        if self.winner is not None:
            data["winner"] = self.winner
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: dict) -> GameState:
        """Inverse of to_dict. Raises KeyError/ValueError on malformed input."""
        players = tuple(
            PlayerState(
                pos=Position(p["pos"]["row"], p["pos"]["col"]),
                walls_left=p["wallsLeft"],
                user_id=p.get("userId"),
            )
            for p in data["players"]
        )
        walls = tuple(Wall(w["row"], w["col"], w["orientation"]) for w in data.get("walls", []))
        return cls(
            players=players,
            walls=walls,
            current_turn=data["currentTurn"],
            status=Status(data["status"]),
            winner=data.get("winner"),
            name=data.get("name"),
        )

    def __repr__(self) -> str:
        """Pretty print the board. Wall segments are drawn between cells."""
        pawns = {self.players[0].pos: "0", self.players[1].pos: "1"}
        lines = []
        for row in range(ROWS - 1, -1, -1):
            rank = f"{row + 1} |"
            for col in range(COLS):
                rank += " " + pawns.get((row, col), ".")
                if col < COLS - 1:
                    blocked = is_step_blocked(self.walls, (row, col), (row, col + 1))
                    rank += "|" if blocked else " "
            lines.append(rank)
            if row > 0:
                gap = "  |"
                for col in range(COLS):
                    blocked = is_step_blocked(self.walls, (row, col), (row - 1, col))
                    gap += " " + ("-" if blocked else " ") + " "
                lines.append(gap.rstrip())

        lines.append("  +" + "-" * (COLS * 3))
        lines.append("    " + "  ".join("abcdefghi"))
        lines.append(
            f"\nwalls left: {self.players[0].walls_left} / {self.players[1].walls_left}"
            f"  status: {self.status.value}"
        )
        if self.winner is not None:
            lines.append(f"Player {self.winner} wins")
        else:
            lines.append(f"Player {self.current_turn} to move")

        return "\n".join(lines)
