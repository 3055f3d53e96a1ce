"""
Game notation for Quoridor (PGN-like format).

Format example:
```
[Event "Casual Game"]
[Date "2026.01.18"]
[Player0 "alice"]
[Player1 "bot"]
[Result "1-0"]

1. e2 e8 2. e3 d7h 3. e4 e7 ...
```

Actions:
- Pawn move: destination cell, e.g. "e2" (column a-i, row 1-9)
- Wall: anchor cell plus orientation, e.g. "d7h" or "c3v"
  (anchor column a-h, row 1-8)

Move numbers increment after both players have acted (like chess).
"""

from __future__ import annotations
import re
from datetime import date
from dataclasses import dataclass, field

from .grid import COL_LETTERS, algebraic_to_cell, cell_to_algebraic
from .moves import Action, MoveAction, WallAction
from .rules import apply_action
from .state import GameState, Orientation, Position, Wall

_WALL_RE = re.compile(r"^([a-h])([1-8])([hv])$")
_TAG_RE = re.compile(r'^\[(\w+)\s+"(.*)"\]$')
_MOVE_NUMBER_RE = re.compile(r"^\d+\.$")
RESULTS = ("1-0", "0-1", "*")


def action_to_str(action: Action) -> str:
    """Convert an action to notation."""
    if isinstance(action, MoveAction):
        return cell_to_algebraic(action.pos.row, action.pos.col)
    return str(action.wall)


def str_to_action(s: str, player: int | None = None) -> Action:
    """Parse notation into an action. Raises ValueError on bad input."""
    s = s.strip().lower()
    m = _WALL_RE.match(s)
    if m:
        col = COL_LETTERS.index(m.group(1))
        row = int(m.group(2)) - 1
        return WallAction(Wall(row, col, Orientation(m.group(3))), player)
    row, col = algebraic_to_cell(s)
    return MoveAction(Position(row, col), player)


@dataclass
class GameRecord:
    """Record of a complete or in-progress game."""

    # Metadata (PGN-style tags)
    event: str = "Quoridor Game"
    site: str = "?"
    date: str = field(default_factory=lambda: date.today().strftime("%Y.%m.%d"))
    player0: str = "Player 0"
    player1: str = "Player 1"
    result: str = "*"  # "*" = ongoing, "1-0" = player 0 wins, "0-1" = player 1 wins

    # Action history, in play order
    actions: list[Action] = field(default_factory=list)

    def record(self, action: Action, state_after: GameState) -> None:
        """Append an accepted action and update the result tag."""
        self.actions.append(action)
        if state_after.winner == 0:
            self.result = "1-0"
        elif state_after.winner == 1:
            self.result = "0-1"

    def replay(self, start: GameState | None = None) -> GameState:
        """Apply every recorded action to start (a new game by default)."""
        state = start if start is not None else GameState.new_game()
        for action in self.actions:
            state = apply_action(state, action)
        return state

    def to_pgn(self) -> str:
        """Export to PGN-like format."""
        lines = [
            f'[Event "{self.event}"]',
            f'[Site "{self.site}"]',
            f'[Date "{self.date}"]',
            f'[Player0 "{self.player0}"]',
            f'[Player1 "{self.player1}"]',
            f'[Result "{self.result}"]',
            '',
        ]

        words = []
        for i, action in enumerate(self.actions):
            if i % 2 == 0:
                words.append(f"{i // 2 + 1}.")
            words.append(action_to_str(action))

        # Word wrap at 80 chars
        current_line = ""
        for word in words:
            if len(current_line) + len(word) + 1 > 80:
                lines.append(current_line)
                current_line = word
            else:
                current_line = f"{current_line} {word}".strip()
        if current_line:
            lines.append(current_line)

        if self.result != "*":
            lines.append(self.result)

        return '\n'.join(lines)

    @classmethod
    def from_pgn(cls, text: str) -> GameRecord:
        """Parse PGN-like text. Actions are parsed but not validated."""
        tags = {}
        tokens = []
        for line in text.splitlines():
            line = line.strip()
            if not line:
                continue
            m = _TAG_RE.match(line)
            if m:
                tags[m.group(1).lower()] = m.group(2)
            else:
                tokens.extend(line.split())

        record = cls(**{k: v for k, v in tags.items() if k in cls.__dataclass_fields__ and k != "actions"})
        for token in tokens:
            if _MOVE_NUMBER_RE.match(token) or token in RESULTS:
                continue
            record.actions.append(str_to_action(token))
        return record
