#!/usr/bin/env python3
"""
Terminal-based Quoridor game client.

Play against the greedy bot or watch two bots play each other.
"""

from __future__ import annotations
import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from quoridor.core.errors import IllegalActionError
from quoridor.core.moves import get_valid_moves
from quoridor.core.notation import GameRecord, action_to_str, str_to_action
from quoridor.core.rules import apply_action
from quoridor.core.state import GameState
from quoridor.core.walls import legal_walls
from quoridor.ai.evaluator import PathEvaluator
from quoridor.ai.greedy import GreedyAI, GreedyConfig


def parse_user_action(state: GameState, input_str: str):
    """Parse user input into a command string or an action."""
    input_str = input_str.strip().lower()

    if input_str in ['q', 'quit', 'exit']:
        return 'quit'
    if input_str in ['h', 'help', '?']:
        return 'help'
    if input_str in ['m', 'moves']:
        return 'show_moves'

    try:
        return str_to_action(input_str, state.current_turn)
    except ValueError:
        print(f"Invalid format: {input_str}. Use 'e2' to move or 'e3h' / 'e3v' for a wall")
        return None


def show_legal_moves(state: GameState) -> None:
    """Display pawn moves and wall count."""
    player = state.current_turn
    moves = get_valid_moves(state, player)
    print("Pawn moves:", ", ".join(str(m) for m in moves))
    walls = legal_walls(state, player)
    print(f"Legal walls: {len(walls)} ({state.players[player].walls_left} left)")


def print_analysis(state: GameState, evaluator: PathEvaluator) -> None:
    for player in (0, 1):
        print(f"  player {player}: {evaluator.distance(state, player)} steps to goal")


def play_human_vs_ai(ai: GreedyAI, human_player: int = 0) -> GameRecord:
    """Play a game: human vs bot."""
    state = GameState.new_game()
    record = GameRecord(
        player0="human" if human_player == 0 else "bot",
        player1="bot" if human_player == 0 else "human",
    )
    evaluator = PathEvaluator()

    print("\n=== Quoridor ===")
    print(f"You are player {human_player} ({'bottom' if human_player == 0 else 'top'})")
    print("Commands: move (e.g. 'e2'), wall (e.g. 'e3h'), 'm' for moves, 'q' quit")

    while not state.is_terminal:
        print(state)
        player = state.current_turn

        if player == human_player:
            while True:
                try:
                    user_input = input("> ").strip()
                except EOFError:
                    return record

                result = parse_user_action(state, user_input)

                if result == 'quit':
                    print("Thanks for playing!")
                    return record
                elif result == 'help':
                    print("Enter a cell like 'e2' to move, or an anchor plus h/v like 'e3h' for a wall")
                    print("'m' to see legal moves, 'q' to quit")
                elif result == 'show_moves':
                    show_legal_moves(state)
                elif result is not None:
                    try:
                        state = apply_action(state, result)
                    except IllegalActionError as e:
                        print(f"Illegal: {e}")
                        continue
                    record.record(result, state)
                    print(f"You played: {action_to_str(result)}")
                    break
        else:
            action = ai.choose_action(state, player)
            state = apply_action(state, action)
            record.record(action, state)
            print(f"Bot plays: {action_to_str(action)}")
            print_analysis(state, evaluator)

    print(state)
    if state.winner == human_player:
        print("Congratulations! You win!")
    else:
        print("Bot wins. Better luck next time!")
    return record


def watch_ai_vs_ai(ai0: GreedyAI, ai1: GreedyAI, delay: float = 0.5,
                   max_actions: int = 400) -> GameRecord:
    """Watch two bots play."""
    state = GameState.new_game()
    record = GameRecord(player0="bot", player1="bot")
    bots = (ai0, ai1)

    print("\n=== Bot vs Bot ===")

    while not state.is_terminal and len(record.actions) < max_actions:
        print(state)
        player = state.current_turn
        action = bots[player].choose_action(state, player)
        state = apply_action(state, action)
        record.record(action, state)
        print(f"Player {player} plays: {action_to_str(action)}\n")
        time.sleep(delay)

    print(state)
    if state.winner is None:
        print(f"Stopped after {len(record.actions)} actions without a winner")
    else:
        print(f"Game over after {len(record.actions)} actions. Winner: player {state.winner}")
    return record


def main():
    parser = argparse.ArgumentParser(description='Quoridor Terminal Client')
    parser.add_argument('--watch', action='store_true', help='Watch bot vs bot')
    parser.add_argument('--play-as', type=int, choices=[0, 1], default=0,
                        help='Play as player 0 (bottom) or 1 (top)')
    parser.add_argument('--seed', type=int, default=None, help='Bot random seed')
    parser.add_argument('--window', type=int, default=2, help='Wall search window')
    parser.add_argument('--threshold', type=int, default=2, help='Minimum wall net benefit')
    parser.add_argument('--urgency', type=int, default=4,
                        help='Consider walls when opponent is this close to goal')
    parser.add_argument('--no-walls', action='store_true', help='Bot never places walls')
    parser.add_argument('--delay', type=float, default=0.5, help='Seconds between bot moves')
    parser.add_argument('--pgn', type=str, help='Write the game record to this file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log bot decisions')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = GreedyConfig(
        window=args.window,
        benefit_threshold=args.threshold,
        urgency_distance=args.urgency,
        use_walls=not args.no_walls,
    )

    if args.watch:
        ai0 = GreedyAI.from_seed(args.seed, config) if args.seed is not None else GreedyAI(config)
        ai1 = GreedyAI.from_seed(args.seed + 1, config) if args.seed is not None else GreedyAI(config)
        record = watch_ai_vs_ai(ai0, ai1, args.delay)
    else:
        ai = GreedyAI.from_seed(args.seed, config) if args.seed is not None else GreedyAI(config)
        record = play_human_vs_ai(ai, args.play_as)

    if args.pgn:
        Path(args.pgn).write_text(record.to_pgn() + "\n")
        print(f"Saved game to {args.pgn}")


if __name__ == '__main__':
    main()
