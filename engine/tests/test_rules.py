"""Tests for action application and turn flow."""

import numpy as np
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from quoridor.core.errors import (
    IllegalActionError, IllegalMoveError, IllegalWallPlacementError,
    OutOfTurnError, GameNotPlayingError
)
from quoridor.core.moves import MoveAction, WallAction, get_valid_moves
from quoridor.core.paths import distance_to_goal
from quoridor.core.rules import (
    apply_action, try_apply_action, legal_actions, is_legal_action
)
from quoridor.core.state import GameState, PlayerState, Position, Status, Wall, goal_row
from quoridor.core.walls import iter_anchors


class TestMoveAction:
    def test_step(self):
        state = GameState.new_game()
        new_state = apply_action(state, MoveAction(Position(1, 4)))
        assert new_state.players[0].pos == (1, 4)
        assert new_state.current_turn == 1
        assert new_state.status is Status.PLAYING
        assert new_state.winner is None

    def test_input_untouched(self):
        state = GameState.new_game()
        apply_action(state, MoveAction(Position(1, 4)))
        assert state.players[0].pos == (0, 4)
        assert state.current_turn == 0

    def test_illegal_destination(self):
        state = GameState.new_game()
        with pytest.raises(IllegalMoveError):
            apply_action(state, MoveAction(Position(2, 4)))

    def test_cannot_move_onto_opponent(self):
        state = GameState(players=(PlayerState(Position(3, 4)), PlayerState(Position(4, 4))))
        with pytest.raises(IllegalMoveError):
            apply_action(state, MoveAction(Position(4, 4)))
        jumped = apply_action(state, MoveAction(Position(5, 4)))
        assert jumped.players[0].pos == (5, 4)

    def test_walls_unchanged(self):
        state = GameState.new_game()
        new_state = apply_action(state, MoveAction(Position(1, 4)))
        assert new_state.players[0].walls_left == 10
        assert new_state.walls == ()


class TestWinning:
    def setup_method(self):
        self.state = GameState(players=(PlayerState(Position(7, 0)), PlayerState(Position(1, 8))))

    def test_win(self):
        final = apply_action(self.state, MoveAction(Position(8, 0)))
        assert final.status is Status.FINISHED
        assert final.winner == 0
        assert final.current_turn == 0
        assert final.is_terminal

    def test_player_1_win(self):
        state = GameState(players=self.state.players, current_turn=1)
        final = apply_action(state, MoveAction(Position(0, 8)))
        assert final.winner == 1
        assert final.current_turn == 1

    def test_no_action_after_win(self):
        final = apply_action(self.state, MoveAction(Position(8, 0)))
        with pytest.raises(GameNotPlayingError):
            apply_action(final, MoveAction(Position(0, 8)))
        with pytest.raises(GameNotPlayingError):
            apply_action(final, WallAction(Wall.horizontal(3, 3)))
        assert try_apply_action(final, MoveAction(Position(7, 0))) is None
        assert legal_actions(final) == []


class TestWallAction:
    def test_place(self):
        state = GameState.new_game()
        wall = Wall.horizontal(6, 4)
        new_state = apply_action(state, WallAction(wall))
        assert new_state.walls == (wall,)
        assert new_state.players[0].walls_left == 9
        assert new_state.players[1].walls_left == 10
        assert new_state.current_turn == 1
        assert new_state.status is Status.PLAYING
        assert state.walls == ()

    def test_walls_appended_in_order(self):
        state = GameState.new_game()
        state = apply_action(state, WallAction(Wall.horizontal(6, 4)))
        state = apply_action(state, WallAction(Wall.vertical(1, 1)))
        assert state.walls == (Wall.horizontal(6, 4), Wall.vertical(1, 1))
        assert state.players[0].walls_left == 9
        assert state.players[1].walls_left == 9
        assert state.current_turn == 0

    def test_overlap(self):
        state = apply_action(GameState.new_game(), WallAction(Wall.horizontal(6, 4)))
        with pytest.raises(IllegalWallPlacementError):
            apply_action(state, WallAction(Wall.horizontal(6, 5)))

    def test_out_of_bounds(self):
        with pytest.raises(IllegalWallPlacementError):
            apply_action(GameState.new_game(), WallAction(Wall.vertical(8, 8)))

    def test_off_lattice_column(self):
        with pytest.raises(IllegalWallPlacementError):
            apply_action(GameState.new_game(), WallAction(Wall.horizontal(0, 9)))
        assert try_apply_action(GameState.new_game(), WallAction(Wall.vertical(3, 12))) is None

    def test_no_walls_left(self):
        state = GameState.new_game().with_player(0, walls_left=0)
        with pytest.raises(IllegalWallPlacementError):
            apply_action(state, WallAction(Wall.horizontal(3, 3)))

    def test_sealing_wall(self):
        state = GameState(
            players=(PlayerState(Position(0, 0)), PlayerState(Position(8, 4))),
            walls=(Wall.horizontal(0, 0),),
        )
        assert try_apply_action(state, WallAction(Wall.vertical(0, 1))) is None


class TestTurns:
    def test_out_of_turn(self):
        state = GameState.new_game()
        with pytest.raises(OutOfTurnError):
            apply_action(state, MoveAction(Position(7, 4), player=1))

    def test_matching_player(self):
        state = GameState.new_game()
        new_state = apply_action(state, MoveAction(Position(1, 4), player=0))
        assert new_state.current_turn == 1

    def test_waiting(self):
        state = GameState.new_game('alice')
        with pytest.raises(GameNotPlayingError):
            apply_action(state, MoveAction(Position(1, 4)))

    def test_rejections_are_value_errors(self):
        with pytest.raises(ValueError):
            apply_action(GameState.new_game(), MoveAction(Position(5, 5)))

    def test_unknown_action(self):
        with pytest.raises(TypeError):
            apply_action(GameState.new_game(), "e2")


class TestLegalActions:
    def test_opening(self):
        actions = legal_actions(GameState.new_game())
        moves = [a for a in actions if isinstance(a, MoveAction)]
        walls = [a for a in actions if isinstance(a, WallAction)]
        assert len(moves) == 3
        assert len(walls) == 128
        assert isinstance(actions[0], MoveAction)
        assert all(a.player == 0 for a in actions)

    def test_all_accepted(self):
        state = GameState.new_game()
        for action in legal_actions(state)[:10]:
            assert is_legal_action(state, action)


class TestDeterminism:
    def test_same_output(self):
        state = GameState.new_game()
        action = WallAction(Wall.horizontal(5, 5))
        assert apply_action(state, action) == apply_action(state, action)


class TestInvariants:
    def test_random_playout_keeps_paths(self):
        rng = np.random.default_rng(1234)
        anchors = list(iter_anchors())
        state = GameState.new_game()

        for _ in range(60):
            if state.is_terminal:
                break
            player = state.current_turn
            new_state = None
            if rng.random() < 0.5:
                wall = anchors[int(rng.integers(len(anchors)))]
                new_state = try_apply_action(state, WallAction(wall))
            if new_state is None:
                moves = get_valid_moves(state, player)
                assert moves
                new_state = apply_action(state, MoveAction(moves[int(rng.integers(len(moves)))]))

            for p in (0, 1):
                assert distance_to_goal(new_state.walls, new_state.players[p].pos, goal_row(p)) < float('inf')
                assert new_state.players[p].walls_left >= 0
            if not new_state.is_terminal:
                assert new_state.current_turn == 1 - player
            state = new_state
