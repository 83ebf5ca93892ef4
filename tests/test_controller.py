"""
Unit tests for the game controller
Tests the session state machine, first-click safety, win/loss and the clock lifecycle
"""

import random

import pytest

from game import GameController, GameStatus, ConfigurationError, Difficulty
from game.difficulty import BEGINNER, EXPERT
from conftest import ScriptedRandom, SMALL, SMALL_MINE_DRAWS


class TestControllerInitialization:
    """Test cases for a fresh session"""

    def test_default_initialization(self):
        """Test controller starts a beginner game that has not started"""
        controller = GameController()

        assert controller.difficulty == BEGINNER
        assert controller.board.rows == 9
        assert controller.board.cols == 9
        assert controller.status == GameStatus.PLAYING
        assert controller.started is False
        assert controller.elapsed_seconds == 0
        assert controller.mines_remaining == 10
        assert controller.board.mine_count == 0

    def test_invalid_difficulty_rejected(self):
        with pytest.raises(ConfigurationError):
            GameController(Difficulty('broken', 2, 2, 4))


class TestFirstReveal:
    """Test cases for deferred mine placement"""

    @pytest.mark.parametrize("seed", range(20))
    def test_first_click_is_never_a_mine(self, seed):
        controller = GameController('beginner', rng=random.Random(seed))

        assert controller.reveal(0, 0) is True

        cell = controller.board.get_cell(0, 0)
        assert cell.is_mine is False
        assert cell.is_revealed is True
        assert controller.board.mine_count == 10
        assert controller.started is True
        if cell.adjacent == 0:
            assert all(n.is_revealed for n in controller.board.neighbors(0, 0))

    def test_mines_placed_only_once(self, small_game):
        small_game.reveal(0, 0)
        mines = {(c.x, c.y) for c in small_game.board if c.is_mine}

        small_game.reveal(2, 1)

        assert {(c.x, c.y) for c in small_game.board if c.is_mine} == mines

    def test_first_reveal_cascade(self, small_game):
        small_game.reveal(0, 0)

        revealed = {(c.x, c.y) for c in small_game.board if c.is_revealed}
        assert revealed == {(0, 0), (1, 0), (0, 1), (1, 1), (0, 2), (1, 2)}
        assert small_game.status == GameStatus.PLAYING


class TestGameLogic:
    """Test cases for the win/loss transitions"""

    def test_reveal_mine_loses(self, small_game):
        """Test that hitting a mine reveals every mine and keeps flags"""
        small_game.reveal(0, 0)
        small_game.toggle_flag(2, 2)

        assert small_game.reveal(2, 0) is True

        assert small_game.status == GameStatus.LOST
        assert small_game.session.clicked_mine == (2, 0)
        assert small_game.board.get_cell(2, 0).is_revealed is True
        assert small_game.board.get_cell(2, 2).is_revealed is True
        assert small_game.board.get_cell(2, 2).is_flagged is True
        assert small_game.board.get_cell(2, 0).is_flagged is False
        assert small_game.board.get_cell(2, 1).is_revealed is False
        assert small_game.is_game_over is True

    def test_last_safe_cell_wins(self, small_game):
        """Test that winning flags every mine"""
        small_game.reveal(0, 0)

        small_game.reveal(2, 1)

        assert small_game.status == GameStatus.WON
        assert small_game.board.get_cell(2, 0).is_flagged is True
        assert small_game.board.get_cell(2, 2).is_flagged is True
        assert small_game.mines_remaining == 0

    def test_immediate_win(self):
        """Test that a board with a single safe cell is won on the first click"""
        controller = GameController(Difficulty('packed', 3, 3, 8), rng=random.Random(3))

        controller.reveal(1, 1)

        assert controller.status == GameStatus.WON
        assert controller.board.get_cell(1, 1).adjacent == 8
        assert controller.clock.running is False

    def test_reveal_flagged_cell_is_noop(self, small_game):
        small_game.reveal(0, 0)
        small_game.toggle_flag(2, 1)

        assert small_game.reveal(2, 1) is False
        assert small_game.board.get_cell(2, 1).is_revealed is False
        assert small_game.status == GameStatus.PLAYING

    def test_reveal_revealed_cell_is_noop(self, small_game):
        small_game.reveal(0, 0)
        assert small_game.reveal(1, 1) is False

    def test_actions_ignored_after_game_over(self, small_game):
        small_game.reveal(0, 0)
        small_game.reveal(2, 0)

        assert small_game.reveal(2, 1) is False
        assert small_game.toggle_flag(2, 1) is False
        assert small_game.board.get_cell(2, 1).is_revealed is False
        assert small_game.board.get_cell(2, 1).is_flagged is False

    def test_out_of_range_ignored(self, small_game):
        assert small_game.reveal(-1, 0) is False
        assert small_game.reveal(3, 3) is False
        assert small_game.started is False

        small_game.reveal(0, 0)
        assert small_game.toggle_flag(5, 5) is False
        assert small_game.status == GameStatus.PLAYING


class TestFlagging:
    """Test cases for flag actions through the controller"""

    def test_flag_before_start_ignored(self, small_game):
        assert small_game.toggle_flag(1, 1) is False
        assert small_game.board.get_cell(1, 1).is_flagged is False
        assert small_game.mines_remaining == 2

    def test_flag_and_unflag(self, small_game):
        small_game.reveal(0, 0)

        assert small_game.toggle_flag(2, 0) is True
        assert small_game.mines_remaining == 1

        assert small_game.toggle_flag(2, 0) is True
        assert small_game.mines_remaining == 2

    def test_flag_revealed_cell_is_noop(self, small_game):
        small_game.reveal(0, 0)

        assert small_game.toggle_flag(1, 1) is False
        assert small_game.board.get_cell(1, 1).is_flagged is False

    def test_remaining_mines_can_go_negative(self, small_game):
        """Test that over-flagging is reported as a negative count"""
        small_game.reveal(0, 0)
        for y in range(3):
            small_game.toggle_flag(2, y)

        assert small_game.mines_remaining == -1


class TestClockLifecycle:
    """Test cases for when the clock runs"""

    def test_clock_starts_on_first_reveal(self, small_game, scheduler):
        scheduler.advance(5)
        assert small_game.elapsed_seconds == 0

        small_game.reveal(0, 0)
        scheduler.advance(3)

        assert small_game.elapsed_seconds == 3
        assert scheduler.pending == 1

    def test_clock_stops_on_loss(self, small_game, scheduler):
        small_game.reveal(0, 0)
        scheduler.advance(2)

        small_game.reveal(2, 0)
        scheduler.advance(10)

        assert small_game.elapsed_seconds == 2
        assert scheduler.pending == 0

    def test_clock_stops_on_win(self, small_game, scheduler):
        small_game.reveal(0, 0)
        scheduler.advance(4)

        small_game.reveal(2, 1)
        scheduler.advance(10)

        assert small_game.elapsed_seconds == 4
        assert small_game.clock.running is False

    def test_default_scheduler_drives_clock_across_reset(self):
        """Test that a controller built without a scheduler exposes one that keeps working after reset"""
        controller = GameController(SMALL, rng=ScriptedRandom(SMALL_MINE_DRAWS * 2))
        scheduler = controller.scheduler

        controller.reveal(0, 0)
        scheduler.advance(2)
        assert controller.elapsed_seconds == 2

        controller.reset()
        assert controller.scheduler is scheduler
        assert controller.clock.scheduler is scheduler

        controller.reveal(0, 0)
        scheduler.advance(3)
        assert controller.elapsed_seconds == 3
        assert scheduler.pending == 1

    def test_reset_stops_and_zeroes_clock(self, small_game, scheduler):
        small_game.reveal(0, 0)
        scheduler.advance(3)
        old_clock = small_game.clock

        small_game.reset()
        scheduler.advance(5)

        assert old_clock.running is False
        assert old_clock.elapsed_seconds == 3
        assert small_game.elapsed_seconds == 0
        assert scheduler.pending == 0


class TestReset:
    """Test cases for reset and difficulty changes"""

    def test_reset_replaces_session(self, small_game):
        small_game.reveal(0, 0)
        old_session = small_game.session

        small_game.reset()

        assert small_game.session is not old_session
        assert small_game.status == GameStatus.PLAYING
        assert small_game.started is False
        assert small_game.board.mine_count == 0
        assert small_game.difficulty == SMALL
        assert all(not c.is_revealed and not c.is_flagged for c in small_game.board)

    def test_reset_after_loss(self, small_game):
        small_game.reveal(0, 0)
        small_game.reveal(2, 0)

        small_game.reset()

        assert small_game.status == GameStatus.PLAYING
        assert small_game.session.clicked_mine is None

    def test_change_difficulty(self):
        controller = GameController('beginner', rng=random.Random(1))
        controller.reveal(4, 4)

        controller.change_difficulty('expert')

        assert controller.difficulty == EXPERT
        assert (controller.board.rows, controller.board.cols) == (16, 30)
        assert controller.started is False
        assert controller.mines_remaining == 99

    def test_invalid_difficulty_keeps_current_game(self, small_game):
        small_game.reveal(0, 0)
        session = small_game.session

        with pytest.raises(ConfigurationError):
            small_game.change_difficulty('impossible')

        assert small_game.session is session
        assert small_game.difficulty == SMALL

    def test_new_session_uses_fresh_mines(self):
        """Test that mines from the previous session do not leak into the next"""
        rng = ScriptedRandom([2, 2, 2, 0, 0, 2, 1, 2])
        controller = GameController(SMALL, rng=rng)
        controller.reveal(0, 0)

        controller.reset()
        controller.reveal(2, 0)

        assert {(c.x, c.y) for c in controller.board if c.is_mine} == {(0, 2), (1, 2)}
