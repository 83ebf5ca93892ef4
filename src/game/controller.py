"""
Minesweeper Game - Controller
Game session state machine sequencing mine placement, reveals, flags and the clock
"""

import logging
import random
from enum import Enum
from typing import Optional, Tuple, Union

from .board import (Board, create_board, place_mines, reveal, check_win,
                    toggle_flag, count_flagged)
from .clock import GameClock, ManualScheduler
from .difficulty import Difficulty, get_difficulty


logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """Enumeration for different game states"""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class GameSession:
    """One game on one board, replaced wholesale on reset"""

    def __init__(self, difficulty: Difficulty, scheduler=None):
        self.difficulty = difficulty
        self.board: Board = create_board(difficulty.rows, difficulty.cols)
        self.status = GameStatus.PLAYING
        self.started = False
        self.clock = GameClock(scheduler)
        self.clicked_mine: Optional[Tuple[int, int]] = None

    @property
    def elapsed_seconds(self) -> int:
        return self.clock.elapsed_seconds

    def close(self):
        self.clock.stop()


class GameController:
    """
    Drives a game session in response to discrete player actions

    Every action runs to completion before the next one is handled. reveal and
    toggle_flag return True when the action changed the board.
    """

    def __init__(self, difficulty: Union[str, Difficulty] = 'beginner',
                 scheduler=None, rng: Optional[random.Random] = None):
        self.difficulty = get_difficulty(difficulty)
        # One scheduler shared by every session so callers can keep driving it across resets
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.rng = rng
        self.session = self._new_session()

    def _new_session(self) -> GameSession:
        session = GameSession(self.difficulty, self.scheduler)
        logger.info("New %s game: %dx%d with %d mines", self.difficulty.name,
                    self.difficulty.rows, self.difficulty.cols, self.difficulty.mines)
        return session

    @property
    def board(self) -> Board:
        return self.session.board

    @property
    def status(self) -> GameStatus:
        return self.session.status

    @property
    def started(self) -> bool:
        return self.session.started

    @property
    def elapsed_seconds(self) -> int:
        return self.session.elapsed_seconds

    @property
    def clock(self) -> GameClock:
        return self.session.clock

    @property
    def mines_remaining(self) -> int:
        """Mines minus flags placed, negative when over-flagged"""
        return self.difficulty.mines - count_flagged(self.session.board)

    @property
    def is_game_over(self) -> bool:
        return self.session.status != GameStatus.PLAYING

    def reveal(self, x: int, y: int) -> bool:
        """Reveal a cell and handle game logic"""
        session = self.session
        if session.status != GameStatus.PLAYING:
            return False

        cell = session.board.get_cell(x, y)
        if cell is None or cell.is_flagged or cell.is_revealed:
            return False

        # Place mines on first click so it is never a mine
        if not session.started:
            place_mines(session.board, self.difficulty.mines, (x, y), self.rng)
            session.started = True
            session.clock.start()

        if cell.is_mine:
            cell.is_revealed = True
            session.clicked_mine = (x, y)
            self._reveal_all_mines()
            self._finish(GameStatus.LOST)
            return True

        reveal(session.board, x, y)
        if check_win(session.board):
            self._flag_all_mines()
            self._finish(GameStatus.WON)
        return True

    def toggle_flag(self, x: int, y: int) -> bool:
        """Toggle flag on a cell, only once the game has started"""
        session = self.session
        if session.status != GameStatus.PLAYING or not session.started:
            return False

        cell = session.board.get_cell(x, y)
        if cell is None or cell.is_revealed:
            return False

        toggle_flag(session.board, x, y)
        return True

    def reset(self):
        """Discard the current session and start a fresh one"""
        self.session.close()
        self.session = self._new_session()

    def change_difficulty(self, difficulty: Union[str, Difficulty]):
        """Switch preset and reset, invalid presets leave the current game untouched"""
        self.difficulty = get_difficulty(difficulty)
        self.reset()

    def _reveal_all_mines(self):
        """Reveal all mines when game is lost, flags are left in place"""
        for cell in self.session.board:
            if cell.is_mine:
                cell.is_revealed = True

    def _flag_all_mines(self):
        """Flag all mines when game is won"""
        for cell in self.session.board:
            if cell.is_mine:
                cell.is_flagged = True

    def _finish(self, status: GameStatus):
        self.session.status = status
        self.session.clock.stop()
        logger.info("Game %s after %ds", status.value, self.session.elapsed_seconds)
