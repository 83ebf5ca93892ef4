"""
Game package initialization
"""

from .board import (Board, Cell, create_board, place_mines, compute_adjacency,
                    reveal, check_win, toggle_flag, count_flagged)
from .clock import GameClock, ManualScheduler
from .controller import GameController, GameSession, GameStatus
from .difficulty import ConfigurationError, Difficulty, DIFFICULTIES, get_difficulty
from .api import Action, MinesweeperAPI

__all__ = [
    'Board', 'Cell', 'create_board', 'place_mines', 'compute_adjacency',
    'reveal', 'check_win', 'toggle_flag', 'count_flagged',
    'GameClock', 'ManualScheduler',
    'GameController', 'GameSession', 'GameStatus',
    'ConfigurationError', 'Difficulty', 'DIFFICULTIES', 'get_difficulty',
    'Action', 'MinesweeperAPI'
]
