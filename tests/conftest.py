"""
Pytest configuration and shared fixtures
"""

import sys
from pathlib import Path

import pytest

# Add src and the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from game import Difficulty, ManualScheduler, GameController, create_board, compute_adjacency


class ScriptedRandom:
    """Random stand-in returning a fixed sequence from randrange"""

    def __init__(self, values):
        self._values = iter(values)

    def randrange(self, stop):
        value = next(self._values)
        assert 0 <= value < stop
        return value


def board_with_mines(rows, cols, mines):
    """Board with mines at the given (x, y) positions and adjacency computed"""
    board = create_board(rows, cols)
    for x, y in mines:
        board.cells[y][x].place_mine()
    compute_adjacency(board)
    return board


# Mines at (2, 2) and (2, 0), the first draw hits the excluded corner and the
# third repeats a mine, exercising both rejection paths
SMALL_MINE_DRAWS = [0, 0, 2, 2, 2, 2, 2, 0]
SMALL = Difficulty('small', 3, 3, 2)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def small_game(scheduler):
    """
    3x3 game whose mines land on (2, 0) and (2, 2) once (0, 0) is revealed

    Layout (x across, y down):
        . 1 *
        . 2 2
        . 1 *
    """
    return GameController(SMALL, scheduler=scheduler, rng=ScriptedRandom(SMALL_MINE_DRAWS))
