"""
Minesweeper Game API
Event-in, snapshot-out interface for presentation layers and agents
"""

import json
import random
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import numpy as np

from .board import Cell
from .controller import GameController, GameStatus
from .difficulty import Difficulty


# Visible board codes
HIDDEN = -3
FLAGGED = -2
MINE = -1


class Action(Enum):
    """Available player actions"""
    REVEAL = "reveal"
    FLAG = "flag"


class MinesweeperAPI:
    """
    API for presentation layers to interact with a Minesweeper game
    Translates input events into controller actions and exposes board snapshots
    """

    def __init__(self, difficulty: Union[str, Difficulty] = 'beginner',
                 scheduler=None, rng: Optional[random.Random] = None):
        """
        Initialize the game API

        Args:
            difficulty: Preset name or Difficulty
            scheduler: tkinter-style scheduler driving the game clock
            rng: Random source used for mine placement
        """
        self.controller = GameController(difficulty, scheduler, rng)
        self.action_history: List[Dict[str, Any]] = []

    @property
    def scheduler(self):
        """Scheduler driving the game clock, advance it when no tk root is used"""
        return self.controller.scheduler

    @property
    def rows(self) -> int:
        return self.controller.board.rows

    @property
    def cols(self) -> int:
        return self.controller.board.cols

    def primary_action(self, x: int, y: int) -> Dict[str, Any]:
        """Reveal the cell at column x, row y"""
        return self.take_action(x, y, Action.REVEAL)

    def secondary_action(self, x: int, y: int) -> Dict[str, Any]:
        """Toggle the flag at column x, row y"""
        return self.take_action(x, y, Action.FLAG)

    def select_difficulty(self, name: Union[str, Difficulty]) -> Dict[str, Any]:
        """Start a new game with another preset"""
        self.controller.change_difficulty(name)
        self.action_history.clear()
        return self.get_game_state()

    def restart(self) -> Dict[str, Any]:
        """Start a new game with the current preset"""
        self.controller.reset()
        self.action_history.clear()
        return self.get_game_state()

    def take_action(self, x: int, y: int, action: Action) -> Dict[str, Any]:
        """
        Take an action at the specified coordinates

        Args:
            x: Column coordinate (0-indexed)
            y: Row coordinate (0-indexed)
            action: Action to take (REVEAL or FLAG)

        Returns:
            Result with success flag and updated game state
        """
        if not self.controller.board.in_bounds(x, y):
            return {
                'success': False,
                'action': action.value,
                'coordinates': (x, y),
                'error': f'Invalid coordinates: ({x}, {y})',
                'state': self.get_game_state()
            }

        status_before = self.controller.status
        if action == Action.REVEAL:
            success = self.controller.reveal(x, y)
        else:
            success = self.controller.toggle_flag(x, y)

        self.action_history.append({
            'x': x,
            'y': y,
            'action': action.value,
            'success': success,
            'game_state_before': status_before.value,
            'game_state_after': self.controller.status.value
        })

        return {
            'success': success,
            'action': action.value,
            'coordinates': (x, y),
            'state': self.get_game_state()
        }

    @staticmethod
    def _visible_code(cell: Cell) -> int:
        if cell.is_revealed:
            return MINE if cell.is_mine else cell.adjacent
        if cell.is_flagged:
            return FLAGGED
        return HIDDEN

    def visible_board(self) -> List[List[int]]:
        """Board as the player sees it (-3=hidden, -2=flag, -1=mine, 0-8=numbers)"""
        return [[self._visible_code(cell) for cell in row]
                for row in self.controller.board.cells]

    def get_game_state(self) -> Dict[str, Any]:
        """
        Get the current complete game state

        Returns:
            Complete game state information
        """
        controller = self.controller
        full_board = [[{
            'x': cell.x,
            'y': cell.y,
            'is_mine': cell.is_mine,
            'is_revealed': cell.is_revealed,
            'is_flagged': cell.is_flagged,
            'adjacent': cell.adjacent
        } for cell in row] for row in controller.board.cells]

        status = controller.status
        return {
            'difficulty': controller.difficulty.name,
            'board_size': (self.rows, self.cols),
            'total_mines': controller.difficulty.mines,
            'game_state': status.value,
            'started': controller.started,
            'elapsed_seconds': controller.elapsed_seconds,
            'remaining_mines': controller.mines_remaining,
            'clicked_mine': controller.session.clicked_mine,
            'visible_board': self.visible_board(),
            'full_board': full_board,
            'action_count': len(self.action_history),
            'is_game_over': controller.is_game_over,
            'is_won': status == GameStatus.WON,
            'is_lost': status == GameStatus.LOST
        }

    def get_board_array(self) -> np.ndarray:
        """
        Get the board as a numpy array

        Returns:
            3D numpy array: [rows, cols, channels]
            Channels:
            0: Visible state (-3=hidden, -2=flag, -1=mine, 0-8=numbers)
            1: Is revealed (0 or 1)
            2: Is flagged (0 or 1)
        """
        cells = self.controller.board.cells
        visible = np.array(self.visible_board(), dtype=np.float32)
        revealed = np.array([[c.is_revealed for c in row] for row in cells], dtype=np.float32)
        flagged = np.array([[c.is_flagged for c in row] for row in cells], dtype=np.float32)
        return np.stack([visible, revealed, flagged], axis=-1)

    def export_game_state(self) -> str:
        """Export current game state as JSON string"""
        return json.dumps(self.get_game_state(), indent=2)

    def get_action_history(self) -> List[Dict[str, Any]]:
        return self.action_history.copy()

    def render_text(self) -> str:
        """Plain text rendering of the visible board, used by the console driver"""
        symbols = {HIDDEN: '#', FLAGGED: 'F', MINE: '*', 0: '.'}
        header = '   ' + ''.join(f'{x % 10}' for x in range(self.cols))
        lines = [header]
        for y, row in enumerate(self.visible_board()):
            lines.append(f'{y:2d} ' + ''.join(symbols.get(v, str(v)) for v in row))
        return '\n'.join(lines)
