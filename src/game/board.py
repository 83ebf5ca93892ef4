"""
Minesweeper Game - Core Board Logic
Grid model, mine placement, flood-fill reveal, win detection and flag tracking
"""

import logging
import random
from typing import Iterator, List, Optional, Tuple

from .difficulty import ConfigurationError


logger = logging.getLogger(__name__)

# Offsets of the 8 surrounding cells
NEIGHBOR_OFFSETS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1)
                    if not (dx == 0 and dy == 0)]


class Cell:
    """Represents a single cell on the minesweeper board"""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.is_mine = False
        self.is_revealed = False
        self.is_flagged = False
        self.adjacent = 0

    def place_mine(self):
        """Place a mine in this cell"""
        self.is_mine = True

    def reveal(self) -> bool:
        """Reveal this cell, returns True if the cell changed"""
        if self.is_revealed or self.is_flagged:
            return False
        self.is_revealed = True
        return True

    def toggle_flag(self):
        """Toggle flag state on this cell (revealed cells are never flagged)"""
        if not self.is_revealed:
            self.is_flagged = not self.is_flagged

    def __repr__(self):
        return (f"Cell(x={self.x}, y={self.y}, mine={self.is_mine}, "
                f"revealed={self.is_revealed}, flagged={self.is_flagged}, "
                f"adjacent={self.adjacent})")


class Board:
    """Fixed-size rectangular grid of cells, stored row-major as cells[y][x]"""

    def __init__(self, rows: int, cols: int, cells: List[List[Cell]]):
        self.rows = rows
        self.cols = cols
        self.cells = cells

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at the given column/row, or None when out of range"""
        if self.in_bounds(x, y):
            return self.cells[y][x]
        return None

    def neighbors(self, x: int, y: int) -> Iterator[Cell]:
        """Yield the in-bounds cells surrounding (x, y)"""
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield self.cells[ny][nx]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def mine_count(self) -> int:
        return sum(1 for cell in self if cell.is_mine)


def create_board(rows: int, cols: int) -> Board:
    """Build an empty board without mines"""
    if rows <= 0 or cols <= 0:
        raise ConfigurationError(f"Board size must be positive, got {rows}x{cols}")

    cells = []
    for y in range(rows):
        board_row = []
        for x in range(cols):
            board_row.append(Cell(x, y))
        cells.append(board_row)
    return Board(rows, cols, cells)


def place_mines(board: Board, mine_count: int, excluded: Tuple[int, int],
                rng: Optional[random.Random] = None) -> Board:
    """
    Scatter mines over the board, never on the excluded cell

    Cells are drawn uniformly at random and redrawn when they already hold a
    mine or are the excluded cell. Adjacency counts are recomputed afterwards.

    Args:
        board: Board to mutate
        mine_count: Number of mines to place
        excluded: (x, y) of the cell that must stay safe
        rng: Random source, the random module when omitted

    Returns:
        The same board, mutated
    """
    if mine_count < 0 or mine_count > board.size - 1:
        raise ConfigurationError(
            f"Cannot place {mine_count} mines on a {board.rows}x{board.cols} "
            f"board with one safe cell")

    if rng is None:
        rng = random
    excluded_x, excluded_y = excluded
    placed = 0
    draws = 0
    while placed < mine_count:
        x = rng.randrange(board.cols)
        y = rng.randrange(board.rows)
        draws += 1
        cell = board.cells[y][x]
        if (x == excluded_x and y == excluded_y) or cell.is_mine:
            continue
        cell.place_mine()
        placed += 1

    compute_adjacency(board)
    logger.debug("Placed %d mines in %d draws, excluding %s", placed, draws, excluded)
    return board


def compute_adjacency(board: Board) -> Board:
    """Calculate the number of adjacent mines for each non-mine cell"""
    for cell in board:
        if cell.is_mine:
            continue
        cell.adjacent = sum(1 for n in board.neighbors(cell.x, cell.y) if n.is_mine)
    return board


def reveal(board: Board, x: int, y: int) -> Board:
    """
    Reveal a cell and flood-fill its zero-adjacency region

    Uses an explicit stack instead of recursion. Flagged and already revealed
    cells are skipped and do not propagate. Mines are never revealed here.
    """
    if not board.in_bounds(x, y):
        return board

    stack = [(x, y)]
    visited = set()
    revealed = 0
    while stack:
        cx, cy = stack.pop()
        if (cx, cy) in visited:
            continue
        visited.add((cx, cy))

        cell = board.cells[cy][cx]
        if not cell.reveal():
            continue
        revealed += 1

        if cell.adjacent == 0 and not cell.is_mine:
            for neighbor in board.neighbors(cx, cy):
                if (neighbor.x, neighbor.y) not in visited:
                    stack.append((neighbor.x, neighbor.y))

    logger.debug("Reveal from (%d, %d) uncovered %d cells", x, y, revealed)
    return board


def check_win(board: Board) -> bool:
    """Check if every non-mine cell has been revealed"""
    total_safe = 0
    revealed_safe = 0
    for cell in board:
        if not cell.is_mine:
            total_safe += 1
            if cell.is_revealed:
                revealed_safe += 1
    return revealed_safe == total_safe


def toggle_flag(board: Board, x: int, y: int) -> Board:
    """Toggle flag on a hidden cell, ignores revealed and out-of-range cells"""
    cell = board.get_cell(x, y)
    if cell is not None:
        cell.toggle_flag()
    return board


def count_flagged(board: Board) -> int:
    return sum(1 for cell in board if cell.is_flagged)
