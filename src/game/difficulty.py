"""
Difficulty presets for the minesweeper board
"""

from typing import NamedTuple, Union


class ConfigurationError(ValueError):
    """Raised for board settings that cannot produce a playable game"""


class Difficulty(NamedTuple):
    """Immutable board preset (rows, cols, mines)"""
    name: str
    rows: int
    cols: int
    mines: int

    def validate(self) -> 'Difficulty':
        """Reject presets whose mines cannot all be placed around a safe first click"""
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(
                f"Difficulty '{self.name}' needs a positive board size, "
                f"got {self.rows}x{self.cols}")
        if self.mines < 0 or self.mines > self.rows * self.cols - 1:
            raise ConfigurationError(
                f"Difficulty '{self.name}' has {self.mines} mines, at most "
                f"{self.rows * self.cols - 1} fit on a {self.rows}x{self.cols} board")
        return self


BEGINNER = Difficulty('beginner', 9, 9, 10)
INTERMEDIATE = Difficulty('intermediate', 16, 16, 40)
EXPERT = Difficulty('expert', 16, 30, 99)

# Difficulty presets keyed by name
DIFFICULTIES = {
    BEGINNER.name: BEGINNER,
    INTERMEDIATE.name: INTERMEDIATE,
    EXPERT.name: EXPERT,
}


def get_difficulty(preset: Union[str, Difficulty]) -> Difficulty:
    """Resolve a preset name (case-insensitive) or Difficulty into a validated preset"""
    if isinstance(preset, Difficulty):
        return preset.validate()

    difficulty = DIFFICULTIES.get(str(preset).strip().lower())
    if difficulty is None:
        raise ConfigurationError(
            f"Unknown difficulty '{preset}', expected one of {', '.join(DIFFICULTIES)}")
    return difficulty.validate()
