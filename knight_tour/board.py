"""
Board state for the knight's tour.

The board is a rows × cols numpy grid of CellState values. Exactly one cell
holds the knight while a tour is in progress; visited cells never change
state again.
"""

from enum import IntEnum
from typing import Optional

import numpy as np

from .interfaces import BoardInterface, Position


class CellState(IntEnum):
    """State of a single board cell."""
    UNVISITED = 0
    CURRENT = 1
    VISITED = 2


class TourBoard(BoardInterface):
    """
    Rectangular knight's tour board.

    Attributes:
        _rows: Number of rows
        _cols: Number of columns
        _grid: int8 array of CellState values
        _current: Position of the knight (None until placed)
    """

    def __init__(self, rows: int, cols: int):
        """
        Create an empty board with every cell unvisited.

        Args:
            rows: Number of rows (>= 1)
            cols: Number of columns (>= 1)
        """
        if rows < 1 or cols < 1:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")
        self._rows = rows
        self._cols = cols
        self._grid = np.full((rows, cols), CellState.UNVISITED, dtype=np.int8)
        self._current: Optional[Position] = None

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def current(self) -> Optional[Position]:
        return self._current

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self._rows and 0 <= col < self._cols

    def state_at(self, pos: Position) -> CellState:
        return CellState(int(self._grid[pos[0], pos[1]]))

    def get_grid(self) -> np.ndarray:
        """Read-only view of the cell states."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    def open_mask(self) -> np.ndarray:
        """Boolean mask of cells the knight may still land on."""
        return self._grid != CellState.VISITED

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self._grid == state))

    def place_knight(self, pos: Position) -> None:
        if self._current is not None:
            raise ValueError(f"Knight already placed at {self._current}")
        if not self.in_bounds(pos):
            raise ValueError(f"Start square {pos} is off a {self._rows}x{self._cols} board")
        if self.state_at(pos) == CellState.VISITED:
            raise ValueError(f"Start square {pos} has already been visited")
        self._grid[pos[0], pos[1]] = CellState.CURRENT
        self._current = (int(pos[0]), int(pos[1]))

    def advance(self, pos: Position) -> None:
        if self._current is None:
            raise ValueError("No knight on the board")
        if not self.in_bounds(pos):
            raise ValueError(f"Square {pos} is off a {self._rows}x{self._cols} board")
        if self.state_at(pos) == CellState.VISITED:
            raise ValueError(f"Square {pos} has already been visited")

        row, col = self._current
        self._grid[row, col] = CellState.VISITED
        self._grid[pos[0], pos[1]] = CellState.CURRENT
        self._current = (int(pos[0]), int(pos[1]))

    def __repr__(self) -> str:
        return f"TourBoard({self._rows}x{self._cols}, current={self._current})"
