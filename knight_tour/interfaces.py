"""
Abstract interfaces for Board and Solver classes.

These interfaces define the contract that all implementations must follow,
so rendering, saving and the CLI only depend on the abstract board/solver.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
import numpy as np


Position = Tuple[int, int]


class BoardInterface(ABC):
    """
    Abstract interface for knight's tour board states.

    A board is a rows × cols grid where every cell is either unvisited,
    visited, or holds the knight (current).

    Attributes:
        rows: Number of board rows
        cols: Number of board columns
        current: Position of the knight, or None before placement
    """

    @property
    @abstractmethod
    def rows(self) -> int:
        """Number of rows."""
        pass

    @property
    @abstractmethod
    def cols(self) -> int:
        """Number of columns."""
        pass

    @property
    @abstractmethod
    def current(self) -> Optional[Position]:
        """Square currently holding the knight."""
        pass

    @abstractmethod
    def get_grid(self) -> np.ndarray:
        """
        Get the cell states as a rows × cols array.

        Returns:
            Read-only array of CellState values.
        """
        pass

    @abstractmethod
    def place_knight(self, pos: Position) -> None:
        """
        Put the knight on its starting square.

        Args:
            pos: 0-indexed (row, col) of the start square
        """
        pass

    @abstractmethod
    def advance(self, pos: Position) -> None:
        """
        Move the knight to a new square, marking the old one visited.

        Args:
            pos: 0-indexed (row, col) of the destination
        """
        pass


class SolverInterface(ABC):
    """
    Abstract interface for tour drivers.

    A solver owns one board for the duration of a run, moves the knight
    until no legal move remains, and reports the number of moves made.
    """

    @abstractmethod
    def run(self, start: Position, on_step=None, verbose: bool = False) -> int:
        """
        Run the tour to completion.

        Args:
            start: 0-indexed starting square
            on_step: Optional callback invoked with the board after every move
            verbose: Whether to print progress

        Returns:
            Number of moves made
        """
        pass

    @abstractmethod
    def get_board(self) -> BoardInterface:
        """
        Get the board being toured.

        Returns:
            Current BoardInterface instance.
        """
        pass

    @property
    @abstractmethod
    def path(self) -> List[Position]:
        """Squares visited so far, starting square first."""
        pass
