"""
Warnsdorff tour driver.

The driver moves the knight greedily: from the current square it scores every
legal move by the number of onward moves it would leave and takes the lowest
score, preferring the earliest candidate in offset order on ties. It never
backtracks and stops as soon as the knight has no legal move.
"""

import time
import numpy as np
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .interfaces import SolverInterface, Position
from .board import TourBoard
from .moves import candidates, count_onward_moves


class TourState(Enum):
    ACTIVE = 'active'
    HALTED = 'halted'


class WarnsdorffSolver(SolverInterface):
    """
    Greedy knight's tour driver.

    Attributes:
        _board: Board owned by this solver and mutated in place
        _moves: Number of moves made so far
        _path: Squares occupied so far, start square first
        _state: ACTIVE while the knight has a legal move
    """

    def __init__(self, board: TourBoard):
        if not isinstance(board, TourBoard):
            raise TypeError("WarnsdorffSolver requires TourBoard")
        self._board = board
        self._moves = 0
        self._path: List[Position] = []
        self._state = TourState.HALTED if board.current is None else TourState.ACTIVE
        if board.current is not None:
            self._path.append(board.current)

    def get_board(self) -> TourBoard:
        return self._board

    @property
    def bounds(self) -> Tuple[int, int]:
        return (self._board.rows, self._board.cols)

    @property
    def moves(self) -> int:
        return self._moves

    @property
    def path(self) -> List[Position]:
        return list(self._path)

    @property
    def state(self) -> TourState:
        return self._state

    def is_complete(self) -> bool:
        """Whether every square has been visited."""
        return self._moves == self._board.rows * self._board.cols - 1

    def place(self, start: Position) -> None:
        """Put the knight on its start square and activate the driver."""
        self._board.place_knight(start)
        self._path = [self._board.current]
        self._moves = 0
        self._state = TourState.ACTIVE

    def choose_move(self, position: Position) -> Optional[Position]:
        """
        Pick the Warnsdorff move from a square.

        Args:
            position: Square to move from

        Returns:
            Candidate with the fewest onward moves (first one on ties),
            or None if there is no legal move.
        """
        grid = self._board.get_grid()
        options = candidates(position, self.bounds, grid)
        if not options:
            return None

        best = options[0]
        best_score = count_onward_moves(best, self.bounds, grid)
        for option in options[1:]:
            score = count_onward_moves(option, self.bounds, grid)
            if score < best_score:
                best = option
                best_score = score
        return best

    def step(self) -> Optional[Position]:
        """
        Make a single move.

        Returns:
            The square moved to, or None once the tour has halted.
        """
        if self._state is TourState.HALTED:
            return None

        next_square = self.choose_move(self._board.current)
        if next_square is None:
            self._state = TourState.HALTED
            return None

        self._board.advance(next_square)
        self._path.append(next_square)
        self._moves += 1
        return next_square

    def run(
        self,
        start: Optional[Position] = None,
        on_step: Optional[Callable[[TourBoard], None]] = None,
        verbose: bool = False
    ) -> int:
        """
        Move the knight until no legal move remains.

        The last square reached is left holding the knight (CURRENT).

        Args:
            start: 0-indexed start square; may be omitted if the knight
                is already on the board
            on_step: Called with the board after every move
            verbose: Whether to print a run summary

        Returns:
            Number of moves made
        """
        if start is not None and self._board.current != tuple(start):
            self.place(start)
        elif self._board.current is None:
            raise ValueError("No start square given and no knight on the board")
        elif not self._path or self._path[-1] != self._board.current:
            # Knight was placed on the board after this solver was built
            self._path = [self._board.current]
            self._moves = 0
            self._state = TourState.ACTIVE

        rows, cols = self.bounds

        if verbose:
            print("=" * 60)
            print(f"Warnsdorff Tour ({rows}x{cols})")
            print("=" * 60)
            print(f"Start: {self._path[0]}, Squares: {rows * cols}")
            print("=" * 60)

        start_time = time.time()

        while self.step() is not None:
            if on_step is not None:
                on_step(self._board)

        elapsed = time.time() - start_time

        if verbose:
            print("=" * 60)
            print(f"Halted after {self._moves} moves in {elapsed:.3f}s")
            print(f"Squares visited: {len(self._path)}/{rows * cols}")
            print("=" * 60)

        return self._moves


def solve(
    rows: int,
    cols: int,
    start: Position,
    on_step: Optional[Callable[[TourBoard], None]] = None,
    verbose: bool = False
) -> WarnsdorffSolver:
    """Run a tour on a fresh board and return the finished solver."""
    solver = WarnsdorffSolver(TourBoard(rows, cols))
    solver.run(start, on_step=on_step, verbose=verbose)
    return solver


def sweep_start_squares(rows: int, cols: int) -> np.ndarray:
    """
    Run a tour from every square of a rows × cols board.

    Returns:
        (rows, cols) int array; entry [r, c] is the move count reached
        when starting on (r, c).
    """
    counts = np.zeros((rows, cols), dtype=np.int32)
    for r in range(rows):
        for c in range(cols):
            counts[r, c] = solve(rows, cols, (r, c)).moves
    return counts
