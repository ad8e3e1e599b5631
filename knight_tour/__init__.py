"""
Warnsdorff Knight's Tour Package

This package computes open knight's tours on rectangular boards with
Warnsdorff's rule: always move to the square with the fewest onward moves,
breaking ties in a fixed offset order.

Modules:
    - interfaces: Abstract base classes for Board and Solver
    - board: Board state (cell states on a numpy grid)
    - moves: Knight move generation and JIT accessibility map
    - solver: Warnsdorff tour driver
    - utils: Tour validation and existence checks
    - config: Configuration management
    - prompt: Interactive input of board size and start square
    - visualize: Text rendering, plots and result saving
"""

from .interfaces import BoardInterface, SolverInterface, Position
from .board import CellState, TourBoard
from .moves import KNIGHT_OFFSETS, candidates, count_onward_moves, is_knight_move, accessibility_map
from .solver import TourState, WarnsdorffSolver, solve, sweep_start_squares
from .utils import validate_tour, check_tour_exists
from .config import Config
from .prompt import input_integer, get_pair_from_user, prompt_board_size, prompt_start_square
from .visualize import (
    DEFAULT_GLYPHS,
    TOUR_COMPLETED,
    NO_MORE_MOVES,
    render_board,
    print_board,
    outcome_message,
    plot_tour,
    plot_accessibility,
    plot_success_heatmap,
    save_tour_format,
    save_run_results,
    save_sweep_results,
    create_run_output_folder,
)

__all__ = [
    'BoardInterface',
    'SolverInterface',
    'Position',
    'CellState',
    'TourBoard',
    'KNIGHT_OFFSETS',
    'candidates',
    'count_onward_moves',
    'is_knight_move',
    'accessibility_map',
    'TourState',
    'WarnsdorffSolver',
    'solve',
    'sweep_start_squares',
    'validate_tour',
    'check_tour_exists',
    'Config',
    'input_integer',
    'get_pair_from_user',
    'prompt_board_size',
    'prompt_start_square',
    'DEFAULT_GLYPHS',
    'TOUR_COMPLETED',
    'NO_MORE_MOVES',
    'render_board',
    'print_board',
    'outcome_message',
    'plot_tour',
    'plot_accessibility',
    'plot_success_heatmap',
    'save_tour_format',
    'save_run_results',
    'save_sweep_results',
    'create_run_output_folder',
]
