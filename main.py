"""
Main entry point for the Warnsdorff Knight's Tour.

This script asks for a board size and a starting square (unless they are
given in the config file or on the command line), then moves the knight with
Warnsdorff's rule, printing the board after every move.

Usage:
    python main.py
    python main.py --rows 5 --cols 5 --start 1 1
    python main.py --config config.yaml --quiet --save
    python main.py --mode sweep --size 5 5 --size 8 8
"""

import argparse
import sys
from typing import Dict, List, Optional, Tuple

import numpy as np

from knight_tour.config import Config
from knight_tour.solver import WarnsdorffSolver, sweep_start_squares
from knight_tour.board import TourBoard
from knight_tour.prompt import prompt_board_size, prompt_start_square
from knight_tour.utils import check_tour_exists
from knight_tour.visualize import (
    print_board,
    outcome_message,
    plot_tour,
    plot_accessibility,
    plot_success_heatmap,
    save_run_results,
    save_sweep_results,
)


INTRO = ("This program attempts an open Knight Tour using Warnsdorff's algorithm. "
         "Please specify square/rectangular board dimensions, and the Knight's starting square.")


# =============================================================================
# Runner Classes
# =============================================================================

class TourRunner:
    """
    Orchestrates tour execution based on configuration.
    """

    def __init__(self, config: Config, input_fn=input):
        """
        Initialize runner with configuration.

        Args:
            config: Configuration instance
            input_fn: Line reader used for interactive prompts
        """
        self.config = config
        self.input_fn = input_fn

    def resolve_board(self) -> Tuple[int, int, Tuple[int, int]]:
        """
        Fill in board size and start square, prompting for missing values.

        Returns:
            (rows, cols, start) with start 0-indexed
        """
        config = self.config
        rows, cols = prompt_board_size(
            config.min_size, config.max_size, self.input_fn,
            rows=config.rows, cols=config.cols,
        )

        start = config.start
        if start is None or not (0 <= start[0] < rows and 0 <= start[1] < cols):
            start = prompt_start_square(rows, cols, self.input_fn)

        return rows, cols, start

    def run_single(self, rows: int, cols: int, start: Tuple[int, int]) -> WarnsdorffSolver:
        """
        Run one tour, printing the board before the first move and after each move.

        Args:
            rows: Number of board rows
            cols: Number of board columns
            start: 0-indexed start square

        Returns:
            The finished solver
        """
        glyphs = self.config.glyphs
        board = TourBoard(rows, cols)
        solver = WarnsdorffSolver(board)
        solver.place(start)

        on_step = None
        if self.config.show_steps:
            print_board(board, glyphs)
            on_step = lambda b: print_board(b, glyphs)

        solver.run(on_step=on_step, verbose=self.config.verbose)
        return solver

    def run_sweep(self) -> Dict[Tuple[int, int], np.ndarray]:
        """
        Run a tour from every start square of every configured size.

        Returns:
            Map of (rows, cols) to per-start-square move counts
        """
        results = {}
        for rows, cols in self.config.sizes:
            print(f"\n{'#'*60}")
            print(f"# Board {rows}x{cols}")
            print(f"{'#'*60}")
            self.print_existence(rows, cols)

            counts = sweep_start_squares(rows, cols)
            results[(rows, cols)] = counts
            self._print_sweep_summary(rows, cols, counts)
        return results

    def print_existence(self, rows: int, cols: int) -> None:
        """Print whether an open tour exists on a rows × cols board."""
        info = check_tour_exists(rows, cols)
        print(f"\nTour Check for {info['rows']}x{info['cols']}:")
        print(f"  Squares: {info['squares']}, Moves needed: {info['target_moves']}")
        if info['exists']:
            print(f"  ✓ An open tour exists ({info['reason']})")
        else:
            print(f"  ✗ No open tour: {info['reason']}")
        print()

    def _print_sweep_summary(self, rows: int, cols: int, counts: np.ndarray) -> None:
        """Print summary for a start-square sweep."""
        target = rows * cols - 1
        completed = int(np.sum(counts == target))
        print(f"{'='*60}")
        print(f"Summary for {rows}x{cols} ({counts.size} start squares)")
        print(f"{'='*60}")
        print(f"Completed tours: {completed}/{counts.size} ({completed / counts.size:.1%})")
        print(f"Average moves: {np.mean(counts):.2f} / {target}")
        print(f"Fewest moves: {int(np.min(counts))}")
        print(f"{'='*60}")


# =============================================================================
# CLI Interface
# =============================================================================

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Warnsdorff Knight's Tour",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Config file
    parser.add_argument(
        '--config', '-c',
        type=str,
        default='config.yaml',
        help='Path to YAML configuration file'
    )

    # Override options
    parser.add_argument(
        '--rows', '-r',
        type=int,
        help='Number of board rows (overrides config)'
    )

    parser.add_argument(
        '--cols', '-k',
        type=int,
        help='Number of board columns (overrides config)'
    )

    parser.add_argument(
        '--start', '-s',
        type=int,
        nargs=2,
        metavar=('ROW', 'COL'),
        help='1-indexed starting square (overrides config)'
    )

    parser.add_argument(
        '--mode',
        type=str,
        choices=['single', 'sweep'],
        help='Execution mode (overrides config)'
    )

    parser.add_argument(
        '--size', '-n',
        type=int,
        nargs=2,
        action='append',
        metavar=('ROWS', 'COLS'),
        help='Board size for sweep mode, repeatable (overrides config)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only print the final board, not every step'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--save',
        action='store_true',
        help='Save results (plots and data)'
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=str,
        help='Output directory for saved results'
    )

    parser.add_argument(
        '--show',
        action='store_true',
        help='Show plots interactively'
    )

    return parser.parse_args(argv)


def load_config_with_overrides(args: argparse.Namespace) -> Config:
    """
    Load configuration from file and apply CLI overrides.

    Args:
        args: Parsed command line arguments

    Returns:
        Configuration with overrides applied
    """
    try:
        config = Config.from_yaml(args.config)
    except FileNotFoundError:
        print(f"Warning: Config file '{args.config}' not found, using defaults")
        config = Config()
    except Exception as e:
        print(f"Error loading config: {e}")
        sys.exit(1)

    # Apply CLI overrides
    if args.rows:
        config.rows = args.rows
    if args.cols:
        config.cols = args.cols
    if args.start:
        config.start_row, config.start_col = args.start
    if args.mode:
        config.mode = args.mode
    if args.size:
        config.sizes = [list(s) for s in args.size]
    if args.quiet:
        config.show_steps = False
    if args.verbose:
        config.verbose = True
    if args.save:
        config.save = True
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.show:
        config.show = True

    return config


def main(argv: Optional[List[str]] = None, input_fn=input):
    """
    Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
        input_fn: Line reader used for interactive prompts
    """
    args = parse_args(argv)

    # Load configuration
    config = load_config_with_overrides(args)

    # Validate
    errors = config.validate()
    if errors:
        print("Configuration errors:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    runner = TourRunner(config, input_fn=input_fn)

    if config.mode == 'sweep':
        config.print_summary()
        results = runner.run_sweep()
        saved = save_sweep_results(
            config.output_dir, results, {'sizes': config.sizes}, save_plots=config.save
        )
        print(f"\nSummary saved to {saved['summary']}")
        if config.show:
            for counts in results.values():
                plot_success_heatmap(counts, show=True)
        return

    print(INTRO)
    if config.verbose:
        config.print_summary()

    try:
        rows, cols, start = runner.resolve_board()
    except EOFError:
        print("\nNo input received, exiting.")
        sys.exit(1)
    if config.verbose:
        runner.print_existence(rows, cols)

    solver = runner.run_single(rows, cols, start)

    if not config.show_steps:
        print_board(solver.get_board(), config.glyphs)

    print(outcome_message(solver.moves, rows, cols))

    metadata = {
        'rows': rows,
        'cols': cols,
        'start': [start[0] + 1, start[1] + 1],
    }

    if config.save:
        saved = save_run_results(config.output_dir, solver, metadata, save_plots=True)
        print(f"Saved to {saved['run_folder']}/")

    if config.show:
        plot_tour(solver.path, rows, cols, show=True, metadata=metadata)
        plot_accessibility(solver.get_board(), show=True)


if __name__ == "__main__":
    main()
