"""
Visualization functions for the Warnsdorff knight's tour.

This module provides:
- Text rendering of the board, one fixed-width glyph per cell
- Exit reporting (tour completed or stuck)
- Tour path and accessibility plots
- Start-square success heatmaps for sweeps
- Save functionality with metadata
"""

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as patches
from typing import Dict, Optional, Any, Sequence, Tuple
from pathlib import Path
import json
from datetime import datetime

from .board import CellState
from .moves import accessibility_map


DEFAULT_GLYPHS: Dict[str, str] = {
    'current': '[K]',
    'visited': '[/]',
    'unvisited': '[ ]',
}

TOUR_COMPLETED = "Tour Completed!"
NO_MORE_MOVES = "No More Moves!"


# =============================================================================
# Text Rendering
# =============================================================================

def render_board(board, glyphs: Optional[Dict[str, str]] = None) -> str:
    """
    Render the board as text, one line per row.

    Args:
        board: Board with get_grid() method
        glyphs: Mapping of 'current', 'visited', 'unvisited' to cell glyphs

    Returns:
        Rendered board without a trailing newline.
    """
    glyphs = glyphs or DEFAULT_GLYPHS
    lookup = {
        CellState.CURRENT: glyphs['current'],
        CellState.VISITED: glyphs['visited'],
        CellState.UNVISITED: glyphs['unvisited'],
    }
    grid = board.get_grid()
    return "\n".join(
        "".join(lookup[CellState(int(cell))] for cell in row)
        for row in grid
    )


def print_board(board, glyphs: Optional[Dict[str, str]] = None) -> None:
    """Print the board followed by a blank line."""
    print(render_board(board, glyphs))
    print()


def outcome_message(moves: int, rows: int, cols: int) -> str:
    """Final report for a halted tour."""
    return TOUR_COMPLETED if moves == rows * cols - 1 else NO_MORE_MOVES


# =============================================================================
# Plots
# =============================================================================

def _draw_checkerboard(ax, rows: int, cols: int) -> None:
    """Draw light/dark squares with row 0 at the top."""
    for r in range(rows):
        for c in range(cols):
            colour = '#f0d9b5' if (r + c) % 2 == 0 else '#b58863'
            ax.add_patch(patches.Rectangle((c, r), 1, 1, facecolor=colour, edgecolor='none'))

    ax.set_xlim(0, cols)
    ax.set_ylim(0, rows)
    ax.set_aspect('equal')
    ax.invert_yaxis()
    ax.set_xticks([c + 0.5 for c in range(cols)])
    ax.set_xticklabels([str(c + 1) for c in range(cols)])
    ax.set_yticks([r + 0.5 for r in range(rows)])
    ax.set_yticklabels([str(r + 1) for r in range(rows)])
    ax.tick_params(length=0)


def _finish(fig, filename: Optional[str], show: bool) -> Optional[str]:
    plt.tight_layout()

    if filename:
        fig.savefig(filename, dpi=150, bbox_inches='tight')
        if not show:
            plt.close(fig)
        return filename

    if show:
        plt.show()

    return None


def plot_tour(
    path: Sequence[Tuple[int, int]],
    rows: int,
    cols: int,
    filename: Optional[str] = None,
    show: bool = False,
    metadata: Optional[Dict] = None
) -> Optional[str]:
    """
    Plot the knight's path over the board with move numbers.

    Args:
        path: Squares in visiting order, start first
        rows: Number of board rows
        cols: Number of board columns
        filename: Optional path to save the figure
        show: Whether to display the plot
        metadata: Optional dict with run parameters

    Returns:
        Filename if saved, None otherwise
    """
    fig, ax = plt.subplots(figsize=(max(4, cols), max(4, rows)))
    _draw_checkerboard(ax, rows, cols)

    if path:
        xs = [c + 0.5 for _, c in path]
        ys = [r + 0.5 for r, _ in path]
        ax.plot(xs, ys, color='navy', linewidth=1.5, alpha=0.7)
        ax.scatter([xs[0]], [ys[0]], s=200, color='green', zorder=3, label='Start')
        ax.scatter([xs[-1]], [ys[-1]], s=200, color='red', zorder=3, label='End')

        for i, (r, c) in enumerate(path):
            ax.text(c + 0.5, r + 0.5, str(i + 1), ha='center', va='center',
                    fontsize=9, fontweight='bold', color='black', zorder=4)
        ax.legend(loc='upper right', bbox_to_anchor=(1.0, -0.05), ncol=2, fontsize=8)

    moves = max(len(path) - 1, 0)
    title = f"Warnsdorff Tour {rows}x{cols}: {outcome_message(moves, rows, cols)}"
    if metadata and 'start' in metadata:
        title += f"\nStart={metadata['start']} | Moves={moves}/{rows * cols - 1}"
    ax.set_title(title, fontsize=11, fontweight='bold')

    return _finish(fig, filename, show)


def plot_accessibility(
    board,
    filename: Optional[str] = None,
    show: bool = False
) -> Optional[str]:
    """
    Heatmap of onward-move counts for every square of the board.

    Args:
        board: Board with open_mask() method
        filename: Optional path to save the figure
        show: Whether to display the plot

    Returns:
        Filename if saved, None otherwise
    """
    counts = np.asarray(accessibility_map(board.open_mask()))

    fig, ax = plt.subplots(figsize=(max(4, board.cols), max(4, board.rows)))
    im = ax.imshow(counts, cmap='viridis', vmin=0, vmax=8)
    for r in range(board.rows):
        for c in range(board.cols):
            ax.text(c, r, str(int(counts[r, c])), ha='center', va='center',
                    color='white', fontsize=10)

    ax.set_xticks(range(board.cols))
    ax.set_xticklabels([str(c + 1) for c in range(board.cols)])
    ax.set_yticks(range(board.rows))
    ax.set_yticklabels([str(r + 1) for r in range(board.rows)])
    ax.set_title('Onward Moves per Square', fontsize=11, fontweight='bold')
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    return _finish(fig, filename, show)


def plot_success_heatmap(
    completed: np.ndarray,
    filename: Optional[str] = None,
    show: bool = False,
    title: Optional[str] = None
) -> Optional[str]:
    """
    Show which start squares lead Warnsdorff's rule to a full tour.

    Args:
        completed: (rows, cols) array of move counts per start square
        filename: Optional path to save the figure
        show: Whether to display the plot
        title: Optional plot title

    Returns:
        Filename if saved, None otherwise
    """
    rows, cols = completed.shape
    target = rows * cols - 1

    fig, ax = plt.subplots(figsize=(max(4, cols), max(4, rows)))
    im = ax.imshow(completed, cmap='RdYlGn', vmin=0, vmax=max(target, 1))
    for r in range(rows):
        for c in range(cols):
            ax.text(c, r, str(int(completed[r, c])), ha='center', va='center', fontsize=9)

    ax.set_xticks(range(cols))
    ax.set_xticklabels([str(c + 1) for c in range(cols)])
    ax.set_yticks(range(rows))
    ax.set_yticklabels([str(r + 1) for r in range(rows)])

    rate = float(np.mean(completed == target))
    ax.set_title(title or f"Moves by Start Square {rows}x{cols} (complete: {rate:.0%})",
                 fontsize=11, fontweight='bold')
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    return _finish(fig, filename, show)


# =============================================================================
# Saving
# =============================================================================

def save_tour_format(path: Sequence[Tuple[int, int]], filename: str) -> str:
    """
    Save a tour as one 1-indexed "row,col" line per square, start first.

    No headers, no comments - just the squares.

    Args:
        path: Squares in visiting order (0-indexed)
        filename: Path to save the file

    Returns:
        Path to saved file
    """
    with open(filename, 'w') as f:
        for r, c in path:
            f.write(f"{int(r) + 1},{int(c) + 1}\n")

    return filename


def create_run_output_folder(
    base_output_dir: str,
    rows: int,
    cols: int,
    start: Tuple[int, int]
) -> str:
    """
    Create a timestamped output folder for a run.

    Structure: base_output_dir/{rows}x{cols}/run_{datetime}_r{row}c{col}/
    (start square 1-indexed)

    Returns:
        Path to created folder
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_folder = (Path(base_output_dir) / f"{rows}x{cols}"
                  / f"run_{timestamp}_r{start[0] + 1}c{start[1] + 1}")
    run_folder.mkdir(parents=True, exist_ok=True)
    return str(run_folder)


def _json_ready(metadata: Dict[str, Any]) -> Dict[str, Any]:
    json_metadata = {}
    for k, v in metadata.items():
        if isinstance(v, np.ndarray):
            json_metadata[k] = v.tolist()
        elif isinstance(v, np.integer):
            json_metadata[k] = int(v)
        elif isinstance(v, np.floating):
            json_metadata[k] = float(v)
        elif isinstance(v, tuple):
            json_metadata[k] = list(v)
        else:
            json_metadata[k] = v
    return json_metadata


def save_run_results(
    output_dir: str,
    solver,
    metadata: Dict,
    save_plots: bool = True
) -> Dict[str, str]:
    """
    Save all results for a single tour to a timestamped folder.

    Always saves:
    - tour.txt: Squares in visiting order (1-indexed row,col)
    - metadata.json: Run parameters and results

    Optionally saves:
    - tour.png: Path plot
    - accessibility.png: Onward moves of the final board

    Args:
        output_dir: Base output directory
        solver: Finished solver with get_board(), path and moves
        metadata: Dict with all run parameters
        save_plots: Whether to save plots

    Returns:
        Dict mapping result type to filename
    """
    board = solver.get_board()
    path = solver.path

    run_folder = create_run_output_folder(output_dir, board.rows, board.cols, path[0])
    run_path = Path(run_folder)

    saved_files = {'run_folder': run_folder}

    tour_txt = run_path / "tour.txt"
    save_tour_format(path, str(tour_txt))
    saved_files['tour_txt'] = str(tour_txt)

    json_metadata = _json_ready(metadata)
    json_metadata['rows'] = board.rows
    json_metadata['cols'] = board.cols
    json_metadata['moves'] = solver.moves
    json_metadata['completed'] = solver.is_complete()
    json_metadata['outcome'] = outcome_message(solver.moves, board.rows, board.cols)
    json_metadata['path'] = [[int(r), int(c)] for r, c in path]
    json_metadata['timestamp'] = datetime.now().isoformat()

    json_file = run_path / "metadata.json"
    with open(json_file, 'w') as f:
        json.dump(json_metadata, f, indent=2)
    saved_files['metadata'] = str(json_file)

    if save_plots:
        tour_file = run_path / "tour.png"
        plot_tour(path, board.rows, board.cols, filename=str(tour_file), metadata=metadata)
        saved_files['tour_png'] = str(tour_file)

        access_file = run_path / "accessibility.png"
        plot_accessibility(board, filename=str(access_file))
        saved_files['accessibility_png'] = str(access_file)

    return saved_files


def save_sweep_results(
    output_dir: str,
    results: Dict[Tuple[int, int], np.ndarray],
    metadata: Dict,
    save_plots: bool = True
) -> Dict[str, str]:
    """
    Save move counts for every start square of every swept board size.

    Args:
        output_dir: Directory to save results
        results: Map of (rows, cols) to per-start-square move counts
        metadata: Dict with sweep parameters
        save_plots: Whether to save heatmaps

    Returns:
        Dict mapping result type to filename
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    saved_files = {}
    summary = {**_json_ready(metadata), 'boards': {}}

    for (rows, cols), counts in results.items():
        prefix = f"sweep_{rows}x{cols}"
        target = rows * cols - 1

        npy_file = output_path / f"{prefix}_moves.npy"
        np.save(str(npy_file), counts)
        saved_files[f'{rows}x{cols}_npy'] = str(npy_file)

        if save_plots:
            png_file = output_path / f"{prefix}_heatmap.png"
            plot_success_heatmap(counts, filename=str(png_file))
            saved_files[f'{rows}x{cols}_heatmap'] = str(png_file)

        summary['boards'][f'{rows}x{cols}'] = {
            'target_moves': target,
            'completed_starts': int(np.sum(counts == target)),
            'total_starts': int(counts.size),
            'success_rate': float(np.mean(counts == target)),
            'min_moves': int(np.min(counts)),
            'moves': counts.tolist(),
        }

    summary['timestamp'] = datetime.now().isoformat()
    json_file = output_path / "sweep_summary.json"
    with open(json_file, 'w') as f:
        json.dump(summary, f, indent=2)
    saved_files['summary'] = str(json_file)

    return saved_files
