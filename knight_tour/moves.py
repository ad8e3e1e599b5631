"""
Knight move generation.

This module contains:
- The canonical knight offset table
- Candidate generation from a square (pure Python, order-preserving)
- JIT-compiled whole-board accessibility map
"""

import jax
import jax.numpy as jnp
import numpy as np
from typing import List, Tuple

from .board import CellState
from .interfaces import Position


# =============================================================================
# Offset Table
# =============================================================================

# Clockwise from (2, 1). The order is the tie-break order of the tour driver.
KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (2, 1),
    (1, 2),
    (-1, 2),
    (-2, 1),
    (-2, -1),
    (-1, -2),
    (1, -2),
    (2, -1),
)


# =============================================================================
# Candidate Generation
# =============================================================================

def candidates(
    position: Position,
    bounds: Tuple[int, int],
    grid: np.ndarray
) -> List[Position]:
    """
    List the squares one knight move away that are on-board and not visited.

    Args:
        position: Source square (row, col); need not be on the board
        bounds: Board dimensions (rows, cols)
        grid: Cell states, indexed [row, col]

    Returns:
        Candidate squares in KNIGHT_OFFSETS order. Empty at a dead end.
    """
    rows, cols = bounds
    row, col = position
    moves = []
    for dr, dc in KNIGHT_OFFSETS:
        new_row, new_col = row + dr, col + dc
        if 0 <= new_row < rows and 0 <= new_col < cols \
                and grid[new_row, new_col] != CellState.VISITED:
            moves.append((new_row, new_col))
    return moves


def count_onward_moves(
    position: Position,
    bounds: Tuple[int, int],
    grid: np.ndarray
) -> int:
    """Number of legal moves from a square (its Warnsdorff score)."""
    return len(candidates(position, bounds, grid))


def is_knight_move(a: Position, b: Position) -> bool:
    """Check that b is exactly one knight move away from a."""
    return (b[0] - a[0], b[1] - a[1]) in KNIGHT_OFFSETS


# =============================================================================
# Accessibility Map
# =============================================================================

@jax.jit
def accessibility_map(open_mask: jnp.ndarray) -> jnp.ndarray:
    """
    Count non-visited knight neighbours for every cell at once.

    Equivalent to count_onward_moves evaluated on every square, computed by
    summing the open mask shifted by each knight offset.

    Args:
        open_mask: Boolean (rows, cols) array, True where not visited

    Returns:
        int32 (rows, cols) array of onward-move counts
    """
    rows, cols = open_mask.shape
    padded = jnp.pad(open_mask.astype(jnp.int32), 2)
    total = jnp.zeros((rows, cols), dtype=jnp.int32)
    for dr, dc in KNIGHT_OFFSETS:
        total = total + padded[2 + dr:2 + dr + rows, 2 + dc:2 + dc + cols]
    return total
