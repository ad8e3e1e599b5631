"""
Utility functions for checking knight's tours.

This module contains:
- Tour validation (bounds, repeats, knight hops)
- Known existence result for open tours on rectangular boards
"""

from typing import Dict, List, Sequence

from .interfaces import Position
from .moves import is_knight_move


# =============================================================================
# Tour Validation
# =============================================================================

def validate_tour(path: Sequence[Position], rows: int, cols: int) -> Dict[str, any]:
    """
    Check that a path is a legal (possibly partial) open knight's tour.

    Args:
        path: Squares in visiting order, start square first
        rows: Number of board rows
        cols: Number of board columns

    Returns:
        Dictionary with validation results.
    """
    errors: List[str] = []
    seen = set()

    for i, (row, col) in enumerate(path):
        if not (0 <= row < rows and 0 <= col < cols):
            errors.append(f"Square {i} ({row}, {col}) is off the board")
        if (row, col) in seen:
            errors.append(f"Square {i} ({row}, {col}) visited twice")
        seen.add((row, col))
        if i > 0 and not is_knight_move(path[i - 1], (row, col)):
            errors.append(f"Hop {i} {tuple(path[i - 1])} -> ({row}, {col}) is not a knight move")

    return {
        'valid': not errors,
        'complete': not errors and len(path) == rows * cols,
        'length': len(path),
        'moves': max(len(path) - 1, 0),
        'errors': errors,
    }


# =============================================================================
# Tour Existence Check
# =============================================================================

def check_tour_exists(rows: int, cols: int) -> Dict[str, any]:
    """
    Check whether an open knight's tour exists on a rows × cols board.

    With m <= n, an open tour exists except when:
    - m is 1 or 2 (the 1×1 board is trivially toured)
    - the board is 3×3, 3×5, 3×6 or 4×4

    A tour existing does not mean Warnsdorff's rule will find it.

    Args:
        rows: Number of board rows
        cols: Number of board columns

    Returns:
        Dictionary with existence information.
    """
    m, n = sorted((rows, cols))

    if m == 1 and n == 1:
        exists, reason = True, 'single square'
    elif m in (1, 2):
        exists, reason = False, f'a {m}-wide board cannot be toured'
    elif (m, n) in ((3, 3), (3, 5), (3, 6), (4, 4)):
        exists, reason = False, f'{m}x{n} has no open tour'
    else:
        exists, reason = True, 'open tour known to exist'

    return {
        'rows': rows,
        'cols': cols,
        'squares': rows * cols,
        'target_moves': rows * cols - 1,
        'exists': exists,
        'reason': reason,
    }
