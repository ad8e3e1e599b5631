"""
Interactive input for board dimensions and the knight's starting square.

Malformed or out-of-range input is not an error: the user is asked again
until a value within the inclusive bounds is entered.
"""

from typing import Callable, Optional, Tuple


def input_integer(
    lower: int,
    upper: int,
    text: str,
    input_fn: Callable[[str], str] = input
) -> int:
    """
    Read an integer within [lower, upper], re-prompting until one is given.

    Args:
        lower: Smallest accepted value
        upper: Largest accepted value
        text: Prompt shown to the user
        input_fn: Line reader (defaults to the builtin input)

    Returns:
        The accepted integer.
    """
    while True:
        line = input_fn(text)
        try:
            value = int(line.strip())
        except ValueError:
            continue
        if lower <= value <= upper:
            return value


def get_pair_from_user(
    lower1: int,
    upper1: int,
    lower2: int,
    upper2: int,
    text1: str,
    text2: str,
    offset: int = 0,
    input_fn: Callable[[str], str] = input
) -> Tuple[int, int]:
    """
    Read two bounded integers, subtracting offset from each.

    An offset of 1 turns a 1-indexed square into a 0-indexed one.
    """
    first = input_integer(lower1, upper1, text1, input_fn) - offset
    second = input_integer(lower2, upper2, text2, input_fn) - offset
    return first, second


def prompt_board_size(
    min_size: int = 3,
    max_size: int = 10,
    input_fn: Callable[[str], str] = input,
    rows: Optional[int] = None,
    cols: Optional[int] = None
) -> Tuple[int, int]:
    """Ask for the number of rows and columns, skipping any already known."""
    if rows is None:
        rows = input_integer(
            min_size, max_size,
            f"Enter number of rows (between {min_size}-{max_size}):",
            input_fn,
        )
    if cols is None:
        cols = input_integer(
            min_size, max_size,
            f"Enter number of columns (between {min_size}-{max_size}):",
            input_fn,
        )
    return rows, cols


def prompt_start_square(
    rows: int,
    cols: int,
    input_fn: Callable[[str], str] = input
) -> Tuple[int, int]:
    """Ask for the knight's 1-indexed starting square; returns it 0-indexed."""
    return get_pair_from_user(
        1, rows, 1, cols,
        "Enter starting row of knight:",
        "Enter starting column of knight:",
        offset=1,
        input_fn=input_fn,
    )
