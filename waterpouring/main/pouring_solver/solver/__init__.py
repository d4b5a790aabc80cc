"""
Water Pouring Solver: Breadth-First Search over Glass States.

Main API:
    solve_puzzle(from_text, to_text) -> list[Move]
    BFSSolver().solve(from_state, to_state) -> list[Move]

Both raise NoSolution when the expected state cannot be reached.
"""

from typing import List
from .models import (
    Glass,
    State,
    Move,
    Fill,
    Empty,
    Pour,
    InvalidOperation,
    NoSolution,
    SearchCancelled,
    replay,
)
from .bfs_solver import BFSSolver, StateWithHistory, solve
from .utils.conversion import parse_state, format_state


__all__ = [
    # Main API
    "solve_puzzle",
    "solve",
    "BFSSolver",
    "parse_state",
    "format_state",
    # Models
    "Glass",
    "State",
    "Move",
    "Fill",
    "Empty",
    "Pour",
    "StateWithHistory",
    "replay",
    # Errors
    "InvalidOperation",
    "NoSolution",
    "SearchCancelled",
]


def solve_puzzle(from_text: str, to_text: str) -> List[Move]:
    """
    Solve a puzzle given in text format.

    Args:
        from_text: Initial state, e.g. "0/5, 0/3"
        to_text: Expected state, e.g. "4/5, 0/3"

    Returns:
        Shortest list of moves

    Raises:
        ValueError: If either text is malformed
        NoSolution: If the expected state is unreachable

    Example:
        >>> [str(m) for m in solve_puzzle("0/5, 0/3", "5/5, 0/3")]
        ['Fill(0)']
    """
    return solve(parse_state(from_text), parse_state(to_text))
