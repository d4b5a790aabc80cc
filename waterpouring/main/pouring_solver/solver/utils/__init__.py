"""
Solver Utility Functions.

This module provides utility functions for the puzzle solver:
- conversion: State text format, move JSON encoding
"""

from .conversion import (
    parse_glass,
    parse_state,
    format_state,
    state_from_json,
    move_to_dict,
    move_from_dict,
)

__all__ = [
    "parse_glass",
    "parse_state",
    "format_state",
    "state_from_json",
    "move_to_dict",
    "move_from_dict",
]
