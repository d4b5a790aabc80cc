"""
BFS-Solver Module.

Breadth-first state-space search for the water pouring puzzle.

Public exports:
- StateWithHistory: Frontier entry (state + moves that reached it)
- BFSSolver / solve: Main solver algorithm
- next_states_from_collection, unvisited_states: Level expansion logic
"""

from .state import StateWithHistory
from .solver import BFSSolver, solve
from .expansion import (
    find_solution,
    next_states_from_state,
    next_states_from_collection,
    unvisited_states,
    all_visited_states,
)

__all__ = [
    'StateWithHistory',
    'BFSSolver',
    'solve',
    'find_solution',
    'next_states_from_state',
    'next_states_from_collection',
    'unvisited_states',
    'all_visited_states',
]
