"""
BFS Expansion.

Helpers that compute one breadth-first level from the previous one.

Key Concepts:
- Every frontier entry is expanded by every move its state allows
- Candidates whose state was already visited are dropped
- Within one level, only the first candidate reaching a state is kept
  (enumeration order of State.available_moves())
"""

from __future__ import annotations
from typing import Iterable, Optional

from ..models import State, Move
from .state import StateWithHistory


def find_solution(
    frontier: Iterable[StateWithHistory],
    expected: State
) -> Optional[list[Move]]:
    """
    Look for the expected state in a frontier.

    Returns:
        The history of the first matching entry, or None if absent
    """
    for entry in frontier:
        if entry.state == expected:
            return list(entry.history)
    return None


def next_states_from_state(entry: StateWithHistory) -> list[StateWithHistory]:
    """All successors of one entry, one per available move."""
    return [entry.advance(move) for move in entry.state.available_moves()]


def next_states_from_collection(
    frontier: Iterable[StateWithHistory]
) -> list[StateWithHistory]:
    """Successors of every entry of a frontier, flattened in frontier order."""
    successors = []
    for entry in frontier:
        successors.extend(next_states_from_state(entry))
    return successors


def unvisited_states(
    candidates: Iterable[StateWithHistory],
    visited: frozenset[State]
) -> list[StateWithHistory]:
    """
    Filter candidates down to the next frontier.

    Args:
        candidates: Successors of the current frontier
        visited: States discovered at any previous depth

    Returns:
        Candidates with a never-seen state, first occurrence per state only
    """
    seen = set()
    fresh = []
    for entry in candidates:
        if entry.state in visited or entry.state in seen:
            continue
        seen.add(entry.state)
        fresh.append(entry)
    return fresh


def all_visited_states(
    visited: frozenset[State],
    new_entries: Iterable[StateWithHistory]
) -> frozenset[State]:
    """Previous visited states plus the states of new_entries (new frozenset)."""
    return visited | {entry.state for entry in new_entries}
