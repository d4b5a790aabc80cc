"""
BFS-Solver Main Loop.

This module implements BFSSolver.solve() - the breadth-first search over the
implicit graph of puzzle states.

Key Concepts:
- Level-by-level expansion: all states at distance k before any at k+1,
  so the first history found for the target is of minimal length
- Visited set: states are never expanded twice (cycle avoidance)
- Exhaustion: a level that discovers no new state means the target is
  unreachable -> NoSolution
- Cancellation: an optional threading.Event is checked once per level; when
  set, the search stops with SearchCancelled

The state space is finite (product of capacity_i + 1 over all glasses) and the
visited set grows strictly every level, so the loop always terminates.
"""

from __future__ import annotations
import logging
import threading
from typing import Optional

from ..models import State, Move, NoSolution, SearchCancelled
from .state import StateWithHistory
from .expansion import (
    find_solution,
    next_states_from_collection,
    unvisited_states,
    all_visited_states,
)
from waterpouring.performance import timed

logger = logging.getLogger(__name__)


class BFSSolver:
    """Shortest move sequence between two states by breadth-first search."""

    @timed
    def solve(self, from_state: State, to_state: State,
              cancel_event: Optional[threading.Event] = None) -> list[Move]:
        """
        Solve Water Pouring Puzzle.

        Args:
            from_state: Initial state
            to_state: Expected state
            cancel_event: Stops the search when set (checked once per level)

        Returns:
            Shortest list of moves transforming from_state into to_state
            (empty list if both are equal)

        Raises:
            NoSolution: If to_state is not reachable from from_state (this
                includes a to_state whose capacities differ)
            ValueError: If the two states do not have the same number of glasses
            SearchCancelled: If cancel_event was set before the search ended

        Algorithm:
            1. frontier = [(from_state, [])], visited = {from_state}
            2. Return history if a frontier entry matches to_state
            3. Expand every entry by every available move
            4. Drop already visited states -> next frontier
            5. Empty next frontier -> NoSolution (space exhausted)
            6. visited += next frontier, repeat from 2
        """
        _check_same_length(from_state, to_state)

        frontier = [StateWithHistory.seed(from_state)]
        visited = frozenset([from_state])

        while True:
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Search [%s] -> [%s] cancelled after %d state(s)",
                            from_state, to_state, len(visited))
                raise SearchCancelled(f"Search cancelled after {len(visited)} state(s)")

            solution = find_solution(frontier, to_state)
            if solution is not None:
                logger.info("Solved [%s] -> [%s] in %d move(s), %d state(s) visited",
                            from_state, to_state, len(solution), len(visited))
                return solution

            next_frontier = unvisited_states(next_states_from_collection(frontier), visited)

            # No new state discovered: everything reachable has been explored
            if not next_frontier:
                logger.info("No solution for [%s] -> [%s] after %d state(s)",
                            from_state, to_state, len(visited))
                raise NoSolution(visited)

            visited = all_visited_states(visited, next_frontier)
            frontier = next_frontier

            logger.debug("Depth %d: frontier=%d visited=%d",
                         frontier[0].depth, len(frontier), len(visited))


def _check_same_length(from_state: State, to_state: State):
    if len(from_state) != len(to_state):
        raise ValueError(
            f"Initial [{from_state}] and expected [{to_state}] must have the same number "
            f"of glasses ({len(from_state)} != {len(to_state)})"
        )


_default_solver = BFSSolver()


def solve(from_state: State, to_state: State,
          cancel_event: Optional[threading.Event] = None) -> list[Move]:
    """Module-level shortcut for BFSSolver().solve()."""
    return _default_solver.solve(from_state, to_state, cancel_event)
