"""
Search State for Breadth-First Search.

This module defines StateWithHistory - one frontier entry of the search:
a puzzle State paired with the moves that produced it from the initial State.

IMPORTANT: StateWithHistory is defined ONLY here. It is internal bookkeeping of
           the solver and never leaves a solve() call.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..models import State, Move


@dataclass(frozen=True)
class StateWithHistory:
    """
    Frontier entry for breadth-first search.

    Attributes:
        state: Puzzle state reached
        history: Moves applied to the initial state to reach it (in order)

    Notes:
        - depth == len(history); every entry of one frontier has the same depth
        - Immutable: advance() returns a new entry

    Example:
        >>> entry = StateWithHistory.seed(State.of(Glass(5), Glass(3)))
        >>> entry.advance(Fill(0)).history
        (Fill(index=0),)
    """
    state: State
    history: tuple[Move, ...] = ()

    @classmethod
    def seed(cls, state: State) -> StateWithHistory:
        """Entry for the initial state (empty history)."""
        return cls(state=state)

    @property
    def depth(self) -> int:
        return len(self.history)

    def advance(self, move: Move) -> StateWithHistory:
        return StateWithHistory(self.state.process(move), self.history + (move,))
