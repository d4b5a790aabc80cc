"""
Water Pouring Data Models.

This module defines all value types used by the puzzle solver:
- Glass: one container (fixed capacity + current fill level)
- State: ordered tuple of glasses (one full puzzle configuration)
- Fill, Empty, Pour: the closed set of moves
- InvalidOperation, NoSolution, SearchCancelled: error taxonomy

All volumes are integers. Every "mutating" operation returns a new value;
nothing in this module is ever modified in place.

NOTE: StateWithHistory is NOT defined here. It is search bookkeeping and lives
      in bfs_solver/state.py next to the solver that uses it.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Union


class InvalidOperation(ValueError):
    """
    Raised when an operation would drive a glass outside [0, capacity].

    Also raised for moves that reference glasses the State does not have.
    Never expected to surface from a solve: moves are always generated from
    the State they are applied to.
    """
    pass


class NoSolution(RuntimeError):
    """
    Raised when the reachable state space is exhausted without reaching the target.

    Attributes:
        visited: frozenset of every State discovered before giving up
    """

    def __init__(self, visited: Iterable[State]):
        self.visited = frozenset(visited)
        listing = ", ".join(f"[{s}]" for s in sorted(self.visited, key=_state_sort_key))
        super().__init__(f"No solution found, got {{{listing}}}")


class SearchCancelled(Exception):
    """
    Raised when a caller abandons a running search (e.g. its timeout expired).

    Not a search outcome: the solver never catches it, it only stops the loop
    so the worker thread is released.
    """
    pass


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Glass:
    """
    One glass of the puzzle.

    Attributes:
        capacity: Maximum volume, fixed for the glass's lifetime (>= 0)
        current: Current volume, 0 <= current <= capacity

    Notes:
        - Invariant is checked on construction and by every operation
        - Operations never clamp: an overflow or underflow raises InvalidOperation

    Example:
        >>> g = Glass(capacity=5)
        >>> g.fill().minus(2)
        Glass(capacity=5, current=3)
    """
    capacity: int
    current: int = 0

    def __post_init__(self):
        if not _is_int(self.capacity) or not _is_int(self.current):
            raise InvalidOperation(
                f"Glass volumes must be integers, got {self.current!r}/{self.capacity!r}"
            )
        if self.capacity < 0:
            raise InvalidOperation(f"Capacity must be >= 0, got {self.capacity}")
        if not 0 <= self.current <= self.capacity:
            raise InvalidOperation(
                f"Current ({self.current}) must be within [0, {self.capacity}]"
            )

    def __str__(self) -> str:
        return f"{self.current}/{self.capacity}"

    def is_empty(self) -> bool:
        return self.current == 0

    def is_full(self) -> bool:
        return self.current == self.capacity

    def remaining_volume(self) -> int:
        return self.capacity - self.current

    def empty(self) -> Glass:
        return replace(self, current=0)

    def fill(self) -> Glass:
        return replace(self, current=self.capacity)

    def minus(self, value: int) -> Glass:
        """
        Remove content from the glass.

        Raises:
            InvalidOperation: If value is negative or more than current content
        """
        if value < 0:
            raise InvalidOperation(f"Cannot remove a negative volume ({value})")
        if value > self.current:
            raise InvalidOperation(f"Cannot remove {value} from glass {self}")
        return replace(self, current=self.current - value)

    def plus(self, value: int) -> Glass:
        """
        Add content to the glass.

        Raises:
            InvalidOperation: If the glass would spill or go negative
        """
        new_current = self.current + value
        if new_current > self.capacity:
            raise InvalidOperation(f"Cannot add {value} to glass {self}: it would spill")
        if new_current < 0:
            raise InvalidOperation(f"Cannot add {value} to glass {self}: it would go negative")
        return replace(self, current=new_current)


# ========== Moves (closed set) ==========

@dataclass(frozen=True)
class Fill:
    """Fill glass at index to its capacity."""
    index: int

    def __str__(self) -> str:
        return f"Fill({self.index})"


@dataclass(frozen=True)
class Empty:
    """Empty glass at index."""
    index: int

    def __str__(self) -> str:
        return f"Empty({self.index})"


@dataclass(frozen=True)
class Pour:
    """Pour as much as possible from glass from_index into glass to_index."""
    from_index: int
    to_index: int

    def __str__(self) -> str:
        return f"Pour({self.from_index}, {self.to_index})"


Move = Union[Fill, Empty, Pour]


@dataclass(frozen=True)
class State:
    """
    One full configuration of the puzzle.

    Attributes:
        glasses: Tuple of Glass; the position of a glass is its identity

    Notes:
        - Equality and hashing are structural (capacity + current at every index)
        - A list passed as glasses is stored as a tuple
        - Glass count never changes through process()

    Example:
        >>> s = State.of(Glass(5), Glass(3))
        >>> s.process(Fill(0))
        State(glasses=(Glass(capacity=5, current=5), Glass(capacity=3, current=0)))
    """
    glasses: tuple[Glass, ...]

    def __post_init__(self):
        object.__setattr__(self, 'glasses', tuple(self.glasses))

    @classmethod
    def of(cls, *glasses: Glass) -> State:
        return cls(glasses)

    def __str__(self) -> str:
        return ", ".join(str(g) for g in self.glasses)

    def __len__(self) -> int:
        return len(self.glasses)

    def __iter__(self) -> Iterator[Glass]:
        return iter(self.glasses)

    def __getitem__(self, index: int) -> Glass:
        return self.glasses[index]

    def capacities(self) -> tuple[int, ...]:
        return tuple(g.capacity for g in self.glasses)

    def total_volume(self) -> int:
        return sum(g.current for g in self.glasses)

    def available_moves(self) -> list[Move]:
        """
        All legal moves from this state.

        Returns:
            Fill(i) for every glass that is not full, then Empty(i) for every
            glass that is not empty, then Pour(i, j) for every ordered pair of
            distinct glasses where i is not empty and j is not full.

        Notes:
            - Enumeration order is by index and fixed (reproducible search order)
            - Every returned move is guaranteed to process() without error
        """
        moves: list[Move] = [Fill(i) for i, g in enumerate(self.glasses) if not g.is_full()]
        moves.extend(Empty(i) for i, g in enumerate(self.glasses) if not g.is_empty())
        moves.extend(
            Pour(i, j)
            for i, source in enumerate(self.glasses) if not source.is_empty()
            for j, target in enumerate(self.glasses) if i != j and not target.is_full()
        )
        return moves

    def process(self, move: Move) -> State:
        """
        Apply a move and return the resulting state.

        Args:
            move: Fill, Empty or Pour

        Returns:
            New State; glasses not touched by the move are unchanged

        Raises:
            InvalidOperation: Unknown move, index out of range, or Pour onto itself
        """
        if isinstance(move, Fill):
            self._check_index(move.index)
            return self._replace_glasses({move.index: self.glasses[move.index].fill()})

        if isinstance(move, Empty):
            self._check_index(move.index)
            return self._replace_glasses({move.index: self.glasses[move.index].empty()})

        if isinstance(move, Pour):
            self._check_index(move.from_index)
            self._check_index(move.to_index)
            if move.from_index == move.to_index:
                raise InvalidOperation(f"Cannot pour glass {move.from_index} into itself")
            source = self.glasses[move.from_index]
            target = self.glasses[move.to_index]
            amount = min(source.current, target.remaining_volume())
            return self._replace_glasses({
                move.from_index: source.minus(amount),
                move.to_index: target.plus(amount),
            })

        raise InvalidOperation(f"Unknown move: {move!r}")

    def _check_index(self, index: int):
        if not _is_int(index) or not 0 <= index < len(self.glasses):
            raise InvalidOperation(
                f"Glass index {index!r} out of range for {len(self.glasses)} glass(es)"
            )

    def _replace_glasses(self, changes: dict[int, Glass]) -> State:
        return State(tuple(changes.get(i, g) for i, g in enumerate(self.glasses)))


def replay(initial: State, moves: Iterable[Move]) -> list[State]:
    """
    Apply moves one after another.

    Returns:
        Every visited state, starting with initial (len == len(moves) + 1)
    """
    states = [initial]
    for move in moves:
        states.append(states[-1].process(move))
    return states


def _state_sort_key(state: State) -> tuple:
    return tuple((g.capacity, g.current) for g in state.glasses)
