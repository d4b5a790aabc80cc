"""
Tests for the water pouring value types (Glass, State, moves).

Test Groups:
- G1-G9: Glass operations and invariants
- M1-M10: State.available_moves() / State.process()
"""

import pytest

from waterpouring.main.pouring_solver.solver.models import (
    Glass, State, Fill, Empty, Pour, InvalidOperation, NoSolution, replay
)


# ========== Fixtures ==========

@pytest.fixture
def glasses():
    """A spread of glasses: empty, partial, full, zero-capacity."""
    return [
        Glass(capacity=5, current=0),
        Glass(capacity=5, current=2),
        Glass(capacity=3, current=3),
        Glass(capacity=0, current=0),
        Glass(capacity=8, current=7),
    ]


@pytest.fixture
def two_glasses():
    return State.of(Glass(capacity=5), Glass(capacity=3))


def all_states(capacities):
    """Every state for the given capacities (small spaces only)."""
    states = [()]
    for capacity in capacities:
        states = [s + (Glass(capacity, c),) for s in states for c in range(capacity + 1)]
    return [State(s) for s in states]


# ========== Test Group G: Glass ==========

def test_G1_fill_and_empty(glasses):
    """G1: fill() is full, empty() is empty"""
    for g in glasses:
        assert g.fill().is_full()
        assert g.empty().is_empty()
        assert g.fill().capacity == g.capacity


def test_G2_remaining_volume(glasses):
    """G2: remaining_volume == capacity - current"""
    for g in glasses:
        assert g.remaining_volume() == g.capacity - g.current
        assert g.remaining_volume() >= 0


def test_G3_minus_in_range(glasses):
    """G3: minus(v) for 0 <= v <= current"""
    for g in glasses:
        for v in range(g.current + 1):
            assert g.minus(v).current == g.current - v


def test_G4_minus_too_much(glasses):
    """G4: minus(v) with v > current fails"""
    for g in glasses:
        with pytest.raises(InvalidOperation):
            g.minus(g.current + 1)
    with pytest.raises(InvalidOperation):
        Glass(capacity=5, current=2).minus(-1)


def test_G5_plus(glasses):
    """G5: plus(v) succeeds iff 0 <= current + v <= capacity"""
    for g in glasses:
        for v in range(-g.current - 2, g.remaining_volume() + 3):
            if 0 <= g.current + v <= g.capacity:
                assert g.plus(v).current == g.current + v
            else:
                with pytest.raises(InvalidOperation):
                    g.plus(v)


def test_G6_operations_do_not_mutate():
    """G6: Glass is immutable, operations return new values"""
    g = Glass(capacity=5, current=2)
    g.fill()
    g.empty()
    g.plus(1)
    g.minus(1)
    assert g == Glass(capacity=5, current=2)

    with pytest.raises(AttributeError):
        g.current = 4


def test_G7_structural_equality():
    """G7: Equal glasses compare and hash equal"""
    assert Glass(5, 2) == Glass(capacity=5, current=2)
    assert hash(Glass(5, 2)) == hash(Glass(5, 2))
    assert Glass(5, 2) != Glass(5, 3)
    assert Glass(5, 2) != Glass(4, 2)


@pytest.mark.parametrize("capacity, current", [
    (-1, 0),    # negative capacity
    (3, 4),     # overfull
    (3, -1),    # negative content
    (2.5, 0),   # non-integer capacity
    (5, 1.0),   # non-integer content
])
def test_G8_invalid_construction(capacity, current):
    """G8: Constructor rejects glasses breaking the invariant"""
    with pytest.raises(InvalidOperation):
        Glass(capacity=capacity, current=current)


def test_G9_text():
    """G9: str() is current/capacity"""
    assert str(Glass(5, 2)) == "2/5"
    assert str(State.of(Glass(5), Glass(3, 3))) == "0/5, 3/3"


# ========== Test Group M: State and moves ==========

def test_M1_available_moves_initial(two_glasses):
    """M1: Only fills are available from empty glasses"""
    assert two_glasses.available_moves() == [Fill(0), Fill(1)]


def test_M2_available_moves_mixed():
    """M2: Fill non-full, Empty non-empty, Pour non-empty into non-full"""
    state = State.of(Glass(5, 2), Glass(3, 3))
    assert state.available_moves() == [Fill(0), Empty(0), Empty(1), Pour(1, 0)]


def test_M3_available_moves_three_glasses():
    """M3: Pours cover every ordered pair of distinct glasses"""
    state = State.of(Glass(8, 4), Glass(5, 2), Glass(3, 1))
    pours = [m for m in state.available_moves() if isinstance(m, Pour)]
    assert len(pours) == 6
    assert all(p.from_index != p.to_index for p in pours)


def test_M4_every_available_move_processes():
    """M4: process() never fails for a move from available_moves()"""
    for state in all_states((4, 3, 2)):
        for move in state.available_moves():
            new_state = state.process(move)
            assert len(new_state) == len(state)
            assert new_state.capacities() == state.capacities()


def test_M5_volume_laws():
    """M5: Pour conserves total volume, Fill increases it, Empty decreases it"""
    for state in all_states((5, 3)):
        for move in state.available_moves():
            before = state.total_volume()
            after = state.process(move).total_volume()
            if isinstance(move, Pour):
                assert after == before
            elif isinstance(move, Fill):
                assert after > before
            else:
                assert after < before


def test_M6_pour_amount():
    """M6: Pour moves min(source content, target remaining volume)"""
    state = State.of(Glass(5, 5), Glass(3, 1))
    assert state.process(Pour(0, 1)) == State.of(Glass(5, 3), Glass(3, 3))

    state = State.of(Glass(5, 1), Glass(3, 0))
    assert state.process(Pour(0, 1)) == State.of(Glass(5, 0), Glass(3, 1))


def test_M7_process_leaves_other_glasses():
    """M7: Only the glasses named by the move change"""
    state = State.of(Glass(8, 4), Glass(5, 2), Glass(3, 1))
    assert state.process(Fill(1)) == State.of(Glass(8, 4), Glass(5, 5), Glass(3, 1))
    assert state.process(Empty(2)) == State.of(Glass(8, 4), Glass(5, 2), Glass(3, 0))
    assert state.process(Pour(0, 2)) == State.of(Glass(8, 2), Glass(5, 2), Glass(3, 3))
    assert state == State.of(Glass(8, 4), Glass(5, 2), Glass(3, 1))


def test_M8_fill_and_empty_idempotent():
    """M8: Applying Fill/Empty twice equals applying once"""
    state = State.of(Glass(5, 2), Glass(3, 1))
    for move in (Fill(0), Empty(0), Fill(1), Empty(1)):
        once = state.process(move)
        assert once.process(move) == once


@pytest.mark.parametrize("move", [
    Fill(2),
    Empty(-1),
    Pour(0, 5),
    Pour(1, 1),
    "Fill(0)",
])
def test_M9_invalid_moves(two_glasses, move):
    """M9: Out-of-range or unknown moves fail fast"""
    with pytest.raises(InvalidOperation):
        two_glasses.process(move)


def test_M10_state_equality_and_replay(two_glasses):
    """M10: States are values; replay() returns every intermediate state"""
    assert State([Glass(5), Glass(3)]) == two_glasses
    assert len({two_glasses, State.of(Glass(5), Glass(3))}) == 1

    states = replay(two_glasses, [Fill(1), Pour(1, 0)])
    assert [str(s) for s in states] == ["0/5, 0/3", "0/5, 3/3", "3/5, 0/3"]


def test_no_solution_message():
    """NoSolution carries the visited states"""
    visited = {State.of(Glass(4, 0), Glass(2, 0)), State.of(Glass(4, 4), Glass(2, 0))}
    error = NoSolution(visited)
    assert error.visited == frozenset(visited)
    assert str(error) == "No solution found, got {[0/4, 0/2], [4/4, 0/2]}"
