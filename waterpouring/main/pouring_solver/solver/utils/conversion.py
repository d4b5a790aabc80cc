"""
Text and JSON Conversion Utilities.

This module converts between the solver's value types and their wire formats:
- State text: "<current>/<capacity>, <current>/<capacity>, ..." (e.g. "0/5, 0/3")
- Move JSON: {"type": "Fill", "index": 0} / {"type": "Empty", "index": 1}
             / {"type": "Pour", "from": 0, "to": 1}

Glass order in the text is the glass index; it is preserved both ways.
"""

from __future__ import annotations
import re
from typing import Any

from ..models import Glass, State, Move, Fill, Empty, Pour

_GLASS_PATTERN = re.compile(r"^(\d+)\s*/\s*(\d+)$")


def parse_glass(text: str) -> Glass:
    """
    Parse one "<current>/<capacity>" token.

    Raises:
        ValueError: If the token is malformed or current > capacity

    Example:
        >>> parse_glass(" 2/5 ")
        Glass(capacity=5, current=2)
    """
    match = _GLASS_PATTERN.match(text.strip())
    if match is None:
        raise ValueError(f"Invalid glass {text.strip()!r}, expected '<current>/<capacity>'")
    current, capacity = int(match.group(1)), int(match.group(2))
    return Glass(capacity=capacity, current=current)


def parse_state(text: str) -> State:
    """
    Parse a comma separated list of glasses.

    Raises:
        ValueError: If text is empty or any glass is malformed

    Example:
        >>> str(parse_state("0/5, 0/3"))
        '0/5, 0/3'
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError("State must be a non-empty string like '0/5, 0/3'")
    return State(tuple(parse_glass(token) for token in text.split(',')))


def format_state(state: State) -> str:
    """Inverse of parse_state()."""
    return ", ".join(f"{g.current}/{g.capacity}" for g in state.glasses)


def state_from_json(value: Any) -> State:
    """
    State from a request payload value.

    Accepts either the text format or a list whose items are glass tokens
    ("2/5") or objects ({"capacity": 5, "current": 2}).
    """
    if isinstance(value, str):
        return parse_state(value)
    if isinstance(value, list) and value:
        glasses = []
        for item in value:
            if isinstance(item, str):
                glasses.append(parse_glass(item))
            elif isinstance(item, dict) and 'capacity' in item:
                glasses.append(Glass(capacity=item['capacity'], current=item.get('current', 0)))
            else:
                raise ValueError(f"Invalid glass {item!r}")
        return State(tuple(glasses))
    raise ValueError(f"Invalid state {value!r}")


def move_to_dict(move: Move) -> dict[str, Any]:
    if isinstance(move, Fill):
        return {'type': 'Fill', 'index': move.index}
    if isinstance(move, Empty):
        return {'type': 'Empty', 'index': move.index}
    if isinstance(move, Pour):
        return {'type': 'Pour', 'from': move.from_index, 'to': move.to_index}
    raise ValueError(f"Unknown move: {move!r}")


def move_from_dict(data: dict[str, Any]) -> Move:
    """
    Inverse of move_to_dict().

    Raises:
        ValueError: On unknown type or missing fields
    """
    move_type = data.get('type') if isinstance(data, dict) else None
    try:
        if move_type == 'Fill':
            return Fill(int(data['index']))
        if move_type == 'Empty':
            return Empty(int(data['index']))
        if move_type == 'Pour':
            return Pour(int(data['from']), int(data['to']))
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid {move_type} move {data!r}: missing {e}") from e
    raise ValueError(f"Unknown move {data!r}")
