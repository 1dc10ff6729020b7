from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

from .cell import Cell, CharKind
from .patterns import DIGIT_SEGMENTS

_PATTERN_TO_DIGIT: Dict[Tuple[bool, ...], str] = {p: d for d, p in DIGIT_SEGMENTS.items()}

# Operator layout -> {lit pattern: symbol}. Patterns not listed have no legal reading.
# The layout is picked by the cell's original symbol; the result depends only on the sticks.
OPERATOR_RULES: Dict[str, Dict[Tuple[bool, ...], str]] = {
    '+': {
        (True, True): '+',
        (False, True): '-',
    },
    '-': {
        (True,): '-',
    },
    '=': {
        (True, True): '=',
        (True, False): '-',
        (False, True): '-',
    },
}


def resolve_digit(segments: Sequence[bool]) -> Optional[str]:
    """Returns the digit whose canonical pattern matches exactly, or None."""
    if len(segments) != 7:
        return None
    return _PATTERN_TO_DIGIT.get(tuple(bool(s) for s in segments))


def resolve_operator(symbol_hint: str, segments: Sequence[bool]) -> Optional[str]:
    rules = OPERATOR_RULES.get(symbol_hint)
    if rules is None:
        return None
    return rules.get(tuple(bool(s) for s in segments))


def resolve_cell(cell: Cell) -> Optional[str]:
    if cell.kind == CharKind.DIGIT:
        return resolve_digit(cell.segments)
    return resolve_operator(cell.symbol, cell.segments)
