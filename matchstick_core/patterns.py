from __future__ import annotations

from typing import Dict, Tuple

Pattern = Tuple[bool, ...]

# Seven-segment slots, in this order everywhere:
#   A(0)
# F(5)  B(1)
#   G(6)
# E(4)  C(2)
#   D(3)
DIGIT_SLOT_NAMES: Tuple[str, ...] = (
    'top', 'top-right', 'bottom-right', 'bottom', 'bottom-left', 'top-left', 'middle',
)

_T = True
_F = False

DIGIT_SEGMENTS: Dict[str, Pattern] = {
    '0': (_T, _T, _T, _T, _T, _T, _F),
    '1': (_F, _T, _T, _F, _F, _F, _F),
    '2': (_T, _T, _F, _T, _T, _F, _T),
    '3': (_T, _T, _T, _T, _F, _F, _T),
    '4': (_F, _T, _T, _F, _F, _T, _T),
    '5': (_T, _F, _T, _T, _F, _T, _T),
    '6': (_T, _F, _T, _T, _T, _T, _T),
    '7': (_T, _T, _T, _F, _F, _F, _F),
    '8': (_T, _T, _T, _T, _T, _T, _T),
    '9': (_T, _T, _T, _T, _F, _T, _T),
}

# Operator sticks, index order matters to the resolver.
OPERATOR_SLOT_NAMES: Dict[str, Tuple[str, ...]] = {
    '+': ('vertical', 'horizontal'),
    '-': ('horizontal',),
    '=': ('top', 'bottom'),
}

DIGITS = frozenset(DIGIT_SEGMENTS)
OPERATORS = frozenset(OPERATOR_SLOT_NAMES)

INITIAL_PUZZLE = '9+9=15'


def digit_pattern(digit: str) -> Pattern:
    """Returns the canonical 7-segment pattern for a digit character."""
    return DIGIT_SEGMENTS[digit]


def operator_segment_count(op: str) -> int:
    """Number of stick positions an operator cell owns."""
    return len(OPERATOR_SLOT_NAMES[op])


def slot_names(symbol: str) -> Tuple[str, ...]:
    if symbol in DIGIT_SEGMENTS:
        return DIGIT_SLOT_NAMES
    return OPERATOR_SLOT_NAMES[symbol]
