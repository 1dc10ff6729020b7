from __future__ import annotations

import logging
from typing import List

from .cell import Cell, Equation
from .patterns import DIGITS, OPERATORS

logger = logging.getLogger(__name__)


def parse_equation(text: str) -> Equation:
    """
    Turns a literal equation string into cells.
    Whitespace is skipped and any character outside 0-9, +, -, = is dropped.
    Digits start from their canonical pattern, operators start fully lit.
    Multi-digit numbers stay as adjacent digit cells.
    """
    cells: List[Cell] = []
    for i, ch in enumerate(text):
        if ch.isspace():
            continue
        if ch in DIGITS or ch in OPERATORS:
            cells.append(Cell.from_symbol(i, ch))
        else:
            logger.debug('dropping unsupported character %r at %d in %r', ch, i, text)
    return Equation(cells=tuple(cells))
