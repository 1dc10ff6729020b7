"""
Equation evaluation.

Cells are resolved to symbols, joined into a working string and checked with a
small arithmetic grammar:

    equation := side '==' side
    side     := [sign] number (('+' | '-') number)*

Numbers are runs of adjacent digit cells. Addition and subtraction are applied
left to right on integers. Nothing here executes arbitrary expressions.
"""
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .cell import Cell, Equation
from .parser import parse_equation
from .resolver import resolve_cell

logger = logging.getLogger(__name__)

Token = Tuple[str, str]  # ('number', '15') | ('operator', '+') | ('equals', '==')

_WORKING_RE = re.compile(r'^[0-9+\-=]+$')


class Outcome(str, Enum):
    VALID_TRUE = 'valid_true'
    VALID_FALSE = 'valid_false'
    INVALID = 'invalid'


def working_string(cells: Iterable[Cell]) -> Optional[str]:
    """Resolved symbols joined in order, '=' doubled into the equality token. None if any cell is unresolved."""
    parts: List[str] = []
    for c in cells:
        sym = resolve_cell(c)
        if sym is None:
            return None
        parts.append('==' if sym == '=' else sym)
    return ''.join(parts)


def render_equation(cells: Iterable[Cell]) -> str:
    """What the sticks currently spell, '?' for cells with no legal reading."""
    return ''.join(resolve_cell(c) or '?' for c in cells)


def tokenize(text: str) -> Optional[List[Token]]:
    """Splits a working string into tokens, or None if it contains a malformed '=' run."""
    tokens: List[Token] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isdigit():
            j = i
            while j < n and text[j].isdigit():
                j += 1
            tokens.append(('number', text[i:j]))
            i = j
        elif ch in '+-':
            tokens.append(('operator', ch))
            i += 1
        elif ch == '=':
            j = i
            while j < n and text[j] == '=':
                j += 1
            if j - i != 2:
                return None
            tokens.append(('equals', '=='))
            i = j
        else:
            return None
    return tokens


def evaluate_expression(tokens: List[Token]) -> Tuple[bool, Optional[int]]:
    """
    Evaluates one side of the equation left to right.
    Returns (is_valid, value). A leading sign is allowed; adjacent operators,
    a dangling operator and numbers with leading zeros are not.
    """
    if not tokens:
        return False, None

    sign = 1
    i = 0
    if tokens[0][0] == 'operator':
        sign = -1 if tokens[0][1] == '-' else 1
        i = 1

    expect_number = True
    value = 0
    op = '+'
    first = True
    while i < len(tokens):
        kind, text = tokens[i]
        if expect_number:
            if kind != 'number':
                return False, None
            if len(text) > 1 and text[0] == '0':
                return False, None
            n = int(text)
            if first:
                value = sign * n
                first = False
            elif op == '+':
                value += n
            else:
                value -= n
            expect_number = False
        else:
            if kind != 'operator':
                return False, None
            op = text
            expect_number = True
        i += 1

    if expect_number:
        return False, None
    return True, value


def evaluate_working(text: str) -> Outcome:
    if not _WORKING_RE.match(text):
        return Outcome.INVALID
    tokens = tokenize(text)
    if tokens is None:
        return Outcome.INVALID
    eq_positions = [i for i, t in enumerate(tokens) if t[0] == 'equals']
    if len(eq_positions) != 1:
        return Outcome.INVALID
    k = eq_positions[0]
    ok_l, left = evaluate_expression(tokens[:k])
    ok_r, right = evaluate_expression(tokens[k + 1:])
    if not (ok_l and ok_r):
        return Outcome.INVALID
    return Outcome.VALID_TRUE if left == right else Outcome.VALID_FALSE


def evaluate(equation: Equation) -> Outcome:
    text = working_string(equation)
    if text is None:
        logger.debug('unresolved cell in %r', render_equation(equation))
        return Outcome.INVALID
    outcome = evaluate_working(text)
    logger.debug('evaluated %r -> %s', text, outcome.value)
    return outcome


def evaluate_text(text: str) -> Outcome:
    """Parses a literal equation string and evaluates it as drawn."""
    return evaluate(parse_equation(text))
