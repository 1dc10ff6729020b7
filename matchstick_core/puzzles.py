from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .patterns import DIGITS, INITIAL_PUZZLE, OPERATORS


@dataclass(frozen=True)
class Puzzle:
    """A starting equation and the true equation one stick move away."""
    start: str
    solution: Optional[str] = None


DEFAULT_PUZZLE = Puzzle(start=INITIAL_PUZZLE, solution='9+6=15')

# Each start is false and reaches its solution by moving exactly one stick.
FALLBACK_PUZZLES: Tuple[Puzzle, ...] = (
    Puzzle(start='6+4=4', solution='0+4=4'),
    Puzzle(start='5+7=2', solution='9-7=2'),
    Puzzle(start='3+3=8', solution='3+5=8'),
    Puzzle(start='0+1=7', solution='6+1=7'),
    DEFAULT_PUZZLE,
)

_ALPHABET = DIGITS | OPERATORS | {' '}


def is_puzzle_text(text: object) -> bool:
    """True for a non-empty string over 0-9 + - = and spaces containing an '='."""
    if not isinstance(text, str) or not text.strip():
        return False
    return '=' in text and all(ch in _ALPHABET for ch in text)


def pick_fallback_puzzle(seed: Optional[int] = None) -> Puzzle:
    """Chooses one of the built-in puzzles at random."""
    rng = random.Random(seed)
    return rng.choice(FALLBACK_PUZZLES)
