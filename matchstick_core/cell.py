from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .patterns import DIGIT_SEGMENTS, OPERATOR_SLOT_NAMES, digit_pattern, operator_segment_count, slot_names


class CharKind(str, Enum):
    DIGIT = 'digit'
    OPERATOR = 'operator'


@dataclass
class Cell:
    """One displayed equation character plus the current state of its sticks.

    `id`, `kind` and `symbol` are fixed at parse time; `symbol` is the literal the
    cell was parsed from, not necessarily what its sticks spell now. Only the
    contents of `segments` change during play, never its length.
    """
    id: int
    kind: CharKind
    symbol: str
    segments: List[bool]

    @classmethod
    def from_symbol(cls, cell_id: int, symbol: str, segments: Optional[Sequence[bool]] = None) -> 'Cell':
        """Builds a cell for a digit or operator literal, fully formed unless segments are given."""
        if symbol in DIGIT_SEGMENTS:
            kind = CharKind.DIGIT
            default = list(digit_pattern(symbol))
        elif symbol in OPERATOR_SLOT_NAMES:
            kind = CharKind.OPERATOR
            default = [True] * operator_segment_count(symbol)
        else:
            raise ValueError(f'unsupported symbol {symbol!r}')
        if segments is None:
            return cls(id=cell_id, kind=kind, symbol=symbol, segments=default)
        if len(segments) != len(default):
            raise ValueError(f'{symbol!r} needs {len(default)} segments, got {len(segments)}')
        return cls(id=cell_id, kind=kind, symbol=symbol, segments=[bool(s) for s in segments])

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    def is_lit(self, index: int) -> bool:
        self._check_index(index)
        return self.segments[index]

    def set_segment(self, index: int, lit: bool) -> None:
        self._check_index(index)
        self.segments[index] = lit

    def lit_count(self) -> int:
        return sum(1 for s in self.segments if s)

    def slot_name(self, index: int) -> str:
        self._check_index(index)
        return slot_names(self.symbol)[index]

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self.segments):
            raise ValueError(f'segment index {index} out of range for cell {self.id} ({self.symbol!r})')


Snapshot = Tuple[Tuple[bool, ...], ...]


@dataclass(frozen=True)
class Equation:
    """Ordered cells of an equation, in left-to-right reading order."""
    cells: Tuple[Cell, ...]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def cell(self, cell_id: int) -> Cell:
        for c in self.cells:
            if c.id == cell_id:
                return c
        raise ValueError(f'unknown cell id {cell_id}')

    def symbols(self) -> str:
        """The literal characters the cells were parsed from."""
        return ''.join(c.symbol for c in self.cells)

    def snapshot(self) -> Snapshot:
        """Immutable copy of every cell's segment states."""
        return tuple(tuple(c.segments) for c in self.cells)

    def pretty(self, held: Optional[Tuple[int, int]] = None) -> str:
        """Renders the equation as three rows of matchstick ASCII art plus a row of cell ids."""
        rows: List[List[str]] = [[], [], [], []]
        for c in self.cells:
            for i, part in enumerate(_cell_rows(c)):
                rows[i].append(part)
            label = str(c.id)
            if held is not None and held[0] == c.id:
                label += '*'
            rows[3].append(label.center(3))
        return '\n'.join(' '.join(r).rstrip() for r in rows)


def count_lit(equation: Iterable[Cell]) -> int:
    """Total number of sticks currently lying on the board."""
    return sum(c.lit_count() for c in equation)


def _cell_rows(c: Cell) -> Tuple[str, str, str]:
    s = c.segments
    if c.kind == CharKind.DIGIT:
        a, b, cc, d, e, f, g = s
        return (
            ' _ ' if a else '   ',
            ('|' if f else ' ') + ('_' if g else ' ') + ('|' if b else ' '),
            ('|' if e else ' ') + ('_' if d else ' ') + ('|' if cc else ' '),
        )
    if c.symbol == '+':
        vertical, horizontal = s
        if vertical and horizontal:
            mid = '-+-'
        elif horizontal:
            mid = '---'
        elif vertical:
            mid = ' | '
        else:
            mid = '   '
        return ('   ', mid, '   ')
    if c.symbol == '=':
        top, bottom = s
        return ('   ', '---' if top else '   ', '---' if bottom else '   ')
    return ('   ', '---' if s[0] else '   ', '   ')
