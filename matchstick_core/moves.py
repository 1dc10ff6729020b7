from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .cell import Equation
from .evaluator import Outcome, evaluate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeldStick:
    """The stick currently in the player's hand and where it was picked up from."""
    cell_id: int
    segment_index: int


@dataclass(frozen=True)
class MoveRecord:
    from_cell: int
    from_segment: int
    to_cell: int
    to_segment: int


class MoveAction(str, Enum):
    IGNORED = 'ignored'
    PICKED_UP = 'picked_up'
    CANCELLED = 'cancelled'
    PLACED = 'placed'


@dataclass(frozen=True)
class TouchResult:
    action: MoveAction
    outcome: Optional[Outcome] = None
    move: Optional[MoveRecord] = None


class MoveController:
    """
    Two-phase pick-up / place state machine over one equation.
    Idle when `held` is None, Holding otherwise. At most one stick is ever
    out of the equation, so a completed move keeps the stick count unchanged.
    The controller never restricts where a stick may go beyond "target is empty":
    moving sticks between digits and operators is the puzzle.
    """

    def __init__(self, equation: Equation, held: Optional[HeldStick] = None, won: bool = False) -> None:
        self.equation = equation
        self.held = held
        self.won = won
        self.busy = False

    @property
    def holding(self) -> bool:
        return self.held is not None

    @property
    def disabled(self) -> bool:
        return self.won or self.busy

    def touch(self, cell_id: int, segment_index: int) -> TouchResult:
        """Applies one player touch on a stick position."""
        if self.disabled:
            logger.debug('touch (%d, %d) ignored: won=%s busy=%s', cell_id, segment_index, self.won, self.busy)
            return TouchResult(MoveAction.IGNORED)

        cell = self.equation.cell(cell_id)
        lit = cell.is_lit(segment_index)

        if self.held is None:
            if not lit:
                return TouchResult(MoveAction.IGNORED)
            cell.set_segment(segment_index, False)
            self.held = HeldStick(cell_id, segment_index)
            return TouchResult(MoveAction.PICKED_UP)

        src = self.held
        if src.cell_id == cell_id and src.segment_index == segment_index:
            cell.set_segment(segment_index, True)
            self.held = None
            return TouchResult(MoveAction.CANCELLED)

        if lit:
            # Position already occupied; keep holding.
            return TouchResult(MoveAction.IGNORED)

        cell.set_segment(segment_index, True)
        self.held = None
        move = MoveRecord(src.cell_id, src.segment_index, cell_id, segment_index)
        outcome = evaluate(self.equation)
        if outcome == Outcome.VALID_TRUE:
            self.won = True
        logger.info('stick moved %s -> %s', (move.from_cell, move.from_segment), (move.to_cell, move.to_segment))
        return TouchResult(MoveAction.PLACED, outcome=outcome, move=move)
