from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .cell import Equation
from .evaluator import Outcome, evaluate, render_equation
from .moves import HeldStick, MoveAction, MoveController, MoveRecord, TouchResult
from .parser import parse_equation
from .puzzles import DEFAULT_PUZZLE, Puzzle

logger = logging.getLogger(__name__)

MSG_START = 'Move exactly one matchstick to fix the equation.'
MSG_PLACE = 'Now place it in a new position.'
MSG_CANCELLED = 'Move cancelled.'
MSG_WON = 'Brilliant! The equation is correct.'
MSG_WRONG = "That doesn't seem right. Try again."
MSG_GENERATING = 'Conjuring a new challenge...'


class MessageKind(str, Enum):
    NEUTRAL = 'neutral'
    SUCCESS = 'success'
    ERROR = 'error'


class PuzzleSession:
    """
    All state of one player's game: the equation and its move controller, the
    status message, the last hint and the known solution if any.

    Requests to the puzzle/hint service are split into begin/finish calls. Each
    puzzle load bumps `generation`; a finish call carrying an older generation
    is discarded so a late reply cannot land on a puzzle it was not asked for.
    While a request is outstanding the session is busy and ignores touches.
    """

    def __init__(self, puzzle: Puzzle = DEFAULT_PUZZLE, generation: int = 0) -> None:
        self.generation = generation
        self._busy = False
        self.hint: Optional[str] = None
        self.last_move: Optional[MoveRecord] = None
        self._install(parse_equation(puzzle.start), puzzle.solution)

    @classmethod
    def restore(
        cls,
        equation: Equation,
        *,
        held: Optional[HeldStick] = None,
        won: bool = False,
        generation: int = 0,
        solution: Optional[str] = None,
        message: str = MSG_START,
        message_kind: MessageKind = MessageKind.NEUTRAL,
        hint: Optional[str] = None,
    ) -> 'PuzzleSession':
        """Rebuilds a session from previously exported state (used by the JSON API)."""
        if held is not None and equation.cell(held.cell_id).is_lit(held.segment_index):
            raise ValueError('held stick must come from an empty position')
        if held is not None and won:
            raise ValueError('a won puzzle cannot have a stick in hand')
        s = cls.__new__(cls)
        s.generation = generation
        s._busy = False
        s.hint = hint
        s.last_move = None
        s._install(equation, solution)
        s.controller.held = held
        s.controller.won = won
        s.message = message
        s.message_kind = message_kind
        return s

    def _install(self, equation: Equation, solution: Optional[str]) -> None:
        self.controller = MoveController(equation)
        self.controller.busy = self._busy
        self.solution = solution
        self.message = MSG_START
        self.message_kind = MessageKind.NEUTRAL

    # ----- state accessors -----

    @property
    def equation(self) -> Equation:
        return self.controller.equation

    @property
    def held(self) -> Optional[HeldStick]:
        return self.controller.held

    @property
    def won(self) -> bool:
        return self.controller.won

    @property
    def busy(self) -> bool:
        return self._busy

    @busy.setter
    def busy(self, value: bool) -> None:
        self._busy = value
        self.controller.busy = value

    def current_text(self) -> str:
        """What the sticks currently spell; sent to the hint service."""
        return render_equation(self.equation)

    def outcome(self) -> Outcome:
        return evaluate(self.equation)

    # ----- puzzle lifecycle -----

    def load(self, puzzle: Puzzle) -> None:
        """Replaces the equation wholesale and starts a new generation."""
        self.generation += 1
        self.hint = None
        self.last_move = None
        self._install(parse_equation(puzzle.start), puzzle.solution)
        logger.info('loaded puzzle %r (generation %d)', puzzle.start, self.generation)

    def reset(self) -> None:
        self.load(DEFAULT_PUZZLE)

    # ----- player actions -----

    def touch(self, cell_id: int, segment_index: int) -> TouchResult:
        result = self.controller.touch(cell_id, segment_index)
        if result.action == MoveAction.PICKED_UP:
            self.message, self.message_kind = MSG_PLACE, MessageKind.NEUTRAL
        elif result.action == MoveAction.CANCELLED:
            self.message, self.message_kind = MSG_CANCELLED, MessageKind.NEUTRAL
        elif result.action == MoveAction.PLACED:
            self.last_move = result.move
            if result.outcome == Outcome.VALID_TRUE:
                self.message, self.message_kind = MSG_WON, MessageKind.SUCCESS
            else:
                # Invalid shapes and false equations read the same to the player.
                self.message, self.message_kind = MSG_WRONG, MessageKind.ERROR
        return result

    # ----- collaborator requests -----

    def begin_generation(self) -> Optional[int]:
        """Marks a new-puzzle request as outstanding. Returns its token, or None if already busy."""
        if self._busy:
            return None
        self.busy = True
        self.message, self.message_kind = MSG_GENERATING, MessageKind.NEUTRAL
        return self.generation

    def finish_generation(self, token: int, puzzle: Puzzle) -> bool:
        self.busy = False
        if token != self.generation:
            logger.info('discarding stale puzzle %r (token %d, current %d)', puzzle.start, token, self.generation)
            return False
        self.load(puzzle)
        return True

    def begin_hint(self) -> Optional[int]:
        """Marks a hint request as outstanding. None when the puzzle is solved or a request is pending."""
        if self._busy or self.won:
            return None
        self.busy = True
        return self.generation

    def finish_hint(self, token: int, text: str) -> bool:
        self.busy = False
        if token != self.generation:
            logger.info('discarding stale hint (token %d, current %d)', token, self.generation)
            return False
        self.hint = text
        return True
