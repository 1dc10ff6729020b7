from __future__ import annotations

import argparse
from typing import Optional

from .evaluator import Outcome
from .generator import generate_puzzle, get_hint
from .logging_config import setup_logging
from .moves import MoveAction
from .patterns import DIGIT_SLOT_NAMES, OPERATOR_SLOT_NAMES
from .puzzles import DEFAULT_PUZZLE, Puzzle, is_puzzle_text
from .session import PuzzleSession


def _slot_legend() -> str:
    lines = ['Segments: digit ' + ', '.join(f'{i}={n}' for i, n in enumerate(DIGIT_SLOT_NAMES))]
    for op, names in OPERATOR_SLOT_NAMES.items():
        lines.append(f"          '{op}' " + ', '.join(f'{i}={n}' for i, n in enumerate(names)))
    return '\n'.join(lines)


def _show(session: PuzzleSession, show_solution: bool) -> None:
    held = session.held
    print(session.equation.pretty((held.cell_id, held.segment_index) if held else None))
    print(f'[{session.message_kind.value}] {session.message}')
    if session.hint:
        print(f'Hint: {session.hint}')
    if show_solution and session.solution:
        print(f'Solution: {session.solution}')


def _new_puzzle(session: PuzzleSession, seed: Optional[int]) -> None:
    token = session.begin_generation()
    if token is None:
        print('A request is already running.')
        return
    print(session.message)
    session.finish_generation(token, generate_puzzle(seed=seed))


def _hint(session: PuzzleSession) -> None:
    token = session.begin_hint()
    if token is None:
        print('No hint available right now.')
        return
    session.finish_hint(token, get_hint(session.current_text()))


def play(session: PuzzleSession, seed: Optional[int] = None, show_solution: bool = False) -> None:
    print(_slot_legend())
    print()
    _show(session, show_solution)
    while True:
        text = input('Touch "cell segment", or hint / reset / new / quit: ').strip().lower()
        if text in ('q', 'quit', 'exit'):
            return
        if text == 'hint':
            _hint(session)
        elif text == 'reset':
            session.reset()
        elif text == 'new':
            _new_puzzle(session, seed)
        else:
            sep = ',' if ',' in text else ' '
            try:
                c_s, s_s = [t for t in text.split(sep) if t != '']
                result = session.touch(int(c_s), int(s_s))
            except ValueError as e:
                print(f'Could not use that: {e}. Try again.')
                continue
            if result.action == MoveAction.IGNORED:
                print('Nothing happens.')
        _show(session, show_solution)
        if session.won:
            print('Solved! Type "new" for another puzzle or "quit".')


def main() -> None:
    parser = argparse.ArgumentParser(description='Matchstick equation puzzle: move exactly one stick')
    parser.add_argument('--puzzle', default=None, help='Starting equation, e.g. "9+9=15"')
    parser.add_argument('--new', action='store_true', help='Ask the puzzle service for a new puzzle')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for fallback puzzle choice')
    parser.add_argument('--show-solution', action='store_true', help='Print the known solution when there is one')
    parser.add_argument('--check', action='store_true', help='Only evaluate the starting equation and exit')
    parser.add_argument('--log-file', default=None, help='Also write logs to this file')
    args = parser.parse_args()

    setup_logging(log_file=args.log_file)

    if args.puzzle is not None:
        if not is_puzzle_text(args.puzzle):
            parser.error('puzzle may only contain digits, +, -, = and spaces, and needs an =')
        session = PuzzleSession(Puzzle(start=args.puzzle))
    else:
        session = PuzzleSession(DEFAULT_PUZZLE)
    if args.new:
        _new_puzzle(session, args.seed)

    if args.check:
        outcome = session.outcome()
        print(f'{session.current_text()}: {outcome.value}')
        raise SystemExit(0 if outcome == Outcome.VALID_TRUE else 1)

    try:
        play(session, seed=args.seed, show_solution=args.show_solution)
    except (EOFError, KeyboardInterrupt):
        print()


if __name__ == '__main__':
    main()
