from __future__ import annotations

# Facade module that re-exports matchstick core functionality.
# The Flask app and the tests import from here.
# Single-responsibility modules live under matchstick_core/*.

# Keep requests import here so tests can patch game.requests.post
import requests  # noqa: F401

# Prefer relative imports when loaded as part of a package, then the top-level package.
try:
    from .matchstick_core.patterns import (  # type: ignore
        DIGIT_SEGMENTS,
        DIGIT_SLOT_NAMES,
        OPERATOR_SLOT_NAMES,
        INITIAL_PUZZLE,
        digit_pattern,
        operator_segment_count,
    )
    from .matchstick_core.cell import Cell, CharKind, Equation, count_lit  # type: ignore
    from .matchstick_core.parser import parse_equation  # type: ignore
    from .matchstick_core.resolver import resolve_digit, resolve_operator, resolve_cell  # type: ignore
    from .matchstick_core.evaluator import (  # type: ignore
        Outcome,
        evaluate,
        evaluate_text,
        evaluate_expression,
        render_equation,
        tokenize,
        working_string,
    )
    from .matchstick_core.moves import (  # type: ignore
        HeldStick,
        MoveAction,
        MoveController,
        MoveRecord,
        TouchResult,
    )
    from .matchstick_core.puzzles import (  # type: ignore
        DEFAULT_PUZZLE,
        FALLBACK_PUZZLES,
        Puzzle,
        is_puzzle_text,
        pick_fallback_puzzle,
    )
    from .matchstick_core.session import MessageKind, PuzzleSession  # type: ignore
    from .matchstick_core.generator import (  # type: ignore
        FALLBACK_HINT,
        generate_puzzle as _generate_puzzle_impl,
        get_hint as _get_hint_impl,
        parse_puzzle_payload,
    )
except ImportError:
    from matchstick_core.patterns import (  # type: ignore
        DIGIT_SEGMENTS,
        DIGIT_SLOT_NAMES,
        OPERATOR_SLOT_NAMES,
        INITIAL_PUZZLE,
        digit_pattern,
        operator_segment_count,
    )
    from matchstick_core.cell import Cell, CharKind, Equation, count_lit  # type: ignore
    from matchstick_core.parser import parse_equation  # type: ignore
    from matchstick_core.resolver import resolve_digit, resolve_operator, resolve_cell  # type: ignore
    from matchstick_core.evaluator import (  # type: ignore
        Outcome,
        evaluate,
        evaluate_text,
        evaluate_expression,
        render_equation,
        tokenize,
        working_string,
    )
    from matchstick_core.moves import (  # type: ignore
        HeldStick,
        MoveAction,
        MoveController,
        MoveRecord,
        TouchResult,
    )
    from matchstick_core.puzzles import (  # type: ignore
        DEFAULT_PUZZLE,
        FALLBACK_PUZZLES,
        Puzzle,
        is_puzzle_text,
        pick_fallback_puzzle,
    )
    from matchstick_core.session import MessageKind, PuzzleSession  # type: ignore
    from matchstick_core.generator import (  # type: ignore
        FALLBACK_HINT,
        generate_puzzle as _generate_puzzle_impl,
        get_hint as _get_hint_impl,
        parse_puzzle_payload,
    )


def _post_patchable(url, **kwargs):
    """Adapter using this module's requests for test patching."""
    return requests.post(url, **kwargs)


def generate_puzzle(seed=None) -> Puzzle:
    # Forward with a patchable HTTP hook so tests can stub game.requests.post
    return _generate_puzzle_impl(post=_post_patchable, seed=seed)


def get_hint(equation_text: str) -> str:
    return _get_hint_impl(equation_text, post=_post_patchable)


def main() -> None:
    # CLI driver delegated to matchstick_core.cli
    try:
        from .matchstick_core.cli import main as _main  # type: ignore
    except ImportError:
        from matchstick_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
