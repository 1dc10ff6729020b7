"""
Client for the external text-generation service used for new puzzles and hints.

Talks to the Gemini `generateContent` REST endpoint. Nothing here is trusted to
succeed: every failure ends in built-in fallback data, never an exception.
Configuration comes from the environment:
- GEMINI_API_KEY (or API_KEY): service key; without it the fallbacks are used
- MATCHSTICK_MODEL: model name (default gemini-2.5-flash)
- MATCHSTICK_API_BASE: API root URL
- MATCHSTICK_TIMEOUT: request timeout in seconds (default 20)
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable, Dict, Optional

import requests

from .puzzles import Puzzle, is_puzzle_text, pick_fallback_puzzle

logger = logging.getLogger(__name__)

DEFAULT_MODEL = 'gemini-2.5-flash'
DEFAULT_API_BASE = 'https://generativelanguage.googleapis.com/v1beta'
DEFAULT_TIMEOUT = 20.0

EMPTY_HINT = 'Try looking at the digits differently!'
FALLBACK_HINT = 'Can you turn a 9 into a 6, or a 5 into a 3? Experiment!'

HINT_SYSTEM = 'You are a helpful game assistant.'

HINT_PROMPT = (
    'The player is solving a matchstick equation puzzle.\n'
    'The current equation is "{equation}".\n'
    'The goal is to move EXACTLY ONE matchstick so the equation becomes true.\n'
    'Give a short, encouraging hint that points toward the answer without revealing it.'
)

PUZZLE_PROMPT = (
    'Create a new matchstick equation puzzle.\n'
    'Rule 1: the starting equation must be mathematically FALSE.\n'
    'Rule 2: moving EXACTLY ONE matchstick must make it TRUE.\n'
    'Rule 3: use only the digits 0-9 and the operators + and -, with one =.\n'
    'Rule 4: every number must be a non-negative integer.\n'
    'Answer in JSON.'
)

PUZZLE_SCHEMA: Dict[str, Any] = {
    'type': 'OBJECT',
    'properties': {
        'start': {'type': 'STRING', 'description': 'The false starting equation, e.g. 6+4=4'},
        'solution': {'type': 'STRING', 'description': 'The true equation after one move, e.g. 0+4=4'},
    },
    'required': ['start', 'solution'],
}

PostFn = Callable[..., Any]


def _api_key() -> Optional[str]:
    return os.getenv('GEMINI_API_KEY') or os.getenv('API_KEY') or None


def _timeout() -> float:
    try:
        return float(os.getenv('MATCHSTICK_TIMEOUT', DEFAULT_TIMEOUT))
    except ValueError:
        return DEFAULT_TIMEOUT


def _endpoint(model: Optional[str] = None) -> str:
    base = os.getenv('MATCHSTICK_API_BASE', DEFAULT_API_BASE).rstrip('/')
    return f"{base}/models/{model or os.getenv('MATCHSTICK_MODEL', DEFAULT_MODEL)}:generateContent"


def _extract_text(payload: Any) -> str:
    """Concatenates the text parts of the first candidate. Raises ValueError on any unexpected shape."""
    if not isinstance(payload, dict):
        raise ValueError('response is not an object')
    candidates = payload.get('candidates') or []
    if not isinstance(candidates, list):
        raise ValueError('candidates is not a list')
    if not candidates:
        raise ValueError('response has no candidates')
    first = candidates[0]
    content = first.get('content') if isinstance(first, dict) else None
    parts = content.get('parts') if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise ValueError('first candidate has no content parts')
    return ''.join(str(p.get('text', '')) for p in parts if isinstance(p, dict))


def generate_content(
    prompt: str,
    *,
    system_instruction: Optional[str] = None,
    generation_config: Optional[Dict[str, Any]] = None,
    post: Optional[PostFn] = None,
) -> str:
    """Sends one prompt and returns the reply text. Raises on any transport or format problem."""
    key = _api_key()
    if not key:
        raise RuntimeError('GEMINI_API_KEY is not set')
    post = post or requests.post

    body: Dict[str, Any] = {'contents': [{'role': 'user', 'parts': [{'text': prompt}]}]}
    if system_instruction:
        body['systemInstruction'] = {'parts': [{'text': system_instruction}]}
    if generation_config:
        body['generationConfig'] = generation_config

    resp = post(
        _endpoint(),
        json=body,
        headers={'x-goog-api-key': key, 'Content-Type': 'application/json'},
        timeout=_timeout(),
    )
    resp.raise_for_status()
    return _extract_text(resp.json())


def parse_puzzle_payload(text: str) -> Puzzle:
    """Reads a {start, solution} JSON reply. Raises ValueError when it is malformed."""
    data = json.loads(text or '{}')
    if not isinstance(data, dict):
        raise ValueError('puzzle payload is not an object')
    start = data.get('start')
    solution = data.get('solution')
    if not is_puzzle_text(start) or not is_puzzle_text(solution):
        raise ValueError(f'invalid puzzle payload: start={start!r} solution={solution!r}')
    return Puzzle(start=start.strip(), solution=solution.strip())


def generate_puzzle(*, post: Optional[PostFn] = None, seed: Optional[int] = None) -> Puzzle:
    """Asks the service for a new puzzle; falls back to a built-in one on any failure."""
    try:
        text = generate_content(
            PUZZLE_PROMPT,
            generation_config={
                'responseMimeType': 'application/json',
                'responseSchema': PUZZLE_SCHEMA,
                'thinkingConfig': {'thinkingBudget': 1024},
            },
            post=post,
        )
        puzzle = parse_puzzle_payload(text)
        logger.info('generated puzzle %s -> %s', puzzle.start, puzzle.solution)
        return puzzle
    except (requests.RequestException, ValueError, RuntimeError) as e:
        puzzle = pick_fallback_puzzle(seed)
        logger.warning('puzzle generation failed (%s); using fallback %s', e, puzzle.start)
        return puzzle


def get_hint(equation_text: str, *, post: Optional[PostFn] = None) -> str:
    """Asks the service for a hint on the current equation; always returns some text."""
    try:
        text = generate_content(
            HINT_PROMPT.format(equation=equation_text),
            system_instruction=HINT_SYSTEM,
            generation_config={'thinkingConfig': {'thinkingBudget': 0}},
            post=post,
        )
    except (requests.RequestException, ValueError, RuntimeError) as e:
        logger.warning('hint request failed: %s', e)
        return FALLBACK_HINT
    return text.strip() or EMPTY_HINT
