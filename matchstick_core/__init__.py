"""
Matchstick core Python package.

Pure-logic pieces of the matchstick equation puzzle, kept apart from the
Flask app and the CLI so they can be tested on their own.
Modules:
- patterns.py: seven-segment digit patterns and operator layouts
- cell.py: Cell, Equation, stick counter
- parser.py / resolver.py / evaluator.py: string -> cells -> symbols -> truth
- moves.py: pick-up / place state machine
- session.py: one puzzle session (messages, generation token, busy flag)
- generator.py / puzzles.py: external puzzle and hint collaborator, fallbacks
"""
