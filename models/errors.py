"""
models/errors.py
────────────────
Exceptions raised by the matching engine.
"""


class InvalidInput(ValueError):
    """A profile or argument handed to the engine violates its contract.

    Raised for missing profiles (``None``), objects that are not a
    ``UserProfile``, and non-positive pagination arguments.
    """
