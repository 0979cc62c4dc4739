from __future__ import annotations


class ScoreError(ValueError):
    """Base class for invalid symbolic score input."""


class InvalidNoteError(ScoreError):
    pass


class InvalidChordError(ScoreError):
    pass


class InvalidEventTypeError(ScoreError):
    """Raised when an aggregate is handed something it cannot render."""
