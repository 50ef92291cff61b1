from __future__ import annotations

"""Error taxonomy for content loading and quiz sessions."""


class QuizError(Exception):
    """Base class for all quizsession errors."""


class ContentUnavailable(QuizError):
    """A question set could not be fetched or failed validation."""

    def __init__(self, key: str, reason: str = "") -> None:
        self.key = key
        self.reason = reason
        msg = f"Failed to load quiz data for {key}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class InvalidContent(QuizError, ValueError):
    """Question data that cannot be used for an attempt (e.g. no questions)."""


class InvalidState(QuizError, RuntimeError):
    """Operation attempted outside its valid session state."""
