"""quizsession: multiple-choice quiz sessions, scoring and attempt history."""

from __future__ import annotations

from .content import ContentCache, DirectorySource, MappingSource
from .errors import ContentUnavailable, InvalidContent, InvalidState, QuizError
from .models import Answer, Question, QuestionSet, Result, ReviewAnswer, set_key
from .results import HistoryLedger, Pinned, UNSET, project_result
from .session import AdvanceOutcome, QuizSession, SessionState

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AdvanceOutcome",
    "Answer",
    "ContentCache",
    "ContentUnavailable",
    "DirectorySource",
    "HistoryLedger",
    "InvalidContent",
    "InvalidState",
    "MappingSource",
    "Pinned",
    "Question",
    "QuestionSet",
    "QuizError",
    "QuizSession",
    "Result",
    "ReviewAnswer",
    "SessionState",
    "UNSET",
    "project_result",
    "set_key",
]
