from .quiz_session import AdvanceOutcome, QuizSession, RuntimeState, SessionContext, SessionState

__all__ = ["AdvanceOutcome", "QuizSession", "RuntimeState", "SessionContext", "SessionState"]
