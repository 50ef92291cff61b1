from .session_manager import ReviewContext, SessionManager

__all__ = ["ReviewContext", "SessionManager"]
