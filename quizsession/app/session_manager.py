from __future__ import annotations

"""Session Manager: orchestrates content loading, the active session and history.

One active session at a time. A normal attempt is added to the ledger exactly
once, when advance() completes it; a review session writes each answer into
the reviewed Result instead of producing a new one.
"""

from dataclasses import dataclass
from typing import Optional

from ..content.cache import ContentCache
from ..errors import ContentUnavailable, InvalidState
from ..models import Answer, Question, Result
from ..results.ledger import HistoryLedger
from ..results.projection import UNSET, Pinned, ResultSlot, project_result
from ..session.quiz_session import AdvanceOutcome, QuizSession
from ..util.clock import Clock, now_ms


@dataclass(frozen=True)
class ReviewContext:
    result_id: str


class SessionManager:
    def __init__(self, cache: ContentCache, ledger: HistoryLedger, clock: Clock = now_ms) -> None:
        self.cache = cache
        self.ledger = ledger
        self.clock = clock
        self.session: Optional[QuizSession] = None
        self.review: Optional[ReviewContext] = None
        self._slot: ResultSlot = UNSET

    async def start_quiz(self, category: str, subcategory: Optional[str] = None) -> QuizSession:
        # load first: a failed load leaves the previous session in place
        qs = await self.cache.load(category, subcategory)
        session = QuizSession(clock=self.clock)
        session.start(qs)
        self.session = session
        self.review = None
        self._slot = UNSET
        return session

    async def start_review(self, result_id: str, only_missed: bool = True) -> Optional[QuizSession]:
        """Re-enter a session over a past Result's questions. Unknown id -> None."""
        result = self.ledger.by_id(result_id)
        if result is None:
            return None
        qs = await self.cache.load(result.category, result.subcategory)
        answered = [a.question_id for a in result.answers]
        if only_missed:
            missed = [a.question_id for a in result.answers if not a.is_correct]
            if missed:
                answered = missed
        subset = qs.subset(answered)
        if not subset.questions:
            raise ContentUnavailable(qs.key, f"no questions left from result {result_id}")
        session = QuizSession(clock=self.clock)
        session.start(subset)
        self.session = session
        self.review = ReviewContext(result_id=result_id)
        self._slot = Pinned(result)
        return session

    def current_question(self) -> Optional[Question]:
        return self.session.current_question() if self.session else None

    def answer(self, selected_option: int) -> Answer:
        session = self._active()
        question = session.current_question()
        ans = session.answer(selected_option)
        if self.review is not None and question is not None:
            self.ledger.record_review(self.review.result_id, question.id, selected_option, question.correct_answer)
        return ans

    def next(self) -> AdvanceOutcome:
        session = self._active()
        outcome = session.advance()
        if outcome is AdvanceOutcome.COMPLETED and self.review is None:
            result = project_result(session, self._slot)
            self._slot = Pinned(result)
            self.ledger.add(result)
        return outcome

    def result(self) -> Optional[Result]:
        """The pinned Result, else a provisional one once every question is answered."""
        if isinstance(self._slot, Pinned):
            return self._slot.result
        if self.session is None or not self.session.is_completed():
            return None
        return project_result(self.session, self._slot)

    def reset(self) -> None:
        self.session = None
        self.review = None
        self._slot = UNSET

    def _active(self) -> QuizSession:
        if self.session is None:
            raise InvalidState("no active session")
        return self.session
