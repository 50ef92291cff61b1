from __future__ import annotations

"""Quiz Session: state machine for a single attempt.

NotStarted -> InProgress -> Completed. Completed is terminal; the cursor stays
on the last question afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..errors import InvalidContent, InvalidState
from ..models import Answer, Question, QuestionSet
from ..util.clock import Clock, now_ms
from ..util.explain import trace


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class AdvanceOutcome(str, Enum):
    NOT_ANSWERED = "not_answered"
    CONTINUE = "continue"
    COMPLETED = "completed"


@dataclass(frozen=True)
class SessionContext:
    question_set: QuestionSet
    started_at: int


@dataclass
class RuntimeState:
    index: int = 0
    answers: List[Answer] = field(default_factory=list)
    ended_at: Optional[int] = None


class QuizSession:
    def __init__(self, clock: Clock = now_ms) -> None:
        self.clock = clock
        self.state = SessionState.NOT_STARTED
        self.ctx: Optional[SessionContext] = None
        self.runtime = RuntimeState()

    # --- transitions ---

    def start(self, question_set: QuestionSet) -> None:
        if self.state is not SessionState.NOT_STARTED:
            raise InvalidState(f"start() called in state {self.state.value}")
        if len(question_set.questions) == 0:
            raise InvalidContent(f"Question set {question_set.key!r} has no questions")
        self.ctx = SessionContext(question_set=question_set, started_at=self.clock())
        self.runtime = RuntimeState()
        self.state = SessionState.IN_PROGRESS
        trace("session_started", {"key": question_set.key, "questions": len(question_set)})

    def answer(self, selected_option: int) -> Answer:
        """Record (or overwrite) the answer to the current question."""
        self._require(SessionState.IN_PROGRESS, "answer")
        question = self.current_question()
        if question is None:
            raise InvalidState("no current question")
        if not 0 <= selected_option < len(question.options):
            raise ValueError(f"Option {selected_option} out of range for question {question.id}")
        ans = Answer.for_question(question, selected_option)
        answers = [a for a in self.runtime.answers if a.question_id != question.id]
        answers.append(ans)
        self.runtime.answers = answers
        return ans

    def can_advance(self) -> bool:
        question = self.current_question()
        if question is None:
            return False
        return any(a.question_id == question.id for a in self.runtime.answers)

    def advance(self) -> AdvanceOutcome:
        self._require(SessionState.IN_PROGRESS, "advance")
        if not self.can_advance():
            return AdvanceOutcome.NOT_ANSWERED
        if self.is_last_question():
            self.runtime.ended_at = self.clock()
            self.state = SessionState.COMPLETED
            trace("session_completed", {"key": self.question_set.key, "score": self.score()})
            return AdvanceOutcome.COMPLETED
        self.runtime.index += 1
        return AdvanceOutcome.CONTINUE

    # --- queries ---

    @property
    def question_set(self) -> QuestionSet:
        if self.ctx is None:
            raise InvalidState("session not started")
        return self.ctx.question_set

    @property
    def index(self) -> int:
        return self.runtime.index

    @property
    def answers(self) -> List[Answer]:
        return list(self.runtime.answers)

    @property
    def started_at(self) -> Optional[int]:
        return self.ctx.started_at if self.ctx else None

    @property
    def ended_at(self) -> Optional[int]:
        return self.runtime.ended_at

    def current_question(self) -> Optional[Question]:
        if self.ctx is None:
            return None
        questions = self.ctx.question_set.questions
        if 0 <= self.runtime.index < len(questions):
            return questions[self.runtime.index]
        return None

    def is_last_question(self) -> bool:
        if self.ctx is None:
            return True
        return self.runtime.index == len(self.ctx.question_set.questions) - 1

    def is_completed(self) -> bool:
        """Every question has a recorded answer, wherever the cursor is."""
        if self.ctx is None:
            return False
        answered = {a.question_id for a in self.runtime.answers}
        return all(q.id in answered for q in self.ctx.question_set.questions)

    def correct_count(self) -> int:
        return sum(1 for a in self.runtime.answers if a.is_correct)

    def score(self) -> int:
        """Percentage of correct answers, rounded half up."""
        if self.ctx is None:
            return 0
        total = len(self.ctx.question_set.questions)
        if total == 0:
            return 0
        # integer form of floor(100 * c / n + 0.5)
        return (200 * self.correct_count() + total) // (2 * total)

    def elapsed_ms(self) -> int:
        start = self.started_at
        end = self.runtime.ended_at
        if start is not None and end is not None and end >= start:
            return end - start
        if start is not None:
            # not finalized yet: live estimate
            return max(0, self.clock() - start)
        return 0

    def _require(self, state: SessionState, op: str) -> None:
        if self.state is not state:
            raise InvalidState(f"{op}() not allowed in state {self.state.value}")
