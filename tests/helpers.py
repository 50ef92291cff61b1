from __future__ import annotations

from typing import List, Sequence

from quizsession.models import Question, QuestionSet


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def tick(self, ms: int) -> None:
        self.now += ms


def make_set(correct: Sequence[int], n_options: int = 4, category: str = "python", subcategory: str | None = "basics") -> QuestionSet:
    questions: List[Question] = [
        Question(
            id=i + 1,
            question=f"Question {i + 1}?",
            options=tuple(f"opt{j}" for j in range(n_options)),
            correct_answer=c,
            explanation=f"Because {c}.",
        )
        for i, c in enumerate(correct)
    ]
    return QuestionSet(category=category, subcategory=subcategory, questions=tuple(questions))


def make_doc(correct: Sequence[int], category: str = "python", subcategory: str | None = "basics") -> dict:
    return make_set(correct, category=category, subcategory=subcategory).to_json()
