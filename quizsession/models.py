from __future__ import annotations

"""Quiz data model: questions, answers, results and the category index.

Wire format (JSON) uses the camelCase keys of the stored history documents;
Python attributes are snake_case.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidContent


def set_key(category: str, subcategory: Optional[str] = None) -> str:
    """Content key for a question set: "category-subcategory" or just "category"."""
    if subcategory:
        return f"{category}-{subcategory}"
    return category


@dataclass(frozen=True)
class Question:
    id: int
    question: str
    options: Tuple[str, ...]
    correct_answer: int
    explanation: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.correct_answer < len(self.options):
            raise InvalidContent(
                f"Question {self.id}: correctAnswer {self.correct_answer} is not an index into {len(self.options)} options"
            )

    def is_correct(self, selected_option: int) -> bool:
        return selected_option == self.correct_answer

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class QuestionSet:
    category: str
    subcategory: Optional[str]
    questions: Tuple[Question, ...] = ()

    @property
    def key(self) -> str:
        return set_key(self.category, self.subcategory)

    def __len__(self) -> int:
        return len(self.questions)

    def question(self, question_id: int) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def subset(self, question_ids: List[int]) -> "QuestionSet":
        """Questions whose id is in question_ids, in original order."""
        wanted = set(question_ids)
        return QuestionSet(
            category=self.category,
            subcategory=self.subcategory,
            questions=tuple(q for q in self.questions if q.id in wanted),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "subcategory": self.subcategory,
            "questions": [q.to_json() for q in self.questions],
        }


@dataclass(frozen=True)
class Answer:
    question_id: int
    selected_option: int
    is_correct: bool

    @classmethod
    def for_question(cls, question: Question, selected_option: int) -> "Answer":
        return cls(
            question_id=question.id,
            selected_option=selected_option,
            is_correct=question.is_correct(selected_option),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "questionId": self.question_id,
            "selectedOption": self.selected_option,
            "isCorrect": self.is_correct,
        }


@dataclass
class ReviewAnswer:
    """Review attempts at one question of a past Result."""

    question_id: int
    original_answer: Answer
    review_answers: List[Answer] = field(default_factory=list)
    best_score: bool = False

    def to_json(self) -> Dict[str, Any]:
        return {
            "questionId": self.question_id,
            "originalAnswer": self.original_answer.to_json(),
            "reviewAnswers": [a.to_json() for a in self.review_answers],
            "bestScore": self.best_score,
        }


@dataclass
class Result:
    """Snapshot of a finished attempt.

    Only the history ledger appends to review_answers; every other field is
    fixed once the result is projected.
    """

    id: str
    category: str
    subcategory: Optional[str]
    date: str
    score: int
    total_questions: int
    answers: Tuple[Answer, ...]
    time_taken: int
    review_answers: Optional[List[ReviewAnswer]] = None

    @property
    def correct_count(self) -> int:
        return sum(1 for a in self.answers if a.is_correct)

    def answer_for(self, question_id: int) -> Optional[Answer]:
        for a in self.answers:
            if a.question_id == question_id:
                return a
        return None

    def review_for(self, question_id: int) -> Optional[ReviewAnswer]:
        for r in self.review_answers or []:
            if r.question_id == question_id:
                return r
        return None

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "category": self.category,
            "subcategory": self.subcategory,
            "date": self.date,
            "score": self.score,
            "totalQuestions": self.total_questions,
            "answers": [a.to_json() for a in self.answers],
            "timeTaken": self.time_taken,
        }
        if self.review_answers is not None:
            data["reviewAnswers"] = [r.to_json() for r in self.review_answers]
        return data


@dataclass(frozen=True)
class QuizSubcategory:
    id: str
    name: str
    description: str = ""
    icon: str = ""
    color: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "QuizSubcategory":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            description=str(data.get("description", "")),
            icon=str(data.get("icon", "")),
            color=str(data.get("color", "")),
        )


@dataclass(frozen=True)
class QuizCategory:
    id: str
    name: str
    description: str = ""
    icon: str = ""
    color: str = ""
    subcategories: Tuple[QuizSubcategory, ...] = ()

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "QuizCategory":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            description=str(data.get("description", "")),
            icon=str(data.get("icon", "")),
            color=str(data.get("color", "")),
            subcategories=tuple(QuizSubcategory.from_json(s) for s in data.get("subcategories", []) or []),
        )
