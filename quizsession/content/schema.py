from __future__ import annotations

"""Pydantic models validating question-set documents from a content source."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models import Question, QuestionSet


class QuestionDoc(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    question: str
    options: List[str] = Field(min_length=1)
    correct_answer: int = Field(alias="correctAnswer", ge=0)
    explanation: str = ""

    @model_validator(mode="after")
    def _answer_in_range(self) -> "QuestionDoc":
        if self.correct_answer >= len(self.options):
            raise ValueError(f"correctAnswer {self.correct_answer} out of range for {len(self.options)} options")
        return self


class QuizDocument(BaseModel):
    category: Optional[str] = None
    subcategory: Optional[str] = None
    questions: List[QuestionDoc] = Field(min_length=1)

    @field_validator("questions")
    @classmethod
    def _unique_ids(cls, v: List[QuestionDoc]) -> List[QuestionDoc]:
        seen = set()
        for q in v:
            if q.id in seen:
                raise ValueError(f"duplicate question id {q.id}")
            seen.add(q.id)
        return v


def to_question_set(doc: QuizDocument, category: str, subcategory: Optional[str]) -> QuestionSet:
    """Build the immutable QuestionSet for the requested key.

    The key's category/subcategory win over whatever the document echoes back.
    """
    return QuestionSet(
        category=category,
        subcategory=subcategory,
        questions=tuple(
            Question(
                id=q.id,
                question=q.question,
                options=tuple(q.options),
                correct_answer=q.correct_answer,
                explanation=q.explanation,
            )
            for q in doc.questions
        ),
    )
