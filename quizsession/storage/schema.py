from __future__ import annotations

"""Pydantic models for persisted history records (camelCase on disk)."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import Answer, Result, ReviewAnswer


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AnswerRecord(_Record):
    question_id: int = Field(alias="questionId")
    selected_option: int = Field(alias="selectedOption")
    is_correct: bool = Field(alias="isCorrect")

    def to_model(self) -> Answer:
        return Answer(question_id=self.question_id, selected_option=self.selected_option, is_correct=self.is_correct)


class ReviewAnswerRecord(_Record):
    question_id: int = Field(alias="questionId")
    original_answer: AnswerRecord = Field(alias="originalAnswer")
    review_answers: List[AnswerRecord] = Field(default_factory=list, alias="reviewAnswers")
    best_score: bool = Field(default=False, alias="bestScore")

    def to_model(self) -> ReviewAnswer:
        return ReviewAnswer(
            question_id=self.question_id,
            original_answer=self.original_answer.to_model(),
            review_answers=[a.to_model() for a in self.review_answers],
            best_score=self.best_score,
        )


class ResultRecord(_Record):
    id: str
    category: str
    subcategory: Optional[str] = None
    date: str
    score: int = Field(ge=0, le=100)
    total_questions: int = Field(alias="totalQuestions", ge=0)
    answers: List[AnswerRecord]
    time_taken: int = Field(alias="timeTaken", ge=0)
    review_answers: Optional[List[ReviewAnswerRecord]] = Field(default=None, alias="reviewAnswers")

    @field_validator("subcategory")
    @classmethod
    def _empty_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    def to_model(self) -> Result:
        return Result(
            id=self.id,
            category=self.category,
            subcategory=self.subcategory,
            date=self.date,
            score=self.score,
            total_questions=self.total_questions,
            answers=tuple(a.to_model() for a in self.answers),
            time_taken=self.time_taken,
            review_answers=[r.to_model() for r in self.review_answers] if self.review_answers is not None else None,
        )


def validate_records(records: Any) -> List[Result]:
    """Validate a deserialized ledger (list of dicts) and return Results.

    Raises TypeError for a non-list payload and pydantic.ValidationError for a
    malformed record.
    """
    if not isinstance(records, list):
        raise TypeError("history payload must be a list of results")
    return [ResultRecord.model_validate(r).to_model() for r in records]
