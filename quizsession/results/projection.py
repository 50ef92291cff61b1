from __future__ import annotations

"""Result Projection: turn a finished session into its Result record.

The result slot is either UNSET or Pinned(result). A pinned result always wins,
so a result that was already stored (and maybe annotated with review answers)
keeps its id and is never recomputed.
"""

from dataclasses import dataclass
from typing import Callable, Union
from uuid import uuid4

from ..errors import InvalidState
from ..models import Result
from ..session.quiz_session import QuizSession
from ..util.clock import iso_from_ms


class Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = Unset()


@dataclass(frozen=True)
class Pinned:
    result: Result


ResultSlot = Union[Unset, Pinned]


def new_result_id(ms: int) -> str:
    """Time-derived, unique: millisecond timestamp plus a short random suffix."""
    return f"{ms}-{uuid4().hex[:8]}"


def project_result(
    session: QuizSession,
    slot: ResultSlot = UNSET,
    *,
    id_factory: Callable[[int], str] = new_result_id,
) -> Result:
    if isinstance(slot, Pinned):
        return slot.result
    if not session.is_completed():
        raise InvalidState("cannot project a result before every question is answered")
    qs = session.question_set
    now = session.clock()
    return Result(
        id=id_factory(now),
        category=qs.category,
        subcategory=qs.subcategory,
        date=iso_from_ms(now),
        score=session.score(),
        total_questions=len(qs.questions),
        answers=tuple(session.answers),
        time_taken=max(0, session.elapsed_ms()),
    )
