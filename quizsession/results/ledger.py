from __future__ import annotations

"""History Ledger: bounded, most-recent-first list of finished attempts.

Every mutating operation ends with an explicit save() of the full ledger to
the key-value store. Mutations are serialized with a lock so concurrent
callers cannot break the size cap.
"""

import threading
from typing import Iterator, List, Optional

from pydantic import ValidationError

from ..models import Answer, Result, ReviewAnswer
from ..storage.schema import validate_records
from ..storage.store import CorruptStore, KeyValueStore
from ..util.explain import trace, warn

HISTORY_LIMIT = 20
DEFAULT_KEY = "quizHistory"


class HistoryLedger:
    def __init__(self, store: KeyValueStore, key: str = DEFAULT_KEY) -> None:
        self.store = store
        self.key = key
        self._lock = threading.RLock()
        self._results: List[Result] = self._load()

    def _load(self) -> List[Result]:
        try:
            raw = self.store.load(self.key)
        except CorruptStore as e:
            warn(f"History store is corrupt, starting empty ({e})")
            return []
        if raw is None:
            return []
        try:
            results = validate_records(raw)
        except (TypeError, ValidationError) as e:
            warn(f"History data is corrupt, starting empty ({e.__class__.__name__})")
            return []
        trace("history_loaded", {"results": len(results)})
        return results[:HISTORY_LIMIT]

    def save(self) -> None:
        with self._lock:
            self.store.save(self.key, [r.to_json() for r in self._results])

    # --- mutations ---

    def add(self, result: Result) -> None:
        with self._lock:
            self._results.insert(0, result)
            if len(self._results) > HISTORY_LIMIT:
                del self._results[HISTORY_LIMIT:]
            self.save()
        trace("result_added", {"id": result.id, "score": result.score, "size": len(self._results)})

    def record_review(self, result_id: str, question_id: int, selected_option: int, correct_answer: int) -> Optional[ReviewAnswer]:
        """Append a review answer for one question of a stored result.

        Unknown result id, or a question the attempt never answered, is a
        silent no-op (returns None, nothing saved).
        """
        with self._lock:
            result = self.by_id(result_id)
            if result is None:
                return None
            review = result.review_for(question_id)
            if review is None:
                original = result.answer_for(question_id)
                if original is None:
                    return None
                review = ReviewAnswer(question_id=question_id, original_answer=original)
                if result.review_answers is None:
                    result.review_answers = []
                result.review_answers.append(review)
            attempt = Answer(
                question_id=question_id,
                selected_option=selected_option,
                is_correct=selected_option == correct_answer,
            )
            review.review_answers.append(attempt)
            if attempt.is_correct and not review.original_answer.is_correct:
                review.best_score = True
            self.save()
        trace("review_recorded", {"result": result_id, "question": question_id, "correct": attempt.is_correct, "best": review.best_score})
        return review

    def clear(self) -> None:
        with self._lock:
            self._results = []
            self.save()
        trace("history_cleared")

    # --- reads ---

    @property
    def results(self) -> List[Result]:
        return list(self._results)

    def by_id(self, result_id: str) -> Optional[Result]:
        for r in self._results:
            if r.id == result_id:
                return r
        return None

    def by_category(self, category: str) -> List[Result]:
        return [r for r in self._results if r.category == category]

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[Result]:
        return iter(list(self._results))
