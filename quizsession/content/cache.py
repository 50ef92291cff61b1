from __future__ import annotations

"""Content Cache: memoizing loader for question sets.

A miss fetches the document from the content source, validates it and stores
the resulting QuestionSet under its exact key string; a hit returns the stored
object itself, with no fetch. Fetch and validation failures both surface as
ContentUnavailable.
"""

from typing import Dict, Optional

from pydantic import ValidationError

from ..errors import ContentUnavailable
from ..models import QuestionSet, set_key
from ..util.explain import trace
from .schema import QuizDocument, to_question_set
from .sources import ContentSource


class ContentCache:
    def __init__(self, source: ContentSource) -> None:
        self.source = source
        self._sets: Dict[str, QuestionSet] = {}

    async def load(self, category: str, subcategory: Optional[str] = None) -> QuestionSet:
        # "" and None name the same set
        subcategory = subcategory or None
        key = set_key(category, subcategory)
        cached = self._sets.get(key)
        if cached is not None:
            trace("content_cache_hit", {"key": key})
            return cached
        qs = await self._fetch(key, category, subcategory)
        self._sets[key] = qs
        trace("content_loaded", {"key": key, "questions": len(qs)})
        return qs

    async def exists(self, category: str, subcategory: Optional[str] = None) -> bool:
        try:
            await self.load(category, subcategory)
        except ContentUnavailable:
            return False
        return True

    def evict(self, category: str, subcategory: Optional[str] = None) -> bool:
        key = set_key(category, subcategory)
        removed = self._sets.pop(key, None) is not None
        if removed:
            trace("content_evicted", {"key": key})
        return removed

    def clear(self) -> None:
        self._sets.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._sets

    def __len__(self) -> int:
        return len(self._sets)

    async def _fetch(self, key: str, category: str, subcategory: Optional[str]) -> QuestionSet:
        try:
            raw = await self.source.fetch(key)
        except Exception as exc:
            raise ContentUnavailable(key, str(exc)) from exc
        try:
            doc = QuizDocument.model_validate(raw)
        except ValidationError as exc:
            raise ContentUnavailable(key, "Invalid quiz data structure") from exc
        return to_question_set(doc, category, subcategory)
