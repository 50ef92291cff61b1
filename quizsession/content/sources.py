from __future__ import annotations

"""Content sources: where question-set documents come from.

A source maps a key string ("category" or "category-subcategory") to a raw
document dict, or raises. Sources do no validation; the cache does.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Protocol

import yaml

ALLOWED_FORMATS = {"json", "yaml"}


class ContentSource(Protocol):
    async def fetch(self, key: str) -> Dict[str, Any]: ...


class DirectorySource:
    """Reads {root}/{key}.json (or .yml/.yaml) documents."""

    def __init__(self, root: str | Path, fmt: str = "json") -> None:
        if fmt not in ALLOWED_FORMATS:
            raise ValueError(f"Unsupported content format: {fmt}")
        self.root = Path(root)
        self.fmt = fmt

    def path_for(self, key: str) -> Path:
        if self.fmt == "json":
            return self.root / f"{key}.json"
        p = self.root / f"{key}.yml"
        if not p.exists():
            alt = self.root / f"{key}.yaml"
            if alt.exists():
                return alt
        return p

    def _read(self, key: str) -> Dict[str, Any]:
        p = self.path_for(key)
        with p.open("r", encoding="utf-8") as f:
            if self.fmt == "json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{p.name}: expected a mapping at top level")
        return data

    async def fetch(self, key: str) -> Dict[str, Any]:
        return await asyncio.to_thread(self._read, key)


class MappingSource:
    """In-memory documents keyed by content key. Counts fetches."""

    def __init__(self, documents: Mapping[str, Dict[str, Any]]) -> None:
        self.documents = dict(documents)
        self.fetches: Dict[str, int] = {}

    async def fetch(self, key: str) -> Dict[str, Any]:
        self.fetches[key] = self.fetches.get(key, 0) + 1
        if key not in self.documents:
            raise KeyError(f"No quiz document for {key}")
        return self.documents[key]
