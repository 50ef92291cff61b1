from __future__ import annotations

"""Durable key-value stores for the history ledger.

Contract: load(key) returns the deserialized value or None when absent;
save(key, value) replaces it. JsonFileStore keeps every key in one JSON
document on disk.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol


class CorruptStore(ValueError):
    """The backing file exists but does not hold a JSON object."""


class KeyValueStore(Protocol):
    def load(self, key: str) -> Optional[Any]: ...

    def save(self, key: str, value: Any) -> None: ...


class MemoryStore:
    """Process-local store. Values are kept serialized so reads never alias writes."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self.saves = 0

    def load(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)
        self.saves += 1


class JsonFileStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CorruptStore(f"{self.path}: {e}") from e
        if not isinstance(data, dict):
            raise CorruptStore(f"{self.path}: expected a JSON object")
        return data

    def load(self, key: str) -> Optional[Any]:
        return self._read_all().get(key)

    def save(self, key: str, value: Any) -> None:
        try:
            data = self._read_all()
        except CorruptStore:
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        tmp.replace(self.path)
