from __future__ import annotations

"""Minimal tracing helpers (Explain Mode).

Enable with the CLI flag or `ui.explain` and emit terse, readable lines at
milestones: content loads, session start/finish, ledger writes.
"""

import json
import sys
from typing import Any, Dict, TextIO

_ENABLED = False
_STREAM: TextIO | None = None


def enable(flag: bool = True, stream: TextIO | None = None) -> None:
    global _ENABLED, _STREAM
    _ENABLED = bool(flag)
    _STREAM = stream


def enabled() -> bool:
    return _ENABLED


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    out = _STREAM or sys.stdout
    data = payload or {}
    # one line JSON; default=str keeps odd values printable
    print(f"[EXPLAIN] {event} :: {json.dumps(data, separators=(',', ':'), default=str)}", file=out)


def warn(msg: str) -> None:
    print(f"WARNING: {msg}", file=sys.stderr)
