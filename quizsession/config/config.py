from __future__ import annotations

"""Configuration loading and validation for quizsession.

This module loads YAML configuration, applies defaults, and validates
that enumerations and paths are sane for the CLI.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

ALLOWED_CONTENT_FORMATS = {"json", "yaml"}
PACKAGED_CONTENT_ROOT = Path(__file__).resolve().parents[1] / "resources" / "quizzes"


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unknown content formats fall back to json with a warning; an empty or
    missing content root points at the packaged sample quizzes.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    # Shallow defaults for missing sections
    for section in ("content", "history", "review", "ui"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}

    content = cfg["content"]
    history = cfg["history"]
    review = cfg["review"]
    ui = cfg["ui"]

    content.setdefault("root", "")
    content.setdefault("format", "json")
    content.setdefault("categories_file", "categories.json")

    history.setdefault("path", "./quiz_history.json")
    history.setdefault("key", "quizHistory")

    review.setdefault("only_missed", True)

    ui.setdefault("show_explanations", True)
    ui.setdefault("explain", False)

    fmt = content.get("format")
    if fmt not in ALLOWED_CONTENT_FORMATS:
        print(f"WARNING: Unsupported content format '{fmt}', using 'json'.", file=sys.stderr)
        content["format"] = "json"

    if not content.get("root"):
        content["root"] = str(PACKAGED_CONTENT_ROOT)
    root = Path(content["root"])
    if not root.is_dir():
        print(f"WARNING: Content directory not found at '{root}'. Quizzes will fail to load.", file=sys.stderr)

    if not str(history.get("key") or "").strip():
        print("WARNING: Empty history key, using 'quizHistory'.", file=sys.stderr)
        history["key"] = "quizHistory"

    review["only_missed"] = bool(review.get("only_missed"))
    ui["show_explanations"] = bool(ui.get("show_explanations"))
    ui["explain"] = bool(ui.get("explain"))

    return cfg
