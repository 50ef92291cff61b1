from __future__ import annotations

"""CLI for quizsession using SessionManager and the history ledger."""

import argparse
import asyncio
from pathlib import Path
from typing import Any, Callable, Dict

from ..config.config import load_config, validate_config
from ..content.cache import ContentCache
from ..content.categories import load_categories
from ..content.sources import DirectorySource
from ..errors import ContentUnavailable
from ..models import Question
from ..results.ledger import HistoryLedger
from ..session.quiz_session import AdvanceOutcome
from ..stats.stats import export_ndjson, export_parquet, format_summary, results_frame
from ..storage.store import JsonFileStore
from ..util import explain
from .session_manager import SessionManager


def _build(cfg: Dict[str, Any]) -> SessionManager:
    content = cfg["content"]
    history = cfg["history"]
    cache = ContentCache(DirectorySource(content["root"], content["format"]))
    ledger = HistoryLedger(JsonFileStore(history["path"]), key=history["key"])
    return SessionManager(cache, ledger)


def _ask_option(question: Question, ask: Callable[[str], str], inform: Callable[[str], None]) -> int | None:
    inform(f"\n{question.question}")
    for i, opt in enumerate(question.options, start=1):
        inform(f"  {i}. {opt}")
    while True:
        raw = ask(f"Answer [1-{len(question.options)}, q to quit]: ").strip().lower()
        if raw == "q":
            return None
        if raw.isdigit() and 1 <= int(raw) <= len(question.options):
            return int(raw) - 1
        inform("Please enter a valid option number.")


def _drive(sm: SessionManager, cfg: Dict[str, Any], ask: Callable[[str], str], inform: Callable[[str], None]) -> bool:
    """Run the active session to completion. False if the user quit."""
    show_expl = bool(cfg["ui"].get("show_explanations", True))
    while True:
        question = sm.current_question()
        if question is None:
            return False
        choice = _ask_option(question, ask, inform)
        if choice is None:
            sm.reset()
            inform("Quiz abandoned.")
            return False
        ans = sm.answer(choice)
        verdict = "Correct!" if ans.is_correct else f"Incorrect. Answer: {question.options[question.correct_answer]}"
        inform(verdict)
        if show_expl and question.explanation:
            inform(question.explanation)
        if sm.next() is AdvanceOutcome.COMPLETED:
            return True


def main(argv: list[str] | None = None, *, ask: Callable[[str], str] = input, inform: Callable[[str], None] = print) -> int:
    p = argparse.ArgumentParser(prog="quizsession")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--explain", action="store_true", help="Print milestone trace lines")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list-categories")

    rp = sub.add_parser("run")
    rp.add_argument("--category", required=True)
    rp.add_argument("--subcategory", default=None)

    hp = sub.add_parser("history")
    hp.add_argument("--category", default=None)
    hp.add_argument("--export", default=None, help="Write history stats to .ndjson or .parquet")

    vp = sub.add_parser("review")
    vp.add_argument("--result-id", required=True)
    vp.add_argument("--all", dest="only_missed", action="store_false", help="Review every question, not only missed ones")
    vp.set_defaults(only_missed=None)

    sub.add_parser("clear-history")

    args = p.parse_args(argv)
    cfg = validate_config(load_config(args.config))
    if args.explain or cfg["ui"]["explain"]:
        explain.enable(True)

    if args.cmd == "list-categories":
        cats = load_categories(Path(cfg["content"]["root"]) / cfg["content"]["categories_file"])
        for c in cats:
            subs = ", ".join(s.id for s in c.subcategories)
            inform(f"{c.id}: {c.name} - {c.description}" + (f" | subcategories: {subs}" if subs else ""))
        return 0

    sm = _build(cfg)

    if args.cmd == "run":
        try:
            asyncio.run(sm.start_quiz(args.category, args.subcategory))
        except ContentUnavailable as e:
            inform(f"Couldn't load quiz: {e}")
            return 1
        if not _drive(sm, cfg, ask, inform):
            return 0
        result = sm.result()
        if result is None:
            inform("Quiz finished without a result.")
            return 1
        inform(f"\nScore: {result.score}% ({result.correct_count}/{result.total_questions}) in {result.time_taken / 1000.0:.1f}s")
        inform(f"Result id: {result.id}")
        return 0

    if args.cmd == "history":
        results = sm.ledger.by_category(args.category) if args.category else sm.ledger.results
        for r in results:
            label = f"{r.category}-{r.subcategory}" if r.subcategory else r.category
            reviewed = f" reviewed {len(r.review_answers)}" if r.review_answers else ""
            inform(f"{r.id}  {r.date}  {label}  {r.score}%{reviewed}")
        df = results_frame(results)
        inform(format_summary(df))
        if args.export:
            out = Path(args.export)
            if out.suffix == ".parquet":
                export_parquet(df, out)
            else:
                export_ndjson(df, out)
            inform(f"Exported {len(df)} row(s) to {out}")
        return 0

    if args.cmd == "review":
        only_missed = cfg["review"]["only_missed"] if args.only_missed is None else args.only_missed
        try:
            session = asyncio.run(sm.start_review(args.result_id, only_missed=only_missed))
        except ContentUnavailable as e:
            inform(f"Couldn't load quiz: {e}")
            return 1
        if session is None:
            inform(f"No result with id {args.result_id}")
            return 1
        if _drive(sm, cfg, ask, inform):
            result = sm.ledger.by_id(args.result_id)
            corrected = sum(1 for rv in (result.review_answers or []) if rv.best_score) if result else 0
            inform(f"\nReview finished. Corrected so far: {corrected}")
        return 0

    if args.cmd == "clear-history":
        sm.ledger.clear()
        inform("History cleared.")
        return 0

    return 2
