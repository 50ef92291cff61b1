from __future__ import annotations

"""History statistics on pandas DataFrames.

One row per Result; review columns count how many questions were revisited
and how many of those were corrected (bestScore).
"""

from pathlib import Path
from typing import Iterable

import pandas as pd

from ..models import Result

COLUMNS = {
    "id": "string",
    "category": "string",
    "subcategory": "string",
    "date": pd.DatetimeTZDtype(tz="UTC"),
    "score": "UInt8",
    "total": "UInt16",
    "correct": "UInt16",
    "time_taken_ms": "UInt32",
    "reviewed": "UInt16",
    "corrected": "UInt16",
}


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in COLUMNS.items()})


def results_frame(results: Iterable[Result]) -> pd.DataFrame:
    rows = []
    for r in results:
        reviews = r.review_answers or []
        rows.append(
            {
                "id": r.id,
                "category": r.category,
                "subcategory": r.subcategory,
                "date": r.date,
                "score": r.score,
                "total": r.total_questions,
                "correct": r.correct_count,
                "time_taken_ms": r.time_taken,
                "reviewed": len(reviews),
                "corrected": sum(1 for rv in reviews if rv.best_score),
            }
        )
    if not rows:
        return _empty_df()
    df = pd.DataFrame(rows)
    df["date"] = pd.to_datetime(df["date"], utc=True, errors="coerce")
    for col, dt in COLUMNS.items():
        df[col] = df[col].astype(dt)
    return df[list(COLUMNS.keys())]


def category_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Attempts, mean/best score and mean time per category, sorted by category."""
    if df.empty:
        return pd.DataFrame(columns=["attempts", "mean_score", "best_score", "mean_time_ms"])
    g = df.groupby("category", sort=True)
    out = pd.DataFrame(
        {
            "attempts": g["id"].count(),
            "mean_score": g["score"].mean().astype("float64").round(1),
            "best_score": g["score"].max().astype("int64"),
            "mean_time_ms": g["time_taken_ms"].mean().astype("float64").round(0),
        }
    )
    out.index = out.index.astype(str)
    return out


def format_summary(df: pd.DataFrame) -> str:
    """Return a human-readable summary of the history frame."""
    if df.empty:
        return "No quiz history yet."
    lines = [f"Attempts: {len(df)}  Average score: {df['score'].astype('float64').mean():.1f}%"]
    for cat, row in category_summary(df).iterrows():
        secs = float(row["mean_time_ms"]) / 1000.0
        lines.append(
            f"{cat}: {int(row['attempts'])} attempt(s), avg {row['mean_score']:.1f}%, best {int(row['best_score'])}%, avg time {secs:.1f}s"
        )
    return "\n".join(lines)


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, date_format="iso")


def export_parquet(df: pd.DataFrame, out_path: Path) -> None:
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(out_path, engine="pyarrow", compression="zstd", index=False)
