import json
import tempfile
import unittest
from pathlib import Path

from quizsession.models import Answer, Result, ReviewAnswer
from quizsession.stats import category_summary, export_ndjson, export_parquet, format_summary, results_frame


def _result(rid: str, category: str, score: int, time_taken: int, reviewed: bool = False) -> Result:
    ans = (Answer(1, 0, True), Answer(2, 1, False))
    reviews = [ReviewAnswer(question_id=2, original_answer=ans[1], review_answers=[Answer(2, 0, True)], best_score=True)] if reviewed else None
    return Result(
        id=rid,
        category=category,
        subcategory=None,
        date="2024-03-01T10:00:00.000Z",
        score=score,
        total_questions=2,
        answers=ans,
        time_taken=time_taken,
        review_answers=reviews,
    )


class StatsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.results = [
            _result("c", "python", 100, 3_000),
            _result("b", "networking", 50, 1_000, reviewed=True),
            _result("a", "python", 50, 5_000),
        ]

    def test_results_frame(self) -> None:
        df = results_frame(self.results)
        self.assertEqual(list(df["id"]), ["c", "b", "a"])
        self.assertEqual(int(df.loc[1, "corrected"]), 1)
        self.assertEqual(int(df.loc[0, "correct"]), 1)
        self.assertEqual(str(df["date"].dt.tz), "UTC")

    def test_empty_frame(self) -> None:
        df = results_frame([])
        self.assertTrue(df.empty)
        self.assertIn("score", df.columns)
        self.assertEqual(format_summary(df), "No quiz history yet.")

    def test_category_summary(self) -> None:
        summary = category_summary(results_frame(self.results))
        self.assertEqual(list(summary.index), ["networking", "python"])
        self.assertEqual(int(summary.loc["python", "attempts"]), 2)
        self.assertEqual(float(summary.loc["python", "mean_score"]), 75.0)
        self.assertEqual(int(summary.loc["python", "best_score"]), 100)
        self.assertEqual(float(summary.loc["python", "mean_time_ms"]), 4000.0)

    def test_format_summary(self) -> None:
        text = format_summary(results_frame(self.results))
        self.assertIn("Attempts: 3", text)
        self.assertIn("python: 2 attempt(s), avg 75.0%, best 100%", text)

    def test_export_ndjson(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "out" / "history.ndjson"
            export_ndjson(results_frame(self.results), out)
            lines = out.read_text(encoding="utf-8").strip().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertEqual(json.loads(lines[1])["category"], "networking")

    def test_export_parquet(self) -> None:
        import pandas as pd

        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "history.parquet"
            export_parquet(results_frame(self.results), out)
            back = pd.read_parquet(out, engine="pyarrow")
        self.assertEqual(list(back["id"]), ["c", "b", "a"])


if __name__ == "__main__":
    unittest.main()
