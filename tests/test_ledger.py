import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from quizsession.models import Answer, Result
from quizsession.results import HISTORY_LIMIT, HistoryLedger
from quizsession.storage import JsonFileStore, MemoryStore


def _result(rid: str, answers=((1, 1, True), (2, 1, False)), category: str = "python") -> Result:
    ans = tuple(Answer(question_id=q, selected_option=s, is_correct=c) for q, s, c in answers)
    correct = sum(1 for a in ans if a.is_correct)
    return Result(
        id=rid,
        category=category,
        subcategory="basics",
        date="2024-01-01T00:00:00.000Z",
        score=round(100 * correct / len(ans)),
        total_questions=len(ans),
        answers=ans,
        time_taken=1_000,
    )


class HistoryLedgerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore()
        self.ledger = HistoryLedger(self.store)

    def test_add_is_most_recent_first(self) -> None:
        self.ledger.add(_result("a"))
        self.ledger.add(_result("b"))
        self.assertEqual([r.id for r in self.ledger.results], ["b", "a"])

    def test_cap_evicts_oldest(self) -> None:
        for i in range(HISTORY_LIMIT):
            self.ledger.add(_result(f"r{i}"))
        self.assertEqual(len(self.ledger), 20)
        self.ledger.add(_result("r20"))
        ids = [r.id for r in self.ledger.results]
        self.assertEqual(len(ids), 20)
        self.assertEqual(ids[0], "r20")
        self.assertNotIn("r0", ids)
        self.assertIn("r1", ids)

    def test_add_does_not_dedupe(self) -> None:
        r = _result("same")
        self.ledger.add(r)
        self.ledger.add(r)
        self.assertEqual(len(self.ledger), 2)

    def test_each_mutation_saves(self) -> None:
        self.ledger.add(_result("a"))
        self.ledger.record_review("a", 2, 0, 0)
        self.ledger.clear()
        self.assertEqual(self.store.saves, 3)
        self.assertEqual(self.store.load("quizHistory"), [])

    def test_review_scenario_sets_best_score(self) -> None:
        # correct indices [1, 0]; original picks [1, 1]
        self.ledger.add(_result("r1"))
        review = self.ledger.record_review("r1", 2, 0, 0)
        self.assertIsNotNone(review)
        self.assertTrue(review.best_score)
        self.assertFalse(review.original_answer.is_correct)
        self.assertEqual(len(review.review_answers), 1)
        self.assertTrue(self.ledger.by_id("r1").review_for(2).best_score)

    def test_best_score_is_monotonic(self) -> None:
        self.ledger.add(_result("r1"))
        self.ledger.record_review("r1", 2, 0, 0)
        for pick in (1, 2, 3, 1):
            review = self.ledger.record_review("r1", 2, pick, 0)
            self.assertTrue(review.best_score)
        self.assertEqual(len(review.review_answers), 5)

    def test_correct_original_never_earns_best_score(self) -> None:
        self.ledger.add(_result("r1"))
        review = self.ledger.record_review("r1", 1, 1, 1)
        self.assertTrue(review.review_answers[0].is_correct)
        self.assertFalse(review.best_score)

    def test_one_review_entry_per_question(self) -> None:
        self.ledger.add(_result("r1"))
        self.ledger.record_review("r1", 2, 1, 0)
        self.ledger.record_review("r1", 2, 0, 0)
        reviews = self.ledger.by_id("r1").review_answers
        self.assertEqual(len(reviews), 1)
        self.assertEqual([a.is_correct for a in reviews[0].review_answers], [False, True])

    def test_review_unknown_question_is_noop(self) -> None:
        self.ledger.add(_result("r1"))
        before = self.store.load("quizHistory")
        saves = self.store.saves
        self.assertIsNone(self.ledger.record_review("r1", 99, 0, 0))
        self.assertIsNone(self.ledger.by_id("r1").review_answers)
        self.assertEqual(self.store.load("quizHistory"), before)
        self.assertEqual(self.store.saves, saves)

    def test_review_unknown_result_is_noop(self) -> None:
        self.ledger.add(_result("r1"))
        self.assertIsNone(self.ledger.record_review("missing", 1, 0, 0))
        self.assertEqual(self.store.saves, 1)

    def test_lookups(self) -> None:
        self.ledger.add(_result("a", category="python"))
        self.ledger.add(_result("b", category="networking"))
        self.ledger.add(_result("c", category="python"))
        self.assertEqual([r.id for r in self.ledger.by_category("python")], ["c", "a"])
        self.assertEqual(self.ledger.by_category("history"), [])
        self.assertEqual(self.ledger.by_id("b").category, "networking")
        self.assertIsNone(self.ledger.by_id("zzz"))

    def test_reload_round_trips_reviews(self) -> None:
        self.ledger.add(_result("r1"))
        self.ledger.record_review("r1", 2, 0, 0)
        reloaded = HistoryLedger(self.store)
        self.assertEqual(reloaded.results, self.ledger.results)
        self.assertTrue(reloaded.by_id("r1").review_for(2).best_score)


class LedgerPersistenceTests(unittest.TestCase):
    def test_json_file_store_survives_restart(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "history.json"
            ledger = HistoryLedger(JsonFileStore(path))
            ledger.add(_result("r1"))
            ledger.record_review("r1", 2, 0, 0)
            raw = json.loads(path.read_text(encoding="utf-8"))
            entry = raw["quizHistory"][0]
            self.assertEqual(entry["reviewAnswers"][0]["bestScore"], True)
            self.assertEqual(entry["totalQuestions"], 2)
            again = HistoryLedger(JsonFileStore(path))
            self.assertEqual(again.by_id("r1"), ledger.by_id("r1"))

    def test_absent_file_starts_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            ledger = HistoryLedger(JsonFileStore(Path(tmp) / "none.json"))
            self.assertEqual(len(ledger), 0)

    def test_corrupt_file_starts_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "history.json"
            path.write_text("{not json", encoding="utf-8")
            err = io.StringIO()
            with redirect_stderr(err):
                ledger = HistoryLedger(JsonFileStore(path))
            self.assertEqual(len(ledger), 0)
            self.assertIn("WARNING", err.getvalue())
            ledger.add(_result("r1"))
            self.assertEqual(len(HistoryLedger(JsonFileStore(path))), 1)

    def test_malformed_records_start_empty(self) -> None:
        store = MemoryStore()
        store.save("quizHistory", [{"id": "x", "score": "lots"}])
        with redirect_stderr(io.StringIO()):
            ledger = HistoryLedger(store)
        self.assertEqual(len(ledger), 0)

    def test_custom_key(self) -> None:
        store = MemoryStore()
        HistoryLedger(store, key="alt").add(_result("r1"))
        self.assertIsNone(store.load("quizHistory"))
        self.assertEqual(len(HistoryLedger(store, key="alt")), 1)


if __name__ == "__main__":
    unittest.main()
