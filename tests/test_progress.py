import json
import tempfile
import unittest
from pathlib import Path

from wordsearch.core.models import Progress
from wordsearch.data.progress import (
    SCORE_KEY,
    STAGE_KEY,
    InMemoryProgressStore,
    JsonProgressStore,
    parse_counter,
)


class ParseCounterTests(unittest.TestCase):
    def test_valid_values(self) -> None:
        self.assertEqual(parse_counter("12", STAGE_KEY), 12)
        self.assertEqual(parse_counter(" 3 ", STAGE_KEY), 3)
        self.assertEqual(parse_counter(7, SCORE_KEY), 7)
        self.assertEqual(parse_counter(None, SCORE_KEY), 0)

    def test_invalid_values_fall_back_to_zero(self) -> None:
        for raw in ["abc", "", "1.5", "-4", -4, "NaN"]:
            with self.subTest(raw=raw):
                with self.assertLogs("wordsearch.data.progress", level="WARNING"):
                    self.assertEqual(parse_counter(raw, SCORE_KEY), 0)


class InMemoryProgressStoreTests(unittest.TestCase):
    def test_defaults_when_empty(self) -> None:
        self.assertEqual(InMemoryProgressStore().get(), Progress(0, 0))

    def test_values_are_stored_as_strings(self) -> None:
        store = InMemoryProgressStore()
        store.set(Progress(stage_index=2, score=150))
        self.assertEqual(store.entries, {STAGE_KEY: "2", SCORE_KEY: "150"})
        self.assertEqual(store.get(), Progress(2, 150))

    def test_clear_removes_entries(self) -> None:
        store = InMemoryProgressStore({STAGE_KEY: "2", SCORE_KEY: "10", "other": "x"})
        store.clear()
        self.assertEqual(store.entries, {"other": "x"})
        self.assertEqual(store.get(), Progress(0, 0))


class JsonProgressStoreTests(unittest.TestCase):
    def test_round_trip_and_clear(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "progress.json"
            store = JsonProgressStore(path)
            self.assertEqual(store.get(), Progress(0, 0))

            store.set(Progress(stage_index=4, score=320))
            self.assertTrue(path.exists())
            self.assertEqual(JsonProgressStore(path).get(), Progress(4, 320))

            store.clear()
            self.assertEqual(json.loads(path.read_text(encoding="utf-8")), {})
            self.assertEqual(store.get(), Progress(0, 0))

    def test_corrupt_file_reads_as_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "progress.json"
            path.write_text("{broken", encoding="utf-8")
            with self.assertLogs("wordsearch.data.progress", level="WARNING"):
                self.assertEqual(JsonProgressStore(path).get(), Progress(0, 0))

    def test_invalid_entries_read_as_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "progress.json"
            path.write_text(
                json.dumps({STAGE_KEY: "three", SCORE_KEY: "90"}), encoding="utf-8"
            )
            with self.assertLogs("wordsearch.data.progress", level="WARNING"):
                progress = JsonProgressStore(path).get()
        self.assertEqual(progress, Progress(stage_index=0, score=90))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
