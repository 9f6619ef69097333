import json
import tempfile
import unittest
from pathlib import Path

import pandas as pd

from practicelog.analytics.prepare import active_days, entries_on, load_and_prepare, mistake_log
from practicelog.storage.schema import DTYPES, PracticeRecord
from practicelog.storage.store import (
    ENTRIES_KEY,
    TARGET_KEY,
    RecordStore,
    delete_record,
    export_ndjson,
    export_parquet,
    records_frame,
    save_record,
)

from .helpers import make_record


class PracticeRecordTests(unittest.TestCase):
    def test_defaults_and_coercion(self) -> None:
        rec = PracticeRecord.model_validate({"id": "x", "date": "2024-03-01T10:00:00", "lrSets": "2", "timeTaken": None})
        self.assertEqual(rec.date, "2024-03-01")
        self.assertEqual(rec.lrSets, 2)
        self.assertEqual(rec.timeTaken, 0)
        self.assertEqual(rec.subject, "QUANT")
        self.assertEqual(rec.confidence, 3)
        self.assertFalse(rec.isWeakTopic)

    def test_cross_field_rule_not_enforced(self) -> None:
        rec = PracticeRecord.model_validate({"id": "x", "date": "2024-03-01", "questionsAttempted": 1, "correctAnswers": 3})
        self.assertEqual(rec.correctAnswers, 3)


class RecordStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "log.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_get_set_roundtrip_through_file(self) -> None:
        store = RecordStore(self.path)
        self.assertIsNone(store.get("missing"))
        store.set("k", [1, 2])
        self.assertEqual(RecordStore(self.path).get("k"), [1, 2])

    def test_unreadable_file_is_empty(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("practicelog.storage.store", level="WARNING"):
            store = RecordStore(self.path)
        self.assertEqual(store.records(), ())

    def test_save_update_delete(self) -> None:
        store = RecordStore(self.path)
        a = save_record(store, {"date": "2024-03-01", "subject": "LR", "lrSets": 2})
        b = save_record(store, {"date": "2024-03-02", "subject": "DI", "diSets": 1})
        self.assertNotEqual(a.id, b.id)

        updated = save_record(store, {"lrSets": 5, "learnings": "tricky"}, record_id=a.id)
        self.assertEqual((updated.id, updated.lrSets, updated.subject), (a.id, 5, "LR"))

        snapshot = RecordStore(self.path).records()
        self.assertIsInstance(snapshot, tuple)
        self.assertEqual([r.id for r in snapshot], [a.id, b.id])
        self.assertEqual(snapshot[0].learnings, "tricky")

        self.assertTrue(delete_record(store, a.id))
        self.assertFalse(delete_record(store, a.id))
        self.assertEqual([r.id for r in store.records()], [b.id])

    def test_update_unknown_id(self) -> None:
        store = RecordStore(self.path)
        with self.assertRaises(KeyError):
            save_record(store, {"lrSets": 1}, record_id="nope")

    def test_daily_target_falls_back_to_given_default(self) -> None:
        store = RecordStore(self.path)
        self.assertEqual(store.daily_target(10), 10)
        store.set(TARGET_KEY, 8)
        self.assertEqual(RecordStore(self.path).daily_target(10), 8)

    def test_invalid_entries_are_skipped(self) -> None:
        good = make_record(lrSets=2).model_dump()
        bad = [
            {**good, "id": "b", "confidence": 0},
            {**good, "id": "c", "subject": "GK"},
            {**good, "id": "d", "lrSets": 1.5},
            {k: v for k, v in good.items() if k != "id"},
            "not a record",
        ]
        RecordStore(self.path).set(ENTRIES_KEY, [bad[0], good, *bad[1:]])
        with self.assertLogs("practicelog.storage.store", level="WARNING") as logs:
            snapshot = RecordStore(self.path).records()
        self.assertEqual([r.id for r in snapshot], [good["id"]])
        self.assertEqual(len(logs.records), len(bad))


class FrameAndExportTests(unittest.TestCase):
    def test_records_frame_fills_missing_columns(self) -> None:
        df = records_frame([{"date": "2024-03-01", "lrSets": None, "diSets": "3"}, make_record(lrSets=1)])
        self.assertEqual(list(df.columns), list(DTYPES))
        self.assertEqual(df["lrSets"].tolist(), [0, 1])
        self.assertEqual(df["diSets"].tolist(), [3, 0])

    def test_empty_frame(self) -> None:
        df = records_frame([])
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), list(DTYPES))

    def test_exports(self) -> None:
        df = records_frame([make_record(lrSets=2, learnings="note")])
        with tempfile.TemporaryDirectory() as tmp:
            pq = Path(tmp) / "out" / "log.parquet"
            export_parquet(df, pq)
            back = pd.read_parquet(pq)
            self.assertEqual(back["lrSets"].tolist(), [2])
            nd = Path(tmp) / "log.ndjson"
            export_ndjson(df, nd)
            line = json.loads(nd.read_text(encoding="utf-8").splitlines()[0])
            self.assertEqual(line["learnings"], "note")


class SnapshotViewTests(unittest.TestCase):
    def setUp(self) -> None:
        self.recs = [
            make_record(date="2024-03-02", learnings="second day"),
            make_record(date="2024-03-01", learnings=""),
            make_record(date="2024-03-02", learnings="  "),
            make_record(date="2024-03-05", learnings="later note"),
        ]

    def test_entries_on(self) -> None:
        self.assertEqual(entries_on(self.recs, "2024-03-02"), [self.recs[0], self.recs[2]])
        self.assertEqual(entries_on(self.recs, "2024-03-03"), [])

    def test_active_days(self) -> None:
        self.assertEqual(active_days(self.recs), ["2024-03-01", "2024-03-02", "2024-03-05"])

    def test_mistake_log_newest_first(self) -> None:
        self.assertEqual(mistake_log(self.recs), [self.recs[3], self.recs[0]])

    def test_load_and_prepare(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "log.json"
            store = RecordStore(path)
            store.set(ENTRIES_KEY, [r.model_dump() for r in self.recs])
            df = load_and_prepare(path)
        self.assertEqual(df["date"].tolist(), ["2024-03-01", "2024-03-02", "2024-03-02", "2024-03-05"])
        self.assertEqual(df["id"].tolist()[1:3], [self.recs[0].id, self.recs[2].id])
        self.assertEqual(df["entry_idx"].tolist(), [0, 1, 2, 3])
        self.assertIn("accuracy", df.columns)


if __name__ == "__main__":
    unittest.main()
