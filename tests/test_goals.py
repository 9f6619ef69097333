import unittest
import tempfile
from datetime import date, datetime
from pathlib import Path

from practicelog.analytics.config import AnalyticsConfig
from practicelog.analytics.goals import BELOW_HALF, MET, ON_TRACK, compute_goal_progress, save_target, update_target
from practicelog.storage.store import TARGET_KEY, RecordStore

from .helpers import make_record

TODAY = "2024-03-10"


def _log(*sets_today: int):
    recs = [make_record(date="2024-03-09", lrSets=9)]
    recs += [make_record(date=TODAY, lrSets=n) for n in sets_today]
    return recs


class GoalProgressTests(unittest.TestCase):
    def test_met_exactly(self) -> None:
        g = compute_goal_progress(_log(4, 2), TODAY, 6)
        self.assertEqual(g.setsToday, 6)
        self.assertEqual(g.progress, 100.0)
        self.assertEqual(g.category, MET)

    def test_exceeded_is_capped(self) -> None:
        g = compute_goal_progress(_log(10), date(2024, 3, 10), 6)
        self.assertEqual(g.setsToday, 10)
        self.assertEqual(g.progress, 100.0)
        self.assertEqual(g.category, MET)

    def test_nothing_today(self) -> None:
        g = compute_goal_progress(_log(), TODAY, 6)
        self.assertEqual(g.setsToday, 0)
        self.assertEqual(g.progress, 0.0)
        self.assertEqual(g.category, BELOW_HALF)

    def test_half_is_not_on_track(self) -> None:
        self.assertEqual(compute_goal_progress(_log(3), TODAY, 6).category, BELOW_HALF)
        g = compute_goal_progress(_log(4), TODAY, 6)
        self.assertAlmostEqual(g.progress, 66.6666, places=3)
        self.assertEqual(g.category, ON_TRACK)

    def test_non_positive_target_gives_zero_progress(self) -> None:
        for target in (0, -3, None, "abc"):
            g = compute_goal_progress(_log(5), TODAY, target)
            self.assertEqual(g.progress, 0.0, target)
            self.assertEqual(g.setsToday, 5)

    def test_on_track_threshold_setting(self) -> None:
        g = compute_goal_progress(_log(2), TODAY, 6, AnalyticsConfig(on_track_percent=30))
        self.assertEqual(g.category, ON_TRACK)

    def test_mapping_records(self) -> None:
        recs = [{"date": TODAY, "lrSets": 1, "diSets": 2}, {"date": "2024-03-11", "lrSets": 7}]
        self.assertEqual(compute_goal_progress(recs, TODAY, 6).setsToday, 3)

    def test_datetime_values_match_their_day(self) -> None:
        recs = [{"date": datetime(2024, 3, 10, 8, 0), "lrSets": 2}, {"date": "2024-03-10T21:30:00", "lrSets": 1}]
        self.assertEqual(compute_goal_progress(recs, datetime(2024, 3, 10, 23, 0), 6).setsToday, 3)


class UpdateTargetTests(unittest.TestCase):
    def test_accepts_positive(self) -> None:
        self.assertEqual(update_target(6, 8), 8)
        self.assertEqual(update_target(6, "10"), 10)

    def test_rejects_non_positive_or_invalid(self) -> None:
        for proposed in (0, -1, "nope", None, float("nan"), float("inf")):
            with self.assertLogs("practicelog.analytics.goals", level="WARNING"):
                self.assertEqual(update_target(6, proposed), 6)


class SaveTargetTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "log.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_rejected_update_writes_nothing(self) -> None:
        store = RecordStore(self.path)
        with self.assertLogs("practicelog.analytics.goals", level="WARNING"):
            self.assertEqual(save_target(store, 0, 10), 10)
        self.assertIsNone(store.get(TARGET_KEY))
        self.assertFalse(self.path.exists())

    def test_accepted_update_is_persisted(self) -> None:
        store = RecordStore(self.path)
        self.assertEqual(save_target(store, "8", 10), 8)
        self.assertEqual(RecordStore(self.path).daily_target(10), 8)
        with self.assertLogs("practicelog.analytics.goals", level="WARNING"):
            self.assertEqual(save_target(store, -2, 10), 8)
        self.assertEqual(RecordStore(self.path).daily_target(10), 8)


if __name__ == "__main__":
    unittest.main()
