from __future__ import annotations

"""Command-line interface over the record store and the analytics engine."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from .. import __version__
from ..analytics.aggregate import aggregate_by_period
from ..analytics.config import AnalyticsConfig
from ..analytics.goals import compute_goal_progress, save_target
from ..analytics.keywords import analyze_keywords, format_insights, tip_for
from ..analytics.metrics import compute_metrics, summarize
from ..analytics.plots import plot_accuracy_trend, plot_volume
from ..analytics.prepare import active_days, entries_on, mistake_log
from ..config.config import analytics_config, load_config, validate_config
from ..storage.schema import SUBJECTS
from ..storage.store import (
    RecordStore,
    delete_record,
    export_ndjson,
    export_parquet,
    records_frame,
    save_record,
)

FIELD_FLAGS = {
    "date": str,
    "subject": str,
    "topic": str,
    "lrSets": int,
    "diSets": int,
    "vaultSets": int,
    "sectionalSets": int,
    "timeTaken": float,
    "questionsAttempted": int,
    "correctAnswers": int,
    "confidence": int,
    "learnings": str,
}


def _add_record_args(p: argparse.ArgumentParser) -> None:
    for name, typ in FIELD_FLAGS.items():
        kwargs: Dict[str, Any] = {"type": typ, "default": None}
        if name == "subject":
            kwargs["choices"] = SUBJECTS
        p.add_argument(f"--{name}", **kwargs)
    p.add_argument("--weak", dest="isWeakTopic", action="store_true", default=None, help="Mark as weak topic")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="practicelog", description="Study practice log")
    p.add_argument("--config", type=str, default=None, help="Path to YAML config")
    p.add_argument("--store", type=str, default=None, help="Override store path")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command")

    add = sub.add_parser("add", help="Log a practice session")
    _add_record_args(add)

    edit = sub.add_parser("edit", help="Update fields of a logged session")
    edit.add_argument("id")
    _add_record_args(edit)

    rm = sub.add_parser("delete", help="Delete a logged session")
    rm.add_argument("id")

    ls = sub.add_parser("list", help="List sessions, optionally for one day")
    ls.add_argument("--day", type=str, default=None)

    sub.add_parser("summary", help="Overall totals")
    sub.add_parser("days", help="Dates with logged sessions")
    sub.add_parser("mistakes", help="Notes, newest first")

    trend = sub.add_parser("trend", help="Accuracy and volume by period")
    trend.add_argument("--granularity", choices=["daily", "weekly", "monthly"], default=None)
    trend.add_argument("--subject", choices=list(SUBJECTS) + ["all"], default=None)
    trend.add_argument("--plot-dir", type=str, default=None, help="Write PNG charts here")

    sub.add_parser("insights", help="Recurring terms in your notes")

    goal = sub.add_parser("goal", help="Progress toward today's sets target")
    goal.add_argument("--today", type=str, default=None, help="ISO date, defaults to the current date")

    target = sub.add_parser("target", help="Set the daily sets target")
    target.add_argument("value")

    tip = sub.add_parser("tip", help="Show a study tip")
    tip.add_argument("--tick", type=int, default=0)

    export = sub.add_parser("export", help="Export the log to Parquet or NDJSON")
    export.add_argument("out", type=str)
    return p.parse_args(argv)


def _record_fields(args: argparse.Namespace) -> Dict[str, Any]:
    names = list(FIELD_FLAGS) + ["isWeakTopic"]
    return {n: getattr(args, n) for n in names if getattr(args, n, None) is not None}


def _print_record(rec: Any) -> None:
    m = compute_metrics(rec)
    flag = " [weak]" if rec.isWeakTopic else ""
    print(
        f"{rec.id}  {rec.date}  {rec.subject:<5} {rec.topic or '-'}{flag}  "
        f"sets={m['totalSets']} acc={m['accuracy']:.2f}% speed={m['speed']:.2f} min/set"
    )


def _run(args: argparse.Namespace, cfg: Dict[str, Any], acfg: AnalyticsConfig) -> int:
    store = RecordStore(args.store or cfg["store"]["path"])
    cmd = args.command

    if cmd == "add":
        fields = _record_fields(args)
        fields.setdefault("date", date.today().isoformat())
        rec = save_record(store, fields)
        print(f"Saved {rec.id}")
    elif cmd == "edit":
        try:
            rec = save_record(store, _record_fields(args), record_id=args.id)
        except KeyError as exc:
            print(f"ERROR: {exc.args[0]}", file=sys.stderr)
            return 1
        print(f"Updated {rec.id}")
    elif cmd == "delete":
        if not delete_record(store, args.id):
            print(f"ERROR: Unknown record id: {args.id}", file=sys.stderr)
            return 1
        print(f"Deleted {args.id}")
    elif cmd == "list":
        records = store.records()
        if args.day:
            records = entries_on(records, args.day)
        for rec in sorted(records, key=lambda r: r.date, reverse=True):
            _print_record(rec)
    elif cmd == "summary":
        s = summarize(store.records())
        print(f"Cumulative sets: {s['totalSets']}")
        print(f"Overall accuracy: {s['overallAccuracy']:.2f}%")
        print(f"Avg. speed: {s['avgSpeed']:.2f} min/set")
    elif cmd == "days":
        for d in active_days(store.records()):
            print(d)
    elif cmd == "mistakes":
        for rec in mistake_log(store.records()):
            print(f"{rec.date}  {rec.subject:<5} {rec.topic or '-'}: {rec.learnings.strip()}")
    elif cmd == "trend":
        granularity = args.granularity or cfg["display"]["granularity"]
        subject = args.subject or cfg["display"]["subject"]
        points = aggregate_by_period(store.records(), granularity, subject, acfg)
        for p in points:
            print(f"{p['label']:<12} {p['accuracy']:>7.2f}%  {p['totalSets']:>4} sets")
        if args.plot_dir:
            outdir = Path(args.plot_dir)
            outdir.mkdir(parents=True, exist_ok=True)
            plot_accuracy_trend(points, save_path=outdir / f"accuracy_{granularity}.png")
            plot_volume(points, cfg=acfg, save_path=outdir / f"volume_{granularity}.png")
            print(f"Charts saved to: {outdir.resolve()}")
    elif cmd == "insights":
        for line in format_insights(analyze_keywords(store.records(), acfg)):
            print(line)
    elif cmd == "goal":
        today = args.today or date.today().isoformat()
        target = store.daily_target(acfg.default_daily_target)
        g = compute_goal_progress(store.records(), today, target, acfg)
        print(f"{g.setsToday} / {target} Sets Completed Today ({g.progress:.0f}%, {g.category})")
    elif cmd == "target":
        print(f"Daily target: {save_target(store, args.value, acfg.default_daily_target)}")
    elif cmd == "tip":
        print(tip_for(args.tick))
    elif cmd == "export":
        out = Path(args.out)
        df = records_frame(store.records())
        if out.suffix == ".parquet":
            export_parquet(df, out)
        else:
            export_ndjson(df, out)
        print(f"Exported {len(df)} record(s) to {out}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.version:
        print(f"practicelog {__version__}")
        return 0
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if not args.command:
        print("No command given. Use --help for usage.", file=sys.stderr)
        return 2
    cfg = validate_config(load_config(args.config))
    return _run(args, cfg, analytics_config(cfg))
