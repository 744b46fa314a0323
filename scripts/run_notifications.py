"""Run the notification jobs once, e.g. from cron or a platform timer."""

from __future__ import annotations

import argparse
import logging
from datetime import date
from functools import partial

import anyio

from fleet_notifier.application.use_cases.notifications import build_notification_engine
from fleet_notifier.config import get_settings


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for a notification run."""

    parser = argparse.ArgumentParser(
        description="Create due reminders, send their emails and purge expired notifications.",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Evaluate reminders as if today were this ISO date (default: today).",
    )
    parser.add_argument(
        "--drain-timeout",
        type=float,
        default=120.0,
        help="Seconds to wait for pending emails before exiting (default: 120).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO).",
    )
    return parser.parse_args()


def main() -> None:
    """Build the engine, run one tick and print a summary."""

    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine = build_notification_engine(get_settings())
    try:
        report = anyio.run(
            partial(engine.scheduler.run_scheduled_notifications, today=args.date)
        )
    finally:
        engine.close(drain_timeout=args.drain_timeout)

    for result in report.results:
        state = "ok" if result.succeeded else f"FAILED ({result.error})"
        print(f"  {result.job}: {state}")
    if not report.succeeded:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
