from __future__ import annotations

import argparse
from datetime import date, datetime, time, timedelta
import logging
from typing import Any

from calendar_app.client.api import ApiError, EventsApiClient
from calendar_app.config import settings
from calendar_app.core.env import load_env
from calendar_app.logging import configure_logging
from calendar_app.views.layouts import week_days

logger = logging.getLogger(__name__)

# (weekday offset from Sunday, start, minutes, title, category)
DEMO_WEEK = [
    (1, time(7, 0), 45, "Morning run", "fit"),
    (1, time(9, 0), 15, "Standup", "mle"),
    (2, time(10, 0), 90, "Linear algebra lecture", "academics"),
    (3, time(14, 0), 90, "Agent framework spike", "ai-agent"),
    (4, time(16, 30), 60, "Pipeline review", "related"),
    (5, time(11, 0), 30, "Python basics", "basics"),
    (6, time(18, 0), 120, "Dinner", "other"),
]


def build_demo_payloads(anchor: date) -> list[dict[str, Any]]:
    days = week_days(anchor)
    payloads = []
    for offset, start_time, minutes, title, category in DEMO_WEEK:
        start = datetime.combine(days[offset], start_time)
        end = start + timedelta(minutes=minutes)
        payloads.append(
            {
                "title": title,
                "start": start.isoformat(),
                "end": end.isoformat(),
                "category": category,
                "description": "Seeded demo event",
            }
        )
    return payloads


def seed_events(api: EventsApiClient, anchor: date, dry_run: bool = False) -> dict[str, int]:
    created = 0
    failed = 0
    for payload in build_demo_payloads(anchor):
        print(f"- {payload['start']} {payload['title']} [{payload['category']}]")
        if dry_run:
            continue
        try:
            api.create_event(payload)
            created += 1
        except ApiError as exc:
            failed += 1
            logger.error("Failed to seed %r: %s", payload["title"], exc)
    return {"created": created, "failed": failed}


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a demo week of events.")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="Any day in the target week")
    parser.add_argument("--dry-run", action="store_true", help="Only list the events")
    parser.add_argument("--api-url", default=None, help="Override API_URL")
    args = parser.parse_args()

    load_env()
    configure_logging(settings.LOG_LEVEL)
    with EventsApiClient(base_url=args.api_url) as api:
        stats = seed_events(api, args.date or date.today(), dry_run=args.dry_run)
    print(f"Created: {stats['created']}, Failed: {stats['failed']}")


if __name__ == "__main__":
    main()
