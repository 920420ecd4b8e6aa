from __future__ import annotations

import argparse
from datetime import date
from zoneinfo import ZoneInfo

from calendar_app.client.api import ApiError, EventsApiClient
from calendar_app.config import settings
from calendar_app.core.env import load_env
from calendar_app.domain.categories import CATEGORY_IDS
from calendar_app.logging import configure_logging
from calendar_app.views.panels import EventForm


def main() -> None:
    parser = argparse.ArgumentParser(description="Create one calendar event through the API.")
    parser.add_argument("title")
    parser.add_argument("--category", choices=CATEGORY_IDS, default="other")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="Day of the event (YYYY-MM-DD)")
    parser.add_argument("--start", default="08:00", help="Start time HH:MM")
    parser.add_argument("--end", default="09:00", help="End time HH:MM")
    parser.add_argument("--description", default="")
    parser.add_argument("--api-url", default=None, help="Override API_URL")
    args = parser.parse_args()

    load_env()
    configure_logging(settings.LOG_LEVEL)
    tz = ZoneInfo(settings.DISPLAY_TIMEZONE) if settings.DISPLAY_TIMEZONE else None

    day = args.date or date.today()
    form = EventForm.blank(day, tz=tz)
    form.title = args.title
    form.category = args.category
    form.description = args.description
    form.start_time = args.start
    form.end_time = args.end
    payload = form.to_payload()

    with EventsApiClient(base_url=args.api_url) as api:
        try:
            event = api.create_event(payload)
        except ApiError as exc:
            print(f"Failed to create event: {exc.message}")
            raise SystemExit(1)
    print(event.id)


if __name__ == "__main__":
    main()
