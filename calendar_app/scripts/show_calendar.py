from __future__ import annotations

import argparse
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from calendar_app.client.api import EventsApiClient
from calendar_app.config import settings
from calendar_app.controller.controller import CalendarController
from calendar_app.core.env import load_env
from calendar_app.logging import configure_logging
from calendar_app.views.text import render_sidebar, render_text


def main() -> None:
    parser = argparse.ArgumentParser(description="Print a day, week or month view of the calendar.")
    parser.add_argument("--view", choices=["day", "week", "month"], default="week")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="Anchor date (YYYY-MM-DD)")
    parser.add_argument("--category", default=None, help="Only show events of this category")
    parser.add_argument("--api-url", default=None, help="Override API_URL")
    parser.add_argument("--sidebar", action="store_true", help="Also print the category sidebar")
    args = parser.parse_args()

    load_env()
    configure_logging(settings.LOG_LEVEL)
    tz = ZoneInfo(settings.DISPLAY_TIMEZONE) if settings.DISPLAY_TIMEZONE else None

    with EventsApiClient(base_url=args.api_url) as api:
        controller = CalendarController(api, tz=tz, view=args.view)
        if args.date is not None:
            controller.select_day(datetime.combine(args.date, time(), tzinfo=tz))
            controller.change_view(args.view)
        controller.select_category(args.category)
        state = controller.refresh()
        if state.error:
            print(f"Error loading events: {state.error}")
            raise SystemExit(1)
        print(render_text(controller.layout()))
        if args.sidebar:
            print()
            print(render_sidebar(controller.sidebar()))


if __name__ == "__main__":
    main()
