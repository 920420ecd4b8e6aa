"""Time-grid arithmetic shared by the day, week and month views.

Everything here is pure: events in, dates/geometry/labels out. Timestamps are
read in the display timezone when one is given, otherwise as stored.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any, TypeVar

DEFAULT_ROW_HEIGHT = 60
DEFAULT_MIN_HEIGHT = 20
HOURS = range(24)

E = TypeVar("E")


@dataclass(frozen=True)
class EventGeometry:
    top: float
    height: float


def parse_timestamp(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def to_local(value: datetime | str, tz: tzinfo | None = None) -> datetime:
    parsed = parse_timestamp(value)
    if tz is not None and parsed.tzinfo is not None:
        return parsed.astimezone(tz)
    return parsed


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_same_day(left: date | datetime, right: date | datetime) -> bool:
    return as_date(left) == as_date(right)


def event_start(event: Any, tz: tzinfo | None = None) -> datetime:
    return to_local(event.start, tz)


def event_end(event: Any, tz: tzinfo | None = None) -> datetime:
    return to_local(event.end, tz)


def events_on_day(events: Iterable[E], day: date | datetime, tz: tzinfo | None = None) -> list[E]:
    """Events whose start falls on ``day``. An event crossing midnight stays on its start day."""
    target = as_date(day)
    return [event for event in events if event_start(event, tz).date() == target]


def bucket_by_day(
    events: Iterable[E],
    days: Sequence[date],
    tz: tzinfo | None = None,
) -> dict[date, list[E]]:
    buckets: dict[date, list[E]] = {as_date(day): [] for day in days}
    for event in events:
        key = event_start(event, tz).date()
        if key in buckets:
            buckets[key].append(event)
    return buckets


def filter_by_category(events: Iterable[E], category: str | None) -> list[E]:
    if not category:
        return list(events)
    return [event for event in events if event.category == category]


def fractional_hour(value: datetime) -> float:
    return value.hour + value.minute / 60


def project_event(
    event: Any,
    row_height: float = DEFAULT_ROW_HEIGHT,
    min_height: float = DEFAULT_MIN_HEIGHT,
    tz: tzinfo | None = None,
) -> EventGeometry:
    start_hour = fractional_hour(event_start(event, tz))
    end_hour = fractional_hour(event_end(event, tz))
    top = start_hour * row_height
    height = (end_hour - start_hour) * row_height
    return EventGeometry(top=top, height=max(height, min_height))


def hour_label(hour: int) -> str:
    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    if hour < 12:
        return f"{hour} AM"
    return f"{hour - 12} PM"


def hour_labels() -> list[str]:
    return [hour_label(hour) for hour in HOURS]


def format_time(value: datetime) -> str:
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def event_time_label(event: Any, tz: tzinfo | None = None) -> str:
    return format_time(event_start(event, tz))
