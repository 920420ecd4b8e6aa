from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, ClassVar, Sequence

from calendar_app.domain.categories import CategoryStyle, category_style
from calendar_app.views.projector import (
    DEFAULT_MIN_HEIGHT,
    DEFAULT_ROW_HEIGHT,
    EventGeometry,
    as_date,
    bucket_by_day,
    event_time_label,
    hour_labels,
    project_event,
)

WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_CELL_LIMIT = 3


def start_of_week(day: date) -> date:
    # weeks start on Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_days(current: date | datetime) -> list[date]:
    first = start_of_week(as_date(current))
    return [first + timedelta(days=offset) for offset in range(7)]


def month_grid(current: date | datetime) -> list[list[date]]:
    anchor = as_date(current)
    month_start = anchor.replace(day=1)
    next_month = (month_start + timedelta(days=32)).replace(day=1)
    month_end = next_month - timedelta(days=1)
    grid_start = start_of_week(month_start)
    grid_end = start_of_week(month_end) + timedelta(days=6)

    weeks: list[list[date]] = []
    day = grid_start
    while day <= grid_end:
        weeks.append([day + timedelta(days=offset) for offset in range(7)])
        day += timedelta(days=7)
    return weeks


def view_title(view: str, current: date | datetime) -> str:
    day = as_date(current)
    if view == "day":
        return f"{day:%B} {day.day}, {day.year}"
    if view == "week":
        days = week_days(day)
        start, end = days[0], days[-1]
        if start.month == end.month:
            return f"{start:%B} {start.day} - {end.day}, {end.year}"
        return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
    if view == "month":
        return f"{day:%B} {day.year}"
    raise ValueError(f"Unknown view: {view}")


@dataclass
class PositionedEvent:
    event: Any
    time_label: str
    style: CategoryStyle
    geometry: EventGeometry | None = None


@dataclass
class DayColumn:
    day: date
    weekday: str
    is_today: bool
    events: list[PositionedEvent] = field(default_factory=list)


@dataclass
class TimeGridLayout:
    view: str
    title: str
    row_height: float
    hour_labels: list[str]
    columns: list[DayColumn]


@dataclass
class MonthCell:
    day: date
    is_current_month: bool
    is_today: bool
    events: list[PositionedEvent]
    total: int

    @property
    def overflow(self) -> int:
        return max(self.total - len(self.events), 0)


@dataclass
class MonthLayout:
    view: str
    title: str
    weekday_names: list[str]
    weeks: list[list[MonthCell]]


def _today(today: date | None, tz: tzinfo | None) -> date:
    if today is not None:
        return today
    return datetime.now(tz=tz).date()


class CalendarView:
    name: ClassVar[str] = ""

    def __init__(self, row_height: float = DEFAULT_ROW_HEIGHT, min_height: float = DEFAULT_MIN_HEIGHT) -> None:
        self.row_height = row_height
        self.min_height = min_height

    def visible_days(self, current: date) -> list[date]:
        raise NotImplementedError

    def build(
        self,
        current: date | datetime,
        events: Sequence[Any],
        today: date | None = None,
        tz: tzinfo | None = None,
    ):
        raise NotImplementedError

    def position(self, event: Any, tz: tzinfo | None, with_geometry: bool = True) -> PositionedEvent:
        geometry = None
        if with_geometry:
            geometry = project_event(event, row_height=self.row_height, min_height=self.min_height, tz=tz)
        return PositionedEvent(
            event=event,
            time_label=event_time_label(event, tz),
            style=category_style(event.category),
            geometry=geometry,
        )


class _TimeGridView(CalendarView):
    weekday_format: ClassVar[str] = "%a"

    def build(
        self,
        current: date | datetime,
        events: Sequence[Any],
        today: date | None = None,
        tz: tzinfo | None = None,
    ) -> TimeGridLayout:
        anchor = as_date(current)
        today = _today(today, tz)
        days = self.visible_days(anchor)
        buckets = bucket_by_day(events, days, tz)
        columns = [
            DayColumn(
                day=day,
                weekday=day.strftime(self.weekday_format),
                is_today=day == today,
                events=[self.position(event, tz) for event in buckets[day]],
            )
            for day in days
        ]
        return TimeGridLayout(
            view=self.name,
            title=view_title(self.name, anchor),
            row_height=self.row_height,
            hour_labels=hour_labels(),
            columns=columns,
        )


class DayView(_TimeGridView):
    name = "day"
    weekday_format = "%A"

    def visible_days(self, current: date) -> list[date]:
        return [current]


class WeekView(_TimeGridView):
    name = "week"

    def visible_days(self, current: date) -> list[date]:
        return week_days(current)


class MonthView(CalendarView):
    name = "month"

    def visible_days(self, current: date) -> list[date]:
        return [day for week in month_grid(current) for day in week]

    def build(
        self,
        current: date | datetime,
        events: Sequence[Any],
        today: date | None = None,
        tz: tzinfo | None = None,
    ) -> MonthLayout:
        anchor = as_date(current)
        today = _today(today, tz)
        days = self.visible_days(anchor)
        buckets = bucket_by_day(events, days, tz)
        weeks = [days[i : i + 7] for i in range(0, len(days), 7)]
        rows = []
        for week in weeks:
            row = []
            for day in week:
                day_events = buckets[day]
                row.append(
                    MonthCell(
                        day=day,
                        is_current_month=day.month == anchor.month and day.year == anchor.year,
                        is_today=day == today,
                        events=[
                            self.position(event, tz, with_geometry=False)
                            for event in day_events[:MONTH_CELL_LIMIT]
                        ],
                        total=len(day_events),
                    )
                )
            rows.append(row)
        return MonthLayout(
            view=self.name,
            title=view_title(self.name, anchor),
            weekday_names=list(WEEKDAY_NAMES),
            weeks=rows,
        )


VIEWS: dict[str, type[CalendarView]] = {
    DayView.name: DayView,
    WeekView.name: WeekView,
    MonthView.name: MonthView,
}


def get_view(name: str, **kwargs) -> CalendarView:
    try:
        view_cls = VIEWS[name]
    except KeyError as exc:
        raise ValueError(f"Unknown view: {name}") from exc
    return view_cls(**kwargs)
