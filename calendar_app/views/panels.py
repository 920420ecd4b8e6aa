from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo
from typing import Any, Sequence

from calendar_app.domain.categories import CATEGORY_SECTIONS, category_style
from calendar_app.views.projector import event_end, event_start, format_time

RECENT_EVENTS_LIMIT = 5


@dataclass
class SidebarCategory:
    id: str
    name: str
    color: str
    selected: bool
    events: list[Any]


@dataclass
class SidebarSection:
    title: str
    categories: list[SidebarCategory]


@dataclass
class Sidebar:
    sections: list[SidebarSection]
    recent_events: list[Any]


def build_sidebar(events: Sequence[Any], selected_category: str | None = None) -> Sidebar:
    """Category sections with their events, plus the first few events overall.

    Receives the unfiltered event list; the category filter only marks the
    selected entry.
    """
    sections = []
    for title, category_ids in CATEGORY_SECTIONS:
        categories = []
        for category_id in category_ids:
            style = category_style(category_id)
            categories.append(
                SidebarCategory(
                    id=category_id,
                    name=style.label,
                    color=style.color,
                    selected=category_id == selected_category,
                    events=[event for event in events if event.category == category_id],
                )
            )
        sections.append(SidebarSection(title=title, categories=categories))
    return Sidebar(sections=sections, recent_events=list(events[:RECENT_EVENTS_LIMIT]))


def toggle_category(current: str | None, clicked: str) -> str | None:
    return None if clicked == current else clicked


@dataclass
class EventDetails:
    title: str
    date_label: str
    time_label: str
    category_label: str
    category_color: str
    description: str


def event_details(event: Any, tz: tzinfo | None = None) -> EventDetails:
    start = event_start(event, tz)
    end = event_end(event, tz)
    style = category_style(event.category)
    return EventDetails(
        title=event.title,
        date_label=f"{start:%A}, {start:%B} {start.day}, {start.year}",
        time_label=f"{format_time(start)} - {format_time(end)}",
        category_label=style.label,
        category_color=style.color,
        description=event.description or "",
    )


def _parse_clock(value: str) -> time:
    hours, minutes = value.split(":")[:2]
    return time(int(hours), int(minutes))


@dataclass
class EventForm:
    """State of the create/edit modal."""

    title: str = ""
    category: str = ""
    description: str = ""
    start_date: date | None = None
    start_time: str = "08:00"
    end_date: date | None = None
    end_time: str = "09:00"
    event_id: str | None = None
    tz: tzinfo | None = field(default=None, repr=False)

    @classmethod
    def blank(cls, today: date, tz: tzinfo | None = None) -> "EventForm":
        return cls(start_date=today, end_date=today, tz=tz)

    @classmethod
    def from_event(cls, event: Any, tz: tzinfo | None = None) -> "EventForm":
        start = event_start(event, tz)
        end = event_end(event, tz)
        return cls(
            title=event.title,
            category=event.category,
            description=event.description or "",
            start_date=start.date(),
            start_time=f"{start:%H:%M}",
            end_date=end.date(),
            end_time=f"{end:%H:%M}",
            event_id=event.id,
            tz=tz,
        )

    def _combine(self, day: date, clock: str) -> datetime:
        moment = datetime.combine(day, _parse_clock(clock))
        if self.tz is not None:
            moment = moment.replace(tzinfo=self.tz)
        return moment

    def to_payload(self) -> dict[str, Any] | None:
        """Request body for create/update, or None when a required field is blank."""
        if not self.start_date or not self.end_date or not self.title or not self.category:
            return None
        payload: dict[str, Any] = {
            "title": self.title,
            "category": self.category,
            "description": self.description,
            "start": self._combine(self.start_date, self.start_time).isoformat(),
            "end": self._combine(self.end_date, self.end_time).isoformat(),
        }
        if self.event_id:
            payload["id"] = self.event_id
        return payload
