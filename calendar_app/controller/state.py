"""Calendar UI state and the reducer that is the only place it changes."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any

VIEW_NAMES = ("day", "week", "month")

CREATE = "create"
UPDATE = "update"
DELETE = "delete"


@dataclass(frozen=True)
class CalendarState:
    current_date: datetime
    view: str = "week"
    selected_category: str | None = None
    is_modal_open: bool = False
    editing_event: Any = None
    selected_event: Any = None
    is_details_open: bool = False
    events: tuple = ()
    is_loading: bool = False
    error: str | None = None
    fetch_seq: int = 0
    pending_mutation: str | None = None


@dataclass(frozen=True)
class Navigate:
    direction: int


@dataclass(frozen=True)
class GoToday:
    now: datetime


@dataclass(frozen=True)
class ChangeView:
    view: str


@dataclass(frozen=True)
class SelectCategory:
    category: str | None


@dataclass(frozen=True)
class SelectDay:
    day: datetime


@dataclass(frozen=True)
class OpenCreate:
    pass


@dataclass(frozen=True)
class CloseModal:
    pass


@dataclass(frozen=True)
class OpenDetails:
    event: Any


@dataclass(frozen=True)
class CloseDetails:
    pass


@dataclass(frozen=True)
class StartEdit:
    pass


@dataclass(frozen=True)
class FetchStarted:
    seq: int


@dataclass(frozen=True)
class FetchSucceeded:
    seq: int
    events: tuple


@dataclass(frozen=True)
class FetchFailed:
    seq: int
    error: str


@dataclass(frozen=True)
class MutationStarted:
    kind: str


@dataclass(frozen=True)
class MutationSucceeded:
    kind: str


@dataclass(frozen=True)
class MutationFailed:
    kind: str
    error: str


def step_date(view: str, current: datetime, direction: int) -> datetime:
    """Previous/next target for the header arrows."""
    if view == "day":
        return current + timedelta(days=direction)
    if view == "week":
        return current + timedelta(days=7 * direction)
    if view == "month":
        month_index = current.year * 12 + (current.month - 1) + direction
        year, month = divmod(month_index, 12)
        return current.replace(year=year, month=month + 1, day=1, hour=0, minute=0, second=0, microsecond=0)
    raise ValueError(f"Unknown view: {view}")


def reduce(state: CalendarState, action: Any) -> CalendarState:
    if isinstance(action, Navigate):
        return replace(state, current_date=step_date(state.view, state.current_date, action.direction))
    if isinstance(action, GoToday):
        return replace(state, current_date=action.now)
    if isinstance(action, ChangeView):
        if action.view not in VIEW_NAMES:
            raise ValueError(f"Unknown view: {action.view}")
        return replace(state, view=action.view)
    if isinstance(action, SelectCategory):
        return replace(state, selected_category=action.category)
    if isinstance(action, SelectDay):
        return replace(state, current_date=action.day, view="day")
    if isinstance(action, OpenCreate):
        return replace(state, editing_event=None, is_modal_open=True)
    if isinstance(action, CloseModal):
        return replace(state, editing_event=None, is_modal_open=False)
    if isinstance(action, OpenDetails):
        return replace(state, selected_event=action.event, is_details_open=True)
    if isinstance(action, CloseDetails):
        return replace(state, selected_event=None, is_details_open=False)
    if isinstance(action, StartEdit):
        return replace(state, editing_event=state.selected_event, is_details_open=False, is_modal_open=True)

    if isinstance(action, FetchStarted):
        return replace(state, fetch_seq=max(state.fetch_seq, action.seq), is_loading=True)
    if isinstance(action, (FetchSucceeded, FetchFailed)):
        if action.seq < state.fetch_seq:
            # superseded by a newer fetch
            return state
        if isinstance(action, FetchFailed):
            return replace(state, is_loading=False, error=action.error)
        return replace(state, is_loading=False, error=None, events=tuple(action.events))

    if isinstance(action, MutationStarted):
        return replace(state, pending_mutation=action.kind)
    if isinstance(action, MutationFailed):
        return replace(state, pending_mutation=None)
    if isinstance(action, MutationSucceeded):
        if action.kind == DELETE:
            return replace(state, pending_mutation=None, selected_event=None, is_details_open=False)
        return replace(state, pending_mutation=None, editing_event=None, is_modal_open=False)

    raise TypeError(f"Unknown action: {action!r}")
