from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
import itertools
import logging
from typing import Any, Callable, Protocol

from calendar_app.client.api import ApiError
from calendar_app.controller.state import (
    CREATE,
    DELETE,
    UPDATE,
    CalendarState,
    ChangeView,
    CloseDetails,
    CloseModal,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    GoToday,
    MutationFailed,
    MutationStarted,
    MutationSucceeded,
    Navigate,
    OpenCreate,
    OpenDetails,
    SelectCategory,
    SelectDay,
    StartEdit,
    reduce,
)
from calendar_app.views.layouts import MonthLayout, TimeGridLayout, get_view
from calendar_app.views.panels import Sidebar, build_sidebar, toggle_category
from calendar_app.views.projector import filter_by_category

logger = logging.getLogger(__name__)

SUCCESS_MESSAGES = {
    CREATE: ("Event created", "Your event has been successfully created."),
    UPDATE: ("Event updated", "Your event has been successfully updated."),
    DELETE: ("Event deleted", "Your event has been successfully deleted."),
}


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


class LoggingNotifier:
    def __init__(self) -> None:
        self.history: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.history.append(notification)
        level = logging.ERROR if notification.variant == "destructive" else logging.INFO
        logger.log(level, "%s: %s", notification.title, notification.description)


class CalendarApi(Protocol):
    def fetch_events(self) -> list[Any]:
        ...

    def create_event(self, payload: dict[str, Any]) -> Any:
        ...

    def update_event(self, event_id: str, payload: dict[str, Any]) -> Any:
        ...

    def delete_event(self, event_id: str) -> dict[str, str]:
        ...


class CalendarController:
    def __init__(
        self,
        api: CalendarApi,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
        tz: tzinfo | None = None,
        view: str = "week",
    ) -> None:
        self.api = api
        self.notifier = notifier or LoggingNotifier()
        self.tz = tz
        self._clock = clock or (lambda: datetime.now(tz=tz))
        self._fetch_counter = itertools.count(1)
        self.state = CalendarState(current_date=self._clock(), view=view)

    def dispatch(self, action: Any) -> CalendarState:
        self.state = reduce(self.state, action)
        return self.state

    # navigation and panels

    def go_previous(self) -> CalendarState:
        return self.dispatch(Navigate(-1))

    def go_next(self) -> CalendarState:
        return self.dispatch(Navigate(1))

    def go_today(self) -> CalendarState:
        return self.dispatch(GoToday(self._clock()))

    def change_view(self, view: str) -> CalendarState:
        return self.dispatch(ChangeView(view))

    def select_category(self, category: str | None) -> CalendarState:
        return self.dispatch(SelectCategory(category))

    def toggle_category(self, category: str) -> CalendarState:
        return self.select_category(toggle_category(self.state.selected_category, category))

    def select_day(self, day: date | datetime) -> CalendarState:
        if not isinstance(day, datetime):
            day = datetime.combine(day, time(), tzinfo=self.tz)
        return self.dispatch(SelectDay(day))

    def open_create(self) -> CalendarState:
        return self.dispatch(OpenCreate())

    def close_modal(self) -> CalendarState:
        return self.dispatch(CloseModal())

    def open_details(self, event: Any) -> CalendarState:
        return self.dispatch(OpenDetails(event))

    def close_details(self) -> CalendarState:
        return self.dispatch(CloseDetails())

    def start_edit(self) -> CalendarState:
        return self.dispatch(StartEdit())

    # data

    def begin_fetch(self) -> int:
        seq = next(self._fetch_counter)
        self.dispatch(FetchStarted(seq))
        return seq

    def complete_fetch(self, seq: int, events: list[Any] | None = None, error: str | None = None) -> CalendarState:
        if error is not None:
            return self.dispatch(FetchFailed(seq, error))
        return self.dispatch(FetchSucceeded(seq, tuple(events or ())))

    def refresh(self) -> CalendarState:
        seq = self.begin_fetch()
        try:
            events = self.api.fetch_events()
        except ApiError as exc:
            logger.error("Error fetching events: %s", exc)
            return self.complete_fetch(seq, error=exc.message)
        return self.complete_fetch(seq, events=events)

    def _notify_failure(self, kind: str, exc: ApiError) -> None:
        logger.error("%s event error: %s", kind.capitalize(), exc)
        self.notifier.notify(
            Notification(
                title="Error",
                description=f"Failed to {kind} event. Please try again.",
                variant="destructive",
            )
        )

    def _run_mutation(self, kind: str, call: Callable[[], Any]) -> Any:
        self.dispatch(MutationStarted(kind))
        try:
            result = call()
        except ApiError as exc:
            self.dispatch(MutationFailed(kind, exc.message))
            self._notify_failure(kind, exc)
            return None
        self.dispatch(MutationSucceeded(kind))
        title, description = SUCCESS_MESSAGES[kind]
        self.notifier.notify(Notification(title=title, description=description))
        self.refresh()
        return result

    def save_event(self, payload: dict[str, Any]) -> Any:
        editing = self.state.editing_event
        if editing is not None:
            return self._run_mutation(UPDATE, lambda: self.api.update_event(editing.id, payload))
        return self._run_mutation(CREATE, lambda: self.api.create_event(payload))

    def delete_selected(self) -> Any:
        selected = self.state.selected_event
        if selected is None:
            return None
        return self._run_mutation(DELETE, lambda: self.api.delete_event(selected.id))

    # rendering

    def visible_events(self) -> list[Any]:
        return filter_by_category(self.state.events, self.state.selected_category)

    def layout(self, today=None) -> TimeGridLayout | MonthLayout:
        view = get_view(self.state.view)
        return view.build(self.state.current_date, self.visible_events(), today=today, tz=self.tz)

    def sidebar(self) -> Sidebar:
        return build_sidebar(list(self.state.events), self.state.selected_category)
