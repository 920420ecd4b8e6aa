from __future__ import annotations

from calendar_app.views.layouts import MonthLayout, TimeGridLayout
from calendar_app.views.panels import Sidebar


def _render_time_grid(layout: TimeGridLayout) -> list[str]:
    lines = [layout.title, ""]
    for column in layout.columns:
        marker = " (today)" if column.is_today else ""
        lines.append(f"{column.weekday} {column.day.day}{marker}")
        if not column.events:
            lines.append("  -")
        for positioned in column.events:
            geometry = positioned.geometry
            lines.append(
                f"  {positioned.time_label:>8}  {positioned.event.title}"
                f"  [{positioned.event.category}]"
                f"  top={geometry.top:g} height={geometry.height:g}"
            )
    return lines


def _render_month(layout: MonthLayout) -> list[str]:
    lines = [layout.title, "", " ".join(f"{name:>3}" for name in layout.weekday_names)]
    for week in layout.weeks:
        cells = []
        for cell in week:
            label = f"{cell.day.day:>2}" if cell.is_current_month else " ."
            mark = "*" if cell.total else " "
            cells.append(f"{label}{mark}")
        lines.append(" ".join(cells))
    lines.append("")
    for week in layout.weeks:
        for cell in week:
            if not cell.events:
                continue
            lines.append(f"{cell.day.isoformat()}:")
            for positioned in cell.events:
                lines.append(f"  {positioned.time_label} {positioned.event.title}")
            if cell.overflow:
                lines.append(f"  + {cell.overflow} more")
    return lines


def render_sidebar(sidebar: Sidebar) -> str:
    lines = []
    for section in sidebar.sections:
        lines.append(section.title)
        for category in section.categories:
            marker = "*" if category.selected else " "
            lines.append(f" {marker} {category.name} ({len(category.events)})")
    lines.append("RECENT EVENTS")
    for event in sidebar.recent_events:
        lines.append(f"   {event.title}")
    return "\n".join(lines)


def render_text(layout: TimeGridLayout | MonthLayout) -> str:
    if isinstance(layout, MonthLayout):
        return "\n".join(_render_month(layout))
    return "\n".join(_render_time_grid(layout))
