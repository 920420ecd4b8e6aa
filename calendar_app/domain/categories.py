from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Category(str, Enum):
    FIT = "fit"
    ACADEMICS = "academics"
    AI_AGENT = "ai-agent"
    MLE = "mle"
    RELATED = "related"
    BASICS = "basics"
    OTHER = "other"


DEFAULT_CATEGORY = Category.OTHER
CATEGORY_IDS = [category.value for category in Category]


@dataclass(frozen=True)
class CategoryStyle:
    label: str
    color: str
    bg: str
    border: str
    text: str


CATEGORY_STYLES: dict[str, CategoryStyle] = {
    "fit": CategoryStyle("Be Fit", "#4f46e5", "bg-blue-100", "border-blue-300", "text-blue-800"),
    "academics": CategoryStyle("Academics", "#10b981", "bg-green-100", "border-green-300", "text-green-800"),
    "ai-agent": CategoryStyle("AI based agents", "#f59e0b", "bg-amber-100", "border-amber-300", "text-amber-800"),
    "mle": CategoryStyle("MLE", "#ef4444", "bg-red-100", "border-red-300", "text-red-800"),
    "related": CategoryStyle("DE-related", "#8b5cf6", "bg-purple-100", "border-purple-300", "text-purple-800"),
    "basics": CategoryStyle("Basics", "#6b7280", "bg-gray-100", "border-gray-300", "text-gray-800"),
    "other": CategoryStyle("Other", "#6b7280", "bg-gray-100", "border-gray-300", "text-gray-800"),
}

# Sidebar grouping; "other" is filterable but not listed.
CATEGORY_SECTIONS: list[tuple[str, list[str]]] = [
    ("GOALS", ["fit", "academics"]),
    ("TASKS", ["ai-agent", "mle", "related", "basics"]),
]


def normalize_category(value: Any) -> str:
    if isinstance(value, Category):
        return value.value
    if isinstance(value, str):
        cleaned = value.strip()
        if cleaned in CATEGORY_IDS:
            return cleaned
    return DEFAULT_CATEGORY.value


def category_style(category: str | None) -> CategoryStyle:
    return CATEGORY_STYLES.get(category or "", CATEGORY_STYLES[DEFAULT_CATEGORY.value])


def category_label(category: str | None) -> str:
    return category_style(category).label
