from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from calendar_app.core.errors import ValidationError
from calendar_app.domain.categories import normalize_category

_timestamp_adapter = TypeAdapter(datetime)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def coerce_timestamp(value: Any, field: str = "timestamp") -> datetime:
    """Parse ISO strings, epoch numbers and datetimes into an aware UTC datetime."""
    try:
        parsed = _timestamp_adapter.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(f"Cast to date failed for value {value!r} at path {field!r}") from exc
    return ensure_utc(parsed)


class EventCreate(BaseModel):
    title: str
    start: datetime
    end: datetime
    category: str = "other"
    description: str = ""

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Path `title` is required.")
        return cleaned

    @field_validator("start", "end")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, value: Any) -> str:
        return normalize_category(value)

    @field_validator("description", mode="before")
    @classmethod
    def _trim_description(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()


class EventUpdate(BaseModel):
    """Partial update body. Fields that are absent or falsy are left untouched."""

    title: Any = None
    start: Any = None
    end: Any = None
    category: Any = None
    description: Any = None


class EventOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    start: datetime
    end: datetime
    category: str = "other"
    description: str = ""
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("description", mode="before")
    @classmethod
    def _missing_description(cls, value: Any) -> str:
        return value or ""

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "EventOut":
        return cls(
            id=str(document["_id"]),
            title=document["title"],
            start=ensure_utc(document["start"]),
            end=ensure_utc(document["end"]),
            category=document.get("category") or "other",
            description=document.get("description") or "",
            created_at=ensure_utc(document["createdAt"]) if document.get("createdAt") else None,
        )
