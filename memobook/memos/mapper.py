from __future__ import annotations
from datetime import datetime, timezone
from typing import Any

from memobook.memos.schemas import Memo


def _field(obj: Any, name: str, default=None):
    """Return attribute `name` from ORM object or dict, with a default."""
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _timestamp(value: Any, now: datetime) -> str:
    # the only place a missing store timestamp becomes "now"
    if value is None or value == "":
        value = now
    if isinstance(value, datetime):
        # sqlite hands back naive datetimes; they were written as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return str(value)


def to_memo(row: Any, now: datetime | None = None) -> Memo:
    """Normalize a store row (ORM row or plain dict) into a `Memo`.

    Nullable columns get defaults: tags -> [], summary -> None,
    created_at/updated_at -> `now` (UTC) when the store returned nothing.
    Unknown categories pass through untouched.
    """
    now = now or datetime.now(timezone.utc)
    return Memo(
        id=_field(row, "id"),
        title=_field(row, "title"),
        content=_field(row, "content") or "",
        category=_field(row, "category"),
        tags=list(_field(row, "tags") or []),
        summary=_field(row, "summary") or None,
        created_at=_timestamp(_field(row, "created_at"), now),
        updated_at=_timestamp(_field(row, "updated_at"), now),
    )
