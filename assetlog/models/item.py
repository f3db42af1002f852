"""Item domain model — one inventory record with an append-only remarks log."""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Protocol

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
FIELDS = ("id", "description", "location", "status", "remarks")

_LOG_PREFIX = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}\]")


class Clock(Protocol):
    """Anything that can tell the current time."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock, optionally pinned to a fixed UTC offset."""

    def __init__(self, utc_offset_minutes: Optional[int] = None):
        self._tz = (
            timezone(timedelta(minutes=utc_offset_minutes))
            if utc_offset_minutes is not None
            else None
        )

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now()
        return datetime.now(self._tz)


class FixedClock:
    """Clock that always returns the same instant (tests, replays)."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


def timestamp(clock: Clock) -> str:
    return clock.now().strftime(TIMESTAMP_FORMAT)


def format_remarks(text: Optional[str], clock: Clock) -> str:
    """Return *text* as a timestamped remarks entry.

    Blank text becomes ``"[YYYY-MM-DD HH:MM] "``. Text that already starts
    with a bracketed timestamp is returned untouched, so formatting twice is
    the same as formatting once. Anything else gets a fresh prefix.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return f"[{timestamp(clock)}] "
    if _LOG_PREFIX.match(trimmed):
        return text  # type: ignore[return-value]
    return f"[{timestamp(clock)}] {trimmed}"


@dataclass
class Item:
    """An inventory record.

    ``id`` is 0 until the store assigns one. ``remarks`` is an audit log of
    newline-separated ``[timestamp] message`` lines.
    """

    description: str = ""
    location: str = ""
    status: str = ""
    remarks: str = ""
    id: int = 0

    def remark_entries(self) -> list[str]:
        return [line for line in self.remarks.split("\n") if line.strip()]

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in FIELDS}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        return cls(
            id=int(data.get("id") or 0),
            description=data.get("description") or "",
            location=data.get("location") or "",
            status=data.get("status") or "",
            remarks=data.get("remarks") or "",
        )

    @classmethod
    def from_row(cls, row: Any) -> "Item":
        """Build an item from a ``(id, description, location, status, remarks)`` row."""
        item_id, description, location, status, remarks = tuple(row)
        if item_id is None:
            raise ValueError("row has no id")
        return cls(
            id=int(item_id),
            description=description or "",
            location=location or "",
            status=status or "",
            remarks=remarks or "",
        )

    def copy(self, **changes: Any) -> "Item":
        values = asdict(self)
        values.update(changes)
        return Item(**values)
