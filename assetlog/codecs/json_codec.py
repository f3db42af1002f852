"""JSON interchange: an array of ``{id, description, location, status, remarks}`` objects."""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from assetlog.db.errors import ImportFormatError, WriteError
from assetlog.db.item_repo import list_all
from assetlog.models.item import Item

logger = logging.getLogger(__name__)


class ItemRecord(BaseModel):
    """Shape of one imported object; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = ""
    location: Optional[str] = ""
    status: Optional[str] = ""
    remarks: Optional[str] = ""

    def to_item(self) -> Item:
        return Item(
            id=self.id or 0,
            description=self.description or "",
            location=self.location or "",
            status=self.status or "",
            remarks=self.remarks or "",
        )


def dumps_items(items: list[Item]) -> str:
    return json.dumps([i.to_dict() for i in items], indent=2, ensure_ascii=False)


def export_json_string(conn: sqlite3.Connection) -> str:
    return dumps_items(list_all(conn))


def export_json(conn: sqlite3.Connection, path: Path | str) -> int:
    items = list_all(conn)
    try:
        Path(path).write_text(dumps_items(items), encoding="utf-8")
    except OSError as exc:
        raise WriteError("export json", f"{path}: {exc}") from exc
    logger.info(f"Exported {len(items)} items to {path}")
    return len(items)


def parse_items(raw: str) -> list[Item]:
    """Decode and validate a JSON array of items."""
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ImportFormatError("parse json", str(exc)) from exc
    if not isinstance(data, list):
        raise ImportFormatError("parse json", "top-level value must be an array")

    items: list[Item] = []
    for index, obj in enumerate(data):
        try:
            items.append(ItemRecord.model_validate(obj).to_item())
        except ValidationError as exc:
            raise ImportFormatError("parse json", f"item {index}: {exc}") from exc
    return items


def read_json(path: Path | str) -> list[Item]:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ImportFormatError("read json", f"{path}: {exc}") from exc
    return parse_items(raw)


def view_json(path: Path | str) -> str:
    """Pretty-print any JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ImportFormatError("view json", f"{path}: {exc}") from exc
    return json.dumps(data, indent=2, ensure_ascii=False)


def item_to_json(item: Item) -> str:
    return item.to_json()


def item_from_json(raw: str) -> Item:
    try:
        return ItemRecord.model_validate_json(raw).to_item()
    except ValidationError as exc:
        raise ImportFormatError("parse item json", str(exc)) from exc
