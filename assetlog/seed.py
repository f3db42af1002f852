"""Load seed items from a YAML file.

Expected layout::

    items:
      - description: UPS
        location: Rack 1
        status: Operational
        remarks: installed
      - id: 2001
        description: Spare battery
"""
from __future__ import annotations

from pathlib import Path

import yaml

from assetlog.db.errors import ImportFormatError
from assetlog.models.item import Item


def load_seed_items(path: Path | str) -> list[Item]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ImportFormatError("read seed", f"{path}: {exc}") from exc

    entries = data.get("items", []) if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ImportFormatError("read seed", f"{path}: 'items' must be a list")

    items: list[Item] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ImportFormatError("read seed", f"{path}: entry {index} is not a mapping")
        try:
            items.append(Item.from_dict({k: _text(k, v) for k, v in entry.items()}))
        except (TypeError, ValueError) as exc:
            raise ImportFormatError("read seed", f"{path}: entry {index}: {exc}") from exc
    return items


def _text(key: str, value: object) -> object:
    # YAML turns bare words like "yes" or "2024-01-01" into non-strings
    if key == "id" or value is None:
        return value
    return str(value)
