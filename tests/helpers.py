"""Shared helpers for the test suite."""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

from assetlog.db.database import MEMORY, Database
from assetlog.models.item import FixedClock, Item

T0 = datetime(2025, 6, 21, 14, 30)
T0_STAMP = "[2025-06-21 14:30]"
T1 = datetime(2025, 6, 22, 9, 5)
T1_STAMP = "[2025-06-22 09:05]"

LOG_LINE = r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}\] "


def make_db(index_start: int = 1000) -> Database:
    """Return an initialised in-memory Database."""
    db = Database(path=MEMORY, index_start=index_start)
    db.init()
    return db


def make_file_db(index_start: int = 1000) -> Database:
    """Return a Database backed by a fresh temporary file."""
    tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    tmp.close()
    db = Database(path=Path(tmp.name), index_start=index_start)
    db.init()
    return db


def clock(instant: datetime = T0) -> FixedClock:
    return FixedClock(instant)


def sample_item(**overrides) -> Item:
    defaults = dict(
        description="UPS",
        location="Rack 1",
        status="Operational",
        remarks="installed",
    )
    defaults.update(overrides)
    return Item(**defaults)
