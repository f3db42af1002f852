"""Domain models for the inventory store."""

from assetlog.models.item import Clock, FixedClock, Item, SystemClock, format_remarks

__all__ = ["Item", "Clock", "SystemClock", "FixedClock", "format_remarks"]
