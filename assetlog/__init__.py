"""Inventory record keeping over an embedded SQLite store."""

__version__ = "1.0.0"
