"""Exception hierarchy for the store and record operations."""

from __future__ import annotations

from typing import Optional


class InventoryError(Exception):
    """Base class; carries the failing operation and, where known, the item id."""

    def __init__(self, operation: str, message: str, item_id: Optional[int] = None):
        self.operation = operation
        self.item_id = item_id
        target = f" for item {item_id}" if item_id is not None else ""
        super().__init__(f"{operation} failed{target}: {message}")


class BootstrapError(InventoryError):
    """The store could not be opened or its schema could not be created."""


class TransactionError(InventoryError):
    pass


class BeginTransactionError(TransactionError):
    pass


class CommitTransactionError(TransactionError):
    pass


class QueryError(InventoryError):
    """A read failed, or an iterator predicate was malformed."""


class WriteError(InventoryError):
    pass


class ItemNotFoundError(InventoryError, LookupError):
    def __init__(self, operation: str, item_id: int):
        super().__init__(operation, "not found", item_id=item_id)


class IteratorScanError(InventoryError):
    """A row could not be decoded while iterating."""


class ImportFormatError(InventoryError):
    """An import document is malformed; nothing from it was written."""
