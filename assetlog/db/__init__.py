"""Database layer — SQLite store handle, record operations and iterator."""

from assetlog.db.database import MEMORY, Database, Executor, open_store
from assetlog.db.errors import (
    BeginTransactionError,
    BootstrapError,
    CommitTransactionError,
    ImportFormatError,
    InventoryError,
    ItemNotFoundError,
    IteratorScanError,
    QueryError,
    TransactionError,
    WriteError,
)
from assetlog.db.iterator import ItemIterator
from assetlog.db.schema import INDEX_START, SCHEMA_DDL

__all__ = [
    "Database", "Executor", "open_store", "MEMORY",
    "ItemIterator",
    "INDEX_START", "SCHEMA_DDL",
    "InventoryError", "BootstrapError", "TransactionError",
    "BeginTransactionError", "CommitTransactionError",
    "QueryError", "WriteError", "ItemNotFoundError",
    "IteratorScanError", "ImportFormatError",
]
