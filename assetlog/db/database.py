"""Store handle — owns the SQLite connection and the transaction boundary."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Generator, Optional, Protocol, Sequence, TypeVar

from assetlog.db.errors import (
    BeginTransactionError,
    BootstrapError,
    CommitTransactionError,
)
from assetlog.db.schema import INDEX_START, SCHEMA_DDL, SEQUENCE_INIT, TABLE_NAME

logger = logging.getLogger(__name__)

MEMORY = ":memory:"

T = TypeVar("T")


class Executor(Protocol):
    """Runs one parameterised statement and reports ``rowcount``/``lastrowid``.

    A plain ``sqlite3.Connection`` satisfies this both inside and outside a
    transaction, so record operations never care which one they get.
    """

    def execute(self, sql: str, parameters: Sequence[Any] = ..., /) -> sqlite3.Cursor: ...


class Database:
    """
    SQLite store handle with explicit transaction support.

    Every mutation goes through ``transaction()`` (or ``run_in_transaction``),
    which commits on success and rolls back on failure. Reads may use the
    connection directly.
    """

    def __init__(self, path: Optional[Path | str] = None, index_start: int = INDEX_START):
        if path is None:
            from assetlog.config import get_settings
            path = get_settings().database_path
        if isinstance(path, str) and path != MEMORY:
            path = Path(path)
        self.path: Path | str = path
        self.index_start = index_start
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def in_memory(self) -> bool:
        return self.path == MEMORY

    # -- connection lifecycle --------------------------------------------------

    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            try:
                if not self.in_memory:
                    Path(self.path).parent.mkdir(parents=True, exist_ok=True)
                # isolation_level=None: transactions are opened explicitly below
                self._conn = sqlite3.connect(
                    str(self.path), check_same_thread=False, isolation_level=None
                )
            except (OSError, sqlite3.Error) as exc:
                raise BootstrapError("open store", f"{self.path}: {exc}") from exc
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def init(self) -> None:
        """Create the table and seed the id sequence (both idempotent)."""
        conn = self.connection()
        try:
            conn.executescript(SCHEMA_DDL)
        except sqlite3.Error as exc:
            raise BootstrapError("create schema", str(exc)) from exc
        try:
            conn.execute(SEQUENCE_INIT, (TABLE_NAME, self.index_start, TABLE_NAME))
        except sqlite3.Error as exc:
            raise BootstrapError("init sequence", str(exc)) from exc

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -- transaction helpers ---------------------------------------------------

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Commits on success, rolls back and re-raises on any exception."""
        conn = self.connection()
        try:
            conn.execute("BEGIN")
        except sqlite3.Error as exc:
            raise BeginTransactionError("begin transaction", str(exc)) from exc
        try:
            yield conn
        except BaseException:
            self._rollback(conn)
            raise
        try:
            conn.execute("COMMIT")
        except sqlite3.Error as exc:
            self._rollback(conn)
            raise CommitTransactionError("commit transaction", str(exc)) from exc

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        # a failed ROLLBACK must not mask the error that triggered it
        if not conn.in_transaction:
            return
        try:
            conn.execute("ROLLBACK")
        except sqlite3.Error as exc:
            logger.error(f"Rollback failed: {exc}")

    def run_in_transaction(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        with self.transaction() as conn:
            return fn(conn)

    # -- low-level query helpers -----------------------------------------------

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        row = self.connection().execute(sql, params).fetchone()
        return dict(row) if row else None

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        rows = self.connection().execute(sql, params).fetchall()
        return [dict(r) for r in rows]

    def sequence_value(self) -> Optional[int]:
        row = self.fetchone("SELECT seq FROM sqlite_sequence WHERE name = ?", (TABLE_NAME,))
        return row["seq"] if row else None


def open_store(path: Optional[Path | str] = None, index_start: int = INDEX_START) -> Database:
    """Open (or create) the store and make sure it is ready for use.

    A store that cannot be opened is a bootstrap failure: it is logged and the
    process exits.
    """
    db = Database(path, index_start=index_start)
    try:
        db.init()
    except BootstrapError as exc:
        logger.critical(f"Cannot open inventory store: {exc}")
        db.close()
        raise SystemExit(1) from exc
    logger.debug(f"Opened inventory store at {db.path}")
    return db
