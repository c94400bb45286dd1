from contextlib import contextmanager
from typing import Any, List, Optional, Tuple


class RecordingCursor:
    def __init__(self, conn: "RecordingConnection") -> None:
        self.conn = conn
        self.rowcount = -1
        self.description = None
        self._rows: List[Tuple[Any, ...]] = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql: str, params: Any = None) -> None:
        self.conn.statements.append((" ".join(sql.split()), params))
        if self.conn.error is not None:
            raise self.conn.error
        self.rowcount = self.conn.rowcount
        self._rows = list(self.conn.rows)
        self.description = [(c,) for c in self.conn.columns] if self.conn.columns else None

    def fetchone(self) -> Optional[Tuple[Any, ...]]:
        return self._rows[0] if self._rows else None

    def fetchall(self) -> List[Tuple[Any, ...]]:
        return list(self._rows)


class RecordingConnection:
    """Stands in for a psycopg Connection and records every statement executed."""

    def __init__(self, rowcount: int = 1, rows=None, columns=None, error: Optional[Exception] = None) -> None:
        self.statements: List[Tuple[str, Any]] = []
        self.rowcount = rowcount
        self.rows = rows or []
        self.columns = columns or []
        self.error = error
        self.transactions = 0
        self.rolled_back = 0

    def cursor(self) -> RecordingCursor:
        return RecordingCursor(self)

    @contextmanager
    def transaction(self):
        self.transactions += 1
        try:
            yield self
        except Exception:
            self.rolled_back += 1
            raise


