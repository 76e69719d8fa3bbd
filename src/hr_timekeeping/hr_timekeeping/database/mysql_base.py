from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple


class ConnectionFactory(Protocol):
    def connect(self) -> Any:
        ...


@contextmanager
def db_cursor(conn_factory: ConnectionFactory, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """One unit of work: commit when the block exits cleanly, roll back otherwise."""

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def where_clause(clauses: Sequence[str]) -> str:
    return " AND ".join(clauses) if clauses else "1=1"
