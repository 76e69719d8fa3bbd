from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceDirection
from ..database.mysql_base import ConnectionFactory, db_cursor, fetchall, fetchone, where_clause
from .model import AttendanceEvent
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def append(self, *, employee_id: int, timestamp: datetime, direction: AttendanceDirection) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(employee_id, event_time, direction)
                VALUES(%s,%s,%s)
                """,
                (int(employee_id), timestamp, direction.value),
            )
            return int(cur.lastrowid)

    def list_for_employee(
        self,
        *,
        employee_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses = ["a.employee_id=%s"]
        params: list[object] = [int(employee_id)]

        if start is not None:
            clauses.append("a.event_time >= %s")
            params.append(start)
        if end is not None:
            clauses.append("a.event_time <= %s")
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.event_id, a.employee_id, a.event_time, a.direction, e.name AS employee_name
                FROM attendance_events a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE {where_clause(clauses)}
                ORDER BY a.event_time ASC, a.event_id ASC
                """,
                tuple(params),
            )
            return [
                AttendanceEvent(
                    event_id=int(r["event_id"]),
                    employee_id=int(r["employee_id"]),
                    timestamp=r["event_time"],
                    direction=AttendanceDirection(r["direction"]),
                    employee_name=r.get("employee_name"),
                )
                for r in fetchall(cur)
            ]

    def count_employees_between(self, *, start: datetime, end: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(DISTINCT employee_id) AS total
                FROM attendance_events
                WHERE event_time BETWEEN %s AND %s
                """,
                (start, end),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0
