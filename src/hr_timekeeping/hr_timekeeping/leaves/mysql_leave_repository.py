from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.mysql_base import ConnectionFactory, db_cursor, fetchall, fetchone
from .model import LeaveApplication
from .repository import LeaveRepository

_SELECT = """
    SELECT l.leave_id, l.employee_id, e.name AS employee_name,
           l.start_date, l.end_date, l.reason, l.status, l.created_at
    FROM leave_applications l
    JOIN employees e ON e.employee_id = l.employee_id
"""


def _to_leave(r: dict) -> LeaveApplication:
    return LeaveApplication(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        employee_name=r.get("employee_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        status: LeaveStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_applications(employee_id, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), start_date, end_date, reason, status.value),
            )
            return int(cur.lastrowid)

    def get(self, *, leave_id: int) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_all(self) -> Sequence[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY l.created_at DESC, l.leave_id DESC")
            return [_to_leave(r) for r in fetchall(cur)]

    def update(
        self,
        *,
        leave_id: int,
        expected: LeaveStatus,
        employee_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        status: LeaveStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_applications
                SET employee_id=%s, start_date=%s, end_date=%s, reason=%s, status=%s, updated_at=NOW()
                WHERE leave_id=%s AND status=%s
                """,
                (int(employee_id), start_date, end_date, reason, status.value, int(leave_id), expected.value),
            )
            return cur.rowcount > 0

    def delete(self, *, leave_id: int, expected: Optional[LeaveStatus] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if expected is None:
                cur.execute("DELETE FROM leave_applications WHERE leave_id=%s", (int(leave_id),))
            else:
                cur.execute(
                    "DELETE FROM leave_applications WHERE leave_id=%s AND status=%s",
                    (int(leave_id), expected.value),
                )
            return cur.rowcount > 0
