from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.mysql_base import ConnectionFactory, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        role=Role(r["role"]),
        user_id=int(r["user_id"]) if r.get("user_id") is not None else None,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id, user_id, name, role FROM employees WHERE employee_id=%s",
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees")
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id, user_id, name, role FROM employees ORDER BY name ASC")
            return [_to_employee(r) for r in fetchall(cur)]
