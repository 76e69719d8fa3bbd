from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Sequence

from ..core.enums import DayAssignmentStatus, WorkPlanStatus
from ..database.mysql_base import ConnectionFactory, db_cursor, fetchall, fetchone, where_clause
from .model import DayAssignment, NewDayAssignment, WorkPlan
from .repository import WorkPlanRepository

_PLAN_COLUMNS = """
    wp.work_plan_id, wp.employee_id, wp.period_start, wp.period_end,
    wp.status, wp.created_at, e.name AS employee_name
"""


class MySQLWorkPlanRepository(WorkPlanRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        period_start: date,
        period_end: date,
        status: WorkPlanStatus,
        day_assignments: Sequence[NewDayAssignment],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_plans(employee_id, period_start, period_end, status)
                VALUES(%s,%s,%s,%s)
                """,
                (int(employee_id), period_start, period_end, status.value),
            )
            work_plan_id = int(cur.lastrowid)

            for a in day_assignments:
                cur.execute(
                    """
                    INSERT INTO day_assignments(work_plan_id, shift_label, shift_time, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (work_plan_id, a.shift_label, int(a.shift_time), DayAssignmentStatus.PENDING.value),
                )
            return work_plan_id

    def get(self, *, work_plan_id: int) -> Optional[WorkPlan]:
        plans = self._select(["wp.work_plan_id=%s"], [int(work_plan_id)])
        return plans[0] if plans else None

    def list_by_employee(self, *, employee_id: int, status: Optional[WorkPlanStatus] = None) -> Sequence[WorkPlan]:
        clauses = ["wp.employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if status is not None:
            clauses.append("wp.status=%s")
            params.append(status.value)
        return self._select(clauses, params)

    def list_overlapping(self, *, employee_id: int, start: date, end: date) -> Sequence[WorkPlan]:
        return self._select(
            ["wp.employee_id=%s", "wp.period_start <= %s", "wp.period_end >= %s"],
            [int(employee_id), end, start],
        )

    def update_status(self, *, work_plan_id: int, expected: WorkPlanStatus, status: WorkPlanStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_plans
                SET status=%s, updated_at=NOW()
                WHERE work_plan_id=%s AND status=%s
                """,
                (status.value, int(work_plan_id), expected.value),
            )
            return cur.rowcount > 0

    def delete(self, *, work_plan_id: int, expected: Optional[WorkPlanStatus] = None) -> bool:
        # day_assignments rows go with the plan through ON DELETE CASCADE.
        with db_cursor(self._conn_factory) as (_, cur):
            if expected is None:
                cur.execute("DELETE FROM work_plans WHERE work_plan_id=%s", (int(work_plan_id),))
            else:
                cur.execute(
                    "DELETE FROM work_plans WHERE work_plan_id=%s AND status=%s",
                    (int(work_plan_id), expected.value),
                )
            return cur.rowcount > 0

    def count_by_status(self, *, status: WorkPlanStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM work_plans WHERE status=%s", (status.value,))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def _select(self, clauses: list[str], params: list[object]) -> List[WorkPlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_PLAN_COLUMNS}
                FROM work_plans wp
                JOIN employees e ON e.employee_id = wp.employee_id
                WHERE {where_clause(clauses)}
                ORDER BY wp.created_at DESC, wp.work_plan_id DESC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [int(r["work_plan_id"]) for r in rows]
            assignments = self._assignments_for(cur, ids)

        return [
            WorkPlan(
                work_plan_id=int(r["work_plan_id"]),
                employee_id=int(r["employee_id"]),
                period_start=r["period_start"],
                period_end=r["period_end"],
                status=WorkPlanStatus(r["status"]),
                created_at=r["created_at"],
                day_assignments=tuple(assignments.get(int(r["work_plan_id"]), [])),
                employee_name=r.get("employee_name"),
            )
            for r in rows
        ]

    @staticmethod
    def _assignments_for(cur, work_plan_ids: Sequence[int]) -> Dict[int, List[DayAssignment]]:
        placeholders = ",".join(["%s"] * len(work_plan_ids))
        cur.execute(
            f"""
            SELECT assignment_id, work_plan_id, shift_label, shift_time, status
            FROM day_assignments
            WHERE work_plan_id IN ({placeholders})
            ORDER BY assignment_id ASC
            """,
            tuple(work_plan_ids),
        )
        out: Dict[int, List[DayAssignment]] = defaultdict(list)
        for r in fetchall(cur):
            out[int(r["work_plan_id"])].append(
                DayAssignment(
                    assignment_id=int(r["assignment_id"]),
                    work_plan_id=int(r["work_plan_id"]),
                    shift_label=r["shift_label"],
                    shift_time=int(r["shift_time"]),
                    status=DayAssignmentStatus(r["status"]),
                )
            )
        return out
