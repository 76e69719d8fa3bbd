from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import WorkPlanStatus
from .model import NewDayAssignment, WorkPlan


class WorkPlanRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        period_start: date,
        period_end: date,
        status: WorkPlanStatus,
        day_assignments: Sequence[NewDayAssignment],
    ) -> int:
        """Store the plan and all of its day assignments in one transaction.

        Returns work_plan_id. Nothing is stored if any insert fails.
        """

        raise NotImplementedError

    def get(self, *, work_plan_id: int) -> Optional[WorkPlan]:
        raise NotImplementedError

    def list_by_employee(self, *, employee_id: int, status: Optional[WorkPlanStatus] = None) -> Sequence[WorkPlan]:
        """Newest created first."""

        raise NotImplementedError

    def list_overlapping(self, *, employee_id: int, start: date, end: date) -> Sequence[WorkPlan]:
        """Plans whose period intersects [start, end]."""

        raise NotImplementedError

    def update_status(self, *, work_plan_id: int, expected: WorkPlanStatus, status: WorkPlanStatus) -> bool:
        """Conditional write: only succeeds while the stored status is still ``expected``."""

        raise NotImplementedError

    def delete(self, *, work_plan_id: int, expected: Optional[WorkPlanStatus] = None) -> bool:
        """Delete the plan and its assignments; when ``expected`` is given only if the status still matches."""

        raise NotImplementedError

    def count_by_status(self, *, status: WorkPlanStatus) -> int:
        raise NotImplementedError
