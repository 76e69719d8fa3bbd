from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple

from ..common.datetime_utils import format_timestamp
from ..core.codes import WORK_PLAN_STATUS_CODES
from ..core.enums import DayAssignmentStatus, WorkPlanStatus


@dataclass(frozen=True)
class NewDayAssignment:
    """One shift slot as proposed by the employee, before it is stored."""

    shift_label: str
    shift_time: int


@dataclass(frozen=True)
class DayAssignment:
    assignment_id: int
    work_plan_id: int
    shift_label: str
    shift_time: int
    status: DayAssignmentStatus = DayAssignmentStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "id": self.assignment_id,
            "workPlanId": self.work_plan_id,
            "presentShift": self.shift_label,
            "shiftTime": self.shift_time,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class WorkPlan:
    """Domain entity: a proposed shift schedule for one employee over a period."""

    work_plan_id: int
    employee_id: int
    period_start: date
    period_end: date
    status: WorkPlanStatus
    created_at: datetime
    day_assignments: Tuple[DayAssignment, ...] = field(default_factory=tuple)
    employee_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.work_plan_id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "timeStart": self.period_start.isoformat(),
            "timeEnd": self.period_end.isoformat(),
            "status": self.status.value,
            "statusCalendar": WORK_PLAN_STATUS_CODES.to_code(self.status),
            "createdAt": format_timestamp(self.created_at),
            "dayAssignments": [a.to_dict() for a in self.day_assignments],
        }
