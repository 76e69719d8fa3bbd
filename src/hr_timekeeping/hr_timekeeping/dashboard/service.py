from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..attendance.service import AttendanceService
from ..core.enums import WorkPlanStatus
from ..employees.repository import EmployeeRepository
from ..work_plans.repository import WorkPlanRepository


@dataclass(frozen=True)
class DashboardStats:
    today_attendance: int
    total_employees: int
    pending_work_plans: int
    attendance_rate: Union[str, int]

    def to_dict(self) -> dict:
        return {
            "todayAttendance": self.today_attendance,
            "totalEmployees": self.total_employees,
            "pendingWorkPlans": self.pending_work_plans,
            "attendanceRate": self.attendance_rate,
        }


def format_attendance_rate(present: int, total: int) -> Union[str, int]:
    """Percentage with two decimals, or 0 when there is nobody to count."""

    if total <= 0:
        return 0
    return f"{present / total * 100:.2f}"


class DashboardService:
    """Read-only rollups for the admin dashboard."""

    def __init__(self, attendance: AttendanceService, work_plans: WorkPlanRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._work_plans = work_plans
        self._employees = employees

    def get_today_attendance_count(self) -> int:
        return self._attendance.count_present_today()

    def get_pending_work_plan_count(self) -> int:
        return self._work_plans.count_by_status(status=WorkPlanStatus.SUBMITTED)

    def get_attendance_rate(self) -> Union[str, int]:
        return format_attendance_rate(self.get_today_attendance_count(), self._employees.count())

    def get_stats(self) -> DashboardStats:
        present = self.get_today_attendance_count()
        total = self._employees.count()
        return DashboardStats(
            today_attendance=present,
            total_employees=total,
            pending_work_plans=self.get_pending_work_plan_count(),
            attendance_rate=format_attendance_rate(present, total),
        )
