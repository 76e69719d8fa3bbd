from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .work_plans.mysql_work_plan_repository import MySQLWorkPlanRepository
from .work_plans.repository import WorkPlanRepository
from .work_plans.service import WorkPlanService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    work_plans_repo: WorkPlanRepository
    leaves_repo: LeaveRepository

    attendance_service: AttendanceService
    work_plan_service: WorkPlanService
    leave_service: LeaveService
    dashboard_service: DashboardService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    work_plans_repo: WorkPlanRepository,
    leaves_repo: LeaveRepository,
    **service_options,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    attendance_service = AttendanceService(attendance_repo, employees_repo, work_plans_repo, **service_options)
    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        work_plans_repo=work_plans_repo,
        leaves_repo=leaves_repo,
        attendance_service=attendance_service,
        work_plan_service=WorkPlanService(work_plans_repo, employees_repo),
        leave_service=LeaveService(leaves_repo, employees_repo),
        dashboard_service=DashboardService(attendance_service, work_plans_repo, employees_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        work_plans_repo=MySQLWorkPlanRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
    )
