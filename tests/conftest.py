from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from hr_timekeeping.attendance.model import AttendanceEvent
from hr_timekeeping.container import build_services
from hr_timekeeping.core.enums import AttendanceDirection, DayAssignmentStatus, Role
from hr_timekeeping.employees.model import Employee
from hr_timekeeping.identity.model import Principal
from hr_timekeeping.leaves.model import LeaveApplication
from hr_timekeeping.work_plans.model import DayAssignment, WorkPlan

FIXED_NOW = datetime(2025, 1, 10, 12, 0, 0)


class InMemoryEmployees:
    def __init__(self, employees: dict[int, Employee]):
        self.employees = employees

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.employees.get(int(employee_id))

    def count(self) -> int:
        return len(self.employees)

    def list_all(self):
        return sorted(self.employees.values(), key=lambda e: e.name)


class InMemoryAttendance:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.events: list[AttendanceEvent] = []

    def append(self, *, employee_id: int, timestamp: datetime, direction: AttendanceDirection) -> int:
        event_id = len(self.events) + 1
        employee = self._employees.get_by_id(employee_id)
        name = employee.name if employee else None
        self.events.append(AttendanceEvent(event_id, employee_id, timestamp, direction, name))
        return event_id

    def list_for_employee(self, *, employee_id: int, start=None, end=None):
        items = [
            e
            for e in self.events
            if e.employee_id == employee_id
            and (start is None or e.timestamp >= start)
            and (end is None or e.timestamp <= end)
        ]
        return sorted(items, key=lambda e: (e.timestamp, e.event_id))

    def count_employees_between(self, *, start: datetime, end: datetime) -> int:
        return len({e.employee_id for e in self.events if start <= e.timestamp <= end})


class InMemoryWorkPlans:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.plans: dict[int, WorkPlan] = {}
        self._next_assignment = 1

    def create(self, *, employee_id, period_start, period_end, status, day_assignments) -> int:
        plan_id = len(self.plans) + 1
        assignments = []
        for a in day_assignments:
            assignments.append(
                DayAssignment(self._next_assignment, plan_id, a.shift_label, a.shift_time, DayAssignmentStatus.PENDING)
            )
            self._next_assignment += 1
        employee = self._employees.get_by_id(employee_id)
        self.plans[plan_id] = WorkPlan(
            work_plan_id=plan_id,
            employee_id=employee_id,
            period_start=period_start,
            period_end=period_end,
            status=status,
            created_at=FIXED_NOW + timedelta(seconds=plan_id),
            day_assignments=tuple(assignments),
            employee_name=employee.name if employee else None,
        )
        return plan_id

    def get(self, *, work_plan_id: int):
        return self.plans.get(int(work_plan_id))

    def _newest_first(self, plans):
        return sorted(plans, key=lambda p: (p.created_at, p.work_plan_id), reverse=True)

    def list_by_employee(self, *, employee_id: int, status=None):
        return self._newest_first(
            p for p in self.plans.values() if p.employee_id == employee_id and (status is None or p.status == status)
        )

    def list_overlapping(self, *, employee_id: int, start: date, end: date):
        return self._newest_first(
            p
            for p in self.plans.values()
            if p.employee_id == employee_id and p.period_start <= end and p.period_end >= start
        )

    def update_status(self, *, work_plan_id: int, expected, status) -> bool:
        plan = self.plans.get(int(work_plan_id))
        if not plan or plan.status != expected:
            return False
        self.plans[plan.work_plan_id] = replace(plan, status=status)
        return True

    def delete(self, *, work_plan_id: int, expected=None) -> bool:
        plan = self.plans.get(int(work_plan_id))
        if not plan or (expected is not None and plan.status != expected):
            return False
        del self.plans[plan.work_plan_id]
        return True

    def count_by_status(self, *, status) -> int:
        return sum(1 for p in self.plans.values() if p.status == status)


class InMemoryLeaves:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.leaves: dict[int, LeaveApplication] = {}

    def _name(self, employee_id: int):
        employee = self._employees.get_by_id(employee_id)
        return employee.name if employee else None

    def create(self, *, employee_id, start_date, end_date, reason, status) -> int:
        leave_id = len(self.leaves) + 1
        self.leaves[leave_id] = LeaveApplication(
            leave_id=leave_id,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=status,
            created_at=FIXED_NOW + timedelta(seconds=leave_id),
            employee_name=self._name(employee_id),
        )
        return leave_id

    def get(self, *, leave_id: int):
        return self.leaves.get(int(leave_id))

    def list_all(self):
        return sorted(self.leaves.values(), key=lambda leave: leave.created_at, reverse=True)

    def update(self, *, leave_id, expected, employee_id, start_date, end_date, reason, status) -> bool:
        current = self.leaves.get(int(leave_id))
        if not current or current.status != expected:
            return False
        self.leaves[current.leave_id] = replace(
            current,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=status,
            employee_name=self._name(employee_id),
        )
        return True

    def delete(self, *, leave_id: int, expected=None) -> bool:
        current = self.leaves.get(int(leave_id))
        if not current or (expected is not None and current.status != expected):
            return False
        del self.leaves[current.leave_id]
        return True


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(
        {
            1: Employee(employee_id=1, name="Admin", role=Role.ADMIN, user_id=1),
            2: Employee(employee_id=2, name="E2 Partime", role=Role.PARTIME, user_id=2),
            3: Employee(employee_id=3, name="E3 Fulltime", role=Role.FULLTIME, user_id=3),
        }
    )


@pytest.fixture
def attendance_repo(employees_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo)


@pytest.fixture
def work_plans_repo(employees_repo) -> InMemoryWorkPlans:
    return InMemoryWorkPlans(employees_repo)


@pytest.fixture
def leaves_repo(employees_repo) -> InMemoryLeaves:
    return InMemoryLeaves(employees_repo)


@pytest.fixture
def container(employees_repo, attendance_repo, work_plans_repo, leaves_repo, fixed_now):
    return build_services(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        work_plans_repo=work_plans_repo,
        leaves_repo=leaves_repo,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def admin() -> Principal:
    return Principal(employee_id=1, role=Role.ADMIN)


@pytest.fixture
def partime() -> Principal:
    return Principal(employee_id=2, role=Role.PARTIME)


@pytest.fixture
def fulltime() -> Principal:
    return Principal(employee_id=3, role=Role.FULLTIME)


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from hr_timekeeping.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Put an identity into the session the way the auth layer does after login."""

    def _login(employee_id: int, role_code: int) -> None:
        with client.session_transaction() as sess:
            sess["employee_id"] = employee_id
            sess["role"] = role_code

    return _login
