from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..common.datetime_utils import day_bounds, month_bounds, parse_iso_timestamp, truncate_to_millis, utc_now
from ..common.validators import require_date_order
from ..core.codes import DIRECTION_CODES
from ..core.enums import AttendanceDirection
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..work_plans.model import WorkPlan
from ..work_plans.repository import WorkPlanRepository
from .model import AttendanceEvent, RecordedEvent
from .repository import AttendanceRepository


def group_events_by_date(events: Iterable[AttendanceEvent]) -> Dict[str, List[AttendanceEvent]]:
    """Map ISO date -> that day's events in chronological order.

    Days without events get no key at all; calendar rendering treats a key
    as "has activity".
    """

    grouped: Dict[str, List[AttendanceEvent]] = {}
    for event in sorted(events, key=lambda e: e.timestamp):
        grouped.setdefault(event.timestamp.date().isoformat(), []).append(event)
    return grouped


@dataclass(frozen=True)
class CalendarView:
    work_plans: Sequence[WorkPlan]
    events_by_date: Dict[str, List[AttendanceEvent]]

    def to_dict(self) -> dict:
        return {
            "workPlans": [p.to_dict() for p in self.work_plans],
            "attendanceByDate": {d: [e.to_dict() for e in events] for d, events in self.events_by_date.items()},
        }


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        work_plans: WorkPlanRepository,
        *,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._attendance = attendance
        self._employees = employees
        self._work_plans = work_plans
        self._clock = clock

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def record_event(
        self,
        employee_id: int,
        timestamp: str | datetime | None,
        direction: AttendanceDirection | int | str | None,
    ) -> RecordedEvent:
        if timestamp is None or direction is None or direction == "":
            raise ValidationError("Time sweep and status history are required")

        employee = self._require_employee(employee_id)

        ts = truncate_to_millis(timestamp) if isinstance(timestamp, datetime) else parse_iso_timestamp(str(timestamp))
        d = direction if isinstance(direction, AttendanceDirection) else DIRECTION_CODES.to_member(direction)

        event_id = self._attendance.append(employee_id=employee.employee_id, timestamp=ts, direction=d)
        event = AttendanceEvent(
            event_id=event_id,
            employee_id=employee.employee_id,
            timestamp=ts,
            direction=d,
            employee_name=employee.name,
        )
        return RecordedEvent(event=event, employee_name=employee.name)

    def get_history(
        self,
        employee_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceEvent]:
        if start_date and end_date:
            require_date_order(start_date, end_date, start_name="startDate", end_name="endDate")
        start, end = day_bounds(start_date, end_date)
        return self._attendance.list_for_employee(employee_id=int(employee_id), start=start, end=end)

    def get_calendar_view(self, employee_id: int, month: int, year: int) -> CalendarView:
        first_day, last_day = month_bounds(month, year)
        start, end = day_bounds(first_day, last_day)

        plans = self._work_plans.list_overlapping(employee_id=int(employee_id), start=first_day, end=last_day)
        events = self._attendance.list_for_employee(employee_id=int(employee_id), start=start, end=end)
        return CalendarView(work_plans=list(plans), events_by_date=group_events_by_date(events))

    def count_present_today(self) -> int:
        today = self._clock().date()
        start, end = day_bounds(today, today)
        return self._attendance.count_employees_between(start=start, end=end)
