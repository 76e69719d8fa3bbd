from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceDirection
from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    def append(self, *, employee_id: int, timestamp: datetime, direction: AttendanceDirection) -> int:
        """Store a new event and return its id. Existing events are never touched."""

        raise NotImplementedError

    def list_for_employee(
        self,
        *,
        employee_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceEvent]:
        """Events within the inclusive range, oldest first."""

        raise NotImplementedError

    def count_employees_between(self, *, start: datetime, end: datetime) -> int:
        """Number of distinct employees with at least one event in the range."""

        raise NotImplementedError
