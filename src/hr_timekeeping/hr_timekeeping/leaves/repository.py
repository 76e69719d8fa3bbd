from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveApplication


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        status: LeaveStatus,
    ) -> int:
        raise NotImplementedError

    def get(self, *, leave_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def list_all(self) -> Sequence[LeaveApplication]:
        """Newest created first, joined with the employee name."""

        raise NotImplementedError

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
        """Overwrite the row while its status is still ``expected``."""

        raise NotImplementedError

    def delete(self, *, leave_id: int, expected: Optional[LeaveStatus] = None) -> bool:
        """Delete the row; when ``expected`` is given only if the status still matches."""

        raise NotImplementedError
