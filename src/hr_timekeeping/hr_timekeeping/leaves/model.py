from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_timestamp
from ..common.validators import optional_date, require_positive_int
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LeaveApplication:
    """Domain entity: a request for time off."""

    leave_id: int
    employee_id: int
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    employee_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "createdAt": format_timestamp(self.created_at),
        }


def _optional_reason(data: Mapping[str, Any]) -> Optional[str]:
    reason = data.get("reason")
    if reason is None:
        return None
    if not isinstance(reason, str):
        raise ValidationError("reason must be text")
    return reason


@dataclass(frozen=True)
class LeaveInput:
    """What a regular employee may send: dates and reason only.

    It carries no status or employee field: the owner is the caller and
    the status is always DRAFT.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "LeaveInput":
        return cls(
            start_date=optional_date(data.get("startDate"), "startDate"),
            end_date=optional_date(data.get("endDate"), "endDate"),
            reason=_optional_reason(data),
        )


@dataclass(frozen=True)
class PrivilegedLeaveInput(LeaveInput):
    """Admin input: may target any employee and set the status directly."""

    employee_id: Optional[int] = None
    status: Optional[LeaveStatus] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "PrivilegedLeaveInput":
        raw_employee = data.get("employeeId")
        raw_status = data.get("status")

        status: Optional[LeaveStatus] = None
        if raw_status not in (None, ""):
            try:
                status = LeaveStatus(str(raw_status).strip().upper())
            except ValueError:
                raise ValidationError(f"Invalid leave status: {raw_status!r}")

        return cls(
            start_date=optional_date(data.get("startDate"), "startDate"),
            end_date=optional_date(data.get("endDate"), "endDate"),
            reason=_optional_reason(data),
            employee_id=require_positive_int(raw_employee, "employeeId") if raw_employee not in (None, "") else None,
            status=status,
        )
