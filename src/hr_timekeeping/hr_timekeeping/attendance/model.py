from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_timestamp
from ..core.enums import AttendanceDirection


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one check-in or check-out swipe. Never updated once stored."""

    event_id: int
    employee_id: int
    timestamp: datetime
    direction: AttendanceDirection
    employee_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "timestamp": format_timestamp(self.timestamp),
            "direction": self.direction.value,
        }


@dataclass(frozen=True)
class RecordedEvent:
    event: AttendanceEvent
    employee_name: str

    def to_dict(self) -> dict:
        return {
            "employeeName": self.employee_name,
            "timestamp": format_timestamp(self.event.timestamp),
            "direction": self.event.direction.value,
        }
