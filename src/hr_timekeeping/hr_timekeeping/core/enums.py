from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the acting principal, used for authorization."""

    ADMIN = "ADMIN"
    PARTIME = "PARTIME"
    FULLTIME = "FULLTIME"


class AttendanceDirection(str, Enum):
    IN = "IN"
    OUT = "OUT"


class WorkPlanStatus(str, Enum):
    """Lifecycle of a proposed shift schedule."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REFUSED = "REFUSED"
    CANCELLED = "CANCELLED"


class DayAssignmentStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"


class LeaveStatus(str, Enum):
    """Leave requests start in DRAFT and wait for an admin decision."""

    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    REFUSED = "REFUSED"
