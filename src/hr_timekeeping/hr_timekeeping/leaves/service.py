from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_date_order, require_max_length, require_non_empty
from ..core.constants import MAX_REASON_LENGTH
from ..core.enums import LeaveStatus
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..identity.model import Principal
from .model import LeaveApplication, LeaveInput, PrivilegedLeaveInput
from .policy import LEAVE_GRAPH, check_owner_draft
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    @staticmethod
    def input_type_for(principal: Principal) -> type[LeaveInput]:
        """Which payload shape the caller is allowed to send."""

        return PrivilegedLeaveInput if principal.is_admin else LeaveInput

    @staticmethod
    def _check_input_type(principal: Principal, data: LeaveInput) -> None:
        if isinstance(data, PrivilegedLeaveInput) and not principal.is_admin:
            raise AuthorizationError("Insufficient permissions")

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

    def list_all(self) -> Sequence[LeaveApplication]:
        return self._leaves.list_all()

    def get_by_id(self, leave_id: int) -> LeaveApplication:
        leave = self._leaves.get(leave_id=int(leave_id))
        if not leave:
            raise NotFoundError("Leave application not found")
        return leave

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def create(self, *, principal: Principal, data: LeaveInput) -> LeaveApplication:
        self._check_input_type(principal, data)

        employee_id = principal.employee_id
        status = LeaveStatus.DRAFT
        if isinstance(data, PrivilegedLeaveInput):
            employee_id = data.employee_id or principal.employee_id
            status = data.status or LeaveStatus.DRAFT

        if data.start_date is None or data.end_date is None:
            raise ValidationError("startDate and endDate are required")
        reason = require_max_length(require_non_empty(data.reason or "", "reason"), "reason", MAX_REASON_LENGTH)
        require_date_order(data.start_date, data.end_date, start_name="startDate", end_name="endDate")
        self._require_employee(employee_id)

        leave_id = self._leaves.create(
            employee_id=employee_id,
            start_date=data.start_date,
            end_date=data.end_date,
            reason=reason,
            status=status,
        )
        logger.info("Leave application %s created for employee %s (%s)", leave_id, employee_id, status.value)
        return self.get_by_id(leave_id)

    def update(self, *, principal: Principal, leave_id: int, data: LeaveInput) -> LeaveApplication:
        self._check_input_type(principal, data)
        current = self.get_by_id(leave_id)
        check_owner_draft(principal, current, "update")

        employee_id = current.employee_id
        status = LeaveStatus.DRAFT
        if isinstance(data, PrivilegedLeaveInput):
            employee_id = data.employee_id or current.employee_id
            status = data.status or current.status
            if employee_id != current.employee_id:
                self._require_employee(employee_id)

        start_date = data.start_date or current.start_date
        end_date = data.end_date or current.end_date
        reason = current.reason
        if data.reason is not None:
            reason = require_max_length(require_non_empty(data.reason, "reason"), "reason", MAX_REASON_LENGTH)
        require_date_order(start_date, end_date, start_name="startDate", end_name="endDate")

        ok = self._leaves.update(
            leave_id=current.leave_id,
            expected=current.status,
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=status,
        )
        if not ok:
            raise InvalidTransitionError("Leave application changed concurrently, please retry")

        if status != current.status:
            logger.info(
                "Leave application %s: %s -> %s by employee %s",
                current.leave_id, current.status.value, status.value, principal.employee_id,
            )
        return self.get_by_id(current.leave_id)

    def decide(self, *, principal: Principal, leave_id: int, status: LeaveStatus) -> LeaveApplication:
        """Admin approval or refusal of a DRAFT request."""

        current = self.get_by_id(leave_id)
        LEAVE_GRAPH.require(current.status, status)
        if not principal.is_admin:
            raise AuthorizationError("Only an admin can decide leave applications")

        ok = self._leaves.update(
            leave_id=current.leave_id,
            expected=current.status,
            employee_id=current.employee_id,
            start_date=current.start_date,
            end_date=current.end_date,
            reason=current.reason,
            status=status,
        )
        if not ok:
            latest = self.get_by_id(leave_id)
            LEAVE_GRAPH.require(latest.status, status)
            raise InvalidTransitionError("Leave application changed concurrently, please retry")

        logger.info(
            "Leave application %s: %s -> %s by employee %s",
            current.leave_id, current.status.value, status.value, principal.employee_id,
        )
        return self.get_by_id(current.leave_id)

    def delete(self, *, principal: Principal, leave_id: int) -> None:
        current = self.get_by_id(leave_id)
        check_owner_draft(principal, current, "delete")

        expected = None if principal.is_admin else LeaveStatus.DRAFT
        if not self._leaves.delete(leave_id=current.leave_id, expected=expected):
            if expected is None:
                raise NotFoundError("Leave application not found")
            raise AuthorizationError("Only draft leave applications can be deleted")
        logger.info("Leave application %s deleted by employee %s", current.leave_id, principal.employee_id)
