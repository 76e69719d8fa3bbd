from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from ..common.validators import require_date_order, require_max_length, require_non_empty
from ..core.constants import MAX_SHIFT_LABEL_LENGTH
from ..core.enums import WorkPlanStatus
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..identity.model import Principal
from . import policy
from .model import NewDayAssignment, WorkPlan
from .repository import WorkPlanRepository

logger = logging.getLogger(__name__)


class WorkPlanService:
    def __init__(self, work_plans: WorkPlanRepository, employees: EmployeeRepository):
        self._work_plans = work_plans
        self._employees = employees

    @staticmethod
    def parse_day_assignments(raw: Optional[Iterable[Any]]) -> list[NewDayAssignment]:
        """Turn ``[{"presentShift": ..., "shiftTime": ...}]`` into new assignments."""

        if raw is None:
            return []
        if isinstance(raw, (str, bytes, dict)):
            raise ValidationError("dayWorks must be a list")

        out: list[NewDayAssignment] = []
        for i, item in enumerate(raw, start=1):
            if isinstance(item, NewDayAssignment):
                out.append(item)
                continue
            if not isinstance(item, dict):
                raise ValidationError(f"Day assignment #{i} is invalid")
            label = require_non_empty(item.get("presentShift"), f"Day assignment #{i} shift")
            require_max_length(label, f"Day assignment #{i} shift", MAX_SHIFT_LABEL_LENGTH)
            try:
                shift_time = int(item.get("shiftTime"))
            except (TypeError, ValueError):
                raise ValidationError(f"Day assignment #{i} shift time must be a number")
            if shift_time < 0:
                raise ValidationError(f"Day assignment #{i} shift time cannot be negative")
            out.append(NewDayAssignment(shift_label=label, shift_time=shift_time))
        return out

    def create(
        self,
        *,
        principal: Principal,
        period_start: date,
        period_end: date,
        day_assignments: Sequence[NewDayAssignment] = (),
        status: Optional[WorkPlanStatus] = None,
        employee_id: Optional[int] = None,
    ) -> WorkPlan:
        # Only admins may plan on someone else's behalf; everyone else plans for themselves.
        owner_id = int(employee_id) if principal.is_admin and employee_id else principal.employee_id
        if not self._employees.get_by_id(owner_id):
            raise NotFoundError("Employee profile not found")

        require_date_order(period_start, period_end, start_name="Start date", end_name="End date")
        initial = status or WorkPlanStatus.DRAFT
        policy.check_initial_status(initial)

        work_plan_id = self._work_plans.create(
            employee_id=owner_id,
            period_start=period_start,
            period_end=period_end,
            status=initial,
            day_assignments=list(day_assignments),
        )
        logger.info(
            "Work plan %s created for employee %s by %s (%s, %d days)",
            work_plan_id, owner_id, principal.employee_id, initial.value, len(day_assignments),
        )
        return self.get(work_plan_id)

    def get(self, work_plan_id: int) -> WorkPlan:
        plan = self._work_plans.get(work_plan_id=int(work_plan_id))
        if not plan:
            raise NotFoundError("Work plan not found")
        return plan

    def list_by_employee(self, employee_id: int, status: Optional[WorkPlanStatus] = None) -> Sequence[WorkPlan]:
        return self._work_plans.list_by_employee(employee_id=int(employee_id), status=status)

    def set_status(self, *, principal: Principal, work_plan_id: int, status: WorkPlanStatus) -> WorkPlan:
        plan = self.get(work_plan_id)
        policy.check_transition(principal, plan, status)

        if not self._work_plans.update_status(work_plan_id=plan.work_plan_id, expected=plan.status, status=status):
            # Someone else moved the plan between our read and write; judge against what is stored now.
            latest = self.get(work_plan_id)
            policy.WORK_PLAN_GRAPH.require(latest.status, status)
            raise InvalidTransitionError("Work plan changed concurrently, please retry")

        logger.info(
            "Work plan %s: %s -> %s by employee %s",
            plan.work_plan_id, plan.status.value, status.value, principal.employee_id,
        )
        return self.get(work_plan_id)

    def delete(self, *, principal: Principal, work_plan_id: int) -> None:
        plan = self.get(work_plan_id)
        policy.check_delete(principal, plan)
        expected = None if principal.is_admin else WorkPlanStatus.DRAFT
        if not self._work_plans.delete(work_plan_id=plan.work_plan_id, expected=expected):
            if expected is None:
                raise NotFoundError("Work plan not found")
            raise AuthorizationError("Only draft work plans can be deleted")
        logger.info("Work plan %s deleted by employee %s", plan.work_plan_id, principal.employee_id)
