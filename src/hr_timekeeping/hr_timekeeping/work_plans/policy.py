"""Work-plan lifecycle rules.

DRAFT -> SUBMITTED -> APPROVED | REFUSED, and DRAFT | SUBMITTED -> CANCELLED.
Deciding (APPROVED / REFUSED) belongs to admins; submitting and cancelling
belong to the plan's owner, and admins may do it on their behalf.
"""

from __future__ import annotations

from ..common.state_graph import StateGraph
from ..core.enums import WorkPlanStatus
from ..core.exceptions import AuthorizationError, InvalidTransitionError
from ..identity.model import Principal
from .model import WorkPlan

WORK_PLAN_GRAPH: StateGraph[WorkPlanStatus] = StateGraph(
    "Work plan",
    {
        WorkPlanStatus.DRAFT: {WorkPlanStatus.SUBMITTED, WorkPlanStatus.CANCELLED},
        WorkPlanStatus.SUBMITTED: {
            WorkPlanStatus.APPROVED,
            WorkPlanStatus.REFUSED,
            WorkPlanStatus.CANCELLED,
        },
        WorkPlanStatus.APPROVED: set(),
        WorkPlanStatus.REFUSED: set(),
        WorkPlanStatus.CANCELLED: set(),
    },
)

INITIAL_STATUSES = frozenset({WorkPlanStatus.DRAFT, WorkPlanStatus.SUBMITTED})
ADMIN_ONLY_TARGETS = frozenset({WorkPlanStatus.APPROVED, WorkPlanStatus.REFUSED})


def check_initial_status(status: WorkPlanStatus) -> None:
    if status not in INITIAL_STATUSES:
        raise InvalidTransitionError(f"A new work plan cannot start as {status.value}")


def check_transition(principal: Principal, plan: WorkPlan, target: WorkPlanStatus) -> None:
    # Graph first: an impossible move is reported as such whoever asks.
    WORK_PLAN_GRAPH.require(plan.status, target)

    if target in ADMIN_ONLY_TARGETS:
        if not principal.is_admin:
            raise AuthorizationError(f"Only an admin can set a work plan to {target.value}")
        return

    if not (principal.is_admin or principal.owns(plan.employee_id)):
        raise AuthorizationError("Only the plan owner can change this work plan")


def check_delete(principal: Principal, plan: WorkPlan) -> None:
    if principal.is_admin:
        return
    if not principal.owns(plan.employee_id):
        raise AuthorizationError("Only the plan owner can delete this work plan")
    if plan.status != WorkPlanStatus.DRAFT:
        raise AuthorizationError("Only draft work plans can be deleted")
