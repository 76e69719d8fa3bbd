from __future__ import annotations

from ..common.state_graph import StateGraph
from ..core.enums import LeaveStatus
from ..core.exceptions import AuthorizationError
from ..identity.model import Principal
from .model import LeaveApplication

# No separate "submitted" step: a new request waits in DRAFT for an admin.
LEAVE_GRAPH: StateGraph[LeaveStatus] = StateGraph(
    "Leave application",
    {
        LeaveStatus.DRAFT: {LeaveStatus.APPROVED, LeaveStatus.REFUSED},
        LeaveStatus.APPROVED: set(),
        LeaveStatus.REFUSED: set(),
    },
)


def check_owner_draft(principal: Principal, leave: LeaveApplication, action: str) -> None:
    """Non-admins may only touch their own requests, and only while still DRAFT."""

    if principal.is_admin:
        return
    if not principal.owns(leave.employee_id):
        raise AuthorizationError(f"You can only {action} your own leave applications")
    if leave.status != LeaveStatus.DRAFT:
        raise AuthorizationError(f"Only draft leave applications can be {action}d")
