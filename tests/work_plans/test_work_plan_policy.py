from datetime import date, datetime

import pytest

from hr_timekeeping.core.enums import Role, WorkPlanStatus
from hr_timekeeping.core.exceptions import AuthorizationError, InvalidTransitionError
from hr_timekeeping.identity.model import Principal
from hr_timekeeping.work_plans.model import WorkPlan
from hr_timekeeping.work_plans.policy import WORK_PLAN_GRAPH, check_initial_status, check_transition

ADMIN = Principal(employee_id=1, role=Role.ADMIN)
OWNER = Principal(employee_id=2, role=Role.PARTIME)
OTHER = Principal(employee_id=3, role=Role.FULLTIME)


def _plan(status: WorkPlanStatus) -> WorkPlan:
    return WorkPlan(
        work_plan_id=7,
        employee_id=2,
        period_start=date(2025, 1, 13),
        period_end=date(2025, 1, 19),
        status=status,
        created_at=datetime(2025, 1, 10, 9, 0),
    )


def test_terminal_states_have_no_exit():
    for status in (WorkPlanStatus.APPROVED, WorkPlanStatus.REFUSED, WorkPlanStatus.CANCELLED):
        assert WORK_PLAN_GRAPH.is_terminal(status)
    assert not WORK_PLAN_GRAPH.is_terminal(WorkPlanStatus.DRAFT)
    assert not WORK_PLAN_GRAPH.is_terminal(WorkPlanStatus.SUBMITTED)


def test_draft_cannot_jump_to_approved_even_for_admin():
    with pytest.raises(InvalidTransitionError):
        check_transition(ADMIN, _plan(WorkPlanStatus.DRAFT), WorkPlanStatus.APPROVED)


def test_only_admin_decides_submitted_plan():
    check_transition(ADMIN, _plan(WorkPlanStatus.SUBMITTED), WorkPlanStatus.APPROVED)
    check_transition(ADMIN, _plan(WorkPlanStatus.SUBMITTED), WorkPlanStatus.REFUSED)
    with pytest.raises(AuthorizationError):
        check_transition(OWNER, _plan(WorkPlanStatus.SUBMITTED), WorkPlanStatus.APPROVED)


@pytest.mark.parametrize("current", [WorkPlanStatus.DRAFT, WorkPlanStatus.SUBMITTED])
def test_owner_can_cancel_open_plan(current):
    check_transition(OWNER, _plan(current), WorkPlanStatus.CANCELLED)


def test_stranger_cannot_cancel_or_submit():
    with pytest.raises(AuthorizationError):
        check_transition(OTHER, _plan(WorkPlanStatus.DRAFT), WorkPlanStatus.CANCELLED)
    with pytest.raises(AuthorizationError):
        check_transition(OTHER, _plan(WorkPlanStatus.DRAFT), WorkPlanStatus.SUBMITTED)


def test_new_plan_starts_as_draft_or_submitted_only():
    check_initial_status(WorkPlanStatus.DRAFT)
    check_initial_status(WorkPlanStatus.SUBMITTED)
    with pytest.raises(InvalidTransitionError):
        check_initial_status(WorkPlanStatus.APPROVED)
