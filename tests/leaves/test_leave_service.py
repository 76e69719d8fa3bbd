from __future__ import annotations

from datetime import date

import pytest

from hr_timekeeping.core.enums import LeaveStatus
from hr_timekeeping.core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from hr_timekeeping.leaves.model import LeaveInput, PrivilegedLeaveInput
from hr_timekeeping.leaves.service import LeaveService

PAYLOAD = {"startDate": "2025-02-03", "endDate": "2025-02-04", "reason": "Family trip"}


def _leave_input(**overrides):
    return LeaveInput.from_payload({**PAYLOAD, **overrides})


def _admin_input(**overrides):
    return PrivilegedLeaveInput.from_payload({**PAYLOAD, **overrides})


def test_input_variant_follows_role(admin, partime):
    assert LeaveService.input_type_for(admin) is PrivilegedLeaveInput
    assert LeaveService.input_type_for(partime) is LeaveInput


def test_restricted_input_ignores_status_and_employee(container, leaves_repo, partime):
    data = LeaveInput.from_payload({**PAYLOAD, "status": "APPROVED", "employeeId": 3})
    leave = container.leave_service.create(principal=partime, data=data)

    assert leave.status == LeaveStatus.DRAFT
    assert leave.employee_id == 2
    assert leaves_repo.leaves[leave.leave_id].status == LeaveStatus.DRAFT


def test_privileged_input_from_non_admin_is_forbidden(container, partime):
    with pytest.raises(AuthorizationError):
        container.leave_service.create(principal=partime, data=_admin_input(status="APPROVED"))


def test_admin_creates_for_employee_with_status(container, admin):
    leave = container.leave_service.create(principal=admin, data=_admin_input(employeeId=3, status="approved"))

    assert leave.employee_id == 3
    assert leave.status == LeaveStatus.APPROVED
    assert leave.employee_name == "E3 Fulltime"


def test_create_validates_dates_and_reason(container, partime, admin):
    svc = container.leave_service
    with pytest.raises(ValidationError):
        svc.create(principal=partime, data=_leave_input(endDate=None))
    with pytest.raises(ValidationError):
        svc.create(principal=partime, data=_leave_input(reason="  "))
    with pytest.raises(ValidationError):
        svc.create(principal=partime, data=_leave_input(startDate="2025-02-05"))
    with pytest.raises(NotFoundError):
        svc.create(principal=admin, data=_admin_input(employeeId=99))
    with pytest.raises(ValidationError):
        _admin_input(status="PENDING")


def test_owner_updates_draft_and_status_stays_draft(container, partime):
    svc = container.leave_service
    leave = svc.create(principal=partime, data=_leave_input())

    updated = svc.update(
        principal=partime,
        leave_id=leave.leave_id,
        data=LeaveInput.from_payload({"endDate": "2025-02-06", "status": "APPROVED"}),
    )

    assert updated.status == LeaveStatus.DRAFT
    assert updated.start_date == date(2025, 2, 3)
    assert updated.end_date == date(2025, 2, 6)
    assert updated.reason == "Family trip"


def test_non_owner_cannot_update(container, partime, fulltime):
    svc = container.leave_service
    leave = svc.create(principal=partime, data=_leave_input())

    with pytest.raises(AuthorizationError):
        svc.update(principal=fulltime, leave_id=leave.leave_id, data=_leave_input(reason="Mine now"))


def test_owner_cannot_update_decided_leave(container, admin, partime):
    svc = container.leave_service
    leave = svc.create(principal=partime, data=_leave_input())
    svc.decide(principal=admin, leave_id=leave.leave_id, status=LeaveStatus.REFUSED)

    with pytest.raises(AuthorizationError):
        svc.update(principal=partime, leave_id=leave.leave_id, data=_leave_input(reason="Please"))


def test_admin_update_can_change_status_and_employee(container, admin, partime):
    svc = container.leave_service
    leave = svc.create(principal=partime, data=_leave_input())

    updated = svc.update(principal=admin, leave_id=leave.leave_id, data=_admin_input(employeeId=3, status="APPROVED"))

    assert updated.status == LeaveStatus.APPROVED
    assert updated.employee_id == 3


def test_decide_follows_graph_once(container, admin, partime):
    svc = container.leave_service
    leave = svc.create(principal=partime, data=_leave_input())

    with pytest.raises(AuthorizationError):
        svc.decide(principal=partime, leave_id=leave.leave_id, status=LeaveStatus.APPROVED)

    assert svc.decide(principal=admin, leave_id=leave.leave_id, status=LeaveStatus.APPROVED).status == LeaveStatus.APPROVED
    with pytest.raises(InvalidTransitionError):
        svc.decide(principal=admin, leave_id=leave.leave_id, status=LeaveStatus.REFUSED)
    with pytest.raises(InvalidTransitionError):
        svc.decide(principal=admin, leave_id=leave.leave_id, status=LeaveStatus.DRAFT)


def test_delete_rules(container, leaves_repo, admin, partime, fulltime):
    svc = container.leave_service
    draft = svc.create(principal=partime, data=_leave_input())
    approved = svc.create(principal=admin, data=_admin_input(employeeId=2, status="APPROVED"))

    with pytest.raises(AuthorizationError):
        svc.delete(principal=fulltime, leave_id=approved.leave_id)
    with pytest.raises(AuthorizationError):
        svc.delete(principal=partime, leave_id=approved.leave_id)
    with pytest.raises(AuthorizationError):
        svc.delete(principal=fulltime, leave_id=draft.leave_id)

    svc.delete(principal=partime, leave_id=draft.leave_id)
    svc.delete(principal=admin, leave_id=approved.leave_id)
    assert leaves_repo.leaves == {}

    with pytest.raises(NotFoundError):
        svc.delete(principal=admin, leave_id=approved.leave_id)


def test_reads_are_newest_first_with_employee_name(container, admin, partime):
    svc = container.leave_service
    first = svc.create(principal=partime, data=_leave_input())
    second = svc.create(principal=admin, data=_admin_input(employeeId=3))

    assert [leave.leave_id for leave in svc.list_all()] == [second.leave_id, first.leave_id]
    assert svc.get_by_id(first.leave_id).employee_name == "E2 Partime"
    with pytest.raises(NotFoundError):
        svc.get_by_id(404)
    assert [e.name for e in svc.list_employees()] == ["Admin", "E2 Partime", "E3 Fulltime"]


def test_reason_longer_than_column_is_rejected(container, partime):
    svc = container.leave_service
    leave = svc.create(principal=partime, data=_leave_input(reason="r" * 500))
    assert len(leave.reason) == 500

    with pytest.raises(ValidationError):
        svc.create(principal=partime, data=_leave_input(reason="r" * 501))
    with pytest.raises(ValidationError):
        svc.update(principal=partime, leave_id=leave.leave_id, data=_leave_input(reason="r" * 501))
    assert svc.get_by_id(leave.leave_id).reason == "r" * 500
