from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.http import envelope, json_body
from ..common.validators import require_date
from ..core.codes import WORK_PLAN_STATUS_CODES
from ..core.constants import API_PREFIX
from ..core.enums import WorkPlanStatus
from ..core.exceptions import ValidationError
from ..container import Container
from ..identity.session import current_principal, login_required


def _parse_status(raw: object) -> Optional[WorkPlanStatus]:
    """Accept the numeric code (1..5) or the status name."""

    if raw is None or raw == "":
        return None
    if isinstance(raw, str) and not raw.strip().isdigit():
        try:
            return WorkPlanStatus(raw.strip().upper())
        except ValueError:
            raise ValidationError(f"Invalid work plan status: {raw!r}")
    return WORK_PLAN_STATUS_CODES.to_member(raw)


def register(app: Flask, container: Container) -> None:
    base = f"{API_PREFIX}/work-shifts"
    service = container.work_plan_service

    @app.route(f"{base}/work-plan", methods=["POST"], endpoint="work_plan_create")
    @login_required
    def work_plan_create():
        body = json_body()
        employee_id = body.get("employeeId")
        plan = service.create(
            principal=current_principal(),
            period_start=require_date(body.get("timeStart"), "timeStart"),
            period_end=require_date(body.get("timeEnd"), "timeEnd"),
            day_assignments=service.parse_day_assignments(body.get("dayWorks")),
            status=_parse_status(body.get("statusCalendar")),
            employee_id=int(employee_id) if str(employee_id or "").isdigit() else None,
        )
        return envelope("Work plan created successfully", plan.to_dict(), status=201)

    @app.route(f"{base}/work-plans/<int:employee_id>", methods=["GET"], endpoint="work_plan_list")
    @login_required
    def work_plan_list(employee_id: int):
        plans = service.list_by_employee(employee_id, _parse_status(request.args.get("status")))
        return envelope("Work plans retrieved successfully", [p.to_dict() for p in plans])

    @app.route(f"{base}/work-plan/<int:work_plan_id>", methods=["GET"], endpoint="work_plan_detail")
    @login_required
    def work_plan_detail(work_plan_id: int):
        return envelope("Work plan retrieved successfully", service.get(work_plan_id).to_dict())

    @app.route(f"{base}/work-plan/<int:work_plan_id>/status", methods=["PUT"], endpoint="work_plan_set_status")
    @login_required
    def work_plan_set_status(work_plan_id: int):
        status = _parse_status(json_body().get("statusCalendar"))
        if status is None:
            raise ValidationError("statusCalendar is required")

        plan = service.set_status(principal=current_principal(), work_plan_id=work_plan_id, status=status)
        return envelope("Work plan status updated successfully", plan.to_dict())

    @app.route(f"{base}/work-plan/<int:work_plan_id>", methods=["DELETE"], endpoint="work_plan_delete")
    @login_required
    def work_plan_delete(work_plan_id: int):
        service.delete(principal=current_principal(), work_plan_id=work_plan_id)
        return envelope("Work plan deleted successfully", True)
