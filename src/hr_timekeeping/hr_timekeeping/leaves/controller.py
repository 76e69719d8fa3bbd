from __future__ import annotations

from flask import Flask

from ..common.http import envelope, json_body
from ..core.constants import API_PREFIX
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError
from ..container import Container
from ..identity.session import admin_required, current_principal, login_required


def register(app: Flask, container: Container) -> None:
    base = f"{API_PREFIX}/leave-applications"
    service = container.leave_service

    def _read_input():
        # The caller's role decides which payload shape is even read.
        principal = current_principal()
        return principal, service.input_type_for(principal).from_payload(json_body())

    @app.route(f"{base}/employee", methods=["GET"], endpoint="leave_employees")
    def leave_employees():
        employees = service.list_employees()
        return envelope("Employees retrieved successfully", [e.to_dict() for e in employees])

    @app.route(base, methods=["GET"], endpoint="leave_list")
    def leave_list():
        return envelope("Leave applications retrieved successfully", [leave.to_dict() for leave in service.list_all()])

    @app.route(f"{base}/<int:leave_id>", methods=["GET"], endpoint="leave_detail")
    def leave_detail(leave_id: int):
        return envelope("Leave application retrieved successfully", service.get_by_id(leave_id).to_dict())

    @app.route(base, methods=["POST"], endpoint="leave_create")
    @login_required
    def leave_create():
        principal, data = _read_input()
        leave = service.create(principal=principal, data=data)
        return envelope("Leave application created successfully", leave.to_dict(), status=201)

    @app.route(f"{base}/<int:leave_id>", methods=["PUT"], endpoint="leave_update")
    @login_required
    def leave_update(leave_id: int):
        principal, data = _read_input()
        leave = service.update(principal=principal, leave_id=leave_id, data=data)
        return envelope("Leave application updated successfully", leave.to_dict())

    @app.route(f"{base}/<int:leave_id>/status", methods=["PUT"], endpoint="leave_decide")
    @admin_required
    def leave_decide(leave_id: int):
        raw = str(json_body().get("status") or "").strip().upper()
        try:
            status = LeaveStatus(raw)
        except ValueError:
            raise ValidationError("status must be APPROVED or REFUSED")

        leave = service.decide(principal=current_principal(), leave_id=leave_id, status=status)
        return envelope("Leave application status updated successfully", leave.to_dict())

    @app.route(f"{base}/<int:leave_id>", methods=["DELETE"], endpoint="leave_delete")
    @login_required
    def leave_delete(leave_id: int):
        service.delete(principal=current_principal(), leave_id=leave_id)
        return envelope("Leave application deleted successfully", True)
