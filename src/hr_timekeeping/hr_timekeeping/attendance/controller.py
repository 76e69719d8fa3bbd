from __future__ import annotations

from flask import Flask, request

from ..common.http import envelope, json_body
from ..common.validators import optional_date
from ..core.constants import API_PREFIX
from ..core.exceptions import ValidationError
from ..container import Container
from ..identity.session import login_required


def register(app: Flask, container: Container) -> None:
    base = f"{API_PREFIX}/work-shifts"

    @app.route(f"{base}/check-in-out/<int:employee_id>", methods=["POST"], endpoint="attendance_check_in_out")
    @login_required
    def check_in_out(employee_id: int):
        body = json_body()
        recorded = container.attendance_service.record_event(
            employee_id,
            body.get("timeSweep"),
            body.get("statusHistory"),
        )
        return envelope("Attendance recorded successfully", recorded.to_dict(), status=201)

    @app.route(f"{base}/attendance/<int:employee_id>", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history(employee_id: int):
        events = container.attendance_service.get_history(
            employee_id,
            optional_date(request.args.get("startDate"), "startDate"),
            optional_date(request.args.get("endDate"), "endDate"),
        )
        return envelope("Attendance records retrieved successfully", [e.to_dict() for e in events])

    @app.route(f"{base}/calendar/<int:employee_id>", methods=["GET"], endpoint="attendance_calendar")
    @login_required
    def attendance_calendar(employee_id: int):
        month = request.args.get("month", type=int)
        year = request.args.get("year", type=int)
        if month is None or year is None:
            raise ValidationError("Month and year are required")

        view = container.attendance_service.get_calendar_view(employee_id, month, year)
        return envelope("Calendar data retrieved successfully", view.to_dict())
