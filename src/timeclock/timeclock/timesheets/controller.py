from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_minutes, parse_iso_date, parse_year_month
from ..common.web import admin_required
from ..container import Container
from ..core.context import RequestContext
from ..core.exceptions import ValidationError


def _iso(value):
    return value.isoformat() if value else None


def _timesheet_json(t) -> dict:
    out = {
        "employee_id": t.employee_id,
        "work_date": t.work_date.isoformat(),
        "first_punch_at": _iso(t.first_punch_at),
        "last_punch_at": _iso(t.last_punch_at),
        "worked_minutes": t.worked_minutes,
        "break_minutes": t.break_minutes,
        "expected_minutes": t.expected_minutes,
        "balance_minutes": t.balance_minutes,
        "balance": format_minutes(t.balance_minutes),
        "status": t.status.value,
    }
    if hasattr(t, "full_name"):
        out["full_name"] = t.full_name
    return out


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/timesheets", methods=["GET"], endpoint="admin_timesheets")
    @admin_required
    def admin_timesheets(ctx: RequestContext):
        month_s = request.args.get("month") or date.today().strftime("%Y-%m")
        employee_s = request.args.get("employee_id")
        try:
            year, month = parse_year_month(month_s)
        except ValueError:
            raise ValidationError("month must be YYYY-MM")
        employee_id = int(employee_s) if employee_s and employee_s.isdigit() else None

        rows = container.timesheet_service.list_month(ctx, year=year, month=month, employee_id=employee_id)
        return jsonify({"success": True, "timesheets": [_timesheet_json(r) for r in rows]})

    @app.route(
        "/api/admin/timesheets/<int:employee_id>/<work_date>/recalculate",
        methods=["POST"],
        endpoint="admin_timesheet_recalculate",
    )
    @admin_required
    def admin_timesheet_recalculate(ctx: RequestContext, employee_id: int, work_date: str):
        try:
            day = parse_iso_date(work_date)
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")

        timesheet = container.timesheet_service.recalculate(ctx, employee_id=employee_id, work_date=day)
        if timesheet is None:
            return jsonify({"success": True, "timesheet": None})
        return jsonify({"success": True, "timesheet": _timesheet_json(timesheet)})
