from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_minutes, parse_iso_date
from ..common.web import admin_required
from ..container import Container
from ..core.context import RequestContext
from ..core.enums import LedgerSource
from ..core.exceptions import ValidationError


def _entry_json(e) -> dict:
    return {
        "id": e.entry_id,
        "employee_id": e.employee_id,
        "ref_date": e.ref_date.isoformat(),
        "minutes": e.minutes,
        "hours": format_minutes(e.minutes),
        "source": e.source.value,
        "approval_status": e.approval_status.value,
        "description": e.description or "",
        "created_by": e.created_by,
        "approved_by": e.approved_by,
        "approved_at": e.approved_at.isoformat() if e.approved_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/hour-bank/entries", methods=["GET"], endpoint="admin_hour_bank_entries")
    @admin_required
    def admin_hour_bank_entries(ctx: RequestContext):
        employee_s = request.args.get("employee_id")
        employee_id = int(employee_s) if employee_s and employee_s.isdigit() else None
        entries = container.hour_bank_ledger.list_entries(ctx, employee_id=employee_id)
        return jsonify({"success": True, "entries": [_entry_json(e) for e in entries]})

    @app.route("/api/admin/hour-bank/balance/<int:employee_id>", methods=["GET"], endpoint="admin_hour_bank_balance")
    @admin_required
    def admin_hour_bank_balance(ctx: RequestContext, employee_id: int):
        balance = container.hour_bank_ledger.balance_for(ctx, employee_id)
        return jsonify(
            {
                "success": True,
                "employee_id": balance.employee_id,
                "balance_minutes": balance.balance_minutes,
                "balance": format_minutes(balance.balance_minutes),
            }
        )

    @app.route("/api/admin/hour-bank/entries", methods=["POST"], endpoint="admin_hour_bank_create")
    @admin_required
    def admin_hour_bank_create(ctx: RequestContext):
        data = request.get_json(silent=True) or {}
        try:
            source = LedgerSource(data.get("source", ""))
        except ValueError:
            raise ValidationError("Invalid ledger source")
        try:
            employee_id = int(data.get("employee_id") or 0)
            ref_date = parse_iso_date(str(data.get("ref_date", "")))
            minutes = int(data.get("minutes"))
        except (TypeError, ValueError):
            raise ValidationError("employee_id, ref_date (YYYY-MM-DD) and integer minutes are required")

        entry_id = container.hour_bank_ledger.add_manual_entry(
            ctx,
            employee_id=employee_id,
            ref_date=ref_date,
            minutes=minutes,
            source=source,
            description=data.get("description"),
        )
        return jsonify({"success": True, "id": entry_id}), 201

    @app.route(
        "/api/admin/hour-bank/entries/<int:entry_id>/<decision>",
        methods=["POST"],
        endpoint="admin_hour_bank_decide",
    )
    @admin_required
    def admin_hour_bank_decide(ctx: RequestContext, entry_id: int, decision: str):
        if decision == "approve":
            balance = container.hour_bank_ledger.approve_entry(ctx, entry_id)
        elif decision == "reject":
            balance = container.hour_bank_ledger.reject_entry(ctx, entry_id)
        else:
            raise ValidationError("Decision must be approve or reject")
        return jsonify({"success": True, "balance_minutes": balance, "balance": format_minutes(balance)})
