from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError, ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/<staff_id>/<period>", methods=["GET"], endpoint="api_payroll_record")
    @login_required
    def api_payroll_record(staff_id: str, period: str):
        try:
            record = service.reconcile_for(staff_id, period)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "record": record.to_dict()}), 200

    @app.route("/api/payroll/<period>", methods=["GET"], endpoint="api_payroll_period")
    @login_required
    def api_payroll_period(period: str):
        staff_ids = [s for s in request.args.get("staffIds", "").split(",") if s.strip()]
        if not staff_ids:
            return error_response(ValidationError("staffIds query parameter is required"))
        try:
            result = service.reconcile_period(staff_ids, period)
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "success": not result.errors,
                "records": [r.to_dict() for r in result.records],
                "errors": result.errors,
                "summary": result.summary(),
            }
        ), 200
