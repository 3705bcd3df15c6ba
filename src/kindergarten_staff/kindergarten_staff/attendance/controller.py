from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_user_id, error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from ..geo.distance import Coordinate
from ..geo.location import ReportedLocationProvider
from ..shifts.repository import DeviceMetadata


def _location_from_body(data: dict) -> ReportedLocationProvider:
    lat, lng = data.get("latitude"), data.get("longitude")
    if lat is None or lng is None:
        return ReportedLocationProvider(None)
    try:
        return ReportedLocationProvider(Coordinate(latitude=float(lat), longitude=float(lng)))
    except (TypeError, ValueError):
        raise ValidationError("latitude and longitude must be numbers")


def _device_from_request(data: dict) -> DeviceMetadata:
    return DeviceMetadata(
        user_agent=request.headers.get("User-Agent"),
        platform=data.get("platform"),
        ip_address=request.remote_addr,
    )


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/shifts/today", methods=["GET"], endpoint="api_shift_today")
    @login_required
    def api_shift_today():
        try:
            status = service.today_status(current_user_id())
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "status": status}), 200

    @app.route("/api/shifts/check-in", methods=["POST"], endpoint="api_check_in")
    @login_required
    def api_check_in():
        data = request.get_json(silent=True) or {}
        try:
            shift = service.check_in(
                current_user_id(),
                location_provider=_location_from_body(data),
                device=_device_from_request(data),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Checked in", "shift": shift.to_dict()}), 200

    @app.route("/api/shifts/check-out", methods=["POST"], endpoint="api_check_out")
    @login_required
    def api_check_out():
        data = request.get_json(silent=True) or {}
        try:
            shift = service.check_out(
                current_user_id(),
                location_provider=_location_from_body(data),
                device=_device_from_request(data),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Checked out", "shift": shift.to_dict()}), 200

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="api_attendance_bulk")
    @login_required
    def api_attendance_bulk():
        data = request.get_json(silent=True) or {}
        records = data.get("records")
        if not isinstance(records, list):
            return error_response(ValidationError("records must be a list"))
        try:
            result = service.bulk_save(records, data.get("scopeId") or current_user_id())
        except DomainError as e:
            return error_response(e)
        body = result.to_dict()
        body["success"] = not result.has_failures
        return jsonify(body), 200 if not result.has_failures else 207

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="api_attendance_mark")
    @login_required
    def api_attendance_mark():
        data = request.get_json(silent=True) or {}
        subject_ids = data.get("subjectIds")
        if not isinstance(subject_ids, list):
            return error_response(ValidationError("subjectIds must be a list"))
        try:
            result = service.mark_many(
                subject_ids,
                work_date=parse_iso_date(data.get("date")),
                status=data.get("status"),
                scope_id=data.get("scopeId") or current_user_id(),
                notes=data.get("notes"),
                strict=bool(data.get("strict", False)),
            )
        except DomainError as e:
            return error_response(e)
        body = result.to_dict()
        body["success"] = True
        return jsonify(body), 200

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="api_attendance_summary")
    @login_required
    def api_attendance_summary():
        try:
            start = parse_iso_date(request.args.get("from"))
            end = parse_iso_date(request.args.get("to"))
            staff_id = request.args.get("staffId") or current_user_id()
            summary = container.aggregator.summarize(staff_id, start, end)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "summary": summary.to_dict()}), 200
