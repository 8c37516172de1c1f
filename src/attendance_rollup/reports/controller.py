from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import PrimaryFetchError, UpstreamError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/employees/<employee_id>/attendance", methods=["GET"], endpoint="employee_attendance")
    async def employee_attendance(employee_id: str):
        try:
            report = await container.report_service.employee_report(
                employee_id=employee_id,
                month=request.args.get("month"),
                year=request.args.get("year"),
            )
        except ValidationError as e:
            return _error(str(e), 400)
        except PrimaryFetchError:
            return _error("unable to compute attendance for this employee", 502)
        except Exception:
            logger.exception("Employee attendance failed for %s", employee_id)
            return _error("Internal server error", 500)
        return jsonify(report.to_dict()), 200

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="monthly_attendance")
    async def monthly_attendance():
        employee_ids = request.args.getlist("employeeId")
        try:
            reports = await container.report_service.batch_report(
                employee_ids=employee_ids,
                month=request.args.get("month"),
                year=request.args.get("year"),
            )
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Monthly attendance batch failed")
            return _error("Internal server error", 500)
        return jsonify({"employees": [r.to_dict() for r in reports]}), 200

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="daily_attendance")
    async def daily_attendance():
        raw_date = (request.args.get("date") or "").strip()
        if not raw_date:
            return _error("Missing 'date' query parameter", 400)
        try:
            work_date = parse_iso_date(raw_date)
        except ValueError:
            return _error("Invalid date format. Use YYYY-MM-DD", 400)

        try:
            report = await container.report_service.daily_report(
                work_date=work_date,
                search=request.args.get("search"),
                work_mode=request.args.get("workMode"),
                attendance_status=request.args.get("attendanceStatus"),
            )
        except UpstreamError as e:
            logger.warning("Daily attendance unavailable for %s: %s", raw_date, e)
            return _error("Daily attendance is unavailable", 502)
        except Exception:
            logger.exception("Daily attendance failed for %s", raw_date)
            return _error("Internal server error", 500)
        return jsonify(report.to_dict()), 200
