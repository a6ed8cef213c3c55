from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_duration, parse_iso_date
from ..common.validators import pick, require_non_empty
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import PunchNotAllowedError, UpstreamError, ValidationError
from ..events.model import PunchEvent
from ..events.normalize import business_hours_to_dict, event_to_dict, parse_event_type
from ..sessions.model import ReportOverview, WeeklySummary, WorkSession, WorkStatus


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def session_to_dict(s: WorkSession) -> dict:
    return {
        "employee_id": s.employee_id,
        "date": s.date.isoformat(),
        "punch_in": _iso(s.punch_in),
        "punch_out": _iso(s.punch_out),
        "break_start": _iso(s.break_start),
        "break_end": _iso(s.break_end),
        "total_hours": round(s.total_hours, 2),
        "break_duration": round(s.break_duration, 2),
        "break_label": format_duration(s.break_duration),
        "working_hours": round(s.working_hours, 2),
        "is_late_in": s.is_late_in,
        "is_early_out": s.is_early_out,
        "status": s.status.value,
        "punch_cycles": [
            {
                "punch_in": _iso(c.punch_in),
                "punch_out": _iso(c.punch_out),
                "is_late_in": c.is_late_in,
                "is_early_out": c.is_early_out,
            }
            for c in s.punch_cycles
        ],
    }


def status_to_dict(st: WorkStatus) -> dict:
    return {
        "can_punch_in": st.can_punch_in,
        "can_punch_out": st.can_punch_out,
        "can_start_break": st.can_start_break,
        "can_end_break": st.can_end_break,
        "current_status": st.current_status.value,
        "last_action": event_to_dict(st.last_action) if st.last_action else None,
    }


def weekly_to_dict(w: WeeklySummary) -> dict:
    return {
        "employee_id": w.employee_id,
        "week_start": w.week_start.isoformat(),
        "week_end": w.week_end.isoformat(),
        "total_hours": round(w.total_hours, 2),
        "total_break_time": round(w.total_break_time, 2),
        "days_worked": w.days_worked,
        "average_hours_per_day": round(w.average_hours_per_day, 2),
        "daily_breakdown": [
            {
                "date": d.date.isoformat(),
                "day_name": d.day_name,
                "hours": round(d.hours, 2),
                "break_time": round(d.break_time, 2),
                "is_late": d.is_late,
                "is_early": d.is_early,
                "punch_in": _iso(d.punch_in),
                "punch_out": _iso(d.punch_out),
            }
            for d in w.daily_breakdown
        ],
    }


def overview_to_dict(o: ReportOverview) -> dict:
    return {
        "total_sessions": o.total_sessions,
        "total_working_hours": round(o.total_working_hours, 2),
        "total_break_time": round(o.total_break_time),
        "late_arrivals": o.late_arrivals,
        "early_departures": o.early_departures,
        "average_hours_per_day": round(o.average_hours_per_day, 2),
        "total_punch_cycles": o.total_punch_cycles,
        "employee_stats": [
            {
                "employee_id": e.employee_id,
                "sessions": e.sessions,
                "total_hours": round(e.total_hours, 2),
                "average_hours": round(e.average_hours, 2),
                "late_count": e.late_count,
                "early_count": e.early_count,
                "punch_cycles": e.punch_cycles,
                "attendance_rate": round(e.attendance_rate, 1),
            }
            for e in o.employee_stats
        ],
        "daily_totals": [
            {"date": d.date.isoformat(), "hours": round(d.hours, 2), "cycles": d.cycles}
            for d in o.daily_totals
        ],
    }


def register(app: Flask, container: Container) -> None:
    tracking = container.time_tracking_service
    reports = container.report_service

    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _json_object() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("JSON object body required")
        return data

    def _parse_date(value: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}") from None

    def _date_range() -> tuple[date, date]:
        today = container.clock().date()
        start_s = request.args.get("start_date")
        end_s = request.args.get("end_date")
        end = _parse_date(end_s) if end_s else today
        start = _parse_date(start_s) if start_s else end - timedelta(days=DEFAULT_REPORT_DAYS - 1)
        if start > end:
            raise ValidationError("start_date must not be after end_date")
        return start, end

    @app.errorhandler(PunchNotAllowedError)
    def _not_allowed(exc: PunchNotAllowedError):
        return _error(str(exc), 409)

    @app.errorhandler(ValidationError)
    def _invalid(exc: ValidationError):
        return _error(str(exc), 400)

    @app.errorhandler(UpstreamError)
    def _upstream(exc: UpstreamError):
        app.logger.warning("Upstream failure: %s", exc)
        return _error("Storage temporarily unavailable", 503)

    @app.route("/api/timetracking/punch", methods=["POST"], endpoint="punch")
    def punch():
        data = _json_object()
        employee_id = require_non_empty(pick(data, "employee_id", "employeeId", "employee", default=""), "employee_id")
        event_type = parse_event_type(pick(data, "type", "event_type", "eventType"))

        event: PunchEvent = tracking.record_punch(employee_id, event_type, notes=pick(data, "notes", "note"))
        return jsonify(
            {
                "success": True,
                "entry": event_to_dict(event),
                "status": status_to_dict(tracking.get_status(employee_id)),
            }
        ), 201

    @app.route("/api/timetracking/status/<employee_id>", methods=["GET"], endpoint="work_status")
    def work_status(employee_id: str):
        return jsonify(status_to_dict(tracking.get_status(employee_id)))

    @app.route("/api/timetracking/session/<employee_id>", methods=["GET"], endpoint="current_session")
    def current_session(employee_id: str):
        s = tracking.get_current_session(employee_id)
        return jsonify(session_to_dict(s) if s else None)

    @app.route("/api/timetracking/sessions", methods=["GET"], endpoint="work_sessions")
    def work_sessions():
        start, end = _date_range()
        sessions = reports.list_sessions(start, end, employee_id=request.args.get("employee_id") or None)
        return jsonify([session_to_dict(s) for s in sessions])

    @app.route("/api/timetracking/weekly/<employee_id>", methods=["GET"], endpoint="weekly_hours")
    def weekly_hours(employee_id: str):
        as_of_s = request.args.get("as_of")
        as_of = _parse_date(as_of_s) if as_of_s else None
        return jsonify(weekly_to_dict(reports.weekly_summary(employee_id, as_of=as_of)))

    @app.route("/api/reports/overview", methods=["GET"], endpoint="reports_overview")
    def reports_overview():
        start, end = _date_range()
        overview = reports.overview(start, end, employee_id=request.args.get("employee_id") or None)
        return jsonify(overview_to_dict(overview))

    @app.route("/api/reports/export.csv", methods=["GET"], endpoint="reports_export_csv")
    def reports_export_csv():
        start, end = _date_range()
        text = reports.export_csv(start, end, employee_id=request.args.get("employee_id") or None)

        filename = f"attendance_report_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/business-hours", methods=["GET"], endpoint="business_hours")
    def business_hours():
        return jsonify(business_hours_to_dict(tracking.get_business_hours()))

    @app.route("/api/business-hours", methods=["PUT"], endpoint="update_business_hours")
    def update_business_hours():
        data = _json_object()
        hours = tracking.update_business_hours(data)
        return jsonify(business_hours_to_dict(hours))
