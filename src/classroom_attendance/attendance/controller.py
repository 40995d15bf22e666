from __future__ import annotations

import json
import logging

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_error
from ..container import Container
from ..core.constants import STREAM_HEARTBEAT_SECONDS
from ..core.enums import RecordOutcome
from ..core.exceptions import SnapshotTimeout, StoreError
from .badges import decode_badge_image

logger = logging.getLogger(__name__)

_STATUS_BY_OUTCOME = {
    RecordOutcome.RECORDED: 200,
    RecordOutcome.NOT_STARTED: 409,
    RecordOutcome.GRACE_ELAPSED: 409,
    RecordOutcome.NO_MATCH: 404,
}


def register(app: Flask, container: Container) -> None:
    recorder = container.attendance_recorder
    queries = container.attendance_query_service

    def _result_response(result):
        body = {"success": result.recorded, **result.to_dict()}
        return jsonify(body), _STATUS_BY_OUTCOME[result.outcome]

    @app.route(
        "/api/courses/<course_id>/sessions/<session_id>/attendance/<student_id>",
        methods=["POST"],
        endpoint="record_attendance",
    )
    @api_errors
    def record_attendance(course_id: str, session_id: str, student_id: str):
        return _result_response(recorder.record_attendance(course_id, student_id, session_id))

    @app.route("/api/courses/<course_id>/sessions/<session_id>/scan", methods=["POST"], endpoint="scan_badge")
    @api_errors
    def scan_badge(course_id: str, session_id: str):
        """Accept a decoded badge code (JSON) or a photo of the badge (multipart)."""

        if "image" in request.files:
            badge = decode_badge_image(request.files["image"].stream)
            return _result_response(recorder.record_badge(course_id, session_id, badge))

        data = request.get_json(silent=True) or {}
        code = str(data.get("code") or "").strip()
        if not code:
            return json_error("Badge code is required", 400)
        return _result_response(recorder.record_scan(course_id, session_id, code))

    @app.route("/api/courses/<course_id>/sessions/<session_id>/attendance", methods=["GET"], endpoint="attendance_list")
    @api_errors
    def attendance_list(course_id: str, session_id: str):
        views = queries.get_attendance_snapshot(session_id, course_id)
        return jsonify({"success": True, "attendance": [v.to_dict() for v in views]})

    @app.route(
        "/api/courses/<course_id>/sessions/<session_id>/attendance/stream",
        endpoint="attendance_stream",
    )
    @api_errors
    def attendance_stream(course_id: str, session_id: str):
        heartbeat = app.config.get("STREAM_HEARTBEAT_SECONDS", STREAM_HEARTBEAT_SECONDS)
        subscription = queries.get_attendance_data(session_id, course_id)

        def generate():
            # Keepalives on idle surface a dropped client at the next write.
            try:
                while True:
                    try:
                        views = subscription.next_snapshot(timeout=heartbeat)
                    except SnapshotTimeout:
                        yield ": keepalive\n\n"
                        continue
                    except StoreError:
                        if not subscription.closed:
                            logger.exception("Attendance stream for session %s failed", session_id)
                        return
                    payload = json.dumps([v.to_dict() for v in views], default=str)
                    yield f"data: {payload}\n\n"
            finally:
                subscription.close()

        return app.response_class(generate(), mimetype="text/event-stream")

    @app.route("/api/attendance/<attendance_id>", methods=["PUT"], endpoint="edit_attendance")
    @api_errors
    def edit_attendance(attendance_id: str):
        data = request.get_json(silent=True) or {}
        record = recorder.mark_status(attendance_id, data.get("status"))
        return jsonify({"success": True, "id": record.attendance_id, "status": record.status.value})
