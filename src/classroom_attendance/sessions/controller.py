from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, flag
from ..container import Container


def register(app: Flask, container: Container) -> None:
    sessions = container.session_service

    @app.route("/api/courses/<course_id>/sessions", methods=["GET"], endpoint="list_sessions")
    @api_errors
    def list_sessions(course_id: str):
        rows = sessions.get_sessions(course_id)
        return jsonify({"success": True, "sessions": [s.to_dict() for s in rows]})

    @app.route("/api/courses/<course_id>/sessions", methods=["POST"], endpoint="add_session")
    @api_errors
    def add_session(course_id: str):
        session_id = sessions.add_session(course_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "id": session_id, "message": "Session created"}), 201

    @app.route("/api/courses/<course_id>/sessions/<session_id>", methods=["PUT"], endpoint="edit_session")
    @api_errors
    def edit_session(course_id: str, session_id: str):
        sessions.edit_session(course_id, session_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "message": "Session updated"})

    @app.route("/api/courses/<course_id>/sessions/<session_id>", methods=["DELETE"], endpoint="delete_session")
    @api_errors
    def delete_session(course_id: str, session_id: str):
        sessions.delete_session(course_id, session_id, cascade=flag(request.args.get("cascade")))
        return jsonify({"success": True, "message": "Session deleted"})
