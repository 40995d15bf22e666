from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..attendance.badges import make_badge_png
from ..common.http import api_errors, flag, json_error
from ..container import Container
from .model import CourseForm


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    @app.route("/api/courses", methods=["GET"], endpoint="list_courses")
    @api_errors
    def list_courses():
        owner_id = request.args.get("owner", "")
        courses = roster.get_courses(owner_id)
        return jsonify({"success": True, "courses": [c.to_dict() for c in courses]})

    @app.route("/api/courses", methods=["POST"], endpoint="add_course")
    @api_errors
    def add_course():
        form = CourseForm.from_mapping(request.get_json(silent=True) or {})
        course_id = roster.submit_course_form(form)
        return jsonify({"success": True, "id": course_id, "message": "Course created"}), 201

    @app.route("/api/courses/<course_id>", methods=["PUT"], endpoint="edit_course")
    @api_errors
    def edit_course(course_id: str):
        form = CourseForm.from_mapping(request.get_json(silent=True) or {})
        roster.edit_course(form.name, form.section, course_id)
        return jsonify({"success": True, "message": "Course updated"})

    @app.route("/api/courses/<course_id>", methods=["DELETE"], endpoint="delete_course")
    @api_errors
    def delete_course(course_id: str):
        roster.delete_course(course_id, cascade=flag(request.args.get("cascade")))
        return jsonify({"success": True, "message": "Course deleted"})

    @app.route("/api/courses/<course_id>/students", methods=["GET"], endpoint="list_students")
    @api_errors
    def list_students(course_id: str):
        students = roster.get_students(course_id)
        return jsonify({"success": True, "students": [s.to_dict() for s in students]})

    @app.route("/api/courses/<course_id>/students", methods=["POST"], endpoint="add_student")
    @api_errors
    def add_student(course_id: str):
        student_id = roster.add_student(course_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "id": student_id, "message": "Student added"}), 201

    @app.route("/api/courses/<course_id>/students/<student_id>", methods=["PUT"], endpoint="edit_student")
    @api_errors
    def edit_student(course_id: str, student_id: str):
        roster.edit_student(course_id, student_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "message": "Student updated"})

    @app.route("/api/courses/<course_id>/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @api_errors
    def delete_student(course_id: str, student_id: str):
        roster.delete_student(course_id, student_id)
        return jsonify({"success": True, "message": "Student deleted"})

    @app.route("/api/courses/<course_id>/students/<student_id>/badge.png", endpoint="student_badge")
    @api_errors
    def student_badge(course_id: str, student_id: str):
        if roster.get_student(course_id, student_id) is None:
            return json_error("Student not found", 404)
        png = make_badge_png(course_id, student_id)
        return send_file(io.BytesIO(png), mimetype="image/png")
