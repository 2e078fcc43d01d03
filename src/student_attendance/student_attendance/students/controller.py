from __future__ import annotations

from flask import Flask

from ..common.http import json_body, money, ok
from ..container import Container
from .model import Student


def student_to_json(s: Student) -> dict:
    return {
        "id": s.student_id,
        "name": s.name,
        "email": s.email,
        "mobile": s.mobile,
        "parent_mobile": s.parent_mobile,
        "address": s.address,
        "batch_id": s.batch_id,
        "enrollment_date": s.enrollment_date.isoformat(),
        "total_fees": money(s.total_fees),
        "fees_paid": money(s.fees_paid),
        "fees_due": money(s.fees_due),
        "fee_status": s.fee_status.value,
    }


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    def list_students():
        batch_names = {b.batch_id: b.name for b in container.batch_service.list_batches()}
        students = []
        for s in service.list_students():
            row = student_to_json(s)
            if not s.batch_id:
                row["batch_name"] = "No Batch"
            else:
                row["batch_name"] = batch_names.get(s.batch_id, "Unknown Batch")
            students.append(row)
        return ok({"students": students})

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    def add_student():
        student = service.create(json_body())
        return ok({"message": "Student added successfully!", "student": student_to_json(student)}, 201)

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="get_student")
    def get_student(student_id: str):
        return ok({"student": student_to_json(service.get(student_id))})

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="update_student")
    def update_student(student_id: str):
        student = service.update(student_id, json_body())
        return ok({"message": "Student updated successfully!", "student": student_to_json(student)})

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    def delete_student(student_id: str):
        service.delete(student_id)
        return ok({"message": "Student deleted successfully!"})
