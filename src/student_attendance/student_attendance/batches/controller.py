from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container
from .model import Batch


def batch_to_json(b: Batch) -> dict:
    return {
        "id": b.batch_id,
        "name": b.name,
        "capacity": b.capacity,
        "schedule": b.schedule,
        "instructor": b.instructor,
        "created_date": b.created_date.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    service = container.batch_service

    @app.route("/api/batches", methods=["GET"], endpoint="list_batches")
    def list_batches():
        rows = []
        for r in service.list_with_counts():
            row = batch_to_json(r.batch)
            row.update(
                {
                    "current_students": r.batch.current_students,
                    "capacity_status": r.capacity_status.value,
                    "is_full": r.is_full,
                }
            )
            rows.append(row)
        totals = service.totals()
        return ok(
            {
                "batches": rows,
                "total_batches": totals.total_batches,
                "total_capacity": totals.total_capacity,
            }
        )

    @app.route("/api/batches", methods=["POST"], endpoint="add_batch")
    def add_batch():
        batch = service.create(json_body())
        return ok({"message": "Batch added successfully!", "batch": batch_to_json(batch)}, 201)

    @app.route("/api/batches/<batch_id>", methods=["PUT"], endpoint="update_batch")
    def update_batch(batch_id: str):
        batch = service.update(batch_id, json_body())
        return ok({"message": "Batch updated successfully!", "batch": batch_to_json(batch)})

    @app.route("/api/batches/<batch_id>", methods=["DELETE"], endpoint="delete_batch")
    def delete_batch(batch_id: str):
        unassigned = service.delete(batch_id)
        return ok(
            {
                "message": "Batch deleted. Its students are now unassigned.",
                "unassigned_students": unassigned,
            }
        )
