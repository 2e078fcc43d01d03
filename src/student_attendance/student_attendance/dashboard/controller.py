from __future__ import annotations

from flask import Flask

from ..common.http import money, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    @app.route("/", methods=["GET"], endpoint="dashboard")
    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    def dashboard():
        stats = service.stats()
        return ok(
            {
                "system_name": container.system_name,
                "stats": {
                    "total_students": stats.total_students,
                    "total_batches": stats.total_batches,
                    "today_attendance": stats.today_attendance,
                    "attendance_rate": stats.attendance_rate,
                    "total_fees": money(stats.total_fees),
                    "total_fees_paid": money(stats.total_fees_paid),
                    "total_fees_due": money(stats.total_fees_due),
                },
            }
        )

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        status = service.check_connection()
        return ok(
            {
                "message": "Connection successful!",
                "backend": status.backend,
                "target": status.target,
                "batches": status.batch_count,
            }
        )
