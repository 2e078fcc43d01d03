from __future__ import annotations

import io
from datetime import date

from openpyxl import load_workbook

from src.student_attendance.student_attendance.attendance.model import AttendanceMark
from src.student_attendance.student_attendance.core.exceptions import StoreError


def test_dashboard_money_and_counts(client, add_batch, add_student):
    add_batch(batch_id="b1")
    add_student("Amy Adams", batch_id="b1", total_fees="1000", fees_paid="400")
    add_student("Bob Brown", total_fees="500", fees_paid="500")

    for path in ("/", "/api/dashboard"):
        res = client.get(path)
        assert res.status_code == 200
        body = res.get_json()
        assert body["success"] is True
        assert body["system_name"] == "LINKCODE ATTENDANCE MANAGEMENT SYSTEM"
        stats = body["stats"]
        assert stats["total_students"] == 2
        assert stats["total_batches"] == 1
        assert stats["total_fees"] == "1500.00"
        assert stats["total_fees_paid"] == "900.00"
        assert stats["total_fees_due"] == "600.00"


def test_health(client):
    res = client.get("/api/health")
    body = res.get_json()
    assert res.status_code == 200
    assert body["backend"] == "memory"
    assert body["batches"] == 0


def test_health_reports_store_error(client, container, monkeypatch):
    def boom():
        raise StoreError("connection refused")

    monkeypatch.setattr(container.batches_repo, "count", boom)
    res = client.get("/api/health")
    assert res.status_code == 503
    assert res.get_json()["success"] is False


def test_student_crud_roundtrip(client, add_batch):
    add_batch(name="Morning Batch A", batch_id="b1")
    payload = {
        "name": "John Doe",
        "email": "john@example.com",
        "mobile": "9876543210",
        "batch_id": "b1",
        "total_fees": "1200",
        "fees_paid": "200",
    }

    res = client.post("/api/students", json=payload)
    assert res.status_code == 201
    student = res.get_json()["student"]
    assert student["fees_due"] == "1000.00"
    assert student["fee_status"] == "Pending"

    listed = client.get("/api/students").get_json()["students"]
    assert [(s["name"], s["batch_name"]) for s in listed] == [("John Doe", "Morning Batch A")]

    payload.update(fees_paid="1200", batch_id="")
    res = client.put(f"/api/students/{student['id']}", json=payload)
    assert res.status_code == 200
    updated = res.get_json()["student"]
    assert updated["fee_status"] == "Paid"
    assert updated["batch_id"] is None

    listed = client.get("/api/students").get_json()["students"]
    assert listed[0]["batch_name"] == "No Batch"

    assert client.delete(f"/api/students/{student['id']}").status_code == 200
    assert client.get(f"/api/students/{student['id']}").status_code == 404


def test_student_validation_errors(client):
    res = client.post("/api/students", json={"name": "", "email": "x@example.com", "mobile": "1"})
    assert res.status_code == 400
    assert res.get_json() == {"success": False, "message": "Name is required"}

    res = client.post("/api/students", data="not json", content_type="text/plain")
    assert res.status_code == 400

    res = client.post(
        "/api/students",
        json={"name": "A", "email": "a@example.com", "mobile": "1", "fees_due": "0"},
    )
    assert res.status_code == 400

    res = client.post(
        "/api/students",
        json={"name": "A", "email": "a@example.com", "mobile": "1", "batch_id": "nope"},
    )
    assert res.status_code == 400
    assert res.get_json() == {"success": False, "message": "Batch not found"}


def test_batch_endpoints(client, add_student):
    res = client.post("/api/batches", json={"name": "Tiny", "capacity": 1, "schedule": "", "instructor": ""})
    assert res.status_code == 201
    batch_id = res.get_json()["batch"]["id"]
    add_student("Amy Adams", batch_id=batch_id)

    body = client.get("/api/batches").get_json()
    assert body["total_batches"] == 1
    assert body["total_capacity"] == 1
    row = body["batches"][0]
    assert row["current_students"] == 1
    assert row["capacity_status"] == "Critical"
    assert row["is_full"] is True

    res = client.put(f"/api/batches/{batch_id}", json={"name": "Bigger", "capacity": 10})
    assert res.get_json()["batch"]["name"] == "Bigger"

    res = client.delete(f"/api/batches/{batch_id}")
    assert res.get_json()["unassigned_students"] == 1
    assert client.delete(f"/api/batches/{batch_id}").status_code == 404


def test_batch_capacity_must_be_positive(client):
    res = client.post("/api/batches", json={"name": "Nope", "capacity": 0})
    assert res.status_code == 400


def test_attendance_sheet_save_and_reload(client, add_batch, add_student):
    add_batch(batch_id="b1")
    amy = add_student("Amy Adams", batch_id="b1")
    bob = add_student("Bob Brown", batch_id="b1")

    res = client.get("/api/attendance?batch_id=b1&date=2024-03-05")
    sheet = res.get_json()["sheet"]
    assert [s["present"] for s in sheet["students"]] == [False, False]
    assert sheet["summary"] == {"total": 2, "present": 0, "absent": 2}

    res = client.post(
        "/api/attendance",
        json={"batch_id": "b1", "date": "2024-03-05", "marks": {amy.student_id: True}},
    )
    assert res.status_code == 200
    assert res.get_json()["sheet"]["summary"] == {"total": 2, "present": 1, "absent": 1}

    res = client.post("/api/attendance", json={"batch_id": "b1", "date": "2024-03-05", "mark_all": "present"})
    assert res.get_json()["sheet"]["summary"]["present"] == 2

    sheet = client.get("/api/attendance?batch_id=b1&date=2024-03-05").get_json()["sheet"]
    assert {s["id"]: s["present"] for s in sheet["students"]} == {amy.student_id: True, bob.student_id: True}


def test_attendance_rejects_bad_input(client, add_batch):
    add_batch(batch_id="b1")
    assert client.get("/api/attendance?batch_id=b1&date=05/03/2024").status_code == 400
    assert client.post("/api/attendance", json={"date": "2024-03-05", "marks": {}}).status_code == 400
    res = client.post("/api/attendance", json={"batch_id": "b1", "date": "2024-03-05", "marks": {"x": "yes"}})
    assert res.status_code == 400


def test_attendance_without_batch_is_empty(client):
    sheet = client.get("/api/attendance?date=2024-03-05").get_json()["sheet"]
    assert sheet["students"] == []
    assert sheet["summary"]["total"] == 0


def test_monthly_report_and_download(client, store, add_batch, add_student):
    add_batch(name="Morning Batch A", batch_id="b1")
    amy = add_student("Amy Adams", batch_id="b1")
    store.upsert_attendance(
        [
            AttendanceMark(amy.student_id, date(2024, 3, 1), True),
            AttendanceMark(amy.student_id, date(2024, 3, 2), False),
            AttendanceMark(amy.student_id, date(2024, 3, 3), False),
        ]
    )

    report = client.get("/api/reports/monthly?batch_id=b1&month=2024-03").get_json()["report"]
    assert report["month_label"] == "March 2024"
    assert report["rows"][0]["attendance_percentage"] == 33.33
    assert report["rows"][0]["label"] == "Poor"
    assert report["summary"]["average_attendance"] == 33

    res = client.get("/api/reports/monthly.xlsx?batch_id=b1&month=2024-03")
    assert res.status_code == 200
    assert "LINKCODE_attendance_Morning_Batch_A_2024-03_" in res.headers["Content-Disposition"]
    ws = load_workbook(io.BytesIO(res.data)).active
    assert ws["A7"].value == "Amy Adams"
    assert ws["E7"].value == "33.33%"


def test_monthly_report_download_needs_data(client, add_batch):
    add_batch(batch_id="b1")
    res = client.get("/api/reports/monthly.xlsx?batch_id=b1&month=2024-03")
    assert res.status_code == 400
    assert res.get_json()["message"] == "Please select a batch and ensure there is data to export"
