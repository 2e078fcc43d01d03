from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.student_attendance.student_attendance.batches.model import BatchFields
from src.student_attendance.student_attendance.container import build_container
from src.student_attendance.student_attendance.main import create_app
from src.student_attendance.student_attendance.memory.store import MemoryStore
from src.student_attendance.student_attendance.students.model import StudentFields


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 3, 15)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def container(store):
    return build_container(backend="memory", memory_store=store)


@pytest.fixture
def app(container):
    app = create_app("config.testing", container=container)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def add_batch(store):
    def _add(name="Morning Batch A", capacity=35, batch_id=None):
        return store.put_batch(
            BatchFields(
                name=name,
                capacity=capacity,
                schedule="9:00 AM - 12:00 PM",
                instructor="Prof. Smith",
                created_date=date(2024, 1, 1),
            ),
            batch_id=batch_id,
        )

    return _add


@pytest.fixture
def add_student(store):
    def _add(name, batch_id=None, total_fees="0", fees_paid="0", student_id=None):
        return store.put_student(
            StudentFields(
                name=name,
                email=f"{name.split()[0].lower()}@example.com",
                mobile="9876543210",
                parent_mobile="9876543211",
                address="123 Main St",
                batch_id=batch_id,
                enrollment_date=date(2024, 1, 15),
                total_fees=Decimal(total_fees),
                fees_paid=Decimal(fees_paid),
            ),
            student_id=student_id,
        )

    return _add
