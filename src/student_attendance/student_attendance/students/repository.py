from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, StudentFields


class StudentRepository(Protocol):
    """Repository interface for Student.

    Note (DIP): the service layer depends on this interface, not on a concrete store.
    """

    def list_all(self) -> Sequence[Student]:
        """All students ordered by name."""

        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def insert(self, fields: StudentFields) -> Student:
        raise NotImplementedError

    def update(self, student_id: str, fields: StudentFields) -> Optional[Student]:
        """Full-field update. Returns None when the student does not exist."""

        raise NotImplementedError

    def delete(self, student_id: str) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def count_in_batch(self, batch_id: str) -> int:
        raise NotImplementedError
