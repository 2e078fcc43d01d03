from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Batch, BatchFields, BatchWithCount


class BatchRepository(Protocol):
    def list_all(self) -> Sequence[Batch]:
        """All batches ordered by name."""

        raise NotImplementedError

    def list_with_counts(self) -> Sequence[BatchWithCount]:
        """Batches ordered by name with a store-computed student count."""

        raise NotImplementedError

    def get_by_id(self, batch_id: str) -> Optional[Batch]:
        raise NotImplementedError

    def insert(self, fields: BatchFields) -> Batch:
        raise NotImplementedError

    def update(self, batch_id: str, fields: BatchFields) -> Optional[Batch]:
        raise NotImplementedError

    def delete(self, batch_id: str) -> bool:
        """Delete the batch; its students stay, with batch_id set to NULL."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
