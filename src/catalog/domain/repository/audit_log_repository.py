"""Abstract repository for the append-only audit trail."""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.audit_record import AuditRecord, EntityType


class AuditLogRepository(ABC):

    @abstractmethod
    def append(self, record: AuditRecord) -> None:
        """Write a new record. Records are never updated."""

    @abstractmethod
    def find(
        self,
        entity_type: EntityType | None = None,
        entity_id: str | None = None,
        event_type: str | None = None,
        limit: int = 100,
    ) -> list[AuditRecord]:
        """Return matching records, newest first, at most *limit* of them."""

    @abstractmethod
    def list_all(self) -> list[AuditRecord]:
        """Return every record in insertion order."""
