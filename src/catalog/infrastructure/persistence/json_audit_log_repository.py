"""JSON-file-backed implementation of AuditLogRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from catalog.domain.model.audit_record import AuditRecord, EntityType
from catalog.domain.repository.audit_log_repository import AuditLogRepository
from catalog.infrastructure.persistence.json_file_store import JsonFileStore


class JsonAuditLogRepository(AuditLogRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- AuditLogRepository interface -----------------------------------------

    def append(self, record: AuditRecord) -> None:
        rows = self._store.load()
        rows.append(self._to_raw(record))
        self._store.persist(rows)

    def find(
        self,
        entity_type: EntityType | None = None,
        entity_id: str | None = None,
        event_type: str | None = None,
        limit: int = 100,
    ) -> list[AuditRecord]:
        matches = [
            r
            for r in self.list_all()
            if (entity_type is None or r.entity_type == entity_type)
            and (entity_id is None or r.entity_id == entity_id)
            and (event_type is None or r.event_type == event_type)
        ]
        # Newest insertion first among equal timestamps
        matches.reverse()
        matches.sort(key=lambda r: r.created_at, reverse=True)
        return matches[:limit]

    def list_all(self) -> list[AuditRecord]:
        return [self._to_domain(raw) for raw in self._store.load()]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: AuditRecord) -> dict:
        return {
            "id": record.id,
            "entity_type": record.entity_type.value,
            "entity_id": record.entity_id,
            "event_type": record.event_type,
            "payload": record.payload,
            "created_at": record.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> AuditRecord:
        return AuditRecord(
            id=raw["id"],
            entity_type=EntityType(raw["entity_type"]),
            entity_id=raw["entity_id"],
            event_type=raw["event_type"],
            payload=raw["payload"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
