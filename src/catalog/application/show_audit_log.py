"""Application service: audit trail queries.

Read-only views over the records written by the audit consumer.
"""

from __future__ import annotations

from collections import Counter

from catalog.application.dto import AuditSummary, AuditSummaryRow
from catalog.domain.model.audit_record import AuditRecord, EntityType
from catalog.domain.repository.audit_log_repository import AuditLogRepository

DEFAULT_LIMIT = 100
DEFAULT_SCOPED_LIMIT = 50


class ShowAuditLogHandler:

    def __init__(self, audit_repo: AuditLogRepository) -> None:
        self._audit_repo = audit_repo

    def handle(
        self,
        entity_type: EntityType | None = None,
        entity_id: str | None = None,
        event_type: str | None = None,
        limit: int | None = None,
    ) -> list[AuditRecord]:
        return self._audit_repo.find(
            entity_type=entity_type,
            entity_id=entity_id,
            event_type=event_type,
            limit=limit or DEFAULT_LIMIT,
        )

    def for_entity(
        self,
        entity_type: EntityType,
        entity_id: str,
        limit: int | None = None,
    ) -> list[AuditRecord]:
        return self._audit_repo.find(
            entity_type=entity_type,
            entity_id=entity_id,
            limit=limit or DEFAULT_SCOPED_LIMIT,
        )

    def for_event_type(self, event_type: str, limit: int | None = None) -> list[AuditRecord]:
        return self._audit_repo.find(
            event_type=event_type,
            limit=limit or DEFAULT_SCOPED_LIMIT,
        )


class AuditSummaryHandler:

    def __init__(self, audit_repo: AuditLogRepository) -> None:
        self._audit_repo = audit_repo

    def handle(self) -> AuditSummary:
        counts = Counter(
            (r.entity_type.value, r.event_type) for r in self._audit_repo.list_all()
        )
        rows = [
            AuditSummaryRow(entity_type=entity_type, event_type=event_type, count=count)
            for (entity_type, event_type), count in counts.most_common()
        ]
        return AuditSummary(total=sum(counts.values()), by_type=rows)
