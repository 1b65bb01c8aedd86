"""CLI commands for the audit trail."""

from __future__ import annotations

import json

import click

from catalog.application.audit_log_consumer import AuditLogConsumer
from catalog.application.show_audit_log import AuditSummaryHandler, ShowAuditLogHandler
from catalog.domain.model.audit_record import AuditRecord, EntityType
from catalog.infrastructure.bootstrap import audit_log_repository, message_bus


def _display_records(records: list[AuditRecord], payload: bool) -> None:
    if not records:
        click.echo("No audit records found.")
        return

    for r in records:
        click.echo(
            f"{r.created_at:%Y-%m-%d %H:%M:%S}  {r.entity_type.value:<9} "
            f"{r.entity_id:<38} {r.event_type}"
        )
        if payload:
            click.echo(f"    {json.dumps(r.payload, sort_keys=True)}")


@click.command("consume")
def audit_consume() -> None:
    """Run the audit consumer until interrupted (Ctrl-C)."""
    consumer = AuditLogConsumer(audit_repo=audit_log_repository(), bus=message_bus())

    click.echo("Audit consumer started. Press Ctrl-C to stop.")
    try:
        consumer.start()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        raise click.ClickException(f"Audit consumer failed: {exc}")
    finally:
        consumer.stop()
    click.echo("Audit consumer stopped.")


@click.command("list")
@click.option(
    "--entity-type",
    type=click.Choice([e.value for e in EntityType]),
    default=None,
    help="Only records for this entity type.",
)
@click.option("--entity-id", default=None, help="Only records for this entity.")
@click.option("--event-type", default=None, help="Only records of this event type.")
@click.option("--limit", type=int, default=None, help="Maximum number of records.")
@click.option("--payload", is_flag=True, default=False, help="Also print each payload.")
def audit_list(
    entity_type: str | None,
    entity_id: str | None,
    event_type: str | None,
    limit: int | None,
    payload: bool,
) -> None:
    """List audit records, newest first."""
    records = ShowAuditLogHandler(audit_log_repository()).handle(
        entity_type=EntityType(entity_type) if entity_type else None,
        entity_id=entity_id,
        event_type=event_type,
        limit=limit,
    )
    _display_records(records, payload)


@click.command("entity")
@click.option(
    "--type",
    "entity_type",
    type=click.Choice([e.value for e in EntityType]),
    required=True,
    help="Entity type.",
)
@click.option("--id", "entity_id", required=True, help="Entity ID.")
@click.option("--limit", type=int, default=None, help="Maximum number of records (default 50).")
@click.option("--payload", is_flag=True, default=False, help="Also print each payload.")
def audit_entity(entity_type: str, entity_id: str, limit: int | None, payload: bool) -> None:
    """Show the audit history of one category or product."""
    records = ShowAuditLogHandler(audit_log_repository()).for_entity(
        EntityType(entity_type), entity_id, limit=limit
    )
    _display_records(records, payload)


@click.command("events")
@click.option("--type", "event_type", required=True, help="Event type, e.g. PRODUCT_CREATED.")
@click.option("--limit", type=int, default=None, help="Maximum number of records (default 50).")
@click.option("--payload", is_flag=True, default=False, help="Also print each payload.")
def audit_events(event_type: str, limit: int | None, payload: bool) -> None:
    """Show the most recent audit records of one event type."""
    records = ShowAuditLogHandler(audit_log_repository()).for_event_type(event_type, limit=limit)
    _display_records(records, payload)


@click.command("summary")
def audit_summary() -> None:
    """Count audit records by entity and event type."""
    summary = AuditSummaryHandler(audit_log_repository()).handle()

    click.echo(f"Total: {summary.total}")
    for row in summary.by_type:
        click.echo(f"  {row.entity_type:<9} {row.event_type:<32} {row.count:>6}")
