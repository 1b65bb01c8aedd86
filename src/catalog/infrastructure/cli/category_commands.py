"""CLI commands for the Category aggregate."""

from __future__ import annotations

import click

from catalog.application.create_category import CreateCategoryHandler
from catalog.application.event_publisher import EventPublishError
from catalog.application.show_category import ListCategoriesHandler, ShowCategoryHandler
from catalog.application.update_category import UpdateCategoryHandler
from catalog.domain.exceptions import DomainException
from catalog.infrastructure.bootstrap import category_repository, event_publisher


@click.command("create")
@click.option("--name", required=True, help="Category name.")
@click.option("--parent-id", default=None, help="ID of the parent category.")
def category_create(name: str, parent_id: str | None) -> None:
    """Create a new category."""
    handler = CreateCategoryHandler(
        category_repo=category_repository(),
        publisher=event_publisher(),
    )

    try:
        category = handler.handle(name=name, parent_id=parent_id)
    except (DomainException, EventPublishError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category {category.id} '{category.name}' created")


@click.command("update")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--parent-id", default=None, help="New parent ID ('' makes it a root).")
def category_update(category_id: str, name: str | None, parent_id: str | None) -> None:
    """Rename and/or re-parent a category."""
    handler = UpdateCategoryHandler(
        category_repo=category_repository(),
        publisher=event_publisher(),
    )

    try:
        category = handler.handle(category_id, name=name, parent_id=parent_id)
    except (DomainException, EventPublishError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category {category.id} updated (name='{category.name}', parent={category.parent_id or '-'})")


@click.command("show")
@click.option("--id", "category_id", required=True, help="Category ID.")
def category_show(category_id: str) -> None:
    """Show a single category."""
    try:
        dto = ShowCategoryHandler(category_repository()).handle(category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category {dto.id}")
    click.echo(f"Name:    {dto.name}")
    click.echo(f"Parent:  {dto.parent_id or '-'}")
    click.echo(f"Updated: {dto.updated_at}")


@click.command("list")
def category_list() -> None:
    """List all categories."""
    categories = ListCategoriesHandler(category_repository()).handle()

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<38} {'Name':<24} {'Parent':<38}")
    click.echo("-" * 100)
    for c in categories:
        click.echo(f"{c.id:<38} {c.name:<24} {c.parent_id or '-':<38}")
