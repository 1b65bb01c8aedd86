"""CLI commands for the Product aggregate."""

from __future__ import annotations

import math

import click

from catalog.application.activate_product import ActivateProductHandler
from catalog.application.add_attribute_to_product import AddAttributeToProductHandler
from catalog.application.add_category_to_product import AddCategoryToProductHandler
from catalog.application.archive_product import ArchiveProductHandler
from catalog.application.create_product import CreateProductHandler
from catalog.application.dto import AttributeSpec, ProductDTO
from catalog.application.event_publisher import EventPublishError
from catalog.application.remove_category_from_product import (
    RemoveCategoryFromProductHandler,
)
from catalog.application.remove_product_attribute import RemoveProductAttributeHandler
from catalog.application.show_product import ListProductsHandler, ShowProductHandler
from catalog.application.update_product_attribute import UpdateProductAttributeHandler
from catalog.application.update_product_description import (
    UpdateProductDescriptionHandler,
)
from catalog.domain.exceptions import DomainException
from catalog.domain.model.value_objects import AttributeValue
from catalog.infrastructure.bootstrap import (
    category_repository,
    event_publisher,
    product_repository,
)

_HANDLED = (DomainException, EventPublishError)


def parse_value(raw: str) -> AttributeValue:
    """Coerce 'true'/'false' to bool and numeric literals to numbers."""
    lowered = raw.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        number = float(raw)
    except ValueError:
        return raw
    # "nan" and "inf" stay strings
    return number if math.isfinite(number) else raw


def _parse_attributes(raw: tuple[str, ...]) -> list[AttributeSpec]:
    """Parse ('color=blue', 'weight=1.5') into AttributeSpec list."""
    specs: list[AttributeSpec] = []
    for pair in raw:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid attribute format '{pair}'. Expected 'key=value'."
            )
        key, value = pair.split("=", 1)
        specs.append(AttributeSpec(key=key.strip(), value=parse_value(value)))
    return specs


def _display_product(dto: ProductDTO) -> None:
    """Shared formatting for displaying a product."""
    click.echo(f"Product {dto.id}  (status={dto.status})")
    click.echo(f"Name:        {dto.name}")
    click.echo(f"Description: {dto.description or '-'}")
    click.echo(f"Categories:  {', '.join(dto.category_names) or '-'}")
    click.echo(f"Updated:     {dto.updated_at}")
    click.echo()
    if dto.attributes:
        for attr in dto.attributes:
            click.echo(f"  {attr}")
    else:
        click.echo("  (no attributes)")


@click.command("create")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default=None, help="Free-text description.")
@click.option("--category-id", "category_ids", multiple=True, help="Category ID (repeatable).")
@click.option("--attribute", "attributes", multiple=True, help="Attribute as 'key=value' (repeatable).")
def product_create(
    name: str,
    description: str | None,
    category_ids: tuple[str, ...],
    attributes: tuple[str, ...],
) -> None:
    """Create a new DRAFT product."""
    specs = _parse_attributes(attributes)

    handler = CreateProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
        publisher=event_publisher(),
    )

    try:
        product = handler.handle(
            name=name,
            description=description,
            category_ids=list(category_ids),
            attributes=specs,
        )
    except _HANDLED as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' created  (status={product.status.value})")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show details of a product."""
    handler = ShowProductHandler(product_repository(), category_repository())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(product_repository(), category_repository()).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<24} {'Status':<9}")
    click.echo("-" * 73)
    for p in products:
        click.echo(f"{p.id:<38} {p.name:<24} {p.status:<9}")


@click.command("activate")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_activate(product_id: str) -> None:
    """Activate a DRAFT product."""
    handler = ActivateProductHandler(product_repository(), event_publisher())

    try:
        handler.handle(product_id)
    except _HANDLED as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} activated.")


@click.command("archive")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_archive(product_id: str) -> None:
    """Archive a product (idempotent)."""
    handler = ArchiveProductHandler(product_repository(), event_publisher())

    try:
        handler.handle(product_id)
    except _HANDLED as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} archived.")


@click.command("add-category")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--category-id", required=True, help="Category ID to attach.")
def product_add_category(product_id: str, category_id: str) -> None:
    """Attach a category to a product."""
    handler = AddCategoryToProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
        publisher=event_publisher(),
    )

    try:
        handler.handle(product_id, category_id)
    except _HANDLED as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category {category_id} added to product {product_id}.")


@click.command("remove-category")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--category-id", required=True, help="Category ID to detach.")
def product_remove_category(product_id: str, category_id: str) -> None:
    """Detach a category from a product."""
    handler = RemoveCategoryFromProductHandler(product_repository(), event_publisher())

    try:
        handler.handle(product_id, category_id)
    except _HANDLED as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category {category_id} removed from product {product_id}.")


@click.command("add-attribute")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--key", required=True, help="Attribute key (case-sensitive).")
@click.option("--value", required=True, help="Attribute value.")
def product_add_attribute(product_id: str, key: str, value: str) -> None:
    """Add an attribute to a product."""
    handler = AddAttributeToProductHandler(product_repository(), event_publisher())

    try:
        handler.handle(product_id, key, parse_value(value))
    except _HANDLED as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Attribute '{key}' added to product {product_id}.")


@click.command("update-attribute")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--key", required=True, help="Attribute key (case-sensitive).")
@click.option("--value", required=True, help="New attribute value.")
def product_update_attribute(product_id: str, key: str, value: str) -> None:
    """Replace the value of an existing attribute."""
    handler = UpdateProductAttributeHandler(product_repository(), event_publisher())

    try:
        handler.handle(product_id, key, parse_value(value))
    except _HANDLED as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Attribute '{key}' of product {product_id} updated.")


@click.command("remove-attribute")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--key", required=True, help="Attribute key (case-sensitive).")
def product_remove_attribute(product_id: str, key: str) -> None:
    """Remove an attribute from a product."""
    handler = RemoveProductAttributeHandler(product_repository(), event_publisher())

    try:
        handler.handle(product_id, key)
    except _HANDLED as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Attribute '{key}' removed from product {product_id}.")


@click.command("describe")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--description", required=True, help="New description.")
def product_describe(product_id: str, description: str) -> None:
    """Replace a product's description (allowed in any status)."""
    handler = UpdateProductDescriptionHandler(product_repository(), event_publisher())

    try:
        handler.handle(product_id, description)
    except _HANDLED as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Description of product {product_id} updated.")
