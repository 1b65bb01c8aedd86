import click

from catalog.infrastructure.cli.audit_commands import (
    audit_consume,
    audit_entity,
    audit_events,
    audit_list,
    audit_summary,
)
from catalog.infrastructure.cli.category_commands import (
    category_create,
    category_list,
    category_show,
    category_update,
)
from catalog.infrastructure.cli.product_commands import (
    product_activate,
    product_add_attribute,
    product_add_category,
    product_archive,
    product_create,
    product_describe,
    product_list,
    product_remove_attribute,
    product_remove_category,
    product_show,
    product_update_attribute,
)
from catalog.infrastructure.log_config import setup_logging


@click.group()
def cli() -> None:
    """Catalog -- product catalog with an audited event trail"""
    setup_logging()


@cli.group()
def category() -> None:
    """Manage categories."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def audit() -> None:
    """Consume and inspect the audit trail."""


# Register subcommands
category.add_command(category_create)
category.add_command(category_list)
category.add_command(category_show)
category.add_command(category_update)
product.add_command(product_activate)
product.add_command(product_add_attribute)
product.add_command(product_add_category)
product.add_command(product_archive)
product.add_command(product_create)
product.add_command(product_describe)
product.add_command(product_list)
product.add_command(product_remove_attribute)
product.add_command(product_remove_category)
product.add_command(product_show)
product.add_command(product_update_attribute)
audit.add_command(audit_consume)
audit.add_command(audit_entity)
audit.add_command(audit_events)
audit.add_command(audit_list)
audit.add_command(audit_summary)
