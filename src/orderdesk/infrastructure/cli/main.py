import click

from orderdesk.infrastructure.cli.catalog_commands import catalog_search, catalog_variants
from orderdesk.infrastructure.cli.form_commands import form_field_type
from orderdesk.infrastructure.cli.order_commands import (
    order_build,
    order_number,
    order_refund_quote,
)
from orderdesk.infrastructure.log_setup import configure_logging


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="ORDERDESK_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    help="Logging verbosity.",
)
def cli(log_level: str) -> None:
    """orderdesk: order entry for multi-tenant shops"""
    configure_logging(log_level.upper())


@cli.group()
def catalog() -> None:
    """Browse the product catalog."""


@cli.group()
def order() -> None:
    """Compose and submit orders."""


@cli.group()
def form() -> None:
    """Form builder helpers."""


# Register subcommands
catalog.add_command(catalog_search)
catalog.add_command(catalog_variants)
order.add_command(order_build)
order.add_command(order_number)
order.add_command(order_refund_quote)
form.add_command(form_field_type)
