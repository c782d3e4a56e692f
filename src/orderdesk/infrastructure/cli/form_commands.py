"""CLI commands for the form builder."""

from __future__ import annotations

import click

from orderdesk.domain.model.form_field import infer_field_type


@click.command("field-type")
@click.argument("label")
def form_field_type(label: str) -> None:
    """Show the input type inferred from a field LABEL."""
    click.echo(infer_field_type(label).value)
