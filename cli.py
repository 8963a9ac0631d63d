import json
import sys

import typer

from typer import Argument, Option

from core.exceptions import BlueprintError
from core.logging_config import setup_logging
from services.bootstrap import bootstrap
from services.form_renderer_service import FormRendererService
from services.migration_generator_service import MigrationGeneratorService
from services.schema_resolver import get_schema_resolver
from services.validation_service import validate_collection

app = typer.Typer(help="Inspect registered schemas and their derived forms, rules and columns")


@app.callback()
def main(log_level: str = Option("WARNING", "--log-level")):
    # stdout carries command output
    setup_logging(log_level=log_level, stream=sys.stderr)
    bootstrap()


def resolve_or_exit(key: str):
    try:
        return get_schema_resolver().resolve(key)
    except BlueprintError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


@app.command("list-schemas")
def list_schemas():
    for summary in get_schema_resolver().resolve_all():
        status = " (no collection)" if summary.degraded else ""
        typer.echo(f"{summary.key}\t{summary.name}\t{summary.field_count} fields{status}")


@app.command("show-schema")
def show_schema(key: str = Argument(...)):
    resolved = resolve_or_exit(key)
    typer.echo(json.dumps(resolved.model_dump(), indent=2))


@app.command("migration")
def migration(
    key: str = Argument(...),
    table: str = Option(None, "--table", help="Table name; defaults to the collection model's"),
):
    resolved = resolve_or_exit(key)
    try:
        typer.echo(MigrationGeneratorService().generate_create_table_sql(resolved, table))
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


@app.command("validate")
def validate(key: str = Argument(...), payload: str = Argument(..., help="JSON object of field values")):
    resolved = resolve_or_exit(key)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON payload: {e}", err=True)
        raise typer.Exit(code=2)

    errors = validate_collection(resolved, data)
    typer.echo(json.dumps(errors, indent=2))
    if errors:
        raise typer.Exit(code=1)


@app.command("render-form")
def render_form(
    key: str = Argument(...),
    mode: str = Option("create", "--mode"),
    record: str = Option(None, "--record", help="JSON record to pre-fill in edit mode"),
    record_id: int = Option(None, "--record-id"),
):
    data = json.loads(record) if record else None
    try:
        html = FormRendererService().render_form(mode, key, data=data, record_id=record_id)
    except (BlueprintError, ValueError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(str(html))


if __name__ == "__main__":
    app()
