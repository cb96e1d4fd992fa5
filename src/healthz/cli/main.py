"""CLI entry point for healthz.

Invoked as::

    healthz [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m healthz.cli.main
"""
from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

console = Console()
error_console = Console(stderr=True, style="bold red")


def _load_config(config: str | None):  # noqa: ANN202
    from healthz.config.loader import ConfigLoader

    try:
        return ConfigLoader().load(path=config)
    except Exception as exc:  # noqa: BLE001
        error_console.print(f"Could not load config: {exc}")
        raise SystemExit(1) from exc


def _load_healthz(target: str):  # noqa: ANN202
    """Import ``module:attribute`` and return the ``Healthz`` it names.

    The attribute may be a ``Healthz`` instance or a zero-argument factory
    returning one.
    """
    from healthz.health.registry import Healthz

    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise click.BadParameter(
            f"expected MODULE:ATTRIBUTE, got {target!r}", param_hint="--app"
        )
    if "" not in sys.path:
        sys.path.insert(0, "")
    try:
        obj = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as exc:
        raise click.BadParameter(f"cannot load {target!r}: {exc}", param_hint="--app") from exc

    if not isinstance(obj, Healthz) and callable(obj):
        obj = obj()
    if not isinstance(obj, Healthz):
        raise click.BadParameter(
            f"{target!r} is not a Healthz registry", param_hint="--app"
        )
    return obj


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="healthz-registry")
def cli() -> None:
    """Runtime health-aggregation registry."""


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from healthz import __version__

    console.print(f"[bold]healthz[/bold] v{__version__}")
    console.print(f"Python {sys.version}")


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


@cli.command(name="init")
@click.option(
    "--directory",
    "-d",
    default=".",
    show_default=True,
    help="Directory in which to create the config file.",
)
def init_command(directory: str) -> None:
    """Initialise a healthz config file in DIRECTORY."""
    target_dir = Path(directory).resolve()
    config_path = target_dir / "healthz.yaml"

    if config_path.exists():
        console.print(f"[yellow]Config already exists at {config_path}. Skipping.[/yellow]")
        return

    default_yaml = """\
# healthz configuration
version: "0.1.0"
release: ""
description: ""
service_file: .healthz-service-id
notes_count: 10
"""
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        config_path.write_text(default_yaml, encoding="utf-8")
        console.print(f"[green]Created healthz config at {config_path}[/green]")
    except OSError as exc:
        error_console.print(f"Failed to create config: {exc}")
        raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


@cli.command(name="config")
@click.option("--show", is_flag=True, help="Show the current configuration.")
@click.option("--validate", is_flag=True, help="Validate the config file.")
@click.option("--config", "-c", default=None, help="Path to healthz config file.")
def config_command(show: bool, validate: bool, config: str | None) -> None:
    """Show or validate the healthz configuration."""
    cfg = _load_config(config)

    if show or not validate:
        console.print_json(cfg.model_dump_json(indent=2))

    if validate:
        from healthz.config.schema import validate_config

        try:
            validate_config(cfg.model_dump())
            console.print("[green]Configuration is valid.[/green]")
        except Exception as exc:  # noqa: BLE001
            error_console.print(f"Validation failed: {exc}")
            raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# identity
# ---------------------------------------------------------------------------


@cli.command(name="identity")
@click.option(
    "--file",
    "-f",
    "service_file",
    default=None,
    help="Identity file; defaults to service_file from the config.",
)
@click.option("--config", "-c", default=None, help="Path to healthz config file.")
def identity_command(service_file: str | None, config: str | None) -> None:
    """Print the persistent service-id, creating it if needed."""
    from healthz.identity.provider import FileIdentityProvider
    from healthz.schema.errors import IdentityError

    path = Path(service_file) if service_file else _load_config(config).service_file
    try:
        service_id = FileIdentityProvider(path).ensure_identity()
    except IdentityError as exc:
        error_console.print(str(exc))
        raise SystemExit(1) from exc
    console.print(service_id)


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------


@cli.command(name="report")
@click.option("--app", "target", required=True, metavar="MODULE:ATTR", help="Healthz registry to run.")
@click.option(
    "--format",
    "output_format",
    default="table",
    type=click.Choice(["table", "json"]),
    show_default=True,
    help="Output format.",
)
def report_command(target: str, output_format: str) -> None:
    """Run one aggregation pass and print the report."""
    from healthz.health.status import Status

    report = _load_healthz(target).run_checks()

    if output_format == "json":
        console.print_json(json.dumps(report.to_dict()))
    else:
        status_colour = {
            Status.PASS.value: "green",
            Status.WARNING.value: "yellow",
            Status.FAIL.value: "red",
        }
        colour = status_colour[report.status.value]
        console.print(f"Overall status: [{colour}]{report.status.value.upper()}[/{colour}]")
        for key, value in sorted(report.metadata.items()):
            console.print(f"[dim]{key}[/dim] {value}")

        table = Table(header_style="bold cyan")
        table.add_column("Check")
        table.add_column("Type")
        table.add_column("Status")
        table.add_column("Checked at")
        for name, component in report.details.items():
            c = status_colour.get(component.status, "white")
            checked = component.last_checked_at.isoformat() if component.last_checked_at else "-"
            table.add_row(name, component.type, f"[{c}]{component.status}[/{c}]", checked)
        console.print(table)

        for note in report.notes:
            console.print(f"  [dim]-[/dim] {note}")

    if not report.is_healthy():
        raise SystemExit(1)


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


@cli.command(name="serve")
@click.option("--app", "target", required=True, metavar="MODULE:ATTR", help="Healthz registry to serve.")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8080, show_default=True, type=int)
@click.option("--path", "route", default="/healthz", show_default=True, help="Endpoint path.")
def serve_command(target: str, host: str, port: int, route: str) -> None:
    """Serve the health endpoint over HTTP."""
    import uvicorn

    from healthz.handler.routes import create_app

    app = create_app(_load_healthz(target), path=route)
    console.print(f"Serving [bold]{route}[/bold] on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    cli()
