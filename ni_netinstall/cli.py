"""
Command-line interface for netinstall-groups.

Loads a netinstall module configuration, waits for every groups source to
finish and prints the resulting catalog.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from PySide6.QtCore import QCoreApplication
from rich.console import Console
from rich.table import Table

from ni_common.logging import configure_logging
from ni_netinstall.config import NetInstallConfig
from ni_netinstall.groups import group_name
from ni_netinstall.settings import load_configuration_file

app = typer.Typer(help="Resolve netinstall package groups from a module configuration.")
console = Console()


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Render log records as JSON."
    ),
) -> None:
    """Global options shared by every command."""
    configure_logging(debug=debug, json=json_logs or None)


def _core_application() -> QCoreApplication:
    instance = QCoreApplication.instance()
    if instance is None:
        instance = QCoreApplication(sys.argv[:1])
    return instance


def run_load(
    config: NetInstallConfig,
    configuration: dict,
    application: QCoreApplication | None = None,
) -> None:
    """Apply ``configuration`` and spin the event loop until the attempt finishes."""
    if application is None:
        application = _core_application()
    config.groups_ready.connect(application.quit)
    try:
        config.set_configuration_map(configuration)
        if not config.is_finished:
            application.exec()
    finally:
        config.groups_ready.disconnect(application.quit)
        config.shutdown()


def render_groups_table(config: NetInstallConfig) -> Table:
    """Build a rich table listing the loaded groups."""
    table = Table(title=config.title_label or config.sidebar_label, show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Group", style="cyan")
    table.add_column("Description")
    table.add_column("Packages", justify="right", style="green")
    for index, group in enumerate(config.groups(), start=1):
        packages = group.get("packages") or []
        table.add_row(
            str(index),
            group_name(group) or "-",
            str(group.get("description") or ""),
            str(len(packages)) if isinstance(packages, list) else "?",
        )
    return table


@app.command("show")
def show(
    config_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Netinstall module configuration (YAML).",
    ),
    locale: Optional[str] = typer.Option(
        None, "--locale", "-l", help="Locale used for labels, e.g. 'de_DE'."
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the canonical group list as JSON."
    ),
) -> None:
    """Load the groups described by CONFIG_PATH and print them."""
    try:
        configuration = load_configuration_file(config_path)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Cannot read {config_path}: {exc}[/red]")
        raise typer.Exit(2)

    application = _core_application()
    netinstall = NetInstallConfig()
    netinstall.retranslate(locale)
    run_load(netinstall, configuration, application)

    if as_json:
        typer.echo(json.dumps(netinstall.groups(), indent=2, default=str))
    else:
        console.print(render_groups_table(netinstall))
        if netinstall.status_message:
            console.print(f"[yellow]{netinstall.status_message}[/yellow]")

    if not netinstall.is_ready:
        raise typer.Exit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
