# SPDX-License-Identifier: MIT

from pathlib import Path

from rich.console import Console
from rich.table import Table

from ticktrack.configuration import Configuration


def config_view(config: Configuration, data_path: Path) -> None:
    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("default_project", config["default_project"] or "None")
    table.add_row(
        "default_billable",
        "✓ Enabled" if config["default_billable"] else "✗ Disabled",
    )
    table.add_row("default_currency", config["default_currency"])
    table.add_row("week_start", config["week_start"])
    table.add_row("date_format", config["date_format"])
    table.add_row("data_path", str(data_path))

    console.print(table)
