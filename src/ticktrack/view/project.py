# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from ticktrack.model.project import Project


def projects_view(projects: list[Project]) -> None:
    projects_table = Table(box=box.SIMPLE)
    projects_table.add_column("id", no_wrap=True)
    projects_table.add_column("name")
    projects_table.add_column("client")
    projects_table.add_column("rate", justify="right")
    projects_table.add_column("archived")

    for project in projects:
        name = project["name"]
        if project["color"] is not None and project["color"] != "":
            name = f"[{project['color']}]{name}[/{project['color']}]"
        rate = (
            f"{project['rate']:.2f} {project['currency']}"
            if project["rate"] is not None
            else ""
        )
        projects_table.add_row(
            project["id"],
            name,
            project["client"] or "",
            rate,
            "yes" if project["archived"] else "",
        )

    console = Console()
    console.print(projects_table)


def single_project_view(project: Project) -> None:
    project_table = Table(box=box.SIMPLE)
    project_table.add_column("property")
    project_table.add_column("value")

    project_table.add_row("id", project["id"])
    project_table.add_row("name", project["name"])
    project_table.add_row("client", project["client"] or "")
    project_table.add_row(
        "rate", str(project["rate"]) if project["rate"] is not None else ""
    )
    project_table.add_row("currency", project["currency"])
    project_table.add_row("color", project["color"] or "")
    project_table.add_row("archived", "yes" if project["archived"] else "no")

    console = Console()
    console.print(project_table)
