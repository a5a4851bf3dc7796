"""
Issues Command - Report barrel file issues in a module.
"""

import sys
from pathlib import Path
from typing import List

import click
from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from ...analysis.issues import BarrelIssue, ExportAllIssue, find_barrel_issues
from ...core.errors import BarrelError
from ..utils import echo_error, echo_success

console = Console()


# --- API Models ---
class IssuesResponse(BaseModel):
    file: str
    count: int
    issues: List[BarrelIssue] = Field(default_factory=list)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def issues(file: str, as_json: bool) -> None:
    """
    List `export *` statements and re-exports that go through other barrel files.
    """
    try:
        found = find_barrel_issues(Path(file).absolute())
    except BarrelError as e:
        echo_error(e.message)
        sys.exit(1)

    if as_json:
        response = IssuesResponse(file=file, count=len(found), issues=found)
        click.echo(response.model_dump_json(indent=2))
        return

    if not found:
        echo_success(f"No barrel file issues in {file}")
        return

    table = Table(title=f"Barrel file issues in {file}")
    table.add_column("Issue", style="yellow")
    table.add_column("Export")
    table.add_column("Barrel file", style="cyan")
    for issue in found:
        if isinstance(issue, ExportAllIssue):
            table.add_row("export *", "*", issue.barrel_file_path)
        else:
            table.add_row("barrel reference", issue.exported_name, issue.barrel_file_path)
    console.print(table)
