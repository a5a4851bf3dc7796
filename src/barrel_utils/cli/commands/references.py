"""
References Command - List barrel files re-exported by a module.
"""

import sys
from pathlib import Path
from typing import List

import click
from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from ...analysis.issues import BarrelReference, find_barrel_references
from ...core.errors import BarrelError
from ..utils import echo_error, echo_success

console = Console()


# --- API Models ---
class ReferencesResponse(BaseModel):
    file: str
    count: int
    references: List[BarrelReference] = Field(default_factory=list)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def references(file: str, as_json: bool) -> None:
    """List internal barrel files that FILE re-exports from."""
    try:
        found = find_barrel_references(Path(file).absolute())
    except BarrelError as e:
        echo_error(e.message)
        sys.exit(1)

    if as_json:
        response = ReferencesResponse(file=file, count=len(found), references=found)
        click.echo(response.model_dump_json(indent=2))
        return

    if not found:
        echo_success(f"{file} does not re-export from barrel files")
        return

    table = Table(title=f"Barrel files referenced by {file}")
    table.add_column("Barrel file", style="cyan")
    for reference in found:
        table.add_row(reference.barrel_file_path)
    console.print(table)
