"""
Unbarrel Command - Flatten a barrel file in place.
"""

import logging
import sys
from pathlib import Path

import click

from ...core.errors import BarrelError
from ...engine import UnbarrelEngine
from ..utils import echo_error, echo_info, echo_success, load_config

logger = logging.getLogger(__name__)


@click.command()
@click.argument("root_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Print the rewritten file instead of writing it")
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="Path to a YAML config file")
@click.option("--quote", "quote_style", type=click.Choice(["single", "double"]),
              help="Quote style of generated module specifiers")
def unbarrel(root_file: str, dry_run: bool, config_path: str | None, quote_style: str | None) -> None:
    """
    Rewrite ROOT_FILE so every export points at its defining module.
    """
    try:
        config = load_config(config_path, quote_style=quote_style)
    except BarrelError as e:
        echo_error(e.message)
        sys.exit(1)

    result = UnbarrelEngine(config).unbarrel(Path(root_file).absolute(), dry_run=dry_run)

    if result.is_err():
        echo_error(result.unwrap_err().message)
        sys.exit(1)

    report = result.unwrap()
    if dry_run:
        click.echo(report.output)
        return

    if report.written:
        echo_success(f"Unbarreled {root_file}")
        echo_info(f"{report.export_count} exports from {len(report.groups)} modules")
    else:
        echo_success(f"{root_file} is already flat")
