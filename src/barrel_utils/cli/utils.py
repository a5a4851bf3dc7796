"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing and config loading used across the commands.
"""

from pathlib import Path

import click

from ..config import DEFAULT_CONFIG_FILENAME, UnbarrelConfig


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True))


def load_config(config_path: str | None, **overrides) -> UnbarrelConfig:
    """
    Load settings from `config_path`, or from the default file in the
    working directory when none is given, then apply CLI overrides.
    """
    path = Path(config_path) if config_path else Path.cwd() / DEFAULT_CONFIG_FILENAME
    return UnbarrelConfig.load(path).with_overrides(**overrides)
