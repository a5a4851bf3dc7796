"""
barrel-file-utils CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .. import __version__
from .commands import issues, references, unbarrel


@click.group()
@click.version_option(version=__version__, package_name="barrel-file-utils")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """barrel-file-utils: Flatten JavaScript/TypeScript barrel files.

    \b
    Quick Start:
      barrel-file-utils unbarrel src/index.ts
      barrel-file-utils unbarrel src/index.ts --dry-run
      barrel-file-utils issues src/index.ts
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(unbarrel.unbarrel)
main.add_command(issues.issues)
main.add_command(references.references)

if __name__ == "__main__":
    main()
