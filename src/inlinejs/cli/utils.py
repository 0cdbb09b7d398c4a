"""
inlinejs CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import os
import platform
from pathlib import Path

import typer

from inlinejs._version import get_version

LOG_LEVEL_ENV_VAR = "INLINEJS_LOG_LEVEL"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        try:
            import inlinejs

            install_location = Path(inlinejs.__file__).parent
        except Exception:
            install_location = Path.cwd()

        typer.echo(f"inlinejs version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo(f"  Location:      {install_location}")
        raise typer.Exit()


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from --verbose or INLINEJS_LOG_LEVEL."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
