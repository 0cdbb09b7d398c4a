"""
inlinejs CLI Package.

- bundles.py: build / inspect / resolve commands
- utils.py: Version and logging helpers
"""

import typer

from inlinejs.cli.bundles import build_command, inspect_command, resolve_command
from inlinejs.cli.utils import configure_logging, version_callback

app = typer.Typer(
    help="Extract inline component scripts into bundles and resolve them at run time.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose)


app.command(name="build")(build_command)
app.command(name="inspect")(inspect_command)
app.command(name="resolve")(resolve_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
