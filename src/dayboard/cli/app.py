"""Main CLI application."""

from pathlib import Path
from typing import Annotated

import typer

from dayboard.cli.commands import config, init, todo
from dayboard.cli.runtime import CliRuntime

app = typer.Typer(
    name="dayboard",
    help="Dayboard - a personal task list grouped by day and by category",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug output to stderr",
        ),
    ] = False,
) -> None:
    """Dayboard - a personal task list grouped by day and by category."""
    ctx.obj = CliRuntime(config_path=config_path, verbose=verbose)


todo.register(app)
config.register(app)
init.register(app)


if __name__ == "__main__":
    app()
