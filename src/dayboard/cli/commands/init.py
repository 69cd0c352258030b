"""Init and paths commands."""

from pathlib import Path
from typing import Annotated

import typer

from dayboard.cli.console import console, create_table, dim, error, success


def register(app: typer.Typer) -> None:
    """Register the init and paths commands."""

    @app.command()
    def init(
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to config file (default: ~/.dayboard/config.toml)",
            ),
        ] = None,
    ) -> None:
        """Initialize a new Dayboard configuration file with sensible defaults."""
        from dayboard.config import write_config_template
        from dayboard.config.paths import get_config_path

        config_path = path.expanduser() if path else get_config_path()

        try:
            written = write_config_template(config_path)
        except FileExistsError as e:
            error(str(e))
            console.print("Use --path to specify a different location")
            raise typer.Exit(1) from None

        success(f"Created config file at {written}")
        dim("Add a todo with: dayboard add \"Buy milk\" --tag food")

    @app.command()
    def paths() -> None:
        """Show where Dayboard keeps its files."""
        from dayboard.config.paths import get_all_paths

        table = create_table("Dayboard Paths", [("Name", "cyan"), ("Path", "")])
        for name, value in get_all_paths().items():
            table.add_row(name, str(value))
        console.print(table)
