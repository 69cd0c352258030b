"""Todo commands: show, add, toggle, delete and the interactive board."""

from __future__ import annotations

from datetime import date
from typing import Annotated

import typer

from dayboard.cli.console import console, dim, error
from dayboard.cli.render import BoardView
from dayboard.cli.runtime import CliRuntime, get_runtime
from dayboard.todos import GroupMode, Tag


def register(app: typer.Typer) -> None:
    """Register the todo commands on the root app."""
    app.command("show")(show_cmd)
    app.command("add")(add_cmd)
    app.command("toggle")(toggle_cmd)
    app.command("delete")(delete_cmd)
    app.command("board")(board_cmd)


DateOption = Annotated[
    str | None,
    typer.Option("--date", "-d", help="Show one day (YYYY-MM-DD)"),
]
TagOption = Annotated[
    str | None,
    typer.Option("--tag", "-t", help="Show one category"),
]


def _print_board(runtime: CliRuntime) -> None:
    view = BoardView(runtime.config.display)
    console.print(view.board(runtime.manager))


def _apply_selection(runtime: CliRuntime, day: str | None, tag: str | None) -> None:
    if day is not None and tag is not None:
        error("--date and --tag cannot be combined")
        raise typer.Exit(1)
    try:
        if day is not None:
            runtime.manager.select(GroupMode.DATE, day)
        elif tag is not None:
            runtime.manager.select(GroupMode.TAG, tag)
    except ValueError as e:
        error(str(e))
        raise typer.Exit(1) from None


def _parse_form_tags(values: list[str] | None) -> list[Tag]:
    tags: list[Tag] = []
    for value in values or []:
        tag = Tag.parse(value)
        if tag is Tag.OTHER:
            raise ValueError(
                "'other' cannot be picked; todos without tags are listed under it"
            )
        if tag not in tags:
            tags.append(tag)
    return tags


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def show_cmd(
    ctx: typer.Context,
    day: DateOption = None,
    tag: TagOption = None,
) -> None:
    """Show the sidebar and the selected list (latest day by default)."""
    runtime = get_runtime(ctx)
    _apply_selection(runtime, day, tag)
    _print_board(runtime)


def add_cmd(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Todo text")],
    day: Annotated[
        str | None,
        typer.Option("--date", "-d", help="Day of the todo (default: today)"),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option(
            "--tag",
            "-t",
            help="Category (repeatable): clothing, food, housing, transport",
        ),
    ] = None,
) -> None:
    """Add a todo and show its day."""
    runtime = get_runtime(ctx)
    manager = runtime.manager
    try:
        parsed_tags = _parse_form_tags(tags)
        todo = manager.add(text, day or date.today().isoformat(), parsed_tags)
    except ValueError as e:
        error(str(e))
        raise typer.Exit(1) from None

    if todo is None:
        dim("Nothing to add")
        return
    _print_board(runtime)


def toggle_cmd(
    ctx: typer.Context,
    todo_id: Annotated[int, typer.Argument(help="Todo ID")],
) -> None:
    """Mark a todo done, or open again."""
    runtime = get_runtime(ctx)
    todo = runtime.manager.toggle_completed(todo_id)
    if todo is None:
        dim(f"No todo with id {todo_id}")
        return
    _print_board(runtime)


def delete_cmd(
    ctx: typer.Context,
    todo_id: Annotated[int, typer.Argument(help="Todo ID")],
) -> None:
    """Delete a todo permanently."""
    runtime = get_runtime(ctx)
    if not runtime.manager.delete(todo_id):
        dim(f"No todo with id {todo_id}")
        return
    _print_board(runtime)


def board_cmd(ctx: typer.Context) -> None:
    """Start an interactive board session."""
    from dayboard.cli.board import BoardSession

    runtime = get_runtime(ctx)
    session = BoardSession(
        runtime.manager,
        console,
        view=BoardView(runtime.config.display),
    )
    session.run()
