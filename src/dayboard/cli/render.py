"""Rich rendering of the board: sidebar, add form and the filtered list."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dayboard.config.models import DEFAULT_DATE_FORMAT, DisplayConfig
from dayboard.todos import GroupMode, Selection, Tag, Todo, TodoGroups, TodoManager
from dayboard.todos.types import parse_date

EMPTY_STATE = "No todos"
ACTIVE_STYLE = "bold white on blue"
CHIP_STYLE = "black on grey70"


def format_date(value: str | date, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Human label for a calendar date, e.g. ``Wednesday, May 1``."""
    day = parse_date(value)
    return fmt.format(
        weekday=day.strftime("%A"),
        month=day.strftime("%B"),
        day=day.day,
        year=day.year,
    )


def tag_chips(tags: Sequence[Tag]) -> Text:
    chips = Text()
    for i, tag in enumerate(tags):
        if i:
            chips.append(" ")
        chips.append(f" {tag.value} ", style=CHIP_STYLE)
    return chips


class BoardView:
    """Builds renderables for a manager snapshot."""

    def __init__(self, display: DisplayConfig | None = None) -> None:
        self.display = display or DisplayConfig()

    def format_date(self, value: str | date) -> str:
        return format_date(value, self.display.date_format)

    def sidebar(self, groups: TodoGroups, selection: Selection) -> Table:
        grid = Table.grid(padding=(0, 1))
        grid.add_column()
        grid.add_column(justify="right", style="dim")

        grid.add_row(Text("Tags", style="bold"), "")
        for tag in Tag:
            count = len(groups.by_tag[tag])
            style = ACTIVE_STYLE if selection.is_active(GroupMode.TAG, tag.value) else ""
            grid.add_row(Text(f"{tag.value} ({count})", style=style), "")

        grid.add_row("", "")
        grid.add_row(Text("Dates", style="bold"), "")
        for day in groups.dates:
            count = len(groups.by_date[day])
            style = ACTIVE_STYLE if selection.is_active(GroupMode.DATE, day) else ""
            grid.add_row(
                Text(f"{self.format_date(day)} ({count})", style=style),
                Text(day),
            )
        return grid

    def todo_list(self, todos: Sequence[Todo], selection: Selection) -> RenderableType:
        title = selection.title(self.format_date)
        if title is None or not todos:
            body: RenderableType = Text(EMPTY_STATE, style="dim", justify="center")
            return Panel(body, title=title, title_align="left")

        show_date = selection.mode == GroupMode.TAG

        table = Table(box=None, show_header=True, header_style="dim", pad_edge=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("ID", style="dim")
        table.add_column("", no_wrap=True)
        table.add_column(
            "Task",
            max_width=self.display.max_text_width,
            overflow="ellipsis",
        )
        if show_date:
            table.add_column("Date", style="dim", no_wrap=True)
        table.add_column("Tags")

        for row, todo in enumerate(todos, start=1):
            cells: list[RenderableType] = [
                Text(str(row)),
                Text(str(todo.id)),
                Text("[x]" if todo.completed else "[ ]"),
                Text(todo.text, style="strike dim" if todo.completed else ""),
            ]
            if show_date:
                cells.append(Text(self.format_date(todo.date)))
            cells.append(tag_chips(todo.tags))
            table.add_row(*cells)

        return Panel(table, title=title, title_align="left")

    def form(self, form_date: str, form_tags: Sequence[Tag]) -> Text:
        line = Text()
        line.append("New todo  ", style="bold")
        line.append(f"date: {self.format_date(form_date)} ({form_date})")
        line.append("  tags:")
        for tag in Tag.selectable():
            line.append(" ")
            if tag in form_tags:
                line.append(f" {tag.value} ", style=ACTIVE_STYLE)
            else:
                line.append(tag.value, style="dim")
        return line

    def board(
        self,
        manager: TodoManager,
        *,
        form: tuple[str, Sequence[Tag]] | None = None,
    ) -> RenderableType:
        """Sidebar next to the add form and the active list."""
        groups = manager.groups()
        visible = manager.selection.resolve(groups)

        main: list[RenderableType] = []
        if form is not None:
            main.append(self.form(*form))
        main.append(self.todo_list(visible, manager.selection))

        layout = Table.grid(padding=(0, 2))
        layout.add_column(no_wrap=True)
        layout.add_column(ratio=1)
        layout.add_row(self.sidebar(groups, manager.selection), Group(*main))
        return layout
