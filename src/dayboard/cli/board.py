"""Interactive board session.

Each input line is one discrete user action, handled to completion before
the next line is read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from rich.console import Console
from rich.markup import escape

from dayboard.cli.render import BoardView
from dayboard.todos import GroupMode, Tag, Todo, TodoManager, normalize_date

HELP = """\
Commands:
  add <text>                 add a todo with the form's date and tags
  date <YYYY-MM-DD>          set the form date
  tag <label>                toggle a form tag ({tags})
  done <n> | toggle <n>      toggle completion of row n
  rm <n> | delete <n>        delete row n
  view date <YYYY-MM-DD>     show one day
  view tag <label>           show one category
  help                       show this help
  quit | exit                leave
"""

EXIT_COMMANDS = {"quit", "exit", "q", ":q"}


class BoardInputError(ValueError):
    """A board command could not be applied."""


@dataclass
class AddForm:
    """Pending values for the next added todo."""

    date: str
    tags: list[Tag] = field(default_factory=list)

    def set_date(self, value: str) -> None:
        self.date = normalize_date(value)

    def toggle_tag(self, value: str) -> None:
        tag = Tag.parse(value)
        if tag is Tag.OTHER:
            raise BoardInputError(
                "'other' cannot be picked; todos without tags are listed under it"
            )
        if tag in self.tags:
            self.tags.remove(tag)
        else:
            self.tags.append(tag)

    def reset(self) -> None:
        """Clear the tags after a successful add; the date is kept."""
        self.tags = []


class BoardSession:
    """Read-eval-render loop over a TodoManager."""

    def __init__(
        self,
        manager: TodoManager,
        console: Console,
        *,
        view: BoardView | None = None,
        today: date | None = None,
    ) -> None:
        self.manager = manager
        self.console = console
        self.view = view or BoardView()
        self.form = AddForm(date=(today or date.today()).isoformat())

    def render(self) -> None:
        self.console.print(
            self.view.board(self.manager, form=(self.form.date, self.form.tags))
        )

    def run(self) -> None:
        self.console.print("[dim]Type 'help' for commands, 'quit' to leave.[/dim]")
        while True:
            self.render()
            try:
                line = self.console.input("[bold cyan]>[/bold cyan] ")
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break
            if not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """Apply one command line. Returns False when the session should end."""
        command, _, rest = line.strip().partition(" ")
        command = command.lower()
        rest = rest.strip()

        if not command:
            return True
        if command in EXIT_COMMANDS:
            return False

        try:
            self._dispatch(command, rest)
        except ValueError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
        return True

    def _dispatch(self, command: str, rest: str) -> None:
        if command == "add":
            self._add(rest)
        elif command == "date":
            self.form.set_date(_require(rest, "date <YYYY-MM-DD>"))
        elif command == "tag":
            self.form.toggle_tag(_require(rest, "tag <label>"))
        elif command in ("done", "toggle"):
            todo = self._row(rest)
            self.manager.toggle_completed(todo.id)
        elif command in ("rm", "delete", "del"):
            todo = self._row(rest)
            self.manager.delete(todo.id)
        elif command == "view":
            mode, _, key = _require(rest, "view date|tag <key>").partition(" ")
            try:
                group_mode = GroupMode(mode.lower())
            except ValueError:
                raise BoardInputError("usage: view date|tag <key>") from None
            self.manager.select(group_mode, _require(key.strip(), "view date|tag <key>"))
        elif command in ("help", "?"):
            tags = ", ".join(tag.value for tag in Tag.selectable())
            self.console.print(HELP.format(tags=tags), markup=False)
        else:
            raise BoardInputError(f"unknown command {command!r}; type 'help'")

    def _add(self, text: str) -> None:
        todo = self.manager.add(text, self.form.date, self.form.tags)
        if todo is not None:
            self.form.reset()

    def _row(self, value: str) -> Todo:
        visible = self.manager.visible()
        raw = _require(value, "<row number>")
        try:
            index = int(raw)
        except ValueError:
            raise BoardInputError(f"row must be a number, got {value!r}") from None
        if not 1 <= index <= len(visible):
            raise BoardInputError(f"no row {index} in the current list")
        return visible[index - 1]


def _require(value: str, usage: str) -> str:
    if not value:
        raise BoardInputError(f"usage: {usage}")
    return value
