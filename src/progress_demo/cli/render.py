"""CLI renderer for progress-demo."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.markdown import Markdown
from rich.status import Status
from rich.table import Table
from rich.text import Text

from progress_demo.tools.registry import ToolDescriptor
from progress_demo.types import Suggestion


class RichStream:
    """Response sink that shows notices on a status spinner and prints fragments as markdown."""

    def __init__(self, console: Console, status: Status | None = None) -> None:
        self._console = console
        self._status = status

    def progress(self, message: str) -> None:
        if self._status is not None:
            self._status.update(Text(message, style="cyan"))

    def markdown(self, text: str) -> None:
        if text.strip():
            self._console.print(Markdown(text))


class Renderer:
    """CLI renderer using Rich for terminal output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def info(self, message: str) -> None:
        self.console.print(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def welcome(self, workspace: str) -> None:
        self.console.print("[bold blue]Progress Demo[/bold blue] - long-running operations in a chat")
        self.console.print(f"[bold]Workspace:[/bold] [cyan]{workspace}[/cyan]")
        self.console.print("[dim]Type /help for commands, a number to pick a suggestion, Ctrl-C to cancel.[/dim]")

    @contextmanager
    def stream(self) -> Iterator[RichStream]:
        with self.console.status("Working...", spinner="dots") as status:
            yield RichStream(self.console, status)

    def followups(self, suggestions: list[Suggestion]) -> None:
        if not suggestions:
            return
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("No", style="bold green", width=4)
        table.add_column("Suggestion")
        table.add_column("Command", style="dim")
        for number, suggestion in enumerate(suggestions, start=1):
            command = f"/{suggestion.command}" if suggestion.command else ""
            table.add_row(f"{number}.", suggestion.label, command)
        self.console.print(table)

    def tools(self, descriptors: list[ToolDescriptor]) -> None:
        if not descriptors:
            self.console.print("[dim](no tools registered)[/dim]")
            return
        table = Table(show_header=True, box=None, padding=(0, 2))
        table.add_column("Tool", style="bold green")
        table.add_column("Description", style="dim")
        for descriptor in descriptors:
            table.add_row(descriptor.name, descriptor.short_description)
        self.console.print(table)
