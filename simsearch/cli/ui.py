# simsearch/cli/ui.py
"""
Shared Rich helpers for CLI commands.

Usage:
    from simsearch.cli.ui import ui, console

    ui.header("Plugins")
    ui.error("Something went wrong")
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


class UI:
    def print(self, msg: str, style: str = "") -> None:
        if style:
            console.print(f"[{style}]{msg}[/{style}]")
        else:
            console.print(msg)

    def header(self, title: str, subtitle: str = "") -> None:
        content = f"[bold]{title}[/bold]"
        if subtitle:
            content += f"\n[dim]{subtitle}[/dim]"
        console.print(Panel.fit(content, border_style="blue"))

    def warning(self, msg: str) -> None:
        err_console.print(f"[yellow]![/yellow] {escape(msg)}")

    def error(self, msg: str) -> None:
        err_console.print(f"[red]✗[/red] {escape(msg)}")

    def table(self, *columns: str, title: str = "") -> Table:
        table = Table(show_header=True, header_style="bold cyan", title=title or None)
        for column in columns:
            table.add_column(column)
        return table


ui = UI()

__all__ = ["ui", "console", "err_console", "UI"]
