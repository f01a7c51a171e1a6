#!/usr/bin/env python3
"""
Console UI Module using Rich

Styled message helpers and table construction shared by the koinos
tools and the results table renderer.
"""

from typing import IO, Optional

from rich import box
from rich.console import Console, RenderableType
from rich.table import Table


class ConsoleUI:
    """Console output handler using Rich"""

    def __init__(
        self, force_terminal: Optional[bool] = None, file: Optional[IO[str]] = None, width: Optional[int] = None
    ):
        """Initialize console, optionally bound to a file and a fixed width"""
        self.console = Console(force_terminal=force_terminal, file=file, width=width, highlight=False)

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green")

    def print_error(self, message: str):
        """Print error message in red"""
        self.console.print(message, style="red bold")

    def print_warning(self, message: str):
        """Print warning message in yellow"""
        self.console.print(message, style="yellow")

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan")

    def print_plain(self, message: str):
        """Print message in plain white"""
        self.console.print(message, style="white")

    # Tables
    def create_table(
        self,
        headers: list[str],
        title: Optional[str] = None,
        footers: Optional[list[RenderableType]] = None,
        box_name: str = "ROUNDED",
        show_lines: bool = False,
    ) -> Table:
        """Create a table with one column per header and optional footer cells"""
        table = Table(
            title=title,
            box=getattr(box, box_name.upper(), box.ROUNDED),
            show_lines=show_lines,
            show_footer=footers is not None,
        )
        for i, header in enumerate(headers):
            footer = footers[i] if footers is not None else ""
            table.add_column(header, footer=footer)
        return table

    def print_table(self, table: Table):
        """Print a table followed by a blank line"""
        self.console.print(table)
        self.console.print()
