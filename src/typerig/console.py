"""
TypeRig - Console helper.

All operator-facing output goes through ConsoleHelper: styled one-line
messages, two-column tables and the prompt. Input is read here too and
handed to typerig.parser.

Usage:
    console = ConsoleHelper("TEST-RIG")
    console.show_message("Bye !", Feedback.ECHO)
    cmd = console.get_user_input()
"""

import logging
import threading

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from typerig.errors import CommandValidationError
from typerig.parser import parse_command
from typerig.types import Command, Feedback

logger = logging.getLogger(__name__)

INIT_PROMPT = "[Initializing...] >"
NO_CONTEXT_PROMPT = "[Ready:No context] >"
PROMPT_STYLE = "bold green"

FEEDBACK_STYLES = {
    Feedback.ECHO: "green",
    Feedback.CONFIRMATION: "blue",
    Feedback.SUCCESS: "bold green",
    Feedback.WARNING: "yellow",
    Feedback.ERROR: "bold red",
    Feedback.DULL: "dim",
}


class ConsoleHelper:
    """Rich-backed presentation layer for the interactive loop."""

    def __init__(self, title: str | None = None, console: Console | None = None):
        self.console = console or Console(highlight=False)
        self.title = title
        self.prompter = INIT_PROMPT
        self._lock = threading.Lock()
        if title and self.console.is_terminal:
            self.console.set_window_title(title)

    # =========================================================================
    # Output
    # =========================================================================

    def refresh_prompt(self, with_new_line: bool = False) -> None:
        """Redraw the prompt after it changed (e.g. on context switch)."""
        prefix = "\n" if with_new_line else ""
        self.console.print(f"{prefix}{self.prompter}", style=PROMPT_STYLE, markup=False)

    def show_message(self, msg: str, style: Feedback) -> None:
        """Print one message styled by its feedback kind."""
        with self._lock:
            self.console.print(f"\t{msg}", style=FEEDBACK_STYLES[style], markup=False)

    def show_tabular_data(self, data: list[tuple], columns: int) -> None:
        """Print (name, value) rows. Only two columns are supported."""
        if columns != 2:
            self.show_message(
                f"Unable to display data. Unsupported number of columns {columns}.",
                Feedback.WARNING,
            )
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")
        for name, value in data:
            table.add_row(str(name), str(value))

        with self._lock:
            self.console.print(table)

    # =========================================================================
    # Input
    # =========================================================================

    def get_user_input(self) -> Command | None:
        """
        Prompt for one line and parse it.

        Returns:
            The parsed Command, or None if the line was blank or invalid
            (the reason has already been shown to the operator)
        """
        user_input = self.console.input(f"[{PROMPT_STYLE}]{escape(self.prompter)}[/] ")
        try:
            return parse_command(user_input)
        except CommandValidationError as e:
            self.show_message(str(e), Feedback.WARNING)
        except Exception as e:
            logger.exception(f"Failed to parse input: {user_input!r}")
            self.show_message(str(e), Feedback.ERROR)
        return None
