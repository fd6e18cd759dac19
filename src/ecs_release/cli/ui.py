"""Shared Rich consoles for the CLI."""

from datetime import datetime

from rich.console import Console
from rich.text import Text

console = Console()
err_console = Console(stderr=True)


def report_step(message: str) -> None:
    """Report release progress to the user.

    Args:
        message: Progress message to display.
    """
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    console.print(Text(f"[{timestamp}] {message}", style="green"))


def print_error(message: str) -> None:
    """Print an error message on stderr.

    Args:
        message: Error message to display.
    """
    err_console.print(Text(f"[ERROR] {message}", style="red"))


def print_warning(message: str) -> None:
    """Print a warning message.

    Args:
        message: Warning message to display.
    """
    console.print(Text(f"[WARNING] {message}", style="yellow"))
