"""
User Interface Utilities.
Rich console header and spinner used around blocking cluster calls.
File: src/opr/utils/ui.py
"""

from contextlib import contextmanager
from typing import Generator

from rich.console import Console

# Initialize a global console instance
console = Console()


@contextmanager
def spinner(text: str = "Processing...") -> Generator[None, None, None]:
    """
    Context manager that displays a spinning loading animation.

    Usage:
        with spinner("Waiting for pods..."):
            block_on_cluster()
    """
    if console.is_terminal:
        with console.status(f"[bold green]{text}", spinner="dots"):
            yield
    else:
        # no animation when output is piped or captured
        yield


def print_header(title: str, subtitle: str = ""):
    """Prints a styled header."""
    console.rule(f"[bold blue]{title}")
    if subtitle:
        console.print(f"[dim]{subtitle}[/dim]", justify="center")
    console.print()
