"""
Standardized error handling and exit codes for the storymap CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for storymap CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error (e.g. unreadable canvas file)."""

    USER_ERROR = 2
    """User input error (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Invalid outline number: 1.x",
        ...     reason="Numbers look like 1.0, 1.2 or 1.2.3",
        ... )
    """
    console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}")


def print_invalid_number_error(message: str) -> None:
    """Print error when an outline number is malformed or of the wrong tier."""
    print_error(
        message,
        reason="Epics are numbered X.0, features X.Y and stories X.Y.Z",
        solution="storymap show  # to see the numbers in use",
    )


def print_assignment_error(message: str) -> None:
    """Print error when a reparenting request is rejected."""
    print_error(
        message,
        reason="Epics take features and stories; features take stories only",
        solution="storymap parents <id>...  # to list valid parents",
    )


def print_canvas_corrupted_error(message: str) -> None:
    """Print error when the canvas file cannot be read."""
    print_error(
        message,
        reason="The canvas file must be a JSON object with an 'elements' list",
        solution="Fix or move the file; a missing file starts an empty canvas",
    )


def print_invalid_option_error(option: str, valid_options: list[str]) -> None:
    """Print error when an invalid option value is provided."""
    valid_str = ", ".join(valid_options)
    print_error(
        f"Invalid option: {option}",
        reason=f"Valid options are: {valid_str}",
        solution=f"Use one of: {valid_str}",
    )


__all__ = [
    "ExitCode",
    "print_error",
    "print_invalid_number_error",
    "print_assignment_error",
    "print_canvas_corrupted_error",
    "print_invalid_option_error",
]
