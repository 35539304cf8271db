"""
Wizard Prompts - Interactive collection of the user's choices
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.prompt import Confirm, Prompt

from express_ts_wizard.spec import (
    DEFAULT_PROJECT_NAME,
    STRICTNESS_HINTS,
    Strictness,
    UserChoices,
    project_name_error,
)

logger = logging.getLogger(__name__)

CANCEL_MESSAGE = "Operation cancelled."


def ask_project_name(console: Console) -> str:
    """Ask for a project name until a valid one is given."""
    while True:
        value = Prompt.ask(
            "What is your project name?",
            console=console,
            default=DEFAULT_PROJECT_NAME,
        ).strip()
        error = project_name_error(value)
        if error is None:
            return value
        console.print(f"[red]{error}[/red]")


def ask_strictness(console: Console) -> Strictness:
    """Ask which TypeScript strictness preset to use."""
    console.print("Which TypeScript strictness level do you prefer?")
    for level in Strictness:
        console.print(f"  [cyan]{level.value:<9}[/cyan] [dim]{STRICTNESS_HINTS[level]}[/dim]")

    answer = Prompt.ask(
        "Strictness",
        console=console,
        choices=[level.value for level in Strictness],
        default=Strictness.MODERATE.value,
    )
    return Strictness(answer)


def ask_init_git(console: Console) -> bool:
    return Confirm.ask("Initialize Git repository?", console=console, default=True)


def run_prompts(console: Console | None = None) -> UserChoices | None:
    """
    Run the interactive wizard.

    Returns:
        The user's choices, or None if the user cancelled
    """
    console = console or Console()
    console.print("[black on cyan] create-express-ts [/]\n")

    try:
        project_name = ask_project_name(console)
        strictness = ask_strictness(console)
        init_git = ask_init_git(console)
    except (KeyboardInterrupt, EOFError):
        console.print(f"\n[red]{CANCEL_MESSAGE}[/red]")
        logger.debug("Prompts cancelled by user")
        return None

    return UserChoices(
        project_name=project_name,
        strictness=strictness,
        init_git=init_git,
    )
