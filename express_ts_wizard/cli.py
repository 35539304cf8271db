"""
Wizard CLI - Interactive creation of Express + TypeScript projects

Usage:
    create-express-ts

All input is collected interactively. Exit code 0 on success or
cancellation, 1 on any failure.
"""

from __future__ import annotations

import logging

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel

from express_ts_wizard.generator import (
    Stage,
    TargetExistsError,
    WizardError,
    create_project,
)
from express_ts_wizard.prompts import run_prompts
from express_ts_wizard.spec import WizardSettings, describe_strictness

app = typer.Typer(
    name="create-express-ts",
    help="Create an Express + TypeScript project interactively",
    add_completion=False,
)
console = Console()
logger = logging.getLogger("express_ts_wizard")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def create() -> None:
    """Create a new Express + TypeScript project."""
    try:
        settings = WizardSettings.load()
    except (OSError, ValueError, yaml.YAMLError) as e:
        rprint(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)

    configure_logging(settings.log_level)

    choices = run_prompts(console)
    if choices is None:
        raise typer.Exit(0)

    console.print()

    try:
        create_project(choices, settings=settings, console=console)
    except TargetExistsError as e:
        rprint(f"[red]✗[/red] {e}")
        raise typer.Exit(1)
    except WizardError as e:
        logger.error("Project creation failed while %s: %s", e.stage.value if e.stage else "running", e)
        rprint(f"[red]Error creating project:[/red] {e}")
        if e.stage != Stage.VALIDATING and e.project_path and e.project_path.exists():
            rprint(f"[yellow]Partially created project left at {e.project_path}[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        rprint(f"[red]Error creating project:[/red] {e}")
        raise typer.Exit(1)

    _show_next_steps(choices.project_name, describe_strictness(choices.strictness))


def _show_next_steps(project_name: str, strictness_description: str) -> None:
    """Show next steps and the closing summary."""
    steps = f"""
  cd {project_name}
  npm run dev        → Start server with hot-reload
  npm run build      → Compile to JavaScript
  npm run start      → Run the compiled version
  npm run type-check → Check types without compiling

[dim]Tip: Use 'npm ci' for deterministic installs (recommended in CI/CD)[/dim]
"""
    rprint(Panel(steps, title="Next steps"))
    rprint(
        f"[green]✔[/green] Project [cyan]{project_name}[/cyan] created with "
        f"TypeScript [yellow]{strictness_description}[/yellow]"
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
