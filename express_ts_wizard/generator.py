"""
Wizard Generator - Template-based Express + TypeScript project creation

Copies static templates into a fresh project directory, installs
dependencies with the package manager, and optionally creates the first
Git commit. Stages run strictly in order; only the Git stage is allowed
to fail without failing the whole run.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator

from rich.console import Console

from express_ts_wizard.spec import UserChoices, WizardSettings, tsconfig_template

logger = logging.getLogger(__name__)

PROJECT_NAME_PLACEHOLDER = "{{PROJECT_NAME}}"

# (template path, output path), relative to templates dir and project dir
BASE_FILES: list[tuple[str, str]] = [
    ("base/src/index.ts", "src/index.ts"),
    ("base/gitignore", ".gitignore"),
]
MANIFEST_TEMPLATE = "base/package.template.json"
MANIFEST_FILE = "package.json"
TSCONFIG_FILE = "tsconfig.json"

GIT_FAILURE_MESSAGE = "Error initializing Git (may not be installed)"


# ═══════════════════════════════════════════════════════════════════════════
# ERRORS
# ═══════════════════════════════════════════════════════════════════════════


class WizardError(Exception):
    """Base class for project creation failures."""

    stage: "Stage | None" = None
    project_path: Path | None = None


class TargetExistsError(WizardError):
    """The target path is already occupied by a file or directory."""

    def __init__(self, path: Path):
        self.path = path
        self.project_path = path
        super().__init__(f'Directory "{path.name}" already exists.')


class MaterializationError(WizardError):
    """Copying or writing template files failed."""


class InstallError(WizardError):
    """The package manager could not install dependencies."""


class InstallVerificationError(InstallError):
    """Install reported success but left no lock file behind."""


class VcsError(WizardError):
    """A git command failed. Never fatal."""


# ═══════════════════════════════════════════════════════════════════════════
# RESULT TRACKING
# ═══════════════════════════════════════════════════════════════════════════


class Stage(str, Enum):
    VALIDATING = "validating"
    MATERIALIZING = "materializing"
    INSTALLING = "installing"
    INITIALIZING_VCS = "initializing_vcs"
    DONE = "done"
    FAILED = "failed"


@dataclass
class CreationResult:
    """Result of project creation."""

    project_path: Path
    files: list[str] = field(default_factory=list)  # Relative to project_path
    stage: Stage = Stage.VALIDATING
    vcs_initialized: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.stage == Stage.DONE


# ═══════════════════════════════════════════════════════════════════════════
# TEMPLATES
# ═══════════════════════════════════════════════════════════════════════════


def resolve_templates_dir(package_dir: Path | None = None) -> Path:
    """
    Locate the templates directory.

    The packaged copy next to this module wins when it exists; otherwise
    the development copy at the root of a source checkout is used. A
    missing directory is not reported here and shows up as a copy error.
    """
    if package_dir is None:
        package_dir = Path(__file__).parent

    packaged_path = package_dir / "templates"
    development_path = package_dir.parent / "templates"

    if packaged_path.exists():
        return packaged_path
    return development_path


def render_manifest(template_text: str, project_name: str) -> str:
    """Substitute the project name for every placeholder in the manifest."""
    return template_text.replace(PROJECT_NAME_PLACEHOLDER, project_name)


# ═══════════════════════════════════════════════════════════════════════════
# MATERIALIZER
# ═══════════════════════════════════════════════════════════════════════════


def ensure_target_absent(path: Path) -> None:
    """Raise TargetExistsError if anything already lives at path."""
    if path.exists() or path.is_symlink():
        raise TargetExistsError(path)


def copy_templates(
    templates_dir: Path,
    target_path: Path,
    project_name: str,
    strictness: str,
) -> list[str]:
    """
    Copy template files into the target project directory.

    Args:
        templates_dir: Path to the templates directory (read only)
        target_path: Path to the new project directory
        project_name: Name substituted into package.json
        strictness: Strictness level selecting the tsconfig template

    Returns:
        Relative paths of the files written, in write order

    Raises:
        TargetExistsError: target_path already exists. Nothing is written.
        MaterializationError: Any other read or write failure
    """
    written: list[str] = []
    try:
        target_path.mkdir(parents=True)
    except FileExistsError as e:
        raise TargetExistsError(target_path) from e
    except OSError as e:
        raise MaterializationError(f"Failed to create {target_path}: {e}") from e

    try:
        (target_path / "src").mkdir()

        for source, destination in BASE_FILES:
            shutil.copyfile(templates_dir / source, target_path / destination)
            written.append(destination)

        manifest_text = (templates_dir / MANIFEST_TEMPLATE).read_text(encoding="utf-8")
        (target_path / MANIFEST_FILE).write_text(
            render_manifest(manifest_text, project_name), encoding="utf-8"
        )
        written.append(MANIFEST_FILE)

        shutil.copyfile(
            templates_dir / tsconfig_template(strictness), target_path / TSCONFIG_FILE
        )
        written.append(TSCONFIG_FILE)
    except (OSError, UnicodeDecodeError) as e:
        raise MaterializationError(
            f"Failed to write project files to {target_path}: {e}"
        ) from e

    logger.debug("Wrote %s to %s", ", ".join(written), target_path)
    return written


# ═══════════════════════════════════════════════════════════════════════════
# SUBPROCESSES
# ═══════════════════════════════════════════════════════════════════════════


def _run(cmd: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """Run a command with piped output, raising on non-zero exit.

    Output is decoded as UTF-8 with undecodable bytes replaced.
    """
    executable = shutil.which(cmd[0]) or cmd[0]
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    return subprocess.run(
        [executable, *cmd[1:]],
        cwd=cwd,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        check=True,
    )


def _describe_failure(cmd: list[str], error: Exception) -> str:
    if isinstance(error, subprocess.CalledProcessError):
        detail = (error.stderr or error.stdout or "").strip()
        message = f"`{' '.join(cmd)}` exited with code {error.returncode}"
        return f"{message}: {detail}" if detail else message
    return f"`{' '.join(cmd)}` could not be run: {error}"


def install_dependencies(project_path: Path, settings: WizardSettings | None = None) -> None:
    """
    Install dependencies in the project directory.

    The lock file must exist afterwards, even when the package manager
    exits cleanly.
    """
    settings = settings or WizardSettings()
    cmd = [settings.package_manager, *settings.install_args]

    try:
        _run(cmd, project_path)
    except (subprocess.CalledProcessError, OSError) as e:
        raise InstallError(_describe_failure(cmd, e)) from e

    if not (project_path / settings.lock_file).exists():
        raise InstallVerificationError(f"{settings.lock_file} was not generated")


def initialize_git_repository(
    project_path: Path, settings: WizardSettings | None = None
) -> None:
    """Create a Git repository with an initial commit."""
    settings = settings or WizardSettings()
    commands = [
        ["git", "init"],
        ["git", "add", "."],
        ["git", "commit", "-m", settings.commit_message],
    ]

    for cmd in commands:
        try:
            _run(cmd, project_path)
        except (subprocess.CalledProcessError, OSError) as e:
            raise VcsError(_describe_failure(cmd, e)) from e


# ═══════════════════════════════════════════════════════════════════════════
# ORCHESTRATION
# ═══════════════════════════════════════════════════════════════════════════


@contextmanager
def _reported(console: Console, start: str, done: str, failed: str) -> Iterator[None]:
    """Show a spinner while a stage runs, then its outcome."""
    with console.status(start):
        try:
            yield
        except Exception:
            console.print(f"[red]✗[/red] {failed}")
            raise
    console.print(f"[green]{done}[/green]")


def create_project(
    choices: UserChoices,
    *,
    cwd: Path | None = None,
    settings: WizardSettings | None = None,
    console: Console | None = None,
) -> CreationResult:
    """
    Create a new Express + TypeScript project from the user's choices.

    Args:
        choices: Answers collected by the wizard
        cwd: Directory the project is created in. Defaults to the current one.
        settings: Tool configuration
        console: Console used for progress output

    Returns:
        CreationResult describing what was written

    Raises:
        WizardError: On any fatal stage failure. ``stage`` names the stage
            that failed. Files already written are left in place.
    """
    settings = settings or WizardSettings()
    console = console or Console()

    project_path = (cwd or Path.cwd()).resolve() / choices.project_name
    templates_dir = settings.templates_dir or resolve_templates_dir()
    result = CreationResult(project_path=project_path)

    try:
        ensure_target_absent(project_path)

        result.stage = Stage.MATERIALIZING
        logger.info("Creating %s from %s", project_path, templates_dir)
        with _reported(
            console,
            "Creating project structure...",
            "Project structure created ✓",
            "Error creating structure",
        ):
            result.files = copy_templates(
                templates_dir, project_path, choices.project_name, choices.strictness
            )

        result.stage = Stage.INSTALLING
        logger.info("Installing dependencies with %s", settings.package_manager)
        with _reported(
            console,
            "Installing dependencies...",
            "Dependencies installed ✓",
            "Error installing dependencies",
        ):
            install_dependencies(project_path, settings)
    except WizardError as e:
        e.stage = result.stage
        e.project_path = project_path
        result.stage = Stage.FAILED
        raise

    if choices.init_git:
        result.stage = Stage.INITIALIZING_VCS
        with console.status("Initializing Git..."):
            try:
                initialize_git_repository(project_path, settings)
            except Exception as e:
                # Any git failure leaves a usable project
                logger.warning(
                    "Git initialization skipped: %s", e,
                    exc_info=not isinstance(e, VcsError),
                )
                result.warnings.append(str(e))
                console.print(f"[yellow]![/yellow] {GIT_FAILURE_MESSAGE}")
            else:
                result.vcs_initialized = True
                console.print("[green]Git initialized ✓[/green]")

    result.stage = Stage.DONE
    logger.info("Project ready at %s", project_path)
    return result
