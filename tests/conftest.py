"""Shared pytest fixtures for the express-ts-wizard test suite.

Provides reusable fixtures for:
- The packaged templates directory
- Default user choices and settings
- A quiet rich console
- A fake ``subprocess.run`` recording npm and git invocations
"""

from __future__ import annotations

import io
import subprocess
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from express_ts_wizard import generator
from express_ts_wizard.spec import Strictness, UserChoices, WizardSettings


# ---------------------------------------------------------------------------
# Fake subprocess
# ---------------------------------------------------------------------------


class FakeRunner:
    """Stands in for ``subprocess.run``.

    Every call is recorded as ``(tool, args, cwd)``. An npm install writes a
    lock file unless ``write_lock`` is False. Tools listed in ``fail`` raise
    the given exception instead.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str], Path]] = []
        self.fail: dict[str, BaseException] = {}
        self.write_lock = True

    def __call__(self, cmd: list[str], cwd: Any = None, **kwargs: Any) -> subprocess.CompletedProcess:
        tool = Path(cmd[0]).stem.lower()
        self.calls.append((tool, list(cmd[1:]), Path(cwd)))
        if tool in self.fail:
            raise self.fail[tool]
        if tool == "npm" and self.write_lock:
            (Path(cwd) / "package-lock.json").write_text("{}")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    @property
    def tools(self) -> list[str]:
        return [tool for tool, _, _ in self.calls]

    @property
    def git_calls(self) -> list[list[str]]:
        return [args for tool, args, _ in self.calls if tool == "git"]


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr(generator.subprocess, "run", runner)
    return runner


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@pytest.fixture
def templates_dir() -> Path:
    return generator.resolve_templates_dir()


@pytest.fixture
def choices() -> UserChoices:
    return UserChoices(
        project_name="test-project",
        strictness=Strictness.MODERATE,
        init_git=False,
    )


@pytest.fixture
def settings() -> WizardSettings:
    return WizardSettings()


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=120)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "EXPRESS_TS_WIZARD_CONFIG",
        "EXPRESS_TS_WIZARD_LOG_LEVEL",
        "EXPRESS_TS_WIZARD_PACKAGE_MANAGER",
    ):
        monkeypatch.delenv(name, raising=False)
