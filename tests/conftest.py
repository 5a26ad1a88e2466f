"""Shared pytest fixtures and test helpers for licensectl tests."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

THEME_TEXT = "MIT theme license text"
ICON_TEXT = "Apache icon license text"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_ambient_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer env vars from leaking into settings."""
    for name in ("LICENSECTL_CONFIG", "LICENSECTL_ROOT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project with the bundled theme and icon license files."""
    (tmp_path / "assets" / "themes").mkdir(parents=True)
    (tmp_path / "assets" / "icons").mkdir(parents=True)
    (tmp_path / "assets" / "themes" / "LICENSES").write_text(THEME_TEXT, encoding="utf-8")
    (tmp_path / "assets" / "icons" / "LICENSES").write_text(ICON_TEXT, encoding="utf-8")
    return tmp_path


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI resolves paths inside it."""
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def py_command(code: str) -> list[str]:
    """argv running *code* with the current interpreter."""
    return [sys.executable, "-c", code]


def toml_list(argv: list[str]) -> str:
    """Render *argv* as a TOML array (JSON string escapes are valid TOML)."""
    return json.dumps(argv)


def write_config(root: Path, code_command: list[str], *, preflight: bool = False) -> Path:
    """Write a licensectl.toml with theme, icon, and code sections."""
    lines = [
        "[manifest]",
        'destination = "out/licenses.md"',
        "",
        "[[manifest.sections]]",
        'title = "THEME LICENSES"',
        'path = "assets/themes/LICENSES"',
        "",
        "[[manifest.sections]]",
        'title = "ICON LICENSES"',
        'path = "assets/icons/LICENSES"',
        "",
        "[[manifest.sections]]",
        'title = "CODE LICENSES"',
        f"command = {toml_list(code_command)}",
        "",
        "[preflight]",
        f"enabled = {'true' if preflight else 'false'}",
        "",
    ]
    path = root / "licensectl.toml"
    path.write_text("\n".join(lines), encoding="utf-8")
    return path
