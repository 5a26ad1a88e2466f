"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, licensectl.toml only contains
overrides. The defaults reproduce the application's license build:
theme and icon license files, then ``cargo about`` output for crates.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from licensectl.domain.sections import (
    HTML_ENTITY_RULES,
    Command,
    Section,
    StaticFile,
    SubstitutionRule,
)

CARGO_ABOUT_VERSION = "0.6.1"


class SectionConfig(BaseModel):
    """One ``[[manifest.sections]]`` entry.

    Exactly one of ``path`` (static file) or ``command`` (argv list) is set.
    """

    model_config = {"frozen": True}

    title: str
    path: str | None = None
    command: list[str] | None = None
    cwd: str | None = None
    timeout: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _exactly_one_source(self) -> SectionConfig:
        if (self.path is None) == (self.command is None):
            msg = f"Section {self.title!r} must set exactly one of 'path' or 'command'"
            raise ValueError(msg)
        if self.command is not None and not self.command:
            msg = f"Section {self.title!r} has an empty 'command'"
            raise ValueError(msg)
        return self

    def to_section(self, root: Path) -> Section:
        """Build the domain Section, resolving relative paths against *root*."""
        if self.path is not None:
            path = Path(self.path)
            return Section(self.title, StaticFile(path if path.is_absolute() else root / path))
        assert self.command is not None
        cwd = root if self.cwd is None else root / self.cwd
        executable, *args = self.command
        return Section(
            self.title,
            Command(executable, tuple(args), working_dir=cwd, timeout=self.timeout),
        )


def _default_sections() -> list[SectionConfig]:
    return [
        SectionConfig(
            title="###### THEME LICENSES ######",
            path="assets/themes/LICENSES",
        ),
        SectionConfig(
            title="###### ICON LICENSES ######",
            path="assets/icons/LICENSES",
        ),
        SectionConfig(
            title="###### CODE LICENSES ######",
            command=[
                "cargo",
                "about",
                "generate",
                "--fail",
                "-c",
                "script/licenses/zed-licenses.toml",
                "script/licenses/template.md.hbs",
            ],
        ),
    ]


def _default_substitutions() -> list[tuple[str, str]]:
    return [(rule.pattern, rule.replacement) for rule in HTML_ENTITY_RULES]


class ManifestConfig(BaseModel):
    """[manifest] section."""

    model_config = {"frozen": True}

    destination: str = "assets/licenses.md"
    sections: list[SectionConfig] = Field(default_factory=_default_sections)
    substitutions: list[tuple[str, str]] = Field(default_factory=_default_substitutions)

    def build_sections(self, root: Path) -> list[Section]:
        return [section.to_section(root) for section in self.sections]

    def build_rules(self) -> list[SubstitutionRule]:
        return [SubstitutionRule(pattern, replacement) for pattern, replacement in self.substitutions]


class PreflightConfig(BaseModel):
    """[preflight] section.

    ``install_command`` entries may contain ``{version}``.
    """

    model_config = {"frozen": True}

    enabled: bool = True
    tool: str = "cargo-about"
    version: str = CARGO_ABOUT_VERSION
    version_command: list[str] = Field(default_factory=lambda: ["cargo", "about", "--version"])
    install_command: list[str] = Field(
        default_factory=lambda: ["cargo", "install", "cargo-about@{version}"]
    )
    timeout: float | None = Field(default=None, gt=0)

    def resolved_install_command(self) -> list[str]:
        return [part.format(version=self.version) for part in self.install_command]
