"""Tests for configuration models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from licensectl.config.models import ManifestConfig, PreflightConfig, SectionConfig
from licensectl.domain.sections import HTML_ENTITY_RULES, Command, StaticFile


class TestSectionConfig:
    def test_static_file(self, tmp_path: Path) -> None:
        section = SectionConfig(title="THEMES", path="assets/themes/LICENSES").to_section(tmp_path)
        assert section.title == "THEMES"
        assert section.source == StaticFile(tmp_path / "assets" / "themes" / "LICENSES")

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        absolute = tmp_path / "LICENSE"
        section = SectionConfig(title="X", path=str(absolute)).to_section(Path("/other"))
        assert section.source == StaticFile(absolute)

    def test_command(self, tmp_path: Path) -> None:
        config = SectionConfig(title="CODE", command=["cargo", "about", "generate"], timeout=60)
        section = config.to_section(tmp_path)
        assert section.source == Command(
            "cargo", ("about", "generate"), working_dir=tmp_path, timeout=60
        )

    def test_command_cwd(self, tmp_path: Path) -> None:
        config = SectionConfig(title="CODE", command=["echo"], cwd="crates")
        source = config.to_section(tmp_path).source
        assert isinstance(source, Command)
        assert source.working_dir == tmp_path / "crates"

    def test_requires_a_source(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            SectionConfig(title="NONE")

    def test_rejects_both_sources(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            SectionConfig(title="BOTH", path="a", command=["echo"])

    def test_rejects_empty_command(self) -> None:
        with pytest.raises(ValidationError, match="empty"):
            SectionConfig(title="EMPTY", command=[])

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            SectionConfig(title="CODE", command=["echo"], timeout=0)


class TestManifestConfig:
    def test_default_sections(self) -> None:
        config = ManifestConfig()
        assert [s.title for s in config.sections] == [
            "###### THEME LICENSES ######",
            "###### ICON LICENSES ######",
            "###### CODE LICENSES ######",
        ]
        assert config.sections[2].command is not None
        assert config.sections[2].command[:3] == ["cargo", "about", "generate"]

    def test_default_rules(self) -> None:
        assert tuple(ManifestConfig().build_rules()) == HTML_ENTITY_RULES


class TestPreflightConfig:
    def test_install_command_formatting(self) -> None:
        config = PreflightConfig(version="0.6.1")
        assert config.resolved_install_command() == ["cargo", "install", "cargo-about@0.6.1"]

    def test_defaults(self) -> None:
        config = PreflightConfig()
        assert config.enabled is True
        assert config.version_command == ["cargo", "about", "--version"]
