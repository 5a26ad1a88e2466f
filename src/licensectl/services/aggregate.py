"""AggregateService — build the license manifest.

Pipeline: COLLECT → CONCATENATE → SUBSTITUTE → WRITE

INVARIANT: The destination is written once, atomically, and only after
every section was collected and every substitution applied. Any failure
before that point leaves the destination untouched.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from pathlib import Path

import structlog

from licensectl.domain.errors import AggregationError, ConfigurationError
from licensectl.domain.manifest import apply_substitutions, render_section
from licensectl.domain.sections import (
    Command,
    Section,
    SectionReport,
    StaticFile,
    SubstitutionRule,
)
from licensectl.infrastructure.filesystem import (
    ENCODING,
    atomic_write,
    read_asset,
    read_existing,
    resolve_path,
)
from licensectl.infrastructure.process import run_command
from licensectl.services.base import BaseService
from licensectl.services.result import ServiceError, ServiceResult

log = structlog.get_logger(__name__)


class RenderedManifest:
    """Fully substituted manifest text plus per-section accounting."""

    def __init__(self, text: str, reports: list[SectionReport], substitutions: int) -> None:
        self.text = text
        self.reports = reports
        self.substitutions = substitutions

    @property
    def size(self) -> int:
        return len(self.text.encode(ENCODING))

    def summary(self, destination: Path) -> dict[str, object]:
        return {
            "destination": str(destination),
            "sections": [report.to_dict() for report in self.reports],
            "bytes": self.size,
            "substitutions": self.substitutions,
        }


class AggregateService(BaseService):
    """Concatenates sections into a manifest and writes it atomically."""

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def aggregate(
        self,
        sections: Sequence[Section],
        rules: Sequence[SubstitutionRule],
        destination: Path,
    ) -> ServiceResult:
        """COLLECT → CONCATENATE → SUBSTITUTE → WRITE."""
        op = "generate"
        started = time.perf_counter()
        destination = resolve_path(self._root, destination)

        try:
            rendered = self.render(sections, rules)
            atomic_write(destination, rendered.text)
        except AggregationError as exc:
            return self._failure(op, exc, started=started)

        log.info("manifest.written", destination=str(destination), bytes=rendered.size)
        return self._success(op, rendered.summary(destination), started=started)

    def check(
        self,
        sections: Sequence[Section],
        rules: Sequence[SubstitutionRule],
        destination: Path,
    ) -> ServiceResult:
        """Render without writing; fail if *destination* differs."""
        op = "check"
        started = time.perf_counter()
        destination = resolve_path(self._root, destination)

        try:
            rendered = self.render(sections, rules)
        except AggregationError as exc:
            return self._failure(op, exc, started=started)

        current = read_existing(destination)
        data = {**rendered.summary(destination), "up_to_date": current == rendered.text}
        if current != rendered.text:
            reason = "missing" if current is None else "out of date"
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                error=ServiceError(
                    code="STALE_MANIFEST",
                    message=f"{destination} is {reason}; run 'licensectl generate'",
                    detail={"destination": str(destination)},
                ),
            )
        return self._success(op, data, started=started)

    def describe(self, sections: Sequence[Section]) -> ServiceResult:
        """List *sections* in output order without reading or running them."""
        items = [
            {
                "title": section.title,
                "kind": str(section.source.kind),
                "source": section.source.describe(),
            }
            for section in sections
        ]
        return self._success("sections", {"count": len(items), "sections": items})

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def render(
        self,
        sections: Sequence[Section],
        rules: Sequence[SubstitutionRule],
    ) -> RenderedManifest:
        """COLLECT → CONCATENATE → SUBSTITUTE, entirely in memory.

        Raises:
            ConfigurationError: *sections* is empty.
            MissingAsset: A static file could not be read.
            ExternalToolFailure: A command failed.
        """
        if not sections:
            msg = "No sections configured; refusing to write an empty manifest"
            raise ConfigurationError(msg)

        parts: list[str] = []
        reports: list[SectionReport] = []
        for section in sections:
            content = self._collect(section)
            parts.append(render_section(section.title, content))
            reports.append(
                SectionReport(
                    title=section.title,
                    kind=section.source.kind,
                    source=section.source.describe(),
                    size=len(content.encode(ENCODING)),
                )
            )

        text, replaced = apply_substitutions("".join(parts), rules)
        log.debug("manifest.substituted", rules=len(rules), replacements=replaced)
        return RenderedManifest(text, reports, replaced)

    def _collect(self, section: Section) -> str:
        source = section.source
        if isinstance(source, StaticFile):
            path = resolve_path(self._root, source.path)
            log.debug("section.read", section=section.title, path=str(path))
            return read_asset(path, section=section.title)

        assert isinstance(source, Command)
        cwd = resolve_path(self._root, source.working_dir) if source.working_dir else self._root
        log.debug("command.run", section=section.title, command=source.describe(), cwd=str(cwd))
        return run_command(
            source.argv,
            cwd=cwd,
            timeout=source.timeout,
            section=section.title,
        )
