"""PreflightService — pin the external license scanner's version.

Pipeline: PROBE → (INSTALL → REPROBE) → REPORT

Runs separately from aggregation; the CLI decides whether to compose
the two. Aggregation itself never installs anything.
"""

from __future__ import annotations

import time
from pathlib import Path

import structlog

from licensectl.config.models import PreflightConfig
from licensectl.domain.errors import AggregationError, ExternalToolFailure, VersionMismatch
from licensectl.infrastructure.process import run_command
from licensectl.services.base import BaseService
from licensectl.services.result import ServiceResult

log = structlog.get_logger(__name__)


def version_matches(output: str, required: str) -> bool:
    """True when any token of *output* is *required* (``v`` prefix optional).

    Examples:
        >>> version_matches("cargo-about 0.6.1", "0.6.1")
        True
        >>> version_matches("cargo-about v0.6.1\\n", "0.6.1")
        True
        >>> version_matches("cargo-about 0.6.10", "0.6.1")
        False
    """
    wanted = required.removeprefix("v")
    return any(token.removeprefix("v") == wanted for token in output.split())


class PreflightService(BaseService):
    """Checks the scanner version and installs the pinned one if needed."""

    def __init__(self, root: Path, config: PreflightConfig) -> None:
        super().__init__(root)
        self._config = config

    def check(self, *, install: bool = True) -> ServiceResult:
        """PROBE → (INSTALL → REPROBE) → REPORT."""
        op = "preflight"
        started = time.perf_counter()
        cfg = self._config
        data: dict[str, object] = {"tool": cfg.tool, "required": cfg.version}

        found = self._probe()
        if found is not None and version_matches(found, cfg.version):
            log.debug("preflight.ok", tool=cfg.tool, version=cfg.version)
            return self._success(op, {**data, "found": found, "installed": False}, started=started)

        try:
            if not install:
                raise self._mismatch(found)

            log.warning("preflight.installing", tool=cfg.tool, version=cfg.version, found=found)
            run_command(
                cfg.resolved_install_command(),
                cwd=self._root,
                timeout=cfg.timeout,
                section=cfg.tool,
            )

            found = self._probe()
            if found is None or not version_matches(found, cfg.version):
                raise self._mismatch(found)
        except AggregationError as exc:
            return self._failure(op, exc, started=started)

        return self._success(
            op,
            {**data, "found": found, "installed": True},
            warnings=[f"Installed {cfg.tool} {cfg.version}"],
            started=started,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _probe(self) -> str | None:
        """Stdout of the version command, or None if it cannot run."""
        try:
            output = run_command(
                self._config.version_command,
                cwd=self._root,
                timeout=self._config.timeout,
                section=self._config.tool,
            )
        except ExternalToolFailure as exc:
            log.debug("preflight.probe_failed", tool=self._config.tool, error=exc.message)
            return None
        return output.strip()

    def _mismatch(self, found: str | None) -> VersionMismatch:
        cfg = self._config
        seen = found or "not installed"
        msg = f"{cfg.tool} {cfg.version} required, found: {seen}"
        return VersionMismatch(msg, tool=cfg.tool, required=cfg.version, found=found)
