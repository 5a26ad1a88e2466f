"""Aggregation error taxonomy.

Every failure is terminal: nothing is retried or downgraded to a warning.
Each exception carries a stable ``code`` which the service layer copies
into ``ServiceError.code``, plus a ``detail`` dict for diagnostics.
"""

from __future__ import annotations

from typing import Any


class AggregationError(Exception):
    """Base class for all manifest aggregation failures."""

    code = "AGGREGATION_FAILED"

    def __init__(self, message: str, *, section: str | None = None, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.section = section
        self.detail: dict[str, Any] = dict(detail)
        if section is not None:
            self.detail["section"] = section


class ConfigurationError(AggregationError):
    """The aggregation was asked to run with an unusable configuration."""

    code = "INVALID_CONFIG"


class MissingAsset(AggregationError):
    """A static file section does not exist or cannot be read."""

    code = "MISSING_ASSET"


class ExternalToolFailure(AggregationError):
    """A command failed to launch, exited non-zero, or timed out."""

    code = "EXTERNAL_TOOL_FAILURE"


class WriteError(AggregationError):
    """The destination could not be created, written, or renamed into place."""

    code = "WRITE_ERROR"


class VersionMismatch(AggregationError):
    """Preflight found (or left) the wrong external tool version."""

    code = "VERSION_MISMATCH"
