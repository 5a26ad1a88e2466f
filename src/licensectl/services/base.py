"""BaseService — shared foundation for licensectl services.

Every service receives the resolved working directory at construction
time. Services never consult the process CWD themselves.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

import structlog

from licensectl.domain.errors import AggregationError
from licensectl.services.result import ServiceError, ServiceResult

log = structlog.get_logger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class AggregateService(BaseService):
            def aggregate(self, ...) -> ServiceResult:
                try:
                    ...
                except AggregationError as exc:
                    return self._failure("generate", exc)
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    @staticmethod
    def _failure(
        op: str,
        exc: AggregationError,
        *,
        warnings: list[str] | None = None,
        started: float | None = None,
    ) -> ServiceResult:
        """Convert a raised AggregationError into a failed ServiceResult."""
        log.debug(f"{op}.failed", code=exc.code, error=exc.message, **_loggable(exc.detail))
        return ServiceResult(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=exc.code, message=exc.message, detail=exc.detail),
            meta=_timing(started),
        )

    @staticmethod
    def _success(
        op: str,
        data: dict[str, Any],
        *,
        warnings: list[str] | None = None,
        started: float | None = None,
    ) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=warnings or [],
            meta=_timing(started),
        )


def _timing(started: float | None) -> dict[str, Any] | None:
    if started is None:
        return None
    return {"duration_ms": round((time.perf_counter() - started) * 1000, 2)}


def _loggable(detail: dict[str, Any]) -> dict[str, Any]:
    # Stderr can be long; the ServiceResult keeps it in full.
    return {k: v for k, v in detail.items() if k != "stderr"}
