"""Subprocess execution for command sections and preflight.

Every failure mode (binary missing, non-zero exit, timeout, undecodable
stdout) surfaces as :class:`ExternalToolFailure` with the captured stderr
attached, so callers never have to know about :mod:`subprocess`.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from licensectl.domain.errors import ExternalToolFailure

logger = logging.getLogger(__name__)

# Stderr kept in error details; scanners can be very chatty.
_STDERR_LIMIT = 4000


def _decode_stderr(raw: bytes | None) -> str:
    if not raw:
        return ""
    text = raw.decode("utf-8", errors="replace").strip()
    if len(text) > _STDERR_LIMIT:
        text = "..." + text[-_STDERR_LIMIT:]
    return text


def run_command(
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    timeout: float | None = None,
    section: str | None = None,
) -> str:
    """Run *argv* and return its stdout decoded as UTF-8.

    Raises:
        ExternalToolFailure: Launch failure, non-zero exit, timeout,
            or stdout that is not valid UTF-8.
    """
    command = " ".join(argv)
    logger.debug("Running %s (cwd=%s)", command, cwd)
    try:
        proc = subprocess.run(
            list(argv),
            cwd=cwd,
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        msg = f"{command!r} timed out after {timeout}s"
        raise ExternalToolFailure(
            msg, section=section, command=command, stderr=_decode_stderr(exc.stderr)
        ) from exc
    except OSError as exc:
        msg = f"Cannot launch {command!r}: {exc.strerror or exc}"
        raise ExternalToolFailure(msg, section=section, command=command) from exc

    stderr = _decode_stderr(proc.stderr)
    if proc.returncode != 0:
        msg = f"{command!r} exited with status {proc.returncode}"
        if stderr:
            msg = f"{msg}: {stderr.splitlines()[-1]}"
        raise ExternalToolFailure(
            msg,
            section=section,
            command=command,
            returncode=proc.returncode,
            stderr=stderr,
        )

    try:
        return proc.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"{command!r} wrote non UTF-8 output: {exc}"
        raise ExternalToolFailure(msg, section=section, command=command, stderr=stderr) from exc
