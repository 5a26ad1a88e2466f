"""Filesystem operations — asset reads and atomic manifest writes.

INVARIANT: The destination is never observable half-written. Writes go
to a temporary file in the destination's own directory (same filesystem)
and are moved into place with :func:`os.replace`.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from licensectl.domain.errors import MissingAsset, WriteError

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
_DEFAULT_MODE = 0o644


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def resolve_path(root: Path, path: Path | str) -> Path:
    """Resolve *path* against *root* unless it is already absolute."""
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return root / candidate


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def read_asset(path: Path, *, section: str | None = None) -> str:
    """Read a static license file verbatim.

    Raises:
        MissingAsset: The file is absent, unreadable, or not valid UTF-8.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read {path}: {exc.strerror or exc}"
        raise MissingAsset(msg, section=section, path=str(path)) from exc

    try:
        return raw.decode(ENCODING)
    except UnicodeDecodeError as exc:
        msg = f"{path} is not valid UTF-8: {exc}"
        raise MissingAsset(msg, section=section, path=str(path)) from exc


def read_existing(path: Path) -> str | None:
    """Current text of *path*, or None if it does not exist."""
    try:
        return path.read_bytes().decode(ENCODING)
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Unreadable manifest %s: %s", path, exc)
        return None


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def atomic_write(path: Path, text: str) -> None:
    """Write *text* to *path* via temp file + rename.

    Creates parent directories if they don't exist. On any failure the
    temporary file is removed and *path* is left as it was.

    Raises:
        WriteError: Directory creation, write, or rename failed.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        out = tempfile.NamedTemporaryFile(
            "wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
    except OSError as exc:
        msg = f"Cannot create {path}: {exc.strerror or exc}"
        raise WriteError(msg, path=str(path)) from exc

    tmp_path = Path(out.name)
    try:
        with out:
            out.write(text.encode(ENCODING))
            out.flush()
            os.fsync(out.fileno())
        # mkstemp creates 0600; keep the existing file's mode or use 0644.
        mode = path.stat().st_mode & 0o777 if path.exists() else _DEFAULT_MODE
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except OSError as exc:
        msg = f"Cannot write {path}: {exc.strerror or exc}"
        raise WriteError(msg, path=str(path)) from exc
    finally:
        tmp_path.unlink(missing_ok=True)
