"""Section and substitution rule value types.

Pure data, no I/O. A manifest is described by an ordered sequence of
:class:`Section` objects and an ordered sequence of :class:`SubstitutionRule`
objects; order is significant for both.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class SourceKind(StrEnum):
    """Where a section's content comes from."""

    STATIC_FILE = "static_file"
    COMMAND = "command"


@dataclass(frozen=True)
class StaticFile:
    """Content read verbatim from a file."""

    path: Path

    @property
    def kind(self) -> SourceKind:
        return SourceKind.STATIC_FILE

    def describe(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class Command:
    """Content captured from an external process's stdout."""

    executable: str
    args: tuple[str, ...] = ()
    working_dir: Path | None = None
    timeout: float | None = None  # seconds; None waits forever

    @property
    def kind(self) -> SourceKind:
        return SourceKind.COMMAND

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def describe(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class Section:
    """One titled unit of manifest content."""

    title: str
    source: StaticFile | Command


@dataclass(frozen=True)
class SubstitutionRule:
    """Literal (non-regex) find/replace applied over the whole manifest."""

    pattern: str
    replacement: str

    def apply(self, text: str) -> tuple[str, int]:
        """Replace every non-overlapping occurrence, left to right.

        Returns ``(new_text, occurrences_replaced)``.
        """
        if not self.pattern:
            return text, 0
        count = text.count(self.pattern)
        if count == 0:
            return text, 0
        return text.replace(self.pattern, self.replacement), count


# The license scanner's template renderer HTML-escapes its output.
HTML_ENTITY_RULES: tuple[SubstitutionRule, ...] = (
    SubstitutionRule("&quot;", '"'),
    SubstitutionRule("&#x27;", "'"),
    SubstitutionRule("&#x3D;", "="),
    SubstitutionRule("&#x60;", "`"),
    SubstitutionRule("&lt;", "<"),
    SubstitutionRule("&gt;", ">"),
)


@dataclass(frozen=True)
class SectionReport:
    """What one section contributed to a rendered manifest."""

    title: str
    kind: SourceKind
    source: str
    size: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "kind": str(self.kind),
            "source": self.source,
            "bytes": self.size,
        }
