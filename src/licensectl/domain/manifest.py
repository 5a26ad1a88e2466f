"""Manifest rendering — pure text assembly and the substitution pass.

Layout per section::

    # <title>
    <blank>
    <content, newline-terminated>
    <blank>

Sections are joined in input order; substitution rules run afterwards
over the whole buffer.
"""

from __future__ import annotations

from collections.abc import Iterable

from licensectl.domain.sections import SubstitutionRule

HEADER_PREFIX = "# "


def render_header(title: str) -> str:
    """``# <title>`` followed by a blank line."""
    return f"{HEADER_PREFIX}{title}\n\n"


def render_section(title: str, content: str) -> str:
    """Render one section block.

    Content is copied through unmodified except that a final newline is
    added when it has none, so every block ends with exactly one blank line.

    Examples:
        >>> render_section("ICONS", "Apache")
        '# ICONS\\n\\nApache\\n\\n'
        >>> render_section("ICONS", "Apache\\n")
        '# ICONS\\n\\nApache\\n\\n'
    """
    body = content if content.endswith("\n") or not content else content + "\n"
    return render_header(title) + body + "\n"


def apply_substitutions(text: str, rules: Iterable[SubstitutionRule]) -> tuple[str, int]:
    """Apply *rules* in order over *text*.

    Returns ``(substituted_text, total_replacements)``.
    """
    total = 0
    for rule in rules:
        text, count = rule.apply(text)
        total += count
    return text, total
