"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from licensectl.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from licensectl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    destination = result.data.get("destination")
    if destination:
        return str(destination)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "lic.ok"), (f"  {result.op}", "lic.op")))


def _field(console: Console, key: str, value: Any) -> None:
    style = "lic.path" if key in ("destination", "path") else ""
    console.print(Text.assemble((f"  {key}: ", "lic.key"), (str(value), style)))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _section_table(sections: list[dict[str, Any]], *, show_size: bool) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="lic.title")
    table.add_column("Kind")
    table.add_column("Source", style="lic.path")
    if show_size:
        table.add_column("Bytes", justify="right")

    for index, section in enumerate(sections, start=1):
        kind = str(section.get("kind", ""))
        row = [
            str(index),
            Text(str(section.get("title", ""))),
            Text(kind, style=style_for_kind(kind)),
            Text(str(section.get("source", ""))),
        ]
        if show_size:
            row.append(str(section.get("bytes", "")))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "lic.error"), (f"  {result.op}", "lic.op"), " — ", msg))

    if err is None:
        return
    section = err.detail.get("section")
    if section:
        _field(console, "section", section)
    _field(console, "code", err.code)
    stderr = err.detail.get("stderr")
    if verbose:
        for k, v in err.detail.items():
            if k not in ("section", "stderr"):
                _field(console, k, v)
    if stderr:
        console.print(Text("  stderr:", style="lic.key"))
        lines = stderr.splitlines()
        for line in lines if verbose else lines[-5:]:
            console.print(f"    {line}", markup=False)


# ── Operation renderers ───────────────────────────────────────────────


def _render_generate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render generate/check results: destination, sizes, per-section table."""
    _status_line(console, result)
    for key in ("destination", "bytes", "substitutions", "up_to_date"):
        if key in result.data:
            _field(console, key, result.data[key])
    sections = result.data.get("sections") or []
    if sections:
        console.print(_section_table(sections, show_size=True))
    if verbose:
        _render_meta(console, result)


def _render_preflight(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("tool", "required", "found", "installed"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_sections(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "count", result.data.get("count", 0))
    sections = result.data.get("sections") or []
    if sections:
        console.print(_section_table(sections, show_size=False))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS = {
    "generate": _render_generate,
    "check": _render_generate,
    "preflight": _render_preflight,
    "sections": _render_sections,
}
