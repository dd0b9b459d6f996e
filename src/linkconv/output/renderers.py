"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops
fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from linkconv.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from linkconv.services.result import ServiceResult


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
    """Render minimal output for ``--quiet`` mode: one path or link per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op in ("convert", "reformat"):
        return "\n".join(f["path"] for f in result.data.get("files", []))
    if result.op == "links":
        return "\n".join(item["match"] for item in result.data.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="lc.ok")
    op = Text(f"  {result.op}", style="lc.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="lc.key")
    if key in ("path", "source"):
        v = Text(str(value), style="lc.path")
    elif isinstance(value, int) and not isinstance(value, bool):
        v = Text(str(value), style="lc.count")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="lc.error"), Text(f"  {result.op}", style="lc.op"), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_rewrite(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render convert/reformat batch results."""
    data = result.data
    _status_line(console, result)
    for key in ("destination", "format", "documents", "changed", "unchanged", "links"):
        if key in data:
            _field(console, key, data[key])
    if data.get("dry_run"):
        console.print(Text("  dry run: no files were written", style="lc.dry"))

    files = data.get("files", [])
    if files:
        table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
        table.add_column("Document", style="lc.path")
        table.add_column("Links", justify="right", style="lc.count")
        for entry in files:
            table.add_row(Text(entry["path"]), str(entry["links"]))
        console.print()
        console.print(table)

    skipped = data.get("skipped", [])
    if skipped:
        console.print()
        console.print(Text(f"  skipped: {len(skipped)}", style="lc.warning"))
        if verbose:
            for entry in skipped:
                console.print(Text(f"    {entry['path']} ({entry['reason']})"))


def _render_links(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the link listing of one document."""
    data = result.data
    _status_line(console, result)
    _field(console, "path", data["path"])
    _field(console, "count", data["count"])

    items = data.get("items", [])
    if not items:
        return
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Kind")
    table.add_column("Link")
    table.add_column("Resolves to", style="lc.path")
    if verbose:
        table.add_column("Span", justify="right")
    for item in items:
        row = [
            Text(item["kind"], style=style_for_kind(item["kind"])),
            Text(item["match"]),
            Text(item["resolved"]) if item["resolved"] else Text("(unresolved)", style="dim"),
        ]
        if verbose:
            row.append(f"{item['start']}-{item['end']}")
        table.add_row(*row)
    console.print()
    console.print(table)


_OP_RENDERERS: dict[str, Any] = {
    "convert": _render_rewrite,
    "reformat": _render_rewrite,
    "links": _render_links,
}
