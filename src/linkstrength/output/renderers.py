"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from linkstrength.output.console import create_console, format_score, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from linkstrength.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Listings print one line per item (node id or pair label and score);
    single scores print just the number.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    data = result.data
    if result.op == "strength":
        return format_score(data["score"])
    if result.op == "walks":
        return str(data["count"])
    items = data.get("items")
    if isinstance(items, list) and items:
        lines = []
        for item in items:
            if "label" in item:
                lines.append(f"{item['label']}: {format_score(item['score'])}")
            else:
                lines.append(str(item.get("id", "")))
        return "\n".join(lines)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="ls.ok"), Text(f"  {result.op}", style="ls.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="ls.key")
    if isinstance(value, float):
        v = Text(format_score(value), style="ls.score")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the telemetry span tree (verbose only)."""
    telemetry = (result.meta or {}).get("telemetry")
    if not telemetry:
        return
    console.print()
    console.print(Text("  telemetry:", style="dim"))
    _render_span(console, telemetry, indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("elapsed_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}"
    notes = span.get("notes") or {}
    if notes:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in notes.items()) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    console.print(
        Text("ERROR", style="ls.error"),
        Text(f"  {result.op}", style="ls.op"),
        Text(f"  {err.message if err else 'Unknown error'}"),
    )
    if verbose and err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)


def _params_line(console: Console, params: dict[str, Any]) -> None:
    parts = [f"{k}={format_score(v) if isinstance(v, float) else v}" for k, v in params.items()]
    console.print(Text("  " + "  ".join(parts), style="ls.key"))


# ── Graph renderers ───────────────────────────────────────────────────


def _render_show(result: ServiceResult, console: Console) -> None:
    """One line per node: ``From: x, to: y  z``."""
    for item in result.data.get("items", []):
        targets = "  ".join(escape(s) for s in item.get("successors", []))
        console.print(f"From: [ls.node]{escape(item['id'])}[/ls.node], to: {targets}")
    console.print(
        f"\n{result.data.get('count', 0)} nodes, {result.data.get('edge_count', 0)} edges"
    )


def _render_successors(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    console.print(f"[ls.node]{escape(result.data.get('source_id', '?'))}[/ls.node] ->")
    for item in items:
        console.print(Text(f"  {item['id']}"))
    console.print(f"{result.data.get('count', len(items))} successors")


# ── Prediction renderers ──────────────────────────────────────────────


def _render_strength(result: ServiceResult, console: Console) -> None:
    d = result.data
    console.print(
        f"[ls.node]{escape(d['source'])}[/ls.node] -> [ls.node]{escape(d['target'])}[/ls.node]: "
        f"[ls.score]{format_score(d['score'])}[/ls.score]"
    )
    _field(console, "adjacency_term", float(d["adjacency_term"]))
    _field(console, "path_term", float(d["path_term"]))
    nonzero = {i: c for i, c in enumerate(d.get("walk_counts", []), start=1) if c}
    if nonzero:
        _field(console, "walks", ", ".join(f"L{i}={c}" for i, c in nonzero.items()))
    _params_line(console, d.get("params", {}))


def _render_walks(result: ServiceResult, console: Console) -> None:
    d = result.data
    console.print(
        f"{d['count']} walks of length {d['length']} from "
        f"[ls.node]{escape(d['source'])}[/ls.node] to [ls.node]{escape(d['target'])}[/ls.node]"
    )
    for walk in d.get("walks", []):
        console.print(Text("  " + " → ".join(walk)))
    if d.get("truncated"):
        console.print(Text("  …", style="dim"))


def _render_rank(result: ServiceResult, console: Console) -> None:
    d = result.data
    items = d.get("items", [])
    if not items:
        console.print("No predicted links above threshold.")
    else:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Source", style="ls.node")
        table.add_column("Target", style="ls.node")
        table.add_column("Score", justify="right", style="ls.score")
        for pos, item in enumerate(items, start=1):
            table.add_row(
                str(pos),
                Text(item["source"]),
                Text(item["target"]),
                format_score(item["score"]),
            )
        console.print(table)
    count = d.get("count", len(items))
    total = d.get("total", count)
    footer = f"{total} of {d.get('candidates', 0)} candidate pairs above threshold"
    if count < total:
        footer += f" (showing top {count})"
    console.print(footer)
    _params_line(console, d.get("params", {}))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "show": _render_show,
    "stats": _render_generic,
    "successors": _render_successors,
    "strength": _render_strength,
    "walks": _render_walks,
    "rank": _render_rank,
}
