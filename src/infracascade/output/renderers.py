"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from infracascade.output.console import create_console, get_output, style_for_impact

if TYPE_CHECKING:
    from rich.console import Console

    from infracascade.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Cascades print affected country codes, one per line; alerts print
    their priority.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "cascade":
        return "\n".join(c["country"] for c in result.data.get("countries_affected", []))
    if result.op == "cascade_alert":
        alert = result.data.get("alert")
        return alert["priority"] if alert else "none"

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="ic.ok")
    op = Text(f"  {result.op}", style="ic.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ic.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="ic.id")
    elif key == "name":
        v = Text(str(value), style="ic.name")
    else:
        v = Text(str(value))
    console.print(k, v)


def _impact(level: str) -> Text:
    return Text(level, style=style_for_impact(level))


def _percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ic.error")
    op = Text(f"  {result.op}", style="ic.op")
    console.print(label, op, Text(": "), msg)

    if err and err.code:
        console.print(Text(f"  code: {err.code}", style="dim"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Cascade renderers ─────────────────────────────────────────────────


def _render_cascade(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a cascade: country table, then affected nodes and alternatives."""
    d = result.data
    source = d.get("source", {})
    console.print(
        Text("Cascade from ", style="ic.key"),
        Text(str(source.get("name", "?")), style="ic.name"),
        Text(f" ({source.get('id', '?')})", style="ic.id"),
        Text(f"  disruption {_percent(d.get('disruption_level', 1.0))}", style="ic.key"),
    )

    countries = d.get("countries_affected", [])
    total = d.get("country_count", len(countries))
    if not countries:
        console.print("No countries affected.")
    else:
        title = f"Countries affected ({len(countries)} of {total})"
        table = Table(title=title, show_header=True, pad_edge=False, expand=False)
        table.add_column("Code", style="ic.id", no_wrap=True)
        table.add_column("Country", style="ic.name")
        table.add_column("Impact")
        table.add_column("Capacity", style="ic.value", justify="right")
        for c in countries:
            table.add_row(
                c["country"],
                c["country_name"],
                _impact(c["impact_level"]),
                _percent(c["affected_capacity"]),
            )
        console.print(table)

    nodes = d.get("affected_nodes", [])
    if verbose and nodes:
        table = Table(title="Affected nodes", show_header=True, pad_edge=False, expand=False)
        table.add_column("Node", style="ic.id", no_wrap=True)
        table.add_column("Impact")
        table.add_column("Strength", style="ic.value", justify="right")
        table.add_column("Hops", justify="right")
        table.add_column("Chain", style="dim")
        for n in nodes:
            table.add_row(
                n["node"]["id"],
                _impact(n["impact_level"]),
                f"{n['impact_strength']:.3f}",
                str(n["path_length"]),
                " → ".join(n["dependency_chain"]),
            )
        console.print(table)
    else:
        _field(console, "affected_nodes", len(nodes))

    redundancies = d.get("redundancies", [])
    if redundancies:
        console.print(Text("Alternative routes:", style="ic.key"))
        for r in redundancies:
            console.print(
                f"  [ic.id]{r['id']}[/ic.id]  {r['name']}  "
                f"[ic.value]{_percent(r['capacity_share'])}[/ic.value]"
            )


def _render_cascade_alert(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    alert = result.data.get("alert")
    if alert is None:
        console.print(f"No alert: {result.data.get('source_id', '?')} affects no countries.")
        return

    lines = [
        f"priority: {alert['priority']}",
        f"highest impact: {alert['highest_impact']}",
        f"countries: {alert['countries_affected']} ({', '.join(alert['countries'])})",
    ]
    location = alert.get("location")
    if location:
        lines.append(f"location: {location['lat']:.2f}, {location['lon']:.2f}")
    title = f"{alert['source_name']} ({alert['source_type']})"
    console.print(
        Panel(
            "\n".join(lines),
            title=title,
            border_style=style_for_impact(alert["priority"]) or "dim",
            expand=False,
        )
    )


# ── Graph renderers ───────────────────────────────────────────────────


def _render_graph_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Kind")
    table.add_column("Count", style="ic.value", justify="right")
    for key in ("nodes", "edges", "cables", "pipelines", "ports", "chokepoints", "countries"):
        table.add_row(key, str(d.get(key, 0)))
    console.print(table)
    if verbose:
        _field(console, "acyclic", d.get("acyclic"))
        _field(console, "builds", d.get("builds"))


def _edge_line(edge: dict[str, Any], *, peer_key: str) -> str:
    return (
        f"  [ic.id]{edge[peer_key]}[/ic.id]  {edge['type']}  "
        f"strength={edge['strength']:.2f} redundancy={edge['redundancy']:.2f}"
    )


def _render_node(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    node = d.get("node", {})
    lines = [f"type: {node.get('type')}"]
    coords = node.get("coordinates")
    if coords:
        lines.append(f"coordinates: {coords[1]:.3f}, {coords[0]:.3f}")
    for k, v in (node.get("metadata") or {}).items():
        lines.append(f"{k}: {v}")
    lines.append(f"reachable within {d.get('depth')} hops: {d.get('reachable', 0)}")
    console.print(
        Panel("\n".join(lines), title=f"{node.get('id')}: {node.get('name')}", expand=False)
    )

    outgoing = d.get("outgoing", [])
    incoming = d.get("incoming", [])
    if outgoing:
        console.print(Text(f"Dependents ({len(outgoing)}):", style="ic.key"))
        for e in outgoing:
            console.print(_edge_line(e, peer_key="target"))
    if incoming:
        console.print(Text(f"Depends on ({len(incoming)}):", style="ic.key"))
        for e in incoming:
            console.print(_edge_line(e, peer_key="source"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "cascade": _render_cascade,
    "cascade_alert": _render_cascade_alert,
    "graph_stats": _render_graph_stats,
    "node": _render_node,
}
