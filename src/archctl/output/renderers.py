"""Rich renderers for ServiceResult, one per operation.

Renderers register themselves with :func:`_renders` under the ``op`` they
handle.  :func:`render_result` looks the op up and falls back to a plain
key/value listing for ops nobody registered.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from archctl.output.console import create_console, get_output, style_for_layer

if TYPE_CHECKING:
    from rich.console import Console

    from archctl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console", bool], None]

_RENDERERS: dict[str, Renderer] = {}

_QUIET_KEYS = {
    "plan": ("steps", "responsibility"),
    "classify": ("categories", "layer"),
}

SLOW_SPAN_MS = 100


def _renders(*ops: str) -> Callable[[Renderer], Renderer]:
    def register(fn: Renderer) -> Renderer:
        for op in ops:
            _RENDERERS[op] = fn
        return fn

    return register


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as styled text; verbose adds meta and telemetry."""
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose)
    else:
        _RENDERERS.get(result.op, _render_generic)(result, console, verbose)
        if verbose and result.meta:
            _render_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One name per line, for shell pipelines."""
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {message}"

    collection, key = _QUIET_KEYS.get(result.op, ("items", "name"))
    rows = result.data.get(collection)
    if result.op in _QUIET_KEYS:
        rows = rows or []
    elif not rows or not isinstance(rows, list):
        return f"OK: {result.op}"
    return "\n".join(str(row.get(key, "")) for row in rows if isinstance(row, dict))


def _table(*columns: str | tuple[str, dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for column in columns:
        if isinstance(column, tuple):
            header, options = column
            table.add_column(header, **options)
        else:
            table.add_column(column)
    return table


def _joined(values: Any) -> str:
    return ", ".join(str(v) for v in values or [])


def _layer_text(layer: str) -> Text:
    return Text(layer, style=style_for_layer(layer))


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="arch.ok"), Text(f"  {result.op}", style="arch.op"))


def _field(console: Console, key: str, value: Any) -> None:
    text = str(value)
    if key == "name":
        shown = Text(text, style="arch.name")
    elif key == "layer":
        shown = _layer_text(text)
    elif key == "title":
        shown = Text(text, style="arch.title")
    elif isinstance(value, list):
        shown = Text(_joined(value))
    else:
        shown = Text(text)
    console.print(Text(f"  {key}: ", style="arch.key"), shown, sep="")


def _render_meta(console: Console, meta: dict[str, Any]) -> None:
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in meta.items():
        if key == "telemetry":
            _render_span(console, value, depth=1)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], depth: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > SLOW_SPAN_MS else "dim"
    line = f"{'    ' * depth}[{style}]{duration:>8.2f}ms[/{style}]  {span.get('name', '?')}"
    notes = span.get("annotations")
    if notes:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in notes.items()) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, depth + 1)


def _render_error(result: ServiceResult, console: Console, verbose: bool) -> None:
    error = result.error
    console.print(
        Text("ERROR", style="arch.error"),
        Text(f"  {result.op}", style="arch.op"),
        Text(" — "),
        error.message if error else "Unknown error",
    )
    if error is None:
        return
    detail = error.detail
    if error.code == "NO_MATCH" and detail.get("layers"):
        console.print(f"  known layers: {_joined(detail['layers'])}")
    if error.code in {"UNKNOWN_RESPONSIBILITY", "NOT_FOUND"} and detail.get("known"):
        console.print(f"  known: {_joined(detail['known'])}")
    if verbose and detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in detail.items():
            console.print(f"    {key}: {value}")


@_renders("plan")
def _render_plan(result: ServiceResult, console: Console, verbose: bool) -> None:
    data = result.data
    if data.get("markdown"):
        console.print(Markdown(data["markdown"]))
        return

    _status_line(console, result)
    _field(console, "request", data.get("request", ""))
    _field(console, "mode", data.get("mode", ""))
    console.print()

    columns: list[str | tuple[str, dict[str, Any]]] = [
        ("#", {"justify": "right", "style": "dim"}),
        ("Responsibility", {"style": "arch.name", "no_wrap": True}),
        "Layer",
        "Skills",
        "Rationale",
    ]
    if verbose:
        columns.append(("After", {"style": "dim"}))
    table = _table(*columns)

    steps = data.get("steps", [])
    for step in steps:
        layer = _layer_text(step["layer"])
        if step.get("independent"):
            layer.append(" (independent)", style="dim")
        cells: list[Any] = [
            str(step["position"]),
            step["responsibility"],
            layer,
            _joined(step.get("skills")),
            step.get("rationale", ""),
        ]
        if verbose:
            cells.append(_joined(step.get("depends_on")))
        table.add_row(*cells)
    console.print(table)

    if verbose:
        console.print()
        for step in steps:
            console.print(f"  {step['position']}. {step['invocation']}")


@_renders("classify")
def _render_classify(result: ServiceResult, console: Console, verbose: bool) -> None:
    _status_line(console, result)
    _field(console, "request", result.data.get("request", ""))
    console.print()
    table = _table("Layer", "Triggers", ("Rules", {"style": "dim"}))
    for category in result.data.get("categories", []):
        table.add_row(
            _layer_text(category["layer"]),
            _joined(category["triggers"]),
            _joined(category["rules"]),
        )
    console.print(table)


@_renders("list_responsibilities")
def _render_responsibilities(result: ServiceResult, console: Console, verbose: bool) -> None:
    name_column = ("Name", {"style": "arch.name", "no_wrap": True})
    if verbose:
        table = _table(name_column, "Layer", "Description", ("Skills", {"style": "dim"}))
    else:
        table = _table(name_column, "Layer", "Description")
    for item in result.data.get("items", []):
        cells: list[Any] = [item["name"], _layer_text(item["layer"]), item["description"]]
        if verbose:
            cells.append(_joined(item.get("skills")))
        table.add_row(*cells)
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} responsibilities")


@_renders("get_responsibility")
def _render_responsibility(result: ServiceResult, console: Console, verbose: bool) -> None:
    data = result.data
    body = [f"layer: {data.get('layer', '')}", "", data.get("description", "")]
    if data.get("skills"):
        body += ["", "skills:"]
        body += [f"  {s['name']} — {s['title']}" for s in data["skills"]]
    if data.get("rules"):
        body += ["", "triggers:"]
        body += [f"  {r['name']}: {_joined(r['triggers'])}" for r in data["rules"]]
    border = style_for_layer(str(data.get("layer", ""))) or "dim"
    console.print(
        Panel("\n".join(body), title=data.get("name", "?"), border_style=border, expand=False)
    )


@_renders("list_skills")
def _render_skills(result: ServiceResult, console: Console, verbose: bool) -> None:
    columns: list[str | tuple[str, dict[str, Any]]] = [
        ("Name", {"style": "arch.name", "no_wrap": True}),
        ("Title", {"style": "arch.title"}),
        "Used by",
    ]
    if verbose:
        columns.append(("Summary", {"style": "dim"}))
    table = _table(*columns)
    for item in result.data.get("items", []):
        cells = [item["name"], item["title"], _joined(item.get("responsibilities"))]
        if verbose:
            cells.append(item.get("summary", ""))
        table.add_row(*cells)
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} skills")


@_renders("get_skill")
def _render_skill(result: ServiceResult, console: Console, verbose: bool) -> None:
    data = result.data
    header = [f"used by: {_joined(data.get('responsibilities')) or '—'}"]
    if data.get("summary"):
        header.append(data["summary"])
    title = f"{data.get('name', '?')} — {data.get('title', '')}"
    console.print(Panel("\n".join(header), title=title, border_style="dim", expand=False))
    if data.get("body"):
        console.print(Markdown(data["body"]))


@_renders("check")
def _render_check(result: ServiceResult, console: Console, verbose: bool) -> None:
    _status_line(console, result)
    issues = result.data.get("issues", [])
    if not issues:
        console.print("  catalog is healthy")
        return
    for issue in issues:
        tag = "arch.error" if issue["severity"] == "error" else "arch.warning"
        console.print(
            f"  [{tag}]{issue['severity']}[/{tag}] {issue['category']} "
            f"[arch.name]{issue['subject']}[/arch.name]: {issue['message']}"
        )
    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", 0)
    console.print(f"\n{errors} errors, {warnings} warnings")


@_renders("init_project")
def _render_init(result: ServiceResult, console: Console, verbose: bool) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    for path in result.data.get("created", []):
        console.print(f"  [arch.ok]created[/arch.ok] {path}")


def _render_generic(result: ServiceResult, console: Console, verbose: bool) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
