"""Human-readable rendering of ServiceResult, one renderer per operation.

Renderers draw on a StringIO-backed console from :mod:`slnctl.output.console`;
:func:`render_result` picks one by ``result.op`` and returns the text.
Operations without a dedicated renderer get a key/value dump.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from slnctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from slnctl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console", bool], None]


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* for a terminal.

    The text carries no ANSI codes unless a real terminal is attached, so it
    is safe to compare in tests and to pipe.
    """
    console = create_console()
    if result.ok:
        _RENDERERS.get(result.op, _render_fields)(result, console, verbose)
    else:
        _render_failure(result, console, verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One affected project path per line; failures as a single line."""
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {message}"

    data = result.data
    if result.op == "add_projects":
        paths = [item["path"] for item in data.get("added", [])]
    elif result.op == "remove_projects":
        paths = list(data.get("removed", []))
    elif result.op == "list_projects":
        paths = [item["path"] for item in data.get("items", [])]
    else:
        return f"OK: {result.op}"
    return "\n".join(paths)


# --- building blocks ---


def _headline(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "sln.ok"), ("  " + result.op, "sln.op")))


def _key_value(console: Console, key: str, value: Any, *, style: str = "") -> None:
    console.print(Text.assemble((f"  {key}: ", "sln.key"), (str(value), style)))


def _line(
    console: Console, label: str, label_style: str, path: str, *, tail: Text | None = None
) -> None:
    text = Text.assemble((f"  {label} ", label_style), (path, "sln.path"))
    if tail is not None:
        text.append(" -> ")
        text.append_text(tail)
    console.print(text)


def _chain(folders: list[str]) -> Text:
    if not folders:
        return Text("(root)", style="dim")
    return Text(" / ".join(folders), style="sln.folder")


def _unchanged_note(console: Console, data: dict[str, Any]) -> None:
    if not data.get("changed"):
        console.print(Text("  solution unchanged", style="dim"))


def _meta(console: Console, result: ServiceResult) -> None:
    if result.meta:
        console.print(Text("\n  meta:", style="dim"))
        for key, value in result.meta.items():
            console.print(Text(f"    {key}: {value}"))


# --- failures ---


def _render_failure(result: ServiceResult, console: Console, verbose: bool) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "sln.error"), ("  " + result.op, "sln.op"), f": {message}")
    )
    if error is None:
        return
    # Misplaced solution argument: offer the corrected command line.
    if "suggestion" in error.detail:
        console.print(Text("  Did you mean:", style="sln.hint"))
        console.print(Text(f"    {error.detail['suggestion']}"))
    if verbose and error.detail:
        console.print(Text(f"  detail: code={error.code}", style="dim"))
        for key, value in error.detail.items():
            console.print(Text(f"    {key}: {value}"))


# --- membership operations ---


def _render_add(result: ServiceResult, console: Console, verbose: bool) -> None:
    data = result.data
    _headline(console, result)
    _key_value(console, "solution", data.get("solution", ""), style="sln.path")
    for item in data.get("added", []):
        _line(console, "added", "sln.ok", item["path"], tail=_chain(item.get("folders", [])))
    for path in data.get("skipped", []):
        _line(console, "already present", "sln.skipped", path)
    _unchanged_note(console, data)
    if verbose:
        _meta(console, result)


def _render_remove(result: ServiceResult, console: Console, verbose: bool) -> None:
    data = result.data
    _headline(console, result)
    _key_value(console, "solution", data.get("solution", ""), style="sln.path")
    for path in data.get("removed", []):
        _line(console, "removed", "sln.ok", path)
    for path in data.get("not_found", []):
        _line(console, "not in solution", "sln.skipped", path)
    if data.get("folders_removed"):
        _key_value(console, "folders_removed", data["folders_removed"])
    if verbose and data.get("configurations_removed"):
        _key_value(console, "configurations_removed", data["configurations_removed"])
    _unchanged_note(console, data)
    if verbose:
        _meta(console, result)


def _render_list(result: ServiceResult, console: Console, verbose: bool) -> None:
    items = result.data.get("items", [])
    table = Table(pad_edge=False)
    table.add_column("Project", style="sln.path", no_wrap=True)
    table.add_column("Folder")
    if verbose:
        table.add_column("Name", style="dim")
    for item in items:
        cells: list[str | Text] = [item["path"], _chain(item.get("folders", []))]
        if verbose:
            cells.append(item.get("name", ""))
        table.add_row(*cells)
    console.print(table)
    console.print(Text(f"\n{result.data.get('count', len(items))} projects"))


def _render_fields(result: ServiceResult, console: Console, verbose: bool) -> None:
    _headline(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _key_value(console, key, value)
    if verbose:
        _meta(console, result)


_RENDERERS: dict[str, Renderer] = {
    "add_projects": _render_add,
    "remove_projects": _render_remove,
    "list_projects": _render_list,
}
