"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from rescli.output.console import create_console, get_output, style_for_type

if TYPE_CHECKING:
    from rich.console import Console

    from rescli.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    if result.ok and result.op in _VERBATIM_FIELDS:
        # Runtime tables contain tabs; Rich would expand them.
        return str(result.data.get(_VERBATIM_FIELDS[result.op], "")).rstrip("\n")

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
        return f"ERROR: {result.op}: {msg}"
    for key in ("container_name", "user", "instance_id"):
        value = result.data.get(key)
        if value:
            return str(value)
    if result.op == "instance_list":
        return str(result.data.get("output", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="res.ok")
    op = Text(f" {result.op}", style="res.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="res.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="res.id")
    elif key == "container_name":
        v = Text(str(value), style="res.name")
    elif key == "type":
        v = Text(str(value), style=style_for_type(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_message(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Auth ops: the backend-facing message is the whole story."""
    console.print(Text(str(result.data.get("message", f"OK: {result.op}"))))
    if verbose:
        for key, value in result.data.items():
            if key != "message":
                _field(console, key, value)


def _render_create(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    kind = str(result.data.get("type", ""))
    line = Text()
    line.append(kind, style=style_for_type(kind))
    line.append(" instance created successfully with container name: ")
    line.append(str(result.data.get("container_name", "")), style="res.name")
    console.print(line)
    if verbose:
        for key in ("container_id", "image"):
            if result.data.get(key):
                _field(console, key, result.data[key])


def _render_delete(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    console.print(Text("Instance deleted successfully."))
    if verbose:
        _field(console, "instance_id", result.data.get("instance_id", ""))


def _render_exec(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    if verbose:
        _render_generic(result, console)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    label = Text("ERROR", style="res.error")
    op = Text(f" {result.op}", style="res.op")
    console.print(label, op, end="")
    console.print()
    if result.error is None:
        console.print("  Unknown error")
        return
    console.print(Text(f"  {result.error.message}"))
    if verbose:
        console.print(Text(f"  code: {result.error.code}", style="res.key"))
        for key, value in result.error.detail.items():
            _field(console, key, value)


# Ops whose payload is printed exactly as the collaborator returned it.
_VERBATIM_FIELDS: dict[str, str] = {
    "instance_list": "output",
    "health_check": "body",
}

_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "login": _render_message,
    "sign_up": _render_message,
    "logout": _render_message,
    "whoami": _render_message,
    "instance_create": _render_create,
    "instance_delete": _render_delete,
    "instance_exec": _render_exec,
}
