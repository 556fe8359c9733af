"""Record presentation for the CLI layer.

:class:`Presenter` satisfies :class:`~ahndn_client.core.protocols.RecordSink`:
the dispatcher hands it decoded faces and piers, and it renders them
as Rich tables — or as plain tab-separated lines when Rich is not
installed.

All display-related logic lives here — no socket access, no parsing.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ahndn_client.cli.console import console, err_console, rich_available
from ahndn_client.core.models import Face, Pier
from ahndn_client.exceptions import DecodeError

HELP_ENTRIES: tuple[tuple[str, str], ...] = (
    ("status [pier]", "status of pier (defaults to 0, i.e. local)"),
    ("face [pier] face_id", "face info for pier's face_id (pier defaults to 0)"),
    ("piers", "list known piers"),
    ("route name", "find and print info on the route name"),
    ("help", "this list"),
    ("quit / exit", "leave the prompt"),
)


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O themselves)
# ---------------------------------------------------------------------------

def _route_names(face: Face) -> str:
    return ", ".join(route.name for route in face.routes)


def _pair(incoming: int, outgoing: int) -> str:
    """Render an in/out counter pair as ``"in/out"``."""
    return f"{incoming}/{outgoing}"


_COUNTER_LABELS: tuple[str, ...] = ("interests", "bytes", "data", "nacks")


def _counter_rows(face: Face) -> tuple[tuple[str, str], ...]:
    pairs = (
        _pair(face.in_interests, face.out_interests),
        _pair(face.in_bytes, face.out_bytes),
        _pair(face.in_data, face.out_data),
        _pair(face.in_nacks, face.out_nacks),
    )
    return tuple(zip(_COUNTER_LABELS, pairs))


def _pier_address(pier: Pier) -> str:
    return f"{pier.ip}:{pier.port}"


def format_pier_line(pier: Pier) -> str:
    """One-line pier summary, ``LOCAL`` in place of the face id for pier 0."""
    if pier.is_local:
        return f"{pier.id}: {pier.prefix} LOCAL {_pier_address(pier)}"
    return f"{pier.id}: {pier.prefix} ({pier.face_id}) {_pier_address(pier)}"


def format_pier_header(pier: Pier) -> str:
    if pier.is_local:
        return f"pier: {pier.id} (LOCAL): {pier.prefix}@{pier.ip}"
    return f"pier: {pier.id}: {pier.prefix}@{pier.ip}"


def format_face_lines(face: Face, *, detailed: bool) -> list[str]:
    """Plain-text rendering of one face."""
    lines = [
        f"{face.id}\t{face.link_type}\t{face.face_scope}\t"
        f"{face.local_uri} to {face.remote_uri}",
        f"\tRoutes: {_route_names(face)}",
    ]
    if detailed:
        lines.extend(f"    {label:<9} {value}" for label, value in _counter_rows(face))
    return lines


def _escape(text: str) -> str:
    """Escape Rich markup in agent-supplied text."""
    from rich.markup import escape

    return escape(text)


def _import_rich_table() -> type[Any]:
    from rich.table import Table

    return Table


# ---------------------------------------------------------------------------
# Presenter
# ---------------------------------------------------------------------------

class Presenter:
    """Render dispatcher output to the terminal.

    Parameters
    ----------
    use_rich:
        Force Rich on or off.  ``None`` (default) uses Rich whenever it
        is importable.
    """

    def __init__(self, *, use_rich: bool | None = None) -> None:
        self._rich: bool = rich_available() if use_rich is None else use_rich

    # -- records ---------------------------------------------------------

    def faces(self, faces: Sequence[Face], *, detailed: bool) -> None:
        if not self._rich:
            for face in faces:
                for line in format_face_lines(face, detailed=detailed):
                    console.print_plain(line)
            return

        table = _import_rich_table()(
            show_header=True,
            header_style="bold magenta",
            border_style="dim",
        )
        table.add_column("Id", justify="right", style="bold")
        table.add_column("Link")
        table.add_column("Scope")
        table.add_column("Local → Remote")
        table.add_column("Routes")
        if detailed:
            for label in _COUNTER_LABELS:
                table.add_column(f"{label.capitalize()} in/out", justify="right")

        for face in faces:
            row = [
                str(face.id),
                str(face.link_type),
                str(face.face_scope),
                _escape(f"{face.local_uri} → {face.remote_uri}"),
                _escape(_route_names(face)),
            ]
            if detailed:
                row.extend(value for _, value in _counter_rows(face))
            table.add_row(*row)

        console.print(table)

    def piers(self, piers: Sequence[Pier]) -> None:
        if not self._rich:
            for pier in piers:
                console.print_plain(format_pier_line(pier))
            return

        table = _import_rich_table()(
            title="Piers",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Id", justify="right", style="bold")
        table.add_column("Prefix")
        table.add_column("Face", justify="right")
        table.add_column("Address")
        for pier in piers:
            table.add_row(
                str(pier.id),
                _escape(pier.prefix),
                "LOCAL" if pier.is_local else str(pier.face_id),
                _escape(_pier_address(pier)),
            )
        console.print(table)

    def pier_header(self, pier: Pier) -> None:
        if not self._rich:
            console.print_plain(format_pier_header(pier))
            return
        console.print(f"[bold cyan]{_escape(format_pier_header(pier))}[/bold cyan]")

    # -- failures --------------------------------------------------------

    def daemon_error(self, message: str, *, pier: Pier | None = None) -> None:
        where = f" (pier {pier.id})" if pier is not None else ""
        if not self._rich:
            err_console.print_plain(f"Agent error{where}: {message}")
            return
        err_console.print(f"[yellow]Agent error{where}:[/yellow] {_escape(message)}")

    def decode_error(self, error: DecodeError, *, pier: Pier | None = None) -> None:
        where = f" (pier {pier.id})" if pier is not None else ""
        if not self._rich:
            err_console.print_plain(f"Bad reply{where}: {error.detail}")
            return
        err_console.print(f"[red]Bad reply{where}:[/red] {_escape(error.detail)}")

    # -- static ----------------------------------------------------------

    def help(self) -> None:
        if not self._rich:
            console.print_plain("")
            console.print_plain("Available Commands")
            for usage, description in HELP_ENTRIES:
                console.print_plain(f"{usage:<20}: {description}")
            console.print_plain("")
            return

        table = _import_rich_table()(title="Available Commands", show_header=True)
        table.add_column("Command", style="cyan")
        table.add_column("Description")
        for usage, description in HELP_ENTRIES:
            table.add_row(_escape(usage), description)
        console.print(table)
