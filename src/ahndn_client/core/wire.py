"""Mapping from parsed commands to agent wire lines.

The agent's line protocol has changed over time.  Older agents answer
``status`` for the local node and ``pier-status <id>`` for a remote
one; current agents accept ``status <id>`` for both.  Face details
are never a separate wire command — the face list is fetched and
filtered locally.
"""

from __future__ import annotations

from enum import Enum

from ahndn_client.core.models import LOCAL_PIER, Command, Input

EXIT_COMMAND: str = "exit"
PIERS_COMMAND: str = "piers"


class ProtocolRevision(str, Enum):
    UNIFIED = "unified"
    LEGACY = "legacy"


def status_line(peer: int, revision: ProtocolRevision = ProtocolRevision.UNIFIED) -> str:
    """Return the wire line that fetches the face list of *peer*."""
    if revision is ProtocolRevision.LEGACY:
        return "status" if peer == LOCAL_PIER else f"pier-status {peer}"
    return f"status {peer}"


def wire_line(
    parsed: Input,
    revision: ProtocolRevision = ProtocolRevision.UNIFIED,
) -> str | None:
    """Return the single wire line for *parsed*, or ``None``.

    ``ROUTE_QUERY`` (several round trips) and ``HELP`` (none) have no
    single line.
    """
    if parsed.command in (Command.STATUS, Command.FACE_INFO):
        peer = LOCAL_PIER if parsed.peer is None else parsed.peer
        return status_line(peer, revision)
    if parsed.command is Command.PIERS:
        return PIERS_COMMAND
    return None
