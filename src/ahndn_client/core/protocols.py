"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
presenter must satisfy.  Core code depends ONLY on these protocols —
never on sockets, terminals or Rich.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ahndn_client.core.models import Face, Pier
from ahndn_client.exceptions import DecodeError


class Transport(Protocol):
    """Byte channel to the agent carrying one request at a time."""

    def send(self, line: str) -> None:
        """Write *line* followed by a newline terminator.

        Raises
        ------
        TransportError
            On any socket-level failure.
        """
        ...  # pragma: no cover

    def receive_until_idle(self) -> str:
        """Block for the first byte of a reply, then drain until idle.

        Returns the reply decoded as UTF-8 with NULs stripped from both
        ends.

        Raises
        ------
        TransportError
            On any socket-level failure other than a clean end of data.
        """
        ...  # pragma: no cover


class RecordSink(Protocol):
    """Receives decoded records and reportable failures for display."""

    def faces(self, faces: Sequence[Face], *, detailed: bool) -> None:
        ...  # pragma: no cover

    def piers(self, piers: Sequence[Pier]) -> None:
        ...  # pragma: no cover

    def pier_header(self, pier: Pier) -> None:
        """Announce which pier the following route-query faces belong to."""
        ...  # pragma: no cover

    def daemon_error(self, message: str, *, pier: Pier | None = None) -> None:
        ...  # pragma: no cover

    def decode_error(self, error: DecodeError, *, pier: Pier | None = None) -> None:
        ...  # pragma: no cover

    def help(self) -> None:
        ...  # pragma: no cover


class LineReader(Protocol):
    """Source of interactive command lines."""

    def read_line(self, prompt: str) -> str:
        """Return the next line typed by the operator.

        Raises
        ------
        EOFError
            At end of input.
        KeyboardInterrupt
            When the operator interrupts.
        """
        ...  # pragma: no cover
