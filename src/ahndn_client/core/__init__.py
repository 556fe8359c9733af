"""Core / service layer — pure command logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or socket I/O (the dispatcher talks to an injected
  :class:`~ahndn_client.core.protocols.Transport`).
* No imports from ``cli`` or ``infra``.
"""

from ahndn_client.core.dispatcher import Dispatcher
from ahndn_client.core.grammar import DEFAULT_GRAMMAR, Grammar, parse, parse_command
from ahndn_client.core.models import Command, Face, Input, Pier, Route
from ahndn_client.core.protocols import LineReader, RecordSink, Transport
from ahndn_client.core.wire import ProtocolRevision

__all__: list[str] = [
    "DEFAULT_GRAMMAR",
    "Command",
    "Dispatcher",
    "Face",
    "Grammar",
    "Input",
    "LineReader",
    "Pier",
    "ProtocolRevision",
    "RecordSink",
    "Route",
    "Transport",
    "parse",
    "parse_command",
]
