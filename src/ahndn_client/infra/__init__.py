"""Infrastructure layer — external system integration.

This layer wraps all interaction with the agent socket and the
terminal.  Every raw ``OSError`` must be caught here and re-raised as
an :class:`~ahndn_client.exceptions.AhndnClientError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from ahndn_client.infra.line_reader import (
    QuestionaryLineReader,
    StdinLineReader,
    default_line_reader,
)
from ahndn_client.infra.unix_transport import UnixSocketTransport

__all__: list[str] = [
    "QuestionaryLineReader",
    "StdinLineReader",
    "UnixSocketTransport",
    "default_line_reader",
]
