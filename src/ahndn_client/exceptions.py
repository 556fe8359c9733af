"""Custom exception hierarchy for ahndn-client.

All exceptions that cross layer boundaries must inherit from
:class:`AhndnClientError`.  Raw ``OSError`` and ``json`` exceptions
must NEVER propagate beyond the layer that caught them — they are
re-raised as a typed subclass defined here.

Hierarchy
---------
AhndnClientError
├── CommandSyntaxError      (recoverable — REPL continues)
├── TransportError          (fatal — session ends)
│   └── DaemonConnectionError
├── DaemonError             (recoverable — ``ERROR`` reply)
├── DecodeError             (recoverable — malformed reply)
└── EnvironmentError        (optional UI dependency missing)
"""

from __future__ import annotations

from enum import Enum


class AhndnClientError(Exception):
    """Base exception for all ahndn-client errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command grammar -------------------------------------------------------

class SyntaxErrorKind(str, Enum):
    """Why an interactively typed command was rejected."""

    UNKNOWN_COMMAND = "unknown command"
    EXPECTED_NUMBER = "expected number"
    NUMBER_OUT_OF_RANGE = "number out of range"
    EXPECTED_ROUTE = "expected route name"
    TRAILING_INPUT = "unexpected trailing input"


class CommandSyntaxError(AhndnClientError):
    """Raised when a command line does not match the command grammar.

    ``position`` is the offset into the original text where parsing
    stopped; ``remainder`` is the unconsumed text from that point.
    """

    def __init__(
        self,
        kind: SyntaxErrorKind,
        position: int,
        remainder: str,
        *,
        hint: str | None = None,
    ) -> None:
        if remainder:
            message = f"{kind.value} at position {position}: {remainder!r}"
        else:
            message = f"{kind.value} at position {position}"
        super().__init__(message, hint=hint)
        self.kind: SyntaxErrorKind = kind
        self.position: int = position
        self.remainder: str = remainder


# --- Transport -------------------------------------------------------------

class TransportError(AhndnClientError):
    """Raised on a socket-level I/O failure.  Fatal to the session."""


class DaemonConnectionError(TransportError):
    """Raised when the agent socket cannot be connected at startup."""


# --- Replies ---------------------------------------------------------------

class DaemonError(AhndnClientError):
    """Raised when the agent answers with an ``ERROR``-prefixed reply.

    The reply text is preserved verbatim in :attr:`reply`.
    """

    def __init__(self, reply: str) -> None:
        super().__init__(reply)
        self.reply: str = reply


class DecodeErrorKind(str, Enum):
    MALFORMED = "malformed"


class DecodeError(AhndnClientError):
    """Raised when a reply is not the JSON shape the command expects."""

    def __init__(
        self,
        detail: str,
        *,
        kind: DecodeErrorKind = DecodeErrorKind.MALFORMED,
    ) -> None:
        super().__init__(f"{kind.value} reply: {detail}")
        self.kind: DecodeErrorKind = kind
        self.detail: str = detail


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(AhndnClientError):
    """Raised when a required runtime dependency is not available."""
