"""Unix domain socket implementation of :class:`~ahndn_client.core.protocols.Transport`.

This module is the **only** place in the codebase that touches the
agent socket.  Every ``OSError`` is caught here and re-raised as a
typed :class:`~ahndn_client.exceptions.TransportError` — nothing raw
escapes the infrastructure boundary.

Framing
-------
The agent's replies carry no length prefix and no terminator (apart
from a trailing NUL that some agents append).  A reply is therefore
read as:

1. one **blocking** read that waits for the first byte;
2. **non-blocking** reads that drain whatever is buffered;
3. when a read would block, wait up to ``poll_interval`` seconds for
   more bytes — if none arrive, the reply is complete.

With ``poll_interval=0`` step 3 never waits, which is the agent's
original "first empty read ends the message" behaviour.  A reply the
agent flushes in two writes further apart than ``poll_interval`` is
split; the next read will start with its tail.
"""

from __future__ import annotations

import select
import socket
from pathlib import Path
from types import TracebackType

from ahndn_client.exceptions import DaemonConnectionError, TransportError
from ahndn_client.utils.logging import get_logger

logger = get_logger(__name__)

READ_BUFFER_SIZE: int = 1024


class UnixSocketTransport:
    """Concrete :class:`Transport` over an ``AF_UNIX`` stream socket.

    Usage::

        with UnixSocketTransport("/tmp/ah") as transport:
            transport.send("piers")
            reply = transport.receive_until_idle()

    Parameters
    ----------
    path:
        Filesystem path of the agent socket.
    poll_interval:
        Seconds to wait for more bytes after a would-block read.
    first_byte_timeout:
        Seconds to wait for the first byte of a reply.  ``None``
        (default) waits forever.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        poll_interval: float = 0.05,
        first_byte_timeout: float | None = None,
    ) -> None:
        self.path: Path = Path(path)
        self._poll_interval: float = poll_interval
        self._first_byte_timeout: float | None = first_byte_timeout
        self._sock: socket.socket | None = None

    @classmethod
    def from_socket(
        cls,
        sock: socket.socket,
        *,
        poll_interval: float = 0.05,
        first_byte_timeout: float | None = None,
    ) -> UnixSocketTransport:
        """Wrap an already-connected socket (e.g. one end of a socketpair)."""
        transport = cls(
            "<connected>",
            poll_interval=poll_interval,
            first_byte_timeout=first_byte_timeout,
        )
        transport._sock = sock
        return transport

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Connect to the agent socket.

        Raises
        ------
        DaemonConnectionError
            When the socket is missing, refuses the connection, or any
            other OS error occurs.
        """
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(str(self.path))
        except FileNotFoundError as exc:
            sock.close()
            raise DaemonConnectionError(
                f"Agent socket not found: {self.path}",
                hint="Is the agent running?  Use --socket to point at its socket.",
            ) from exc
        except ConnectionRefusedError as exc:
            sock.close()
            raise DaemonConnectionError(
                f"Agent refused the connection on {self.path}",
                hint="The socket file exists but no agent is listening on it.",
            ) from exc
        except OSError as exc:
            sock.close()
            raise DaemonConnectionError(
                f"Cannot connect to {self.path}: {exc}",
            ) from exc
        self._sock = sock
        logger.debug("connected", path=str(self.path))

    def close(self) -> None:
        if self._sock is None:
            return
        try:
            self._sock.close()
        finally:
            self._sock = None

    def __enter__(self) -> UnixSocketTransport:
        if self._sock is None:
            self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("Transport is not connected.")
        return self._sock

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def send(self, line: str) -> None:
        """Write *line* and a newline terminator."""
        sock = self._require_socket()
        try:
            sock.settimeout(None)
            sock.sendall(f"{line}\n".encode("utf-8"))
        except OSError as exc:
            raise TransportError(f"Failed to send {line!r}: {exc}") from exc
        logger.debug("sent", line=line)

    def receive_until_idle(self) -> str:
        """Read one reply; see the module docstring for the framing rules."""
        sock = self._require_socket()
        chunks: list[bytes] = []
        try:
            sock.settimeout(self._first_byte_timeout)
            first = sock.recv(READ_BUFFER_SIZE)
        except TimeoutError as exc:
            raise TransportError(
                f"No reply within {self._first_byte_timeout}s",
            ) from exc
        except OSError as exc:
            raise TransportError(f"Read failed: {exc}") from exc
        chunks.append(first)

        if first:
            chunks.extend(self._drain(sock))

        data = b"".join(chunks)
        logger.debug("received", size=len(data))
        return data.decode("utf-8", errors="replace").strip("\x00")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _drain(self, sock: socket.socket) -> list[bytes]:
        """Non-blocking reads until the socket goes idle or closes."""
        chunks: list[bytes] = []
        sock.setblocking(False)
        try:
            while True:
                try:
                    chunk = sock.recv(READ_BUFFER_SIZE)
                except BlockingIOError:
                    if not self._wait_readable(sock):
                        break
                    continue
                if not chunk:
                    break
                chunks.append(chunk)
        except OSError as exc:
            raise TransportError(f"Read failed: {exc}") from exc
        finally:
            sock.setblocking(True)
        return chunks

    def _wait_readable(self, sock: socket.socket) -> bool:
        readable, _, _ = select.select([sock], [], [], self._poll_interval)
        return bool(readable)
