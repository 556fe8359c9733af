"""Command dispatch — parsed :class:`Input` → agent round trips → sink.

The dispatcher owns no connection state of its own; the only thing
carried between commands is the :class:`Transport` it was given.

Error policy
------------
* :class:`DaemonError` and :class:`DecodeError` are *reported* to the
  sink and the command ends; they never escape :meth:`Dispatcher.dispatch`.
* During a route query a failure for one pier is reported and the
  loop moves on to the next pier.
* :class:`TransportError` always propagates — the session is over.
"""

from __future__ import annotations

from ahndn_client.core.decoder import decode_faces, decode_piers
from ahndn_client.core.filters import faces_by_id, faces_with_route
from ahndn_client.core.models import LOCAL_PIER, Command, Face, Input, Pier
from ahndn_client.core.protocols import RecordSink, Transport
from ahndn_client.core.wire import (
    EXIT_COMMAND,
    PIERS_COMMAND,
    ProtocolRevision,
    status_line,
)
from ahndn_client.exceptions import DaemonError, DecodeError, TransportError
from ahndn_client.utils.logging import get_logger

logger = get_logger(__name__)


class Dispatcher:
    """Answers parsed commands using *transport* and reports to *sink*.

    Parameters
    ----------
    transport:
        Any object satisfying the :class:`Transport` protocol.
    sink:
        Any object satisfying the :class:`RecordSink` protocol.
    revision:
        Wire vocabulary spoken by the agent.
    """

    def __init__(
        self,
        transport: Transport,
        sink: RecordSink,
        *,
        revision: ProtocolRevision = ProtocolRevision.UNIFIED,
    ) -> None:
        self._transport: Transport = transport
        self._sink: RecordSink = sink
        self._revision: ProtocolRevision = revision

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def dispatch(self, parsed: Input) -> None:
        """Run one command to completion."""
        command = parsed.command
        try:
            if command is Command.STATUS:
                self._status(parsed)
            elif command is Command.FACE_INFO:
                self._face_info(parsed)
            elif command is Command.PIERS:
                self._sink.piers(self._fetch_piers())
            elif command is Command.ROUTE_QUERY:
                self._route_query(parsed)
            elif command is Command.HELP:
                self._sink.help()
        except DaemonError as exc:
            self._sink.daemon_error(exc.reply)
        except DecodeError as exc:
            self._sink.decode_error(exc)

    def raw(self, line: str) -> str:
        """Send *line* verbatim and return the undecoded reply."""
        return self._round_trip(line)

    def notify_exit(self) -> None:
        """Tell the agent this session is ending.  No reply is read.

        Best effort: the agent may already be gone.
        """
        try:
            self._transport.send(EXIT_COMMAND)
        except TransportError as exc:
            logger.debug("exit notification not delivered", error=str(exc))

    # ------------------------------------------------------------------
    # Round trips
    # ------------------------------------------------------------------

    def _round_trip(self, line: str) -> str:
        self._transport.send(line)
        return self._transport.receive_until_idle()

    def _fetch_faces(self, peer: int) -> list[Face]:
        return decode_faces(self._round_trip(status_line(peer, self._revision)))

    def _fetch_piers(self) -> list[Pier]:
        return decode_piers(self._round_trip(PIERS_COMMAND))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @staticmethod
    def _peer(parsed: Input) -> int:
        return LOCAL_PIER if parsed.peer is None else parsed.peer

    def _status(self, parsed: Input) -> None:
        self._sink.faces(self._fetch_faces(self._peer(parsed)), detailed=False)

    def _face_info(self, parsed: Input) -> None:
        faces = self._fetch_faces(self._peer(parsed))
        if parsed.face is None:
            return
        matches = faces_by_id(faces, parsed.face)
        if matches:
            self._sink.faces(matches, detailed=True)

    def _route_query(self, parsed: Input) -> None:
        if parsed.route is None:
            return
        piers = self._fetch_piers()
        for pier in piers:
            self._sink.pier_header(pier)
            try:
                faces = self._fetch_faces(pier.id)
            except DaemonError as exc:
                logger.warning("pier status failed", pier=pier.id, reply=exc.reply)
                self._sink.daemon_error(exc.reply, pier=pier)
                continue
            except DecodeError as exc:
                logger.warning("pier status undecodable", pier=pier.id, detail=exc.detail)
                self._sink.decode_error(exc, pier=pier)
                continue
            matches = faces_with_route(faces, parsed.route)
            if matches:
                self._sink.faces(matches, detailed=True)
