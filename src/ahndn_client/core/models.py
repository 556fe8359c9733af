"""Domain models for ahndn-client.

All records are **frozen** dataclasses — immutable snapshots decoded
fresh from every agent reply.  They carry zero I/O and no identity
beyond the lifetime of one reply.

Enumerations use the agent's wire spellings as their values, so
``LinkType("point-to-point")`` decodes and ``str(member)`` encodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Wire vocabularies
# ---------------------------------------------------------------------------

class _WireEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class LinkType(_WireEnum):
    NONE = "none"
    POINT_TO_POINT = "point-to-point"
    MULTI_ACCESS = "multi-access"
    AD_HOC = "ad-hoc"


class FaceScope(_WireEnum):
    NONE = "none"
    LOCAL = "local"
    NON_LOCAL = "non-local"


class FacePersistency(_WireEnum):
    NONE = "none"
    PERSISTENT = "persistent"
    ON_DEMAND = "on-demand"
    PERMANENT = "permanent"


class RouteOrigin(_WireEnum):
    NONE = "none"
    APP = "app"
    AUTO_REG = "auto-reg"
    CLIENT = "client"
    AUTO_CONF = "auto-conf"
    NLSR = "nlsr"
    PREFIX_ANN = "prefix-ann"
    STATIC = "static"


# ---------------------------------------------------------------------------
# Agent records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Route:
    """A named prefix registered against a face."""

    name: str
    origin: RouteOrigin
    cost: int
    """Lower is preferred."""

    flags: int
    expiration_period_ms: int = 0
    """Absent on the wire for non-expiring routes."""


@dataclass(frozen=True, slots=True)
class Face:
    """One link endpoint managed by the agent.

    ``id`` is unique among the faces of one reply.  Traffic counters
    are monotonic for the life of the face.
    """

    id: int
    remote_uri: str
    local_uri: str
    link_type: LinkType
    face_scope: FaceScope
    face_persistency: FacePersistency
    flags: int
    in_interests: int
    out_interests: int
    in_bytes: int
    out_bytes: int
    in_data: int
    out_data: int
    in_nacks: int
    out_nacks: int
    mtu: int
    default_congestion_threshold: int
    default_base_congestion_marking_interval_ns: int
    expiration_period_ms: int = 0
    routes: tuple[Route, ...] = ()

    def has_route(self, name: str) -> bool:
        """Return ``True`` if any attached route is named exactly *name*."""
        return any(route.name == name for route in self.routes)


@dataclass(frozen=True, slots=True)
class Pier:
    """A known peer node of the agent.  Id ``0`` is the local node."""

    id: int
    face_id: int
    prefix: str
    ip: str
    port: int

    @property
    def is_local(self) -> bool:
        return self.id == 0


# ---------------------------------------------------------------------------
# Parsed commands
# ---------------------------------------------------------------------------

class Command(Enum):
    STATUS = "status"
    FACE_INFO = "face"
    PIERS = "piers"
    ROUTE_QUERY = "route"
    HELP = "help"


LOCAL_PIER: int = 0
"""Pier id reserved for the local node."""

MAX_U64: int = 2**64 - 1
"""Largest id or counter value the agent can send."""


@dataclass(frozen=True, slots=True)
class Input:
    """A validated command with only the arguments its variant needs.

    * ``STATUS`` — ``peer``
    * ``FACE_INFO`` — ``peer`` and ``face``
    * ``ROUTE_QUERY`` — ``route``
    * ``PIERS`` / ``HELP`` — nothing
    """

    command: Command
    peer: int | None = None
    face: int | None = None
    route: str | None = None
