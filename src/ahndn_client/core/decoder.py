"""Agent reply decoding — raw text → typed records.

Replies are one of:

* a string beginning with ``ERROR`` — an application error reported by
  the agent, surfaced verbatim as :class:`DaemonError`;
* a JSON array of face objects (``status``);
* a JSON array of pier objects (``piers``).

Guarantees
----------
* Pure — no I/O.
* Only :class:`DaemonError` and :class:`DecodeError` escape.
* Required keys, value types and enum spellings are checked; unknown
  keys are ignored.  ``expiration_period_ms`` defaults to ``0``.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, TypeVar

from ahndn_client.core.models import (
    MAX_U64,
    Face,
    FacePersistency,
    FaceScope,
    LinkType,
    Pier,
    Route,
    RouteOrigin,
)
from ahndn_client.exceptions import DaemonError, DecodeError

ERROR_PREFIX: str = "ERROR"

_E = TypeVar("_E", bound=Enum)

_FACE_COUNTERS: tuple[str, ...] = (
    "flags",
    "in_interests",
    "out_interests",
    "in_bytes",
    "out_bytes",
    "in_data",
    "out_data",
    "in_nacks",
    "out_nacks",
    "mtu",
    "default_congestion_threshold",
    "default_base_congestion_marking_interval_ns",
)


class ExpectedShape(Enum):
    FACES = "faces"
    PIERS = "piers"


def is_daemon_error(raw: str) -> bool:
    return raw.startswith(ERROR_PREFIX)


# ---------------------------------------------------------------------------
# Field readers
# ---------------------------------------------------------------------------

def _require(obj: dict[str, Any], key: str, what: str) -> Any:
    if key not in obj:
        raise DecodeError(f"{what} is missing {key!r}")
    return obj[key]


def _unsigned(obj: dict[str, Any], key: str, what: str, *, default: int | None = None) -> int:
    if default is not None and key not in obj:
        return default
    value = _require(obj, key, what)
    # bool is an int subclass; JSON true/false is not a counter.
    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or not 0 <= value <= MAX_U64
    ):
        raise DecodeError(f"{what}.{key} must be an unsigned integer, got {value!r}")
    return value


def _string(obj: dict[str, Any], key: str, what: str) -> str:
    value = _require(obj, key, what)
    if not isinstance(value, str):
        raise DecodeError(f"{what}.{key} must be a string, got {value!r}")
    return value


def _enum(obj: dict[str, Any], key: str, what: str, enum_cls: type[_E]) -> _E:
    value = _string(obj, key, what)
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise DecodeError(f"{what}.{key} has unknown value {value!r}") from exc


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{what} must be an object, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Record parsers
# ---------------------------------------------------------------------------

def _parse_route(value: Any) -> Route:
    obj = _object(value, "route")
    return Route(
        name=_string(obj, "name", "route"),
        origin=_enum(obj, "origin", "route", RouteOrigin),
        cost=_unsigned(obj, "cost", "route"),
        flags=_unsigned(obj, "flags", "route"),
        expiration_period_ms=_unsigned(obj, "expiration_period_ms", "route", default=0),
    )


def _parse_face(value: Any) -> Face:
    obj = _object(value, "face")
    raw_routes = _require(obj, "routes", "face")
    if not isinstance(raw_routes, list):
        raise DecodeError("face.routes must be an array")
    counters = {key: _unsigned(obj, key, "face") for key in _FACE_COUNTERS}
    return Face(
        id=_unsigned(obj, "id", "face"),
        remote_uri=_string(obj, "remote_uri", "face"),
        local_uri=_string(obj, "local_uri", "face"),
        link_type=_enum(obj, "link_type", "face", LinkType),
        face_scope=_enum(obj, "face_scope", "face", FaceScope),
        face_persistency=_enum(obj, "face_persistency", "face", FacePersistency),
        expiration_period_ms=_unsigned(obj, "expiration_period_ms", "face", default=0),
        routes=tuple(_parse_route(route) for route in raw_routes),
        **counters,
    )


def _parse_pier(value: Any) -> Pier:
    obj = _object(value, "pier")
    return Pier(
        id=_unsigned(obj, "id", "pier"),
        face_id=_unsigned(obj, "faceId", "pier"),
        prefix=_string(obj, "prefix", "pier"),
        ip=_string(obj, "ip", "pier"),
        port=_unsigned(obj, "port", "pier"),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def _load_array(raw: str) -> list[Any]:
    if is_daemon_error(raw):
        raise DaemonError(raw)
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DecodeError(str(exc)) from exc
    except RecursionError as exc:
        raise DecodeError("reply nested too deeply") from exc
    if not isinstance(payload, list):
        raise DecodeError(f"expected a JSON array, got {type(payload).__name__}")
    return payload


def decode_faces(raw: str) -> list[Face]:
    """Decode a ``status`` reply.

    Raises
    ------
    DaemonError
        If *raw* starts with ``ERROR``.
    DecodeError
        If *raw* is not a JSON array of well-formed faces.
    """
    return [_parse_face(entry) for entry in _load_array(raw)]


def decode_piers(raw: str) -> list[Pier]:
    """Decode a ``piers`` reply.  Raises as :func:`decode_faces`."""
    return [_parse_pier(entry) for entry in _load_array(raw)]


def decode(raw: str, shape: ExpectedShape) -> list[Face] | list[Pier]:
    if shape is ExpectedShape.FACES:
        return decode_faces(raw)
    return decode_piers(raw)
