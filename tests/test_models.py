"""Tests for domain models (core/models.py).

All models are frozen dataclasses — these tests verify immutability,
equality semantics, and the small helpers the filters rely on.
"""

from __future__ import annotations

import pytest

from ahndn_client.core.models import (
    LOCAL_PIER,
    Command,
    Face,
    FacePersistency,
    FaceScope,
    Input,
    LinkType,
    Pier,
    Route,
    RouteOrigin,
)


# ---------------------------------------------------------------------------
# Fixtures — reusable model instances
# ---------------------------------------------------------------------------

def _make_route(**overrides: object) -> Route:
    defaults: dict[str, object] = {
        "name": "/a",
        "origin": RouteOrigin.STATIC,
        "cost": 10,
        "flags": 1,
    }
    defaults.update(overrides)
    return Route(**defaults)  # type: ignore[arg-type]


def _make_face(**overrides: object) -> Face:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, object] = {
        "id": 260,
        "remote_uri": "udp4://10.0.0.2:6363",
        "local_uri": "udp4://10.0.0.1:6363",
        "link_type": LinkType.POINT_TO_POINT,
        "face_scope": FaceScope.NON_LOCAL,
        "face_persistency": FacePersistency.PERSISTENT,
        "flags": 0,
        "in_interests": 0,
        "out_interests": 0,
        "in_bytes": 0,
        "out_bytes": 0,
        "in_data": 0,
        "out_data": 0,
        "in_nacks": 0,
        "out_nacks": 0,
        "mtu": 8800,
        "default_congestion_threshold": 0,
        "default_base_congestion_marking_interval_ns": 0,
    }
    defaults.update(overrides)
    return Face(**defaults)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Wire enumerations
# ---------------------------------------------------------------------------

class TestWireEnums:
    @pytest.mark.parametrize(
        ("enum_cls", "spelling"),
        [
            (LinkType, "multi-access"),
            (FaceScope, "non-local"),
            (FacePersistency, "on-demand"),
            (RouteOrigin, "prefix-ann"),
        ],
    )
    def test_round_trip_spelling(self, enum_cls, spelling: str) -> None:
        assert str(enum_cls(spelling)) == spelling

    def test_every_vocabulary_has_none(self) -> None:
        for enum_cls in (LinkType, FaceScope, FacePersistency, RouteOrigin):
            assert str(enum_cls("none")) == "none"

    def test_unknown_spelling_rejected(self) -> None:
        with pytest.raises(ValueError):
            LinkType("point_to_point")


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------

class TestRoute:
    def test_expiration_defaults_to_zero(self) -> None:
        assert _make_route().expiration_period_ms == 0

    def test_frozen(self) -> None:
        route = _make_route()
        with pytest.raises(AttributeError):
            route.cost = 1  # type: ignore[misc]

    def test_equality(self) -> None:
        assert _make_route() == _make_route()
        assert _make_route(name="/a") != _make_route(name="/b")


# ---------------------------------------------------------------------------
# Face
# ---------------------------------------------------------------------------

class TestFace:
    def test_routes_default_empty(self) -> None:
        face = _make_face()
        assert face.routes == ()
        assert face.expiration_period_ms == 0

    def test_has_route_exact_match(self) -> None:
        face = _make_face(routes=(_make_route(name="/a/b"),))
        assert face.has_route("/a/b")
        assert not face.has_route("/a")
        assert not face.has_route("/a/b/c")

    def test_frozen(self) -> None:
        face = _make_face()
        with pytest.raises(AttributeError):
            face.mtu = 1500  # type: ignore[misc]

    def test_hashable(self) -> None:
        face = _make_face(routes=(_make_route(),))
        assert len({face, _make_face(routes=(_make_route(),))}) == 1


# ---------------------------------------------------------------------------
# Pier
# ---------------------------------------------------------------------------

class TestPier:
    def test_local_pier(self) -> None:
        pier = Pier(id=LOCAL_PIER, face_id=0, prefix="/local", ip="127.0.0.1", port=6363)
        assert pier.is_local

    def test_remote_pier(self) -> None:
        pier = Pier(id=5, face_id=262, prefix="/remote", ip="10.0.0.5", port=6363)
        assert not pier.is_local


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class TestInput:
    def test_arguments_default_to_none(self) -> None:
        parsed = Input(Command.PIERS)
        assert parsed.peer is None
        assert parsed.face is None
        assert parsed.route is None

    def test_equality(self) -> None:
        assert Input(Command.STATUS, peer=1) == Input(Command.STATUS, peer=1)
        assert Input(Command.STATUS, peer=1) != Input(Command.STATUS, peer=2)
