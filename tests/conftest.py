"""Shared pytest fixtures and configuration for the ahndn-client test suite.

Guidelines
----------
* No agent process and no filesystem socket in any test.
* Transport tests use in-process ``socket.socketpair()`` pairs.
* Core tests must be pure — collaborators are mocks or fakes.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from ahndn_client.utils.logging import setup_logging


@pytest.fixture(autouse=True)
def _quiet_logging() -> Iterator[None]:
    """Keep log output out of captured streams; drop the handler afterwards."""
    setup_logging("CRITICAL")
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if getattr(handler, "_ahndn_client", False):
            root.removeHandler(handler)


def _face_dict(**overrides: Any) -> dict[str, Any]:
    face: dict[str, Any] = {
        "id": 260,
        "remote_uri": "udp4://10.0.0.2:6363",
        "local_uri": "udp4://10.0.0.1:6363",
        "link_type": "point-to-point",
        "face_scope": "non-local",
        "face_persistency": "persistent",
        "flags": 0,
        "in_interests": 10,
        "out_interests": 11,
        "in_bytes": 1200,
        "out_bytes": 1300,
        "in_data": 7,
        "out_data": 8,
        "in_nacks": 1,
        "out_nacks": 2,
        "mtu": 8800,
        "default_congestion_threshold": 65536,
        "default_base_congestion_marking_interval_ns": 100000000,
        "routes": [],
    }
    face.update(overrides)
    return face


def _route_dict(**overrides: Any) -> dict[str, Any]:
    route: dict[str, Any] = {
        "name": "/a",
        "origin": "static",
        "cost": 10,
        "flags": 1,
    }
    route.update(overrides)
    return route


def _pier_dict(**overrides: Any) -> dict[str, Any]:
    pier: dict[str, Any] = {
        "id": 0,
        "faceId": 0,
        "prefix": "/local",
        "ip": "127.0.0.1",
        "port": 6363,
    }
    pier.update(overrides)
    return pier


@pytest.fixture
def face_dict() -> Callable[..., dict[str, Any]]:
    """Factory for a raw face object as the agent serialises it."""
    return _face_dict


@pytest.fixture
def route_dict() -> Callable[..., dict[str, Any]]:
    return _route_dict


@pytest.fixture
def pier_dict() -> Callable[..., dict[str, Any]]:
    return _pier_dict


@pytest.fixture
def as_reply() -> Callable[[Any], str]:
    """Serialise records as the JSON text the transport hands back."""

    def _reply(payload: Any) -> str:
        return json.dumps(payload)

    return _reply


class FakeTransport:
    """Scripted :class:`Transport`: replies are keyed by the sent line."""

    def __init__(self, replies: dict[str, str | Exception]) -> None:
        self.replies = replies
        self.sent: list[str] = []
        self._pending: str | Exception | None = None
        self.closed = False

    def send(self, line: str) -> None:
        self.sent.append(line)
        self._pending = self.replies.get(line, "ERROR: Invalid command")

    def receive_until_idle(self) -> str:
        pending, self._pending = self._pending, None
        if isinstance(pending, Exception):
            raise pending
        assert pending is not None, "receive without send"
        return pending

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_transport() -> Callable[[dict[str, str | Exception]], FakeTransport]:
    return FakeTransport
