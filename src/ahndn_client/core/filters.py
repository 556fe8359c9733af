"""Pure face selection used by the dispatcher.

No I/O, no side effects, order-preserving.
"""

from __future__ import annotations

from collections.abc import Iterable

from ahndn_client.core.models import Face


def faces_by_id(faces: Iterable[Face], face_id: int) -> list[Face]:
    """Return the faces whose id is *face_id* (at most one per reply)."""
    return [face for face in faces if face.id == face_id]


def faces_with_route(faces: Iterable[Face], route_name: str) -> list[Face]:
    """Return faces carrying a route named exactly *route_name*.

    A face is returned once even when several of its routes match.
    """
    return [face for face in faces if face.has_route(route_name)]
