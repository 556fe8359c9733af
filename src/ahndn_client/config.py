"""Runtime configuration for one client session.

Values are resolved with the precedence *command-line flag* >
*environment variable* > *built-in default*.

======================  ======================  ============
Setting                 Environment variable    Default
======================  ======================  ============
``socket_path``         ``AHNDN_SOCKET``        ``/tmp/ah``
``revision``            ``AHNDN_PROTOCOL``      ``unified``
``poll_interval``       ``AHNDN_POLL_INTERVAL`` ``0.05``
``log_level``           —                       ``WARNING``
======================  ======================  ============
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ahndn_client.core.wire import ProtocolRevision
from ahndn_client.exceptions import AhndnClientError
from ahndn_client.utils.logging import DEFAULT_LEVEL

DEFAULT_SOCKET_PATH: str = "/tmp/ah"
DEFAULT_POLL_INTERVAL: float = 0.05


class ClientSettings(BaseSettings):
    """Agent connection settings read from ``AHNDN_*`` variables.

    Keyword arguments given to the constructor win over the environment,
    which is how command-line flags are layered on top.
    """

    socket: Path = Path(DEFAULT_SOCKET_PATH)
    protocol: ProtocolRevision = ProtocolRevision.UNIFIED
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, ge=0, allow_inf_nan=False)

    model_config = SettingsConfigDict(
        env_prefix="AHNDN_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("protocol", mode="before")
    @classmethod
    def _lower_protocol(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


@dataclass(frozen=True, slots=True)
class ClientConfig:
    socket_path: Path = Path(DEFAULT_SOCKET_PATH)
    revision: ProtocolRevision = ProtocolRevision.UNIFIED
    poll_interval: float = DEFAULT_POLL_INTERVAL
    """Seconds the transport waits for more bytes before treating a reply as complete."""

    log_level: str = DEFAULT_LEVEL


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def resolve_config(args: Any) -> ClientConfig:
    """Build a :class:`ClientConfig` from parsed *args* and the environment.

    *args* is any object with ``socket``, ``protocol``, ``poll_interval``
    and ``verbose`` attributes (an :class:`argparse.Namespace`).

    Raises
    ------
    AhndnClientError
        If a flag or environment value cannot be interpreted.
    """
    flags = {
        "socket": getattr(args, "socket", None),
        "protocol": getattr(args, "protocol", None),
        "poll_interval": getattr(args, "poll_interval", None),
    }
    try:
        settings = ClientSettings(
            **{key: value for key, value in flags.items() if value is not None}
        )
    except ValidationError as exc:
        choices = ", ".join(revision.value for revision in ProtocolRevision)
        raise AhndnClientError(
            f"Invalid client configuration: {_describe(exc)}",
            hint=(
                "Check --socket, --protocol and --poll-interval and the AHNDN_* "
                f"environment variables (protocol is one of: {choices}; "
                "poll interval is a non-negative number of seconds)."
            ),
        ) from exc

    return ClientConfig(
        socket_path=settings.socket,
        revision=settings.protocol,
        poll_interval=settings.poll_interval,
        log_level="DEBUG" if getattr(args, "verbose", False) else DEFAULT_LEVEL,
    )
