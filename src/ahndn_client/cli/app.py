"""CLI application entry point and command routing for ahndn-client.

This module is the **sole error boundary** for the entire application.
It catches :class:`~ahndn_client.exceptions.AhndnClientError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Architecture notes
------------------
* No command logic lives here — grammar, wire mapping and decoding
  belong to the core layer, the socket to the infrastructure layer.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys

from ahndn_client.cli import exit_codes
from ahndn_client.cli.console import console, err_console, rich_available
from ahndn_client.config import ClientConfig, resolve_config
from ahndn_client.core.dispatcher import Dispatcher
from ahndn_client.core.models import MAX_U64
from ahndn_client.core.models import Command, Input
from ahndn_client.core.protocols import RecordSink
from ahndn_client.core.wire import ProtocolRevision
from ahndn_client.exceptions import AhndnClientError
from ahndn_client.infra.unix_transport import UnixSocketTransport
from ahndn_client.utils.logging import setup_logging
from ahndn_client.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _unsigned(value: str) -> int:
    """argparse type for pier and face ids."""
    if not value.isascii() or not value.isdigit() or int(value) > MAX_U64:
        raise argparse.ArgumentTypeError(f"not an unsigned id: {value!r}")
    return int(value)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Without a one-shot flag the client opens the interactive prompt:
    * ``ahndn-client``                 — interactive prompt
    * ``ahndn-client --piers``         — one-shot commands (combinable)
    * ``ahndn-client doctor``          — environment diagnostics
    * ``ahndn-client --version``
    """
    parser = argparse.ArgumentParser(
        prog="ahndn-client",
        description="Connects to the local AHNDN agent.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="'doctor' to run environment diagnostics.",
    )
    parser.add_argument(
        "-s",
        "--socket",
        default=None,
        help="Unix socket of the agent (default: $AHNDN_SOCKET or /tmp/ah).",
    )
    parser.add_argument(
        "--protocol",
        choices=[revision.value for revision in ProtocolRevision],
        default=None,
        help="Agent wire vocabulary (default: $AHNDN_PROTOCOL or unified).",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Idle time that ends a reply (default: $AHNDN_POLL_INTERVAL or 0.05).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log socket traffic to stderr.",
    )

    one_shot = parser.add_argument_group("one-shot commands")
    one_shot.add_argument(
        "--piers",
        action="store_true",
        help="List the piers of the agent.",
    )
    one_shot.add_argument(
        "--status",
        type=_unsigned,
        metavar="PIER",
        help="List the status of a pier (by id from --piers).",
    )
    one_shot.add_argument(
        "--face",
        type=_unsigned,
        nargs=2,
        metavar=("PIER", "FACE"),
        help="Detailed stats for a pier's face id.",
    )
    one_shot.add_argument(
        "--route",
        metavar="NAME",
        help="Find and print every face carrying route NAME.",
    )
    one_shot.add_argument(
        "--raw",
        metavar="TEXT",
        help="Send TEXT to the agent verbatim and print the reply.",
    )
    return parser


def _has_one_shot(args: argparse.Namespace) -> bool:
    return bool(
        args.piers
        or args.status is not None
        or args.face is not None
        or args.route is not None
        or args.raw is not None
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _open_transport(config: ClientConfig) -> UnixSocketTransport:
    """Connect to the agent; a failure here is fatal."""
    transport = UnixSocketTransport(
        config.socket_path,
        poll_interval=config.poll_interval,
    )
    transport.connect()
    return transport


def _make_presenter() -> RecordSink:
    from ahndn_client.cli.presenter import Presenter

    return Presenter()


def _run_one_shot(args: argparse.Namespace, dispatcher: Dispatcher) -> int:
    """Run every requested one-shot command, in a fixed order."""
    if args.piers:
        console.print_plain("PIERS:")
        dispatcher.dispatch(Input(Command.PIERS))
    if args.status is not None:
        console.print_plain(f"PIER-STATUS pier {args.status}:")
        dispatcher.dispatch(Input(Command.STATUS, peer=args.status))
    if args.face is not None:
        pier, face = args.face
        console.print_plain(f"PIER-STATS pier {pier} face {face}:")
        dispatcher.dispatch(Input(Command.FACE_INFO, peer=pier, face=face))
    if args.route is not None:
        console.print_plain(f"ROUTE {args.route}:")
        dispatcher.dispatch(Input(Command.ROUTE_QUERY, route=args.route))
    if args.raw is not None:
        console.print_plain(f"{args.raw}:")
        console.print_plain(dispatcher.raw(args.raw))
    return exit_codes.SUCCESS


def _run_repl(dispatcher: Dispatcher) -> int:
    from ahndn_client.cli.repl import Repl
    from ahndn_client.infra.line_reader import default_line_reader

    return Repl(dispatcher, default_line_reader()).run()


def _handle_session(args: argparse.Namespace, config: ClientConfig) -> int:
    """Connect, then run the one-shot commands or the interactive prompt."""
    transport = _open_transport(config)
    try:
        dispatcher = Dispatcher(
            transport,
            _make_presenter(),
            revision=config.revision,
        )
        if _has_one_shot(args):
            return _run_one_shot(args, dispatcher)
        return _run_repl(dispatcher)
    finally:
        transport.close()


def _handle_doctor(config: ClientConfig) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from ahndn_client.cli.doctor import run_doctor

    return run_doctor(config.socket_path)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ahndn-client CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = resolve_config(args)
    setup_logging(config.log_level)

    if args.target is not None:
        if args.target.lower() == "doctor":
            return _handle_doctor(config)
        parser.error(f"unknown target {args.target!r} (did you mean --raw?)")

    return _handle_session(args, config)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _safe(text: object) -> str:
    """Escape Rich markup in error text when Rich will render it."""
    if not rich_available():
        return str(text)
    from rich.markup import escape

    return escape(str(text))


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except AhndnClientError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {_safe(exc)}")
        if exc.hint:
            err_console.print(f"[yellow]Hint:[/yellow] {_safe(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        err_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {_safe(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
