"""``ahndn-client doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can reach the agent: the socket path,
the Python version, and the optional terminal UI libraries.

This module lives in the CLI layer.  No business logic resides here;
it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import stat
import sys
from importlib import metadata
from pathlib import Path

from ahndn_client.cli import exit_codes
from ahndn_client.cli.console import console, err_console
from ahndn_client.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _socket_check(socket_path: Path) -> tuple[str, str, str]:
    """Return (label, value, status) for the agent socket row."""
    try:
        mode = socket_path.stat().st_mode
    except FileNotFoundError:
        return "socket", f"{socket_path} (missing)", "[red]FAIL[/red]"
    except OSError as exc:
        return "socket", f"{socket_path} ({exc.strerror})", "[red]FAIL[/red]"
    if not stat.S_ISSOCK(mode):
        return "socket", f"{socket_path} (not a socket)", "[red]FAIL[/red]"
    return "socket", str(socket_path), "[green]OK[/green]"


def _library_check(distribution: str, module: str) -> tuple[str, str, str]:
    """Return (label, value, status) for an optional UI library row."""
    try:
        __import__(module)
    except ImportError:
        return distribution, "NOT INSTALLED", "[yellow]WARN[/yellow]"
    try:
        version = metadata.version(distribution)
    except metadata.PackageNotFoundError:
        version = "unknown"
    return distribution, version, "[green]OK[/green]"


def _ahndn_client_version_check() -> tuple[str, str, str]:
    return "ahndn-client", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    out = err_console.print_plain
    out("\nahndn-client doctor")
    out("=" * 64)
    out(f"{'Component':<14} {'Value':<38} {'Status':<8}")
    out("-" * 64)
    for label, value, status in checks:
        out(f"{label:<14} {value:<38} {_status_plain(status):<8}")
    out("")


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(socket_path: Path) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _ahndn_client_version_check(),
        _python_version_check(),
        _socket_check(socket_path),
        _library_check("rich", "rich"),
        _library_check("questionary", "questionary"),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="ahndn-client doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            err_console.print_plain("Some checks failed.")
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        err_console.print_plain("All checks passed.")
    return exit_codes.SUCCESS
