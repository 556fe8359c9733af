"""Interactive line input for the REPL.

Two :class:`~ahndn_client.core.protocols.LineReader` implementations:

* :class:`QuestionaryLineReader` — line editing and in-session history
  via questionary (prompt_toolkit underneath).  Used on a terminal.
* :class:`StdinLineReader` — plain :func:`input`, for piped or scripted
  sessions where a full-screen prompt makes no sense.

Both raise ``EOFError`` at end of input and ``KeyboardInterrupt`` on
interrupt; the REPL treats either as a request to leave.
"""

from __future__ import annotations

import sys
from typing import Any

from ahndn_client.core.protocols import LineReader
from ahndn_client.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive input."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class QuestionaryLineReader:
    """Prompt with history; arrow keys recall earlier commands."""

    def __init__(self) -> None:
        self._questionary: Any = _import_questionary()
        from prompt_toolkit.history import InMemoryHistory

        self._history = InMemoryHistory()

    def read_line(self, prompt: str) -> str:
        # unsafe_ask lets KeyboardInterrupt / EOFError reach the caller
        # instead of being turned into a ``None`` answer.
        answer = self._questionary.text(
            prompt,
            qmark="",
            history=self._history,
        ).unsafe_ask()
        return "" if answer is None else str(answer)


class StdinLineReader:
    def read_line(self, prompt: str) -> str:
        return input(prompt)


def default_line_reader() -> LineReader:
    """Pick questionary on a terminal, plain stdin otherwise."""
    if sys.stdin.isatty():
        return QuestionaryLineReader()
    return StdinLineReader()
