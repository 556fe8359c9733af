"""Interactive read-eval-print loop.

Each line is parsed with the command grammar, dispatched, and the
result rendered by the presenter.  Syntax errors are reported and the
loop continues; only transport failures end the session abnormally.
End of input, an interrupt, or ``quit`` / ``exit`` ends it cleanly
after telling the agent we are leaving.
"""

from __future__ import annotations

from ahndn_client.cli import exit_codes
from ahndn_client.cli.console import console, err_console
from ahndn_client.core.dispatcher import Dispatcher
from ahndn_client.core.grammar import DEFAULT_GRAMMAR, Grammar, parse_command
from ahndn_client.core.protocols import LineReader
from ahndn_client.exceptions import CommandSyntaxError
from ahndn_client.utils.logging import get_logger

logger = get_logger(__name__)

PROMPT: str = "agent> "
QUIT_WORDS: frozenset[str] = frozenset({"quit", "exit"})


class Repl:
    """Drive *dispatcher* from lines supplied by *reader*."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        reader: LineReader,
        *,
        grammar: Grammar = DEFAULT_GRAMMAR,
    ) -> None:
        self._dispatcher = dispatcher
        self._reader = reader
        self._grammar = grammar

    def run(self) -> int:
        """Loop until the operator leaves; return the process exit code."""
        try:
            while True:
                try:
                    line: str | None = self._reader.read_line(PROMPT)
                except EOFError:
                    line = None
                if line is None or not self.handle_line(line):
                    console.print_plain("Exiting...")
                    break
        except KeyboardInterrupt:
            console.print_plain("Interrupted...")
        self._dispatcher.notify_exit()
        return exit_codes.SUCCESS

    def handle_line(self, line: str) -> bool:
        """Process one line.  Returns ``False`` when the operator quits."""
        text = line.strip()
        if not text:
            return True
        if text.lower() in QUIT_WORDS:
            return False
        try:
            parsed = parse_command(text, self._grammar)
        except CommandSyntaxError as exc:
            err_console.print_plain(f"Parse Error on input: {text}, {exc}")
            return True
        logger.debug("dispatching", command=parsed.command.value)
        self._dispatcher.dispatch(parsed)
        return True
