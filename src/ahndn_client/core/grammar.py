"""Interactive command grammar.

Every function in this module is **pure**: no I/O and no shared
mutable state, so one :class:`Grammar` may be used from anywhere.

Parsing is two-phase:

1. :meth:`Grammar.parse` checks the keyword and consumes exactly the
   arguments that command takes.  Anything left over is handed back
   as :attr:`ParseResult.remainder`.  It is not an error at this stage.
2. :func:`parse_command` rejects a non-empty remainder, so that
   ``"piers extra"`` is a syntax error rather than ``piers``.

The keyword table is pluggable because the agent's vocabulary has
changed between protocol revisions.  :data:`DEFAULT_GRAMMAR` accepts
the union of every revision's keywords.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from ahndn_client.core.models import LOCAL_PIER, MAX_U64, Command, Input
from ahndn_client.exceptions import CommandSyntaxError, SyntaxErrorKind

_NUMBER = re.compile(r"[0-9]+")
_ROUTE_NAME = re.compile(r"[A-Za-z0-9/\\-]+")
_KEYWORD = re.compile(r"\S+")


@dataclass(frozen=True, slots=True)
class ParseResult:
    input: Input
    remainder: str
    """Unconsumed input with surrounding whitespace removed."""


# ---------------------------------------------------------------------------
# Cursor over one command line
# ---------------------------------------------------------------------------

class Cursor:
    """Left-to-right scanner handed to each keyword rule.

    Positions reported in errors are offsets into the original text.
    """

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    @property
    def remainder(self) -> str:
        return self.text[self.pos:].strip()

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _fail(self, kind: SyntaxErrorKind) -> CommandSyntaxError:
        return CommandSyntaxError(kind, self.pos, self.text[self.pos:].strip())

    def at_end(self) -> bool:
        self._skip_whitespace()
        return self.pos >= len(self.text)

    def number(self) -> int:
        """Consume a required unsigned 64-bit decimal number."""
        self._skip_whitespace()
        match = _NUMBER.match(self.text, self.pos)
        if match is None:
            raise self._fail(SyntaxErrorKind.EXPECTED_NUMBER)
        value = int(match.group())
        if value > MAX_U64:
            raise self._fail(SyntaxErrorKind.NUMBER_OUT_OF_RANGE)
        self.pos = match.end()
        return value

    def optional_number(self) -> int | None:
        """Consume a number if any input is left, else return ``None``.

        Non-numeric leftovers are an ``EXPECTED_NUMBER`` error, not
        remainder: ``status -1`` must not silently mean ``status``.
        """
        if self.at_end():
            return None
        return self.number()

    def route_name(self) -> str:
        self._skip_whitespace()
        match = _ROUTE_NAME.match(self.text, self.pos)
        if match is None:
            raise self._fail(SyntaxErrorKind.EXPECTED_ROUTE)
        self.pos = match.end()
        return match.group()


Rule = Callable[[Cursor], Input]
"""Consumes a command's arguments and builds its :class:`Input`."""


# ---------------------------------------------------------------------------
# Keyword rules
# ---------------------------------------------------------------------------

def _status(cursor: Cursor) -> Input:
    peer = cursor.optional_number()
    return Input(Command.STATUS, peer=LOCAL_PIER if peer is None else peer)


def _pier_status(cursor: Cursor) -> Input:
    return Input(Command.STATUS, peer=cursor.number())


def _face(cursor: Cursor) -> Input:
    first = cursor.number()
    second = cursor.optional_number()
    if second is None:
        # A lone argument is the face, on the local pier.
        return Input(Command.FACE_INFO, peer=LOCAL_PIER, face=first)
    return Input(Command.FACE_INFO, peer=first, face=second)


def _stats(cursor: Cursor) -> Input:
    return Input(Command.FACE_INFO, peer=LOCAL_PIER, face=cursor.number())


def _pier_stats(cursor: Cursor) -> Input:
    peer = cursor.number()
    face = cursor.number()
    return Input(Command.FACE_INFO, peer=peer, face=face)


def _piers(cursor: Cursor) -> Input:
    return Input(Command.PIERS)


def _route(cursor: Cursor) -> Input:
    return Input(Command.ROUTE_QUERY, route=cursor.route_name())


def _help(cursor: Cursor) -> Input:
    return Input(Command.HELP)


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

class Grammar:
    """Case-insensitive keyword table mapping keywords to :data:`Rule`.

    Parameters
    ----------
    rules:
        Initial keyword table.  Keywords are stored lower-cased.
    """

    def __init__(self, rules: Mapping[str, Rule] | None = None) -> None:
        self._rules: dict[str, Rule] = {}
        for keyword, rule in (rules or {}).items():
            self.register(keyword, rule)

    def register(self, keyword: str, rule: Rule) -> None:
        """Add *keyword*, replacing any existing rule for it."""
        self._rules[keyword.lower()] = rule

    @property
    def keywords(self) -> tuple[str, ...]:
        return tuple(sorted(self._rules))

    def parse(self, text: str) -> ParseResult:
        """Parse one command line.

        Raises
        ------
        CommandSyntaxError
            ``UNKNOWN_COMMAND`` when the first token is not a keyword,
            or an argument error from the keyword's rule.
        """
        cursor = Cursor(text)
        cursor.at_end()
        match = _KEYWORD.match(text, cursor.pos)
        rule = self._rules.get(match.group().lower()) if match else None
        if match is None or rule is None:
            raise CommandSyntaxError(
                SyntaxErrorKind.UNKNOWN_COMMAND,
                cursor.pos,
                text[cursor.pos:].strip(),
                hint="Type 'help' for the list of commands.",
            )
        cursor.pos = match.end()
        parsed = rule(cursor)
        return ParseResult(input=parsed, remainder=cursor.remainder)


DEFAULT_GRAMMAR = Grammar(
    {
        "status": _status,
        "pier-status": _pier_status,
        "face": _face,
        "stats": _stats,
        "pier-stats": _pier_stats,
        "piers": _piers,
        "route": _route,
        "help": _help,
    }
)


def parse(text: str, grammar: Grammar = DEFAULT_GRAMMAR) -> ParseResult:
    """Structural parse with :data:`DEFAULT_GRAMMAR`; see :meth:`Grammar.parse`."""
    return grammar.parse(text)


def parse_command(text: str, grammar: Grammar = DEFAULT_GRAMMAR) -> Input:
    """Parse *text* and require that the whole line was consumed.

    Raises
    ------
    CommandSyntaxError
        Any structural error, or ``TRAILING_INPUT`` when the command
        parsed but left text behind.
    """
    result = grammar.parse(text)
    if result.remainder:
        position = len(text.rstrip()) - len(result.remainder)
        raise CommandSyntaxError(
            SyntaxErrorKind.TRAILING_INPUT,
            position,
            result.remainder,
        )
    return result.input
