"""Tests for the command grammar (core/grammar.py).

The parser is pure, so every test is a direct call.  Coverage:

* Keyword recognition and case-insensitivity
* Arity and defaulting per keyword (single-argument ``face``)
* Number and route-name token rules
* Remainder reporting vs. caller-level full-consumption check
* Pluggable keyword table
"""

from __future__ import annotations

import pytest

from ahndn_client.core.grammar import (
    DEFAULT_GRAMMAR,
    MAX_U64,
    Cursor,
    Grammar,
    parse,
    parse_command,
)
from ahndn_client.core.models import Command, Input
from ahndn_client.exceptions import CommandSyntaxError, SyntaxErrorKind


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------

class TestKeywords:
    @pytest.mark.parametrize("text", ["nothing", "statusfoo", "pier", "exitt"])
    def test_unknown_keyword(self, text: str) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse(text)
        assert exc_info.value.kind is SyntaxErrorKind.UNKNOWN_COMMAND
        assert exc_info.value.position == 0
        assert exc_info.value.remainder == text

    def test_empty_input_is_unknown_command(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("   ")
        assert exc_info.value.kind is SyntaxErrorKind.UNKNOWN_COMMAND

    def test_unknown_command_has_hint(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("nothing")
        assert exc_info.value.hint is not None
        assert "help" in exc_info.value.hint

    @pytest.mark.parametrize("text", ["PIERS", "Piers", "pIeRs"])
    def test_case_insensitive(self, text: str) -> None:
        assert parse(text).input == Input(Command.PIERS)

    def test_leading_whitespace_skipped(self) -> None:
        assert parse("   piers").input == Input(Command.PIERS)

    def test_default_grammar_has_superset_vocabulary(self) -> None:
        assert set(DEFAULT_GRAMMAR.keywords) == {
            "status",
            "pier-status",
            "face",
            "stats",
            "pier-stats",
            "piers",
            "route",
            "help",
        }


# ---------------------------------------------------------------------------
# status / pier-status
# ---------------------------------------------------------------------------

class TestStatus:
    def test_no_argument_defaults_to_local(self) -> None:
        result = parse("status")
        assert result.input == Input(Command.STATUS, peer=0)
        assert result.remainder == ""

    def test_explicit_peer(self) -> None:
        assert parse("status 7").input == Input(Command.STATUS, peer=7)

    def test_negative_peer_fails_at_sign(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("status -1")
        assert exc_info.value.kind is SyntaxErrorKind.EXPECTED_NUMBER
        assert exc_info.value.position == 7
        assert exc_info.value.remainder == "-1"

    def test_word_instead_of_peer_fails(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("status abc")
        assert exc_info.value.kind is SyntaxErrorKind.EXPECTED_NUMBER

    def test_digits_then_letters_leave_remainder(self) -> None:
        result = parse("status 7abc")
        assert result.input.peer == 7
        assert result.remainder == "abc"

    def test_second_number_is_remainder(self) -> None:
        result = parse("status 1 2")
        assert result.input.peer == 1
        assert result.remainder == "2"

    def test_pier_status_requires_peer(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("pier-status")
        assert exc_info.value.kind is SyntaxErrorKind.EXPECTED_NUMBER
        assert exc_info.value.position == len("pier-status")
        assert exc_info.value.remainder == ""

    def test_pier_status_peer(self) -> None:
        assert parse("pier-status 0").input == Input(Command.STATUS, peer=0)


# ---------------------------------------------------------------------------
# face / stats / pier-stats
# ---------------------------------------------------------------------------

class TestFaceInfo:
    def test_single_argument_is_face_on_local_pier(self) -> None:
        assert parse("face 7").input == Input(Command.FACE_INFO, peer=0, face=7)

    def test_two_arguments_are_peer_then_face(self) -> None:
        assert parse("face 3 7").input == Input(Command.FACE_INFO, peer=3, face=7)

    def test_face_requires_an_argument(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("face")
        assert exc_info.value.kind is SyntaxErrorKind.EXPECTED_NUMBER

    def test_non_numeric_second_argument_fails(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("face 7 x")
        assert exc_info.value.kind is SyntaxErrorKind.EXPECTED_NUMBER
        assert exc_info.value.position == 7

    def test_stats_is_local_face(self) -> None:
        assert parse("stats 250").input == Input(Command.FACE_INFO, peer=0, face=250)

    def test_pier_stats(self) -> None:
        assert parse("pier-stats 0 250").input == Input(
            Command.FACE_INFO, peer=0, face=250
        )

    def test_pier_stats_missing_face(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("pier-stats 0")
        assert exc_info.value.kind is SyntaxErrorKind.EXPECTED_NUMBER
        assert exc_info.value.position == len("pier-stats 0")


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

class TestNumbers:
    def test_max_u64_accepted(self) -> None:
        assert parse(f"status {MAX_U64}").input.peer == MAX_U64

    def test_overflow_rejected(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse(f"status {MAX_U64 + 1}")
        assert exc_info.value.kind is SyntaxErrorKind.NUMBER_OUT_OF_RANGE

    def test_non_ascii_digits_rejected(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("status ٣")
        assert exc_info.value.kind is SyntaxErrorKind.EXPECTED_NUMBER

    def test_decimal_leaves_fraction_as_remainder(self) -> None:
        result = parse("status 10.5")
        assert result.input.peer == 10
        assert result.remainder == ".5"

    def test_leading_zeros(self) -> None:
        assert parse("status 007").input.peer == 7


# ---------------------------------------------------------------------------
# route
# ---------------------------------------------------------------------------

class TestRoute:
    def test_route_name(self) -> None:
        result = parse("route my-prefix/a")
        assert result.input == Input(Command.ROUTE_QUERY, route="my-prefix/a")
        assert result.remainder == ""

    def test_backslash_allowed(self) -> None:
        assert parse("route a\\b").input.route == "a\\b"

    def test_missing_route_fails(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("route")
        assert exc_info.value.kind is SyntaxErrorKind.EXPECTED_ROUTE
        assert exc_info.value.position == len("route")

    def test_other_characters_end_the_token(self) -> None:
        result = parse("route /a!b")
        assert result.input.route == "/a"
        assert result.remainder == "!b"

    def test_route_starting_with_invalid_character_fails(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse("route !x")
        assert exc_info.value.kind is SyntaxErrorKind.EXPECTED_ROUTE


# ---------------------------------------------------------------------------
# Remainder and full consumption
# ---------------------------------------------------------------------------

class TestFullConsumption:
    def test_piers_extra_parses_structurally(self) -> None:
        result = parse("piers extra")
        assert result.input == Input(Command.PIERS)
        assert result.remainder == "extra"

    def test_piers_extra_rejected_by_caller_check(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse_command("piers extra")
        assert exc_info.value.kind is SyntaxErrorKind.TRAILING_INPUT
        assert exc_info.value.remainder == "extra"
        assert exc_info.value.position == 6

    def test_help_takes_no_arguments(self) -> None:
        with pytest.raises(CommandSyntaxError) as exc_info:
            parse_command("help me")
        assert exc_info.value.kind is SyntaxErrorKind.TRAILING_INPUT

    def test_trailing_whitespace_is_not_remainder(self) -> None:
        assert parse_command("piers   ") == Input(Command.PIERS)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("status", Input(Command.STATUS, peer=0)),
            ("status 3", Input(Command.STATUS, peer=3)),
            ("pier-status 3", Input(Command.STATUS, peer=3)),
            ("face 9", Input(Command.FACE_INFO, peer=0, face=9)),
            ("face 3 9", Input(Command.FACE_INFO, peer=3, face=9)),
            ("stats 9", Input(Command.FACE_INFO, peer=0, face=9)),
            ("pier-stats 3 9", Input(Command.FACE_INFO, peer=3, face=9)),
            ("piers", Input(Command.PIERS)),
            ("route /ndn/edu", Input(Command.ROUTE_QUERY, route="/ndn/edu")),
            ("help", Input(Command.HELP)),
        ],
    )
    def test_well_formed_commands_consume_everything(
        self, text: str, expected: Input
    ) -> None:
        assert parse(text).remainder == ""
        assert parse_command(text) == expected


# ---------------------------------------------------------------------------
# Pluggable keyword table
# ---------------------------------------------------------------------------

class TestGrammarRegistry:
    def test_register_new_keyword(self) -> None:
        grammar = Grammar({"ls": lambda cursor: Input(Command.PIERS)})
        assert grammar.parse("LS").input == Input(Command.PIERS)

    def test_custom_grammar_rejects_default_keywords(self) -> None:
        grammar = Grammar({"ls": lambda cursor: Input(Command.PIERS)})
        with pytest.raises(CommandSyntaxError):
            grammar.parse("piers")

    def test_rule_receives_cursor_after_keyword(self) -> None:
        def rule(cursor: Cursor) -> Input:
            return Input(Command.STATUS, peer=cursor.number())

        grammar = Grammar()
        grammar.register("Show", rule)
        result = grammar.parse("show 4 rest")
        assert result.input == Input(Command.STATUS, peer=4)
        assert result.remainder == "rest"
        assert grammar.keywords == ("show",)

    def test_parse_command_accepts_custom_grammar(self) -> None:
        grammar = Grammar({"ls": lambda cursor: Input(Command.PIERS)})
        assert parse_command("ls", grammar) == Input(Command.PIERS)
