"""Unit tests for the lexer.

WHY: The transducer trusts its input to be balanced and classified. The
lexer is where malformed source must be caught, with a position the user
can find in their editor.

HOW: Tests cover token classification, group nesting, comment and
whitespace handling, and every LexError path with its line/column.
"""

import pytest

from asm_block.core.errors import LexError
from asm_block.core.lexer import tokenize
from asm_block.core.tokens import Delimiter, Group, Ident, Literal, Punct, surface


class TestClassification:
    """Identifiers, numbers, strings and punctuation."""

    def test_identifiers(self):
        assert tokenize("mov _start v19 A") == (
            Ident("mov"), Ident("_start"), Ident("v19"), Ident("A"),
        )

    def test_numbers_keep_suffixes(self):
        assert tokenize("0 0x1234 4s 0xd76aa478 1.5") == (
            Literal("0"), Literal("0x1234"), Literal("4s"), Literal("0xd76aa478"), Literal("1.5"),
        )

    def test_ident_dot_number_splits(self):
        assert tokenize("v19.4s") == (Ident("v19"), Punct("."), Literal("4s"))

    def test_leading_dot_number(self):
        assert tokenize(".0") == (Punct("."), Literal("0"))

    def test_string_literal_is_verbatim(self):
        source = r'"Hello, \"world\"\n"'
        assert tokenize(source) == (Literal(source),)

    def test_every_punctuation_char_is_separate(self):
        assert tokenize("-:@%") == (Punct("-"), Punct(":"), Punct("@"), Punct("%"))

    def test_semicolon_is_a_token(self):
        assert tokenize("nop; nop") == (Ident("nop"), Punct(";"), Ident("nop"))

    def test_unicode_identifier(self):
        assert tokenize("étiquette:") == (Ident("étiquette"), Punct(":"))


class TestGroups:
    """Delimiters are matched into nested Group tokens."""

    def test_bracket_group(self):
        assert tokenize("[eax + 4]") == (
            Group(Delimiter.BRACKET, (Ident("eax"), Punct("+"), Literal("4"))),
        )

    def test_nested_groups(self):
        tokens = tokenize("[{x} + (a)]")
        assert tokens == (
            Group(Delimiter.BRACKET, (
                Group(Delimiter.BRACE, (Ident("x"),)),
                Punct("+"),
                Group(Delimiter.PAREN, (Ident("a"),)),
            )),
        )

    def test_empty_group(self):
        assert tokenize("()") == (Group(Delimiter.PAREN, ()),)

    def test_group_surface_has_no_spaces(self):
        (group,) = tokenize("{ x : e }")
        assert surface(group) == "{x:e}"


class TestSkipped:
    """Whitespace and comments never reach the stream."""

    def test_whitespace_only(self):
        assert tokenize(" \t\r\n ") == ()

    def test_line_comment(self):
        assert tokenize("nop // trailing comment\nret") == (Ident("nop"), Ident("ret"))

    def test_block_comment(self):
        assert tokenize("nop /* gone */ ret") == (Ident("nop"), Ident("ret"))

    def test_nested_block_comment(self):
        assert tokenize("/* a /* b */ c */ ret") == (Ident("ret"),)

    def test_slash_alone_is_punct(self):
        assert tokenize("a / b") == (Ident("a"), Punct("/"), Ident("b"))

    def test_comment_markers_inside_string(self):
        assert tokenize('"http://x"') == (Literal('"http://x"'),)


class TestErrors:
    """Malformed source raises LexError with a 1-based position."""

    def test_single_quote_rejected(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("mov al, 'a'")
        assert excinfo.value.line == 1
        assert excinfo.value.column == 9
        assert "single-quoted" in str(excinfo.value)

    def test_position_on_later_line(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("mov\n  'x'")
        assert (excinfo.value.line, excinfo.value.column) == (2, 3)

    def test_unclosed_group_reports_opener(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("lea eax, [ebx + 4")
        assert excinfo.value.column == 10
        assert "unclosed '['" in str(excinfo.value)

    def test_unexpected_closer(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("a]")
        assert excinfo.value.column == 2

    def test_mismatched_closer(self):
        with pytest.raises(LexError) as excinfo:
            tokenize("[a)")
        assert excinfo.value.column == 3
        assert "expected ']'" in str(excinfo.value)

    def test_unterminated_string(self):
        with pytest.raises(LexError, match="unterminated string"):
            tokenize('.ascii "abc')

    def test_unterminated_block_comment(self):
        with pytest.raises(LexError, match="unterminated block comment"):
            tokenize("nop /* a /* b */")

    def test_control_character(self):
        with pytest.raises(LexError, match="cannot classify"):
            tokenize("nop \x01")

    def test_lex_error_is_value_error(self):
        with pytest.raises(ValueError):
            tokenize("'")
