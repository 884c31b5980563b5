"""Test context-sensitive escape decoding."""

from editml.ast import EditKind, Operation
from editml.escapes import decode, escapable, unknown_escapes


class TestCommonEscapes:
    def test_backslash(self):
        assert decode("\\\\", EditKind.ADDITION) == "\\"

    def test_braces(self):
        assert decode("\\{x\\}", EditKind.DELETION) == "{x}"

    def test_common_escapes_in_block_content(self):
        assert decode("\\{\\}\\\\", Operation.MOVE) == "{}\\"

    def test_plain_text_unchanged(self):
        assert decode("no escapes here", EditKind.COMMENT) == "no escapes here"


class TestOperatorEscapes:
    def test_addition(self):
        assert decode("a\\+b", EditKind.ADDITION) == "a+b"

    def test_deletion(self):
        assert decode("a\\-b", EditKind.DELETION) == "a-b"

    def test_comment(self):
        assert decode("a\\<b", EditKind.COMMENT) == "a<b"

    def test_highlight(self):
        assert decode("a\\=b", EditKind.HIGHLIGHT) == "a=b"

    def test_tilde_in_move_block(self):
        assert decode("a\\~b", Operation.MOVE) == "a~b"

    def test_tilde_in_copy_block(self):
        assert decode("a\\~b", Operation.COPY) == "a~b"

    def test_other_operator_left_verbatim(self):
        assert decode("a\\-b", EditKind.ADDITION) == "a\\-b"

    def test_operator_escape_not_applied_to_blocks(self):
        assert decode("a\\+b", Operation.COPY) == "a\\+b"

    def test_tilde_not_decoded_inline(self):
        assert decode("\\~", EditKind.HIGHLIGHT) == "\\~"

    def test_escapable_sets(self):
        assert escapable(EditKind.ADDITION) == frozenset("\\{}+")
        assert escapable(Operation.MOVE) == frozenset("\\{}~")


class TestSinglePass:
    def test_double_escaped_brace(self):
        """An escaped backslash followed by a brace yields a literal backslash-brace."""
        assert decode("\\\\{", EditKind.ADDITION) == "\\{"

    def test_four_backslashes(self):
        assert decode("\\\\\\\\", EditKind.ADDITION) == "\\\\"

    def test_decode_is_not_idempotent(self):
        once = decode("\\\\{", EditKind.ADDITION)
        assert decode(once, EditKind.ADDITION) == "{"
        assert once != "{"

    def test_trailing_backslash(self):
        assert decode("abc\\", EditKind.ADDITION) == "abc\\"

    def test_empty(self):
        assert decode("", EditKind.ADDITION) == ""


class TestUnknownEscapes:
    def test_reports_offset_and_sequence(self):
        assert unknown_escapes("a\\%b", EditKind.ADDITION) == [(1, "\\%")]

    def test_known_escapes_not_reported(self):
        assert unknown_escapes("\\+\\{\\}\\\\", EditKind.ADDITION) == []

    def test_unknown_sequence_kept(self):
        assert decode("50\\%", EditKind.COMMENT) == "50\\%"

    def test_multiple(self):
        found = unknown_escapes("\\x and \\y", EditKind.HIGHLIGHT)
        assert [seq for _, seq in found] == ["\\x", "\\y"]
