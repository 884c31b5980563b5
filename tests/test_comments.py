"""Test %% debug-comment line stripping."""

from editml.comments import strip_debug_comments, strip_debug_comments_mapped


class TestCommentLines:
    def test_comment_line_removed(self):
        assert strip_debug_comments("%% a note\ntext") == "text"

    def test_bare_marker(self):
        assert strip_debug_comments("%%") == ""

    def test_tab_after_marker(self):
        assert strip_debug_comments("%%\tnote\ntext") == "text"

    def test_punctuation_after_marker(self):
        assert strip_debug_comments("%%-dash\ntext") == "text"

    def test_alphanumeric_after_marker_is_literal(self):
        assert strip_debug_comments("%%VERSION 2\n") == "%%VERSION 2\n"

    def test_digit_after_marker_is_literal(self):
        assert strip_debug_comments("%%1") == "%%1"

    def test_indented_marker_is_literal(self):
        assert strip_debug_comments("  %% not a comment") == "  %% not a comment"

    def test_marker_mid_line_is_literal(self):
        assert strip_debug_comments("text %% more") == "text %% more"


class TestLineEndings:
    def test_empty(self):
        assert strip_debug_comments("") == ""

    def test_trailing_newline_preserved(self):
        assert strip_debug_comments("a\n%% c\n") == "a\n"

    def test_no_trailing_newline(self):
        assert strip_debug_comments("a\n%% c") == "a"

    def test_crlf_normalised(self):
        assert strip_debug_comments("a\r\n%% c\r\nb\r\n") == "a\nb\n"

    def test_only_comments(self):
        assert strip_debug_comments("%% one\n%% two\n") == ""

    def test_blank_lines_kept(self):
        assert strip_debug_comments("a\n\n%% c\n\nb") == "a\n\n\nb"


class TestNonAlphanumericFollower:
    def test_vulgar_fraction_is_comment(self):
        assert strip_debug_comments("%%½\ntext") == "text"

    def test_superscript_digit_is_comment(self):
        assert strip_debug_comments("%%²\ntext") == "text"

    def test_non_latin_letter_is_literal(self):
        assert strip_debug_comments("%%été") == "%%été"

    def test_non_latin_decimal_digit_is_literal(self):
        assert strip_debug_comments("%%٣") == "%%٣"


class TestLineNumbers:
    def test_no_comments(self):
        assert strip_debug_comments_mapped("a\nb\n") == ("a\nb\n", [1, 2])

    def test_kept_lines_keep_input_numbers(self):
        text, numbers = strip_debug_comments_mapped("%% x\na\n%% y\n%% z\nb")
        assert text == "a\nb"
        assert numbers == [2, 5]

    def test_empty(self):
        assert strip_debug_comments_mapped("") == ("", [])

    def test_only_comments(self):
        assert strip_debug_comments_mapped("%% one\n%% two\n") == ("", [])
