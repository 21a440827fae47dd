r"""
Emphasis stage tests

Tests bold, italic and strikethrough markers, escape inhibition (\*, \~)
and the boundary-whitespace discipline of the underscore forms.
"""

import pytest

from quickmark.lib.stages import emphasisStage_build


@pytest.fixture
def stage():
    return emphasisStage_build()


class TestStarMarkers:
    """Test ** and * markers"""

    def test_bold(self, stage):
        assert stage.apply("**a**") == "<b>a</b>"

    def test_italic(self, stage):
        assert stage.apply("*a*") == "<i>a</i>"

    def test_bold_is_shortest_match(self, stage):
        """The first closing ** terminates the span"""
        assert stage.apply("**a** and **b**") == "<b>a</b> and <b>b</b>"

    def test_bold_and_italic_in_one_line(self, stage):
        assert stage.apply("**a** then *b*") == "<b>a</b> then <i>b</i>"

    def test_markers_do_not_span_lines(self, stage):
        assert stage.apply("a **b\nc** d") == "a **b\nc** d"

    def test_inside_word(self, stage):
        assert stage.apply("In**SI**D*E*") == "In<b>SI</b>D<i>E</i>"

    def test_unbalanced_left_literal(self, stage):
        assert stage.apply("**unclosed") == "**unclosed"

    def test_rule_order(self, stage):
        """Bold must be resolved before italic"""
        names = [rule.name for rule in stage.rules]
        assert names == ["bold", "italic", "bold_under", "italic_under", "strike"]


class TestEscapeInhibition:
    """Test that backslash-escaped markers are not formatted"""

    def test_escaped_bold_untouched(self, stage):
        r"""\*\*a\*\* stays as-is for the unescape stage"""
        assert stage.apply(r"\*\*a\*\*") == r"\*\*a\*\*"

    def test_escaped_italic_untouched(self, stage):
        assert stage.apply(r"\*a\*") == r"\*a\*"

    def test_escaped_strike_untouched(self, stage):
        assert stage.apply(r"\~~a~~") == r"\~~a~~"

    def test_escaped_marker_inside_bold(self, stage):
        """An escaped marker may sit inside a span"""
        assert stage.apply(r"**a\*b**") == r"<b>a\*b</b>"

    def test_content_cannot_end_on_backslash(self, stage):
        r"""**a\** is not bold: the closing marker is escaped"""
        assert "<b>" not in stage.apply(r"**a\**")


class TestUnderscoreMarkers:
    """Test __ and _ markers with boundary whitespace"""

    def test_bold_keeps_one_space_each_side(self, stage):
        assert stage.apply(" __a__ ") == "<b> a </b>"

    def test_italic_keeps_one_space_each_side(self, stage):
        assert stage.apply("say _hi_ now") == "say<i> hi </i>now"

    def test_no_boundary_unmatched(self, stage):
        assert stage.apply("x__a__y") == "x__a__y"

    def test_start_of_text_unmatched(self, stage):
        """No whitespace before the opening marker at position 0"""
        assert stage.apply("__a__ ") == "__a__ "

    def test_identifier_unmatched(self, stage):
        assert stage.apply("call my_var_name now") == "call my_var_name now"

    def test_newline_counts_as_boundary(self, stage):
        assert stage.apply("x\n__a__\n") == "x<b>\na\n</b>"


class TestStrikethrough:
    """Test ~~ markers"""

    def test_strike(self, stage):
        assert stage.apply("~~a~~") == "<s>a</s>"

    def test_strike_in_sentence(self, stage):
        assert stage.apply("He is ~~mean~~ nice") == "He is <s>mean</s> nice"
