"""
Link, image and unescape stage tests
"""

import pytest

from quickmark.lib.stages import imageStage_build, linkStage_build, unescapeStage_build


@pytest.fixture
def link():
    return linkStage_build()


@pytest.fixture
def image():
    return imageStage_build()


class TestLink:
    """Test [caption](target) conversion"""

    def test_anchor(self, link):
        assert link.apply("[cap](http://x)") == "<a href='http://x'>cap</a>"

    def test_image_syntax_skipped(self, link):
        assert link.apply("![cap](http://x)") == "![cap](http://x)"

    def test_two_links_on_one_line(self, link):
        source = "[a](x) and [b](y)"
        assert link.apply(source) == "<a href='x'>a</a> and <a href='y'>b</a>"

    def test_target_not_validated(self, link):
        assert link.apply("[c](not a url)") == "<a href='not a url'>c</a>"

    def test_link_does_not_swallow_image(self, link):
        """A stray bracket before an image does not open a link over it"""
        source = "[a] and ![b](y)"
        assert link.apply(source) == source

    def test_target_with_parentheses(self, link):
        source = "[Corgi](https://en.wikipedia.org/wiki/Corgi_(dog)) now"
        expected = "<a href='https://en.wikipedia.org/wiki/Corgi_(dog)'>Corgi</a> now"
        assert link.apply(source) == expected

    def test_caption_with_brackets(self, link):
        assert link.apply("[see [1]](x)") == "<a href='x'>see [1]</a>"

    def test_parenthesised_target_then_image(self, link):
        source = "[a](x_(y)) and ![b](z)"
        assert link.apply(source) == "<a href='x_(y)'>a</a> and ![b](z)"

    def test_unbalanced_target_stops_at_first_close(self, link):
        assert link.apply("[a](x(y)") == "[a](x(y)"

    def test_newline_in_caption_unmatched(self, link):
        assert link.apply("[a\nb](x)") == "[a\nb](x)"


class TestImage:
    """Test ![caption](target) conversion"""

    def test_image(self, image):
        expected = "<img src='http://x' title='cap' style='max-width: 80%' />"
        assert image.apply("![cap](http://x)") == expected

    def test_custom_width(self):
        result = imageStage_build(max_width="50%").apply("![c](u)")
        assert result == "<img src='u' title='c' style='max-width: 50%' />"

    def test_plain_link_untouched(self, image):
        assert image.apply("[cap](http://x)") == "[cap](http://x)"

    def test_target_with_parentheses(self, image):
        expected = "<img src='http://x/a_(b).png' title='c' style='max-width: 80%' />"
        assert image.apply("![c](http://x/a_(b).png)") == expected

    def test_caption_with_brackets(self, image):
        expected = "<img src='u' title='fig [2]' style='max-width: 80%' />"
        assert image.apply("![fig [2]](u)") == expected


class TestUnescape:
    """Test removal of backslashes before escapable markers"""

    def test_markers(self):
        assert unescapeStage_build().apply(r"\*\_\~") == "*_~"

    def test_other_backslashes_kept(self):
        assert unescapeStage_build().apply(r"\a \\") == r"\a \\"
