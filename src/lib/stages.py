"""
Stage definitions for the quickmark dialect

Each builder returns an immutable Stage. The renderer owns the tuple
returned by stages_build() and applies it in order:

    heading -> emphasis -> linebreak -> paragraph -> link -> image -> unescape

Order is load-bearing. Escaped markers (\\*, \\_, \\~) must survive the
emphasis stage untouched and are only stripped by the final unescape stage;
link conversion must run before image conversion so that image syntax is
excluded from links by the preceding-'!' check alone.
"""

import re
from typing import Optional, Tuple

from ..config import AppSettings, appsettings
from ..models.rules import Rule, Stage


STAGE_ORDER: Tuple[str, ...] = (
    "heading",
    "emphasis",
    "linebreak",
    "paragraph",
    "link",
    "image",
    "unescape",
)

# Link and image parts never span a newline. Brackets inside a caption and
# parentheses inside a target must be balanced, one level deep.
CAPTION_PATTERN = r"((?:[^\[\]\n]|\[[^\[\]\n]*\])+)"
TARGET_PATTERN = r"((?:[^()\n]|\([^()\n]*\))+)"

ESCAPABLE_MARKERS: Tuple[str, ...] = ("*", "_", "~")


def headingStage_build(heading_rule: bool = True) -> Stage:
    """
    Build the heading stage

    A line is a heading of level N when it starts with exactly N '#'
    followed by whitespace. Level 3 is matched first, then 2, then 1; the
    patterns are mutually exclusive so the order does not change results.
    Lines with four or more '#' fall through unchanged.

    Args:
        heading_rule: Emit <hr> after level-1 headings
    """
    h1_template = r"<h1>\g<1></h1><hr>" if heading_rule else r"<h1>\g<1></h1>"
    return Stage(
        name="heading",
        rules=(
            Rule("h3", re.compile(r"^#{3}\s+(.+)$", re.MULTILINE), r"<h3>\g<1></h3>"),
            Rule("h2", re.compile(r"^#{2}\s+(.+)$", re.MULTILINE), r"<h2>\g<1></h2>"),
            Rule("h1", re.compile(r"^#{1}\s+(.+)$", re.MULTILINE), h1_template),
        ),
    )


def emphasisStage_build() -> Stage:
    r"""
    Build the emphasis stage

    Rules, in order:
        bold        **text**       opening marker not preceded by '\'
        italic      *text*         same, single marker
        bold_under  \s__text__\s   needs whitespace on both sides
        italic_under \s_text_\s    needs whitespace on both sides
        strike      ~~text~~       opening marker not preceded by '\'

    Content never spans lines and never ends on a backslash, so an escaped
    closing marker cannot close a span. Bold runs before italic so that a
    double marker is never read as two single ones.

    The underscore forms capture the surrounding whitespace and put it back
    inside the element, exactly once per side.
    """
    return Stage(
        name="emphasis",
        rules=(
            Rule(
                "bold",
                re.compile(r"(?<!\\)\*\*([^\n]*?[^\n\\])\*\*"),
                r"<b>\g<1></b>",
            ),
            Rule(
                "italic",
                re.compile(r"(?<!\\)\*([^\n]*?[^\n\\])\*"),
                r"<i>\g<1></i>",
            ),
            Rule(
                "bold_under",
                re.compile(r"(\s)__([^_\n]*?[^\n\\])__(\s)"),
                r"<b>\g<1>\g<2>\g<3></b>",
            ),
            Rule(
                "italic_under",
                re.compile(r"(\s)_([^_\n]*?[^\n\\])_(\s)"),
                r"<i>\g<1>\g<2>\g<3></i>",
            ),
            Rule(
                "strike",
                re.compile(r"(?<!\\)~~([^\n]*?[^\n\\])~~"),
                r"<s>\g<1></s>",
            ),
        ),
    )


def linebreakStage_build() -> Stage:
    """Two trailing spaces or a trailing backslash become <br>; the newline stays"""
    return Stage(
        name="linebreak",
        rules=(Rule("br", re.compile(r"(?:  |\\)$", re.MULTILINE), "<br>"),),
    )


def paragraphStage_build() -> Stage:
    """
    Build the paragraph stage

    A paragraph is a maximal run of lines that each start with an ASCII
    letter. Anything else at column 0 (blank line, tag, '[', '!', digit,
    accented letter) ends the run and stays outside any <p>.
    """
    return Stage(
        name="paragraph",
        rules=(
            Rule(
                "p",
                re.compile(r"^([A-Za-z].*(?:\n[A-Za-z].*)*)", re.MULTILINE),
                r"<p>\g<1></p>",
            ),
        ),
    )


def linkStage_build() -> Stage:
    """[caption](target) not preceded by '!' becomes an anchor"""
    return Stage(
        name="link",
        rules=(
            Rule(
                "a",
                re.compile(r"(?<!!)\[" + CAPTION_PATTERN + r"\]\(" + TARGET_PATTERN + r"\)"),
                r"<a href='\g<2>'>\g<1></a>",
            ),
        ),
    )


def imageStage_build(max_width: str = "80%") -> Stage:
    """
    Build the image stage

    Args:
        max_width: CSS max-width of the rendered image
    """

    def image_make(match: "re.Match[str]") -> str:
        caption, target = match.group(1), match.group(2)
        return f"<img src='{target}' title='{caption}' style='max-width: {max_width}' />"

    return Stage(
        name="image",
        rules=(
            Rule("img", re.compile(r"!\[" + CAPTION_PATTERN + r"\]\(" + TARGET_PATTERN + r"\)"), image_make),
        ),
    )


def unescapeStage_build() -> Stage:
    """Strip the backslash from every escaped marker"""
    return Stage(
        name="unescape",
        rules=tuple(
            Rule(f"unescape{marker}", re.compile(re.escape("\\" + marker)), marker)
            for marker in ESCAPABLE_MARKERS
        ),
    )


def stages_build(settings: Optional[AppSettings] = None) -> Tuple[Stage, ...]:
    """
    Build the full, ordered stage list

    Args:
        settings: Settings providing image width and heading rule; defaults
                  to the application singleton

    Returns:
        Stages in pipeline order (see STAGE_ORDER)
    """
    settings = settings or appsettings
    return (
        headingStage_build(heading_rule=settings.heading_rule),
        emphasisStage_build(),
        linebreakStage_build(),
        paragraphStage_build(),
        linkStage_build(),
        imageStage_build(max_width=settings.image_max_width),
        unescapeStage_build(),
    )
