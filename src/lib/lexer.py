"""
Custom Pygments lexer for quickmark syntax highlighting

Highlights the markdown dialect in the editor pane and in source listings
appended to rendered pages.

Token types:
- Generic.Heading / Generic.Subheading: '#', '##', '###' lines
- Generic.Strong / Generic.Emph / Generic.Deleted: bold, italic, strike spans
- Name.Tag / Name.Attribute: link and image captions and targets
- String.Escape: backslash-escaped markers
- Punctuation: trailing hard line breaks
"""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.token import Generic, Name, Punctuation, String, Text

from .stages import CAPTION_PATTERN, TARGET_PATTERN


class QuickmarkLexer(RegexLexer):
    """
    Lexer for the quickmark markdown dialect

    Example:
        ## Notes with **bold** and [a link](http://x)

    Tokens:
        ## Notes with ... → Generic.Subheading
    """

    name = 'Quickmark'
    aliases = ['quickmark', 'qmd']
    filenames = ['*.md']

    tokens = {
        'root': [
            # Headings (exact '#' counts, level 1 first so it is not eaten as text)
            (r'^#[ \t]+.*\n?', Generic.Heading),
            (r'^#{2,3}[ \t]+.*\n?', Generic.Subheading),

            # Escaped markers stay literal
            (r'\\[*_~]', String.Escape),

            # Images before links: '!' prefix decides
            (r'(!\[)' + CAPTION_PATTERN + r'(\]\()' + TARGET_PATTERN + r'(\))',
             bygroups(Punctuation, Name.Tag, Punctuation, Name.Attribute, Punctuation)),
            (r'(\[)' + CAPTION_PATTERN + r'(\]\()' + TARGET_PATTERN + r'(\))',
             bygroups(Punctuation, Name.Tag, Punctuation, Name.Attribute, Punctuation)),

            # Emphasis spans
            (r'\*\*[^\n]*?[^\n\\]\*\*', Generic.Strong),
            (r'\*[^\n]*?[^\n\\]\*', Generic.Emph),
            (r'(?<=\s)__[^_\n]*?[^\n\\]__(?=\s)', Generic.Strong),
            (r'(?<=\s)_[^_\n]*?[^\n\\]_(?=\s)', Generic.Emph),
            (r'~~[^\n]*?[^\n\\]~~', Generic.Deleted),

            # Hard line breaks
            (r'(?:  |\\)$', Punctuation),

            # Everything else is text
            (r'[^\\*_~!\[\n# ]+', Text),
            (r'\n', Text),
            (r'.', Text),
        ],
    }


def get_lexer() -> QuickmarkLexer:
    """
    Get the QuickmarkLexer instance

    Returns:
        QuickmarkLexer instance ready for use with Pygments
    """
    return QuickmarkLexer()


def source_highlight(text: str, style: str = "default") -> str:
    """
    Highlight markdown source as standalone HTML

    Args:
        text: Raw markdown
        style: Pygments style name

    Returns:
        HTML <div class="highlight"> block with inline styles
    """
    formatter = HtmlFormatter(style=style, noclasses=True)
    return highlight(text, get_lexer(), formatter)
