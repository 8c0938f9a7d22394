"""
Pygments lexer for the escmark markdown subset

Classifies markdown input into markup tokens for the renderer. Rules are
tried in order at each position, so ambiguous patterns are resolved by
placing the preferred rule first:

- Fenced code blocks and links are matched whole, before their interior
  could be read as markup
- A run of two or more newlines is one paragraph break, a lone newline is
  removable
- "**" is tried before "*", "##" before "#"

Token types (under Token.Escmark):
- Bold, Italic, Underline: inline toggles
- TopHeader, LowerHeader: header environments closed by the next newline
- Tag: {#id} annotations, dropped by the renderer
- RemovableNewline, ActiveNewline: line joins and paragraph breaks
- Text, UnorderedList, Link, Codeblock: copied through verbatim
"""

from typing import Iterator, Optional

from pygments.lexer import RegexLexer
from pygments.token import Token as PygmentsToken

from ..config import appsettings
from ..models.tokens import Token, TokenKind
from .log import LOG


Markup = PygmentsToken.Escmark


class LexicalError(SyntaxError):
    """Raised in strict mode when no markup rule matches a character"""

    def __init__(self, message: str, position: int, character: str) -> None:
        super().__init__(message)
        self.position = position
        self.character = character


class MarkdownLexer(RegexLexer):
    """
    Lexer for the markdown subset understood by escmark

    Example:
        # Notes **now**

    Tokens:
        "# " → Escmark.TopHeader
        "Notes" → Escmark.Text
        " " → Escmark.Text
        "**" → Escmark.Bold
        "now" → Escmark.Text
        "**" → Escmark.Bold
    """

    name = 'Escmark'
    aliases = ['escmark']
    filenames = ['*.md']

    tokens = {
        'root': [
            # Fenced code block, swallowing one newline on either side
            (r'\n?```[^`]*```\n?', Markup.Codeblock),

            # [label](target) with no nested brackets or parens
            (r'\[[^\[\]]+\]\([^()]+\)', Markup.Link),

            # Trailing {#id} annotation, up to the last brace on the line
            (r' ?\{#*.*\}', Markup.Tag),

            # List item line, including its newline
            (r'^[-*+] .+\n', Markup.UnorderedList),

            (r'\n{2,}', Markup.ActiveNewline),
            (r'\n', Markup.RemovableNewline),

            (r'#{2,} *', Markup.LowerHeader),
            (r'# *', Markup.TopHeader),

            (r'\*\*', Markup.Bold),
            (r'\*', Markup.Italic),
            (r'__', Markup.Underline),

            # Plain runs stop before anything that can start a longer match
            (r'[^*_#\n\r\t\f\[{ `]+', Markup.Text),
            (r'[^*_#\n\r\t\f]', Markup.Text),
        ],
    }


_KIND_BY_TYPE = {
    Markup.Bold: TokenKind.BOLD,
    Markup.Italic: TokenKind.ITALIC,
    Markup.Underline: TokenKind.UNDERLINE,
    Markup.TopHeader: TokenKind.TOP_HEADER,
    Markup.LowerHeader: TokenKind.LOWER_HEADER,
    Markup.Tag: TokenKind.TAG,
    Markup.RemovableNewline: TokenKind.REMOVABLE_NEWLINE,
    Markup.ActiveNewline: TokenKind.ACTIVE_NEWLINE,
    Markup.Text: TokenKind.TEXT,
    Markup.UnorderedList: TokenKind.UNORDERED_LIST,
    Markup.Link: TokenKind.LINK,
    Markup.Codeblock: TokenKind.CODEBLOCK,
}


def tokens_scan(
    text: str, strict: Optional[bool] = None, lexer: Optional[MarkdownLexer] = None
) -> Iterator[Token]:
    """
    Lazily tokenize markdown text

    Produces one Token per call, left to right, without gaps or overlaps
    except for characters no rule matches. Those are skipped, or raise
    LexicalError when strict mode is on. Create a new iterator for every
    conversion.

    Args:
        text: Markdown source
        strict: Raise on unmatched characters (defaults to settings.strict_mode)
        lexer: Lexer instance to reuse (a new MarkdownLexer by default)

    Yields:
        Token for each recognized slice of input

    Raises:
        LexicalError: In strict mode, at the first unmatched character

    Example:
        >>> [t.kind.name for t in tokens_scan("*a*")]
        ['ITALIC', 'TEXT', 'ITALIC']
    """
    if strict is None:
        strict = appsettings.strict_mode
    if lexer is None:
        lexer = get_lexer()

    # get_tokens() would strip and append newlines; scan the raw text instead
    for position, ttype, value in lexer.get_tokens_unprocessed(text):
        kind = _KIND_BY_TYPE.get(ttype)
        if kind is None:
            line = text.count('\n', 0, position) + 1
            if strict:
                raise LexicalError(
                    f"Unexpected character {value!r} at line {line}, position {position}",
                    position,
                    value,
                )
            LOG(f"Skipping unmatched character {value!r} at line {line}, position {position}", level=2)
            continue

        LOG(f"Token at position {position}: {kind.name} {value!r}", level=3)
        yield Token(kind=kind, text=value, position=position)


def get_lexer() -> MarkdownLexer:
    """
    Get the MarkdownLexer instance

    Returns:
        MarkdownLexer instance ready for use with Pygments or tokens_scan()
    """
    return MarkdownLexer()
