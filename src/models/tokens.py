"""
Token models for the markdown scanner

Defines the token kinds produced by the lexer and the Token value that
carries each matched slice of input through the renderer.
"""

from enum import Enum
from dataclasses import dataclass


class TokenKind(Enum):
    """
    Classification of a lexical unit of markdown input

    Inline toggles flip a formatting flag, headers open an environment that
    the next newline closes, and the pass-through kinds are recognized only
    so their interior is not tokenized.
    """
    BOLD = "bold"                            # **
    ITALIC = "italic"                        # *
    UNDERLINE = "underline"                  # __
    TOP_HEADER = "top_header"                # "# "
    LOWER_HEADER = "lower_header"            # "## ", "### ", ...
    TAG = "tag"                              # {#id}, never rendered
    REMOVABLE_NEWLINE = "removable_newline"  # single \n
    ACTIVE_NEWLINE = "active_newline"        # paragraph break
    TEXT = "text"
    UNORDERED_LIST = "unordered_list"
    LINK = "link"
    CODEBLOCK = "codeblock"


# Kinds whose matched text is copied to the output unchanged
PASSTHROUGH_KINDS = frozenset({
    TokenKind.TEXT,
    TokenKind.UNORDERED_LIST,
    TokenKind.LINK,
    TokenKind.CODEBLOCK,
})

NEWLINE_KINDS = frozenset({
    TokenKind.REMOVABLE_NEWLINE,
    TokenKind.ACTIVE_NEWLINE,
})


@dataclass(frozen=True)
class Token:
    """
    A single classified slice of the input

    Attributes:
        kind: What the slice means to the renderer
        text: The exact matched substring of the input
        position: Character offset of the slice in the input

    Example:
        For input "**hi**" the first token is
        Token(kind=TokenKind.BOLD, text="**", position=0)
    """
    kind: TokenKind
    text: str
    position: int

    @property
    def end(self) -> int:
        return self.position + len(self.text)
