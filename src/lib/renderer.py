"""
Renderer for escmark tokens to device control codes

Consumes the lexer's token stream once, left to right, flipping the
RenderState toggles and appending control codes and literal text to an
output buffer.
"""

from typing import Callable, Dict, Iterable, Optional

from ..config import appsettings
from ..models.state import RenderState
from ..models.tokens import Token, TokenKind, PASSTHROUGH_KINDS, NEWLINE_KINDS
from .codes import ControlCodes, ESCP
from .lexer import tokens_scan
from .log import LOG


TokenHandler = Callable[[Token, RenderState], bytes]


class Renderer:
    """
    Converts markdown text to a control-code byte stream

    Responsibilities:
    - Toggle bold/italic/underline on alternating markers
    - Open header environments and close them at the next newline
    - Join single newlines with a space, keep paragraph breaks
    - Copy text, list items, links and code blocks verbatim
    - Append the final line feed

    A Renderer holds configuration only. Each render() call creates its own
    RenderState and buffer, so one Renderer can serve many conversions.
    """

    def __init__(
        self,
        codes: Optional[ControlCodes] = None,
        strict: Optional[bool] = None,
        close_at_eof: Optional[bool] = None,
        encoding: Optional[str] = None,
        errors: Optional[str] = None,
    ) -> None:
        """
        Initialize renderer

        Args:
            codes: Control-code table (default: ESC/P)
            strict: Raise on unmatched characters (default: settings.strict_mode)
            close_at_eof: Close open environments before the final line feed
                          (default: settings.close_at_eof)
            encoding: Encoding for literal text (default: settings.output_encoding)
            errors: Codec error handler (default: settings.encoding_errors)
        """
        self.codes = codes if codes is not None else ESCP
        self.strict = appsettings.strict_mode if strict is None else strict
        self.close_at_eof = appsettings.close_at_eof if close_at_eof is None else close_at_eof
        self.encoding = encoding or appsettings.output_encoding
        self.errors = errors or appsettings.encoding_errors

        self.handlers: Dict[TokenKind, TokenHandler] = {}
        self.handlers_register()

    def handlers_register(self) -> None:
        """Map every token kind to the method producing its bytes"""
        self.handlers[TokenKind.BOLD] = lambda token, state: self.flag_toggle(state, 'bold')
        self.handlers[TokenKind.ITALIC] = lambda token, state: self.flag_toggle(state, 'italic')
        self.handlers[TokenKind.UNDERLINE] = lambda token, state: self.flag_toggle(state, 'underline')
        self.handlers[TokenKind.TOP_HEADER] = self.topHeader_open
        self.handlers[TokenKind.LOWER_HEADER] = self.lowerHeader_open
        self.handlers[TokenKind.TAG] = lambda token, state: b""
        for kind in NEWLINE_KINDS:
            self.handlers[kind] = self.newline_render
        for kind in PASSTHROUGH_KINDS:
            self.handlers[kind] = self.text_render

    def render(self, text: str) -> bytes:
        """
        Convert markdown text to a control-code stream

        Args:
            text: Markdown source

        Returns:
            The complete byte stream, always ending with the appended line feed

        Raises:
            LexicalError: In strict mode, on a character no rule matches
        """
        return self.tokens_render(tokens_scan(text, strict=self.strict))

    def tokens_render(self, tokens: Iterable[Token]) -> bytes:
        """
        Render an already-scanned token sequence

        Args:
            tokens: Tokens in input order

        Returns:
            The complete byte stream
        """
        state = RenderState()
        buffer = bytearray()

        for token in tokens:
            buffer += self.token_render(token, state)

        if self.close_at_eof:
            buffer += self.environments_close(state)

        buffer += b"\n"
        LOG(f"Rendered {len(buffer)} bytes", level=2)
        return bytes(buffer)

    def token_render(self, token: Token, state: RenderState) -> bytes:
        """Bytes for a single token, updating state in place"""
        return self.handlers[token.kind](token, state)

    def flag_toggle(self, state: RenderState, flag: str) -> bytes:
        """
        Flip an inline toggle and return its on or off code

        Args:
            state: Render state of the current conversion
            flag: "bold", "italic" or "underline"

        Returns:
            The on code if the flag was closed, else the off code
        """
        on_code, off_code = self.codes.toggle_codes(flag)
        opening = not getattr(state, flag)
        setattr(state, flag, opening)
        return on_code if opening else off_code

    def topHeader_open(self, token: Token, state: RenderState) -> bytes:
        if state.topHeaderOpen:
            return b""
        state.topHeaderOpen = True
        return self.codes.topHeader_open()

    def lowerHeader_open(self, token: Token, state: RenderState) -> bytes:
        if state.lowerHeaderOpen:
            return b""
        state.lowerHeaderOpen = True
        return self.codes.lowerHeader_open()

    def headers_close(self, state: RenderState) -> bytes:
        """
        Close whichever header environments are open

        A header spans a single line, so every newline token runs this
        whatever kind of newline it is.
        """
        result = b""
        if state.topHeaderOpen:
            state.topHeaderOpen = False
            result += self.codes.topHeader_close()
        if state.lowerHeaderOpen:
            state.lowerHeaderOpen = False
            result += self.codes.lowerHeader_close()
        return result

    def newline_render(self, token: Token, state: RenderState) -> bytes:
        """
        Close headers, then join the line (space) or break the paragraph (line feed)

        A removable newline that closed a header emits no joining space; the
        header's trailing line break already ends the line.
        """
        closing = self.headers_close(state)
        if token.kind is TokenKind.ACTIVE_NEWLINE:
            return closing + b"\n"
        if closing:
            return closing
        return b" "

    def text_render(self, token: Token, state: RenderState) -> bytes:
        return token.text.encode(self.encoding, self.errors)

    def environments_close(self, state: RenderState) -> bytes:
        """Close headers and switch off any inline toggle left open"""
        result = self.headers_close(state)
        for flag in ('bold', 'italic', 'underline'):
            if getattr(state, flag):
                result += self.flag_toggle(state, flag)
        return result


def transpile(text: str, codes: Optional[ControlCodes] = None, **options) -> bytes:
    """
    Convert markdown text to a control-code byte stream

    Args:
        text: Markdown source
        codes: Control-code table (default: ESC/P)
        **options: Further Renderer options (strict, close_at_eof, encoding, errors)

    Returns:
        The byte stream, ending with exactly one appended line feed

    Example:
        >>> transpile("**bold text**")
        b'\\x1bEbold text\\x1bF\\n'
    """
    return Renderer(codes=codes, **options).render(text)
