"""
escmark - Markdown to printer control codes

Converts a small markdown subset into the escape sequences a printer or
terminal uses for bold, italic, underline and double-size headers.
"""

__version__ = "1.0.0"

from .codes import ControlCodes, ESCP
from .lexer import MarkdownLexer, LexicalError, tokens_scan
from .renderer import Renderer, transpile
from .profile import Profile, ProfileError, profiles_listAvailable
from .log import LOG, state_connectToLogger

__all__ = [
    "ControlCodes",
    "ESCP",
    "MarkdownLexer",
    "LexicalError",
    "tokens_scan",
    "Renderer",
    "transpile",
    "Profile",
    "ProfileError",
    "profiles_listAvailable",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
