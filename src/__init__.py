"""
escmark - Markdown to printer control codes

Turns **bold**, *italic*, __underline__ and # headers into the escape
sequences understood by ESC/P printers (or ANSI terminals for preview).
"""

__version__ = "1.0.0"

from .lib import Renderer, transpile, Profile, ControlCodes, ESCP, LOG, state_connectToLogger

__all__ = [
    "Renderer",
    "transpile",
    "Profile",
    "ControlCodes",
    "ESCP",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
