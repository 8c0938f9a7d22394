"""
Models package for escmark

Contains data structures and type definitions for the conversion pipeline.
"""

from .document import Conversion
from .state import ProgramState, RenderState, pipeline
from .tokens import Token, TokenKind, PASSTHROUGH_KINDS, NEWLINE_KINDS

__all__ = [
    "Conversion",
    "ProgramState",
    "RenderState",
    "pipeline",
    "Token",
    "TokenKind",
    "PASSTHROUGH_KINDS",
    "NEWLINE_KINDS",
]
