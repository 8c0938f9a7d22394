"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the verbosity of the
ProgramState driving the current conversion run, so the lexer and renderer
can trace their work without having state passed down to them.

Usage:
    from escmark.lib.log import LOG, state_connectToLogger

    # At start of the pipeline:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Converting notes.md", level=1)
    LOG("Skipping unmatched character '_'", level=2)
    LOG("Token at position 12: BOLD '**'", level=3)

Outside a connected context (e.g. a library call to transpile()) nothing is
logged.
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold the ProgramState of the current run
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Output streams may carry raw control bytes, so diagnostics always go to stderr
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <8}</cyan>:<cyan>{function: <20}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: Object with a verbosity attribute (normally a ProgramState)
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when none is connected"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=progress, 2=detail, 3=token trace)
        **kwargs: Additional loguru metadata
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
