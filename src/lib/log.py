"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the verbosity of the
ConversionContext currently being converted, without passing it down
through every handler.

Features:
- Context-aware logging tied to ConversionContext verbosity
- Rich formatting with timestamps, colors, and metadata
- Thread-safe using contextvars
- Works throughout lib modules without passing the context

Usage:
    from inkline.lib.log import LOG, context_connectToLogger

    # At the start of a conversion:
    context_connectToLogger(context)

    # Anywhere in that conversion:
    LOG("This message appears if verbosity >= 1", level=1)
    LOG("Debug details appear if verbosity >= 2", level=2)
    LOG("Per-rule trace appears if verbosity >= 3", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar, Token
import sys

# Context variable to hold the active ConversionContext
_conversion_context: ContextVar[Optional[Any]] = ContextVar('conversion_context', default=None)

# Configure loguru with inkline-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def context_connectToLogger(context: Any) -> Token:
    """
    Connect a ConversionContext (or settings) to the logging context.

    Call this at the start of a conversion to make its verbosity setting
    available to LOG() calls made by the scanner and handlers.

    Args:
        context: Any object with a ``verbosity`` attribute

    Returns:
        Token for context_disconnectFromLogger()
    """
    return _conversion_context.set(context)


def context_disconnectFromLogger(token: Token) -> None:
    """Restore whatever was connected before context_connectToLogger()"""
    _conversion_context.reset(token)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the active context's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Built rule set for gfm", level=2)
        LOG("rule strong consumed 8 chars", level=3)
    """
    context = _conversion_context.get()

    if context is not None and getattr(context, 'verbosity', 0) >= level:
        logger.opt(depth=1).debug(message, **kwargs)
