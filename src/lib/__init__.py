"""
inkline - Inline markdown conversion for chat message templates

Scans inline markdown with ordered, prefix-anchored rules and hands each
construct to a pluggable renderer.
"""

__version__ = "1.0.0"

from .inline import Converter, InlineScanError, context_build, convert, html_render
from .rules import ruleset_build
from .renderer import Renderer, HtmlRenderer, outputs_join
from .smartypants import smartypants
from .log import LOG, context_connectToLogger, context_disconnectFromLogger

__all__ = [
    "Converter",
    "InlineScanError",
    "context_build",
    "convert",
    "html_render",
    "ruleset_build",
    "Renderer",
    "HtmlRenderer",
    "outputs_join",
    "smartypants",
    "LOG",
    "context_connectToLogger",
    "context_disconnectFromLogger",
    "__version__",
]
