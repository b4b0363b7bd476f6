"""
inkline - Inline markdown conversion for chat message templates

Scans inline markdown with ordered, prefix-anchored rules and hands each
construct to a pluggable renderer.
"""

__version__ = "1.0.0"

from .lib import (
    Converter,
    InlineScanError,
    context_build,
    convert,
    html_render,
    ruleset_build,
    Renderer,
    HtmlRenderer,
    LOG,
    context_connectToLogger,
)
from .config import appsettings, InlineSettings
from .models import ConversionContext, LinkReference, Footnote

__all__ = [
    "Converter",
    "InlineScanError",
    "context_build",
    "convert",
    "html_render",
    "ruleset_build",
    "Renderer",
    "HtmlRenderer",
    "LOG",
    "context_connectToLogger",
    "appsettings",
    "InlineSettings",
    "ConversionContext",
    "LinkReference",
    "Footnote",
    "__version__",
]
