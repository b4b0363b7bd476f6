"""
Conversion context model

Bundles everything a scan needs. Created once per top-level conversion
and passed by reference through every nested scan.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from .references import Footnote, LinkReference
from .rules import RuleSet


@dataclass(frozen=True)
class ConversionContext:
    """
    Immutable inputs to one conversion

    Attributes:
        rules: Rule set selected by the gfm/breaks/pedantic/footnotes flags
        links: Read-only link table keyed by normalized reference id
        footnotes: Read-only footnote table keyed by raw footnote id
        renderer: Render capability receiving one call per construct
        prettify: Text hook applied to plain text runs before escaping
                  (identity, or smartypants)
        sanitize: Text hook applied to raw tags (identity, or escape)
        verbosity: Logging verbosity while this context is active
    """
    rules: RuleSet
    links: Mapping[str, LinkReference]
    footnotes: Mapping[str, Footnote]
    renderer: Any
    prettify: Callable[[str], str]
    sanitize: Callable[[str], str]
    verbosity: int = 0
