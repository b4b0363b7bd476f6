"""
Models package for inkline

Contains data structures and type definitions for the conversion engine.
"""

from .rules import Rule, RuleSet, RuleMatch, RULE_ORDER, NEVER
from .references import (
    LinkReference,
    Footnote,
    referenceId_normalize,
    linkTable_build,
    footnoteTable_build,
)
from .context import ConversionContext

__all__ = [
    "Rule",
    "RuleSet",
    "RuleMatch",
    "RULE_ORDER",
    "NEVER",
    "LinkReference",
    "Footnote",
    "referenceId_normalize",
    "linkTable_build",
    "footnoteTable_build",
    "ConversionContext",
]
