"""
Reference table models

Read-only lookup structures supplied by the block-level pass: link
reference definitions keyed by normalized id, and footnotes keyed by
their raw id.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class LinkReference:
    """
    Target of a reference-style link

    Attributes:
        url: Link destination, unencoded
        title: Optional link title, unescaped

    Example:
        For the definition "[docs]: http://example.com "Docs"":
        LinkReference(url="http://example.com", title="Docs")
    """
    url: str
    title: Optional[str] = None


@dataclass(frozen=True)
class Footnote:
    """
    A footnote definition

    Attributes:
        number: Ordinal used for the generated fn:N / fnref:N anchors
    """
    number: int


_WHITESPACE = re.compile(r'\s+')


def referenceId_normalize(ref_id: str) -> str:
    """
    Normalize a link reference id for table lookup

    Collapses internal whitespace runs to one space, then lowercases.
    Table construction and lookup must both go through here.

    Example:
        >>> referenceId_normalize("Foo \\n  Bar")
        'foo bar'
    """
    return _WHITESPACE.sub(' ', ref_id).lower()


def linkTable_build(links: Optional[Mapping[str, Any]] = None) -> Mapping[str, LinkReference]:
    """
    Build a read-only link table with normalized keys

    Args:
        links: Mapping from reference id (any case/spacing) to a
               LinkReference, or to a dict with "url" and optional "title"

    Returns:
        Read-only mapping keyed by ``referenceId_normalize(id)``

    Example:
        >>> linkTable_build({"Docs": {"url": "http://x"}})["docs"]
        LinkReference(url='http://x', title=None)
    """
    table = {}
    for key, value in (links or {}).items():
        if not isinstance(value, LinkReference):
            value = LinkReference(url=value["url"], title=value.get("title"))
        table[referenceId_normalize(key)] = value
    return MappingProxyType(table)


def footnoteTable_build(footnotes: Optional[Mapping[str, Any]] = None) -> Mapping[str, Footnote]:
    """
    Build a read-only footnote table; ids are used as given

    Values may be Footnote instances, bare ordinals, or dicts with "number".
    """
    table = {}
    for key, value in (footnotes or {}).items():
        if isinstance(value, int):
            value = Footnote(number=value)
        elif not isinstance(value, Footnote):
            value = Footnote(number=value["number"])
        table[key] = value
    return MappingProxyType(table)
