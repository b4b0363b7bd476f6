"""
Rule set builder

Builds the ordered, immutable mapping from construct name to a
prefix-anchored pattern, for one combination of the gfm, breaks,
pedantic and footnotes flags.

Derivation order:
1. Start from the base rules
2. gfm: GFM escape, bare URL, strikethrough and text rules
   2a. gfm + breaks: newline-sensitive line break and text rules
3. otherwise pedantic: strong/em need non-space-adjacent delimiters
4. footnote rule only when footnotes are enabled

Every construct always has a rule; disabled ones get a pattern that
never matches, so the scanner never has to special-case a flag.

Example:
    >>> rules = ruleset_build(InlineSettings(gfm=True))
    >>> rules['strikethrough'].match('~~gone~~').group(1)
    'gone'
"""

import re
from functools import lru_cache
from typing import Any, Dict, Optional

from ..config.settings import InlineSettings
from ..models.rules import Rule, RuleSet, NEVER
from .log import LOG

# Link text: balanced single-level brackets, or a "]" that is closed later
INSIDE = r'(?:\[[^\]]*\]|[^\[\]]|\](?=[^\[]*\]))*'

# Link destination with optional <> and optional quoted title
HREF = r'''\s*<?([\s\S]*?)>?(?:\s+['"]([\s\S]*?)['"])?\s*'''

CODE = re.compile(r'''^
    (`+)        # opening run of backticks
    (.+?)       # code content
    (?<!`)
    \1          # closing run of the same length
    (?!`)
''', re.X | re.S)

TAG = re.compile(r'''
    ^<!--[\s\S]*?--> |
    ^</?\w+(?: "[^"<]*" |     # < inside an attribute is illegal
               '[^'<]*' |
               [^'"<>])*?>
''', re.X)


def rules_base() -> Dict[str, 're.Pattern[str]']:
    """Rules used when no option changes them"""
    return {
        'escape': re.compile(r'^\\([\\`*{}\[\]()#+\-.!_>])'),
        'autolink': re.compile(r'^<([^ >]+(@|:/)[^ >]+)>'),
        'url': NEVER,
        'tag': TAG,
        'link': re.compile(r'^!?\[(' + INSIDE + r')\]\(' + HREF + r'\)(?!\))'),
        'reflink': re.compile(r'^!?\[(' + INSIDE + r')\]\s*\[([^\]]*)\]'),
        'nolink': re.compile(r'^!?\[((?:\[[^\]]*\]|[^\[\]])*)\]'),
        'strong': re.compile(r'^__([\s\S]+?)__(?!_)|^\*\*([\s\S]+?)\*\*(?!\*)'),
        'em': re.compile(r'^\b_((?:__|[\s\S])+?)_\b|^\*((?:\*\*|[\s\S])+?)\*(?!\*)'),
        'code': CODE,
        'br': re.compile(r'^ {2,}\n(?!\s*$)'),
        'text': re.compile(r'^[\s\S]+?(?=[\\<!\[_*`]| {2,}\n|$)'),
        'strikethrough': NEVER,
        'footnote': NEVER,
    }


def rules_gfm() -> Dict[str, 're.Pattern[str]']:
    """GitHub flavoured overrides"""
    return {
        'escape': re.compile(r'^\\([\\`*{}\[\]()#+\-.!_>~|])'),
        'url': re.compile(r'''^(https?://[^\s<]+[^<.,:;"')\]\s])'''),
        'strikethrough': re.compile(r'^~~(?=\S)([\s\S]*?\S)~~'),
        'text': re.compile(r'^[\s\S]+?(?=[\\<!\[_*`~]|https?://| {2,}\n|$)'),
    }


def rules_breaks() -> Dict[str, 're.Pattern[str]']:
    """GFM overrides where any newline is a line break"""
    return {
        'br': re.compile(r'^ *\n(?!\s*$)'),
        'text': re.compile(r'^[\s\S]+?(?=[\\<!\[_*`~]|https?://| *\n|$)'),
    }


def rules_pedantic() -> Dict[str, 're.Pattern[str]']:
    """Strict emphasis: delimiters may not sit next to whitespace"""
    return {
        'strong': re.compile(r'^__(?=\S)([\s\S]*?\S)__(?!_)|^\*\*(?=\S)([\s\S]*?\S)\*\*(?!\*)'),
        'em': re.compile(r'^_(?=\S)([\s\S]*?\S)_(?!_)|^\*(?=\S)([\s\S]*?\S)\*(?!\*)'),
    }


@lru_cache(maxsize=None)
def ruleset_forFlags(gfm: bool, breaks: bool, pedantic: bool, footnotes: bool) -> RuleSet:
    """
    Build (once) the rule set for a flag combination

    Cached: identical flags always return the same RuleSet object.
    """
    patterns = rules_base()

    if gfm:
        patterns.update(rules_gfm())
        if breaks:
            patterns.update(rules_breaks())
    elif pedantic:
        patterns.update(rules_pedantic())

    if footnotes:
        patterns['footnote'] = re.compile(r'^\[\^(' + INSIDE + r')\]')

    ruleset = RuleSet({name: Rule(name=name, pattern=pattern) for name, pattern in patterns.items()})
    LOG(f"Built {ruleset!r} for gfm={gfm} breaks={breaks} pedantic={pedantic} footnotes={footnotes}", level=2)
    return ruleset


def ruleset_build(settings: Optional[Any] = None) -> RuleSet:
    """
    Return the rule set selected by a settings object

    Args:
        settings: InlineSettings (or any object with gfm, breaks, pedantic
                  and footnotes attributes); defaults to ``appsettings``

    Returns:
        Shared, immutable RuleSet
    """
    if settings is None:
        from ..config import appsettings
        settings = appsettings

    if isinstance(settings, InlineSettings):
        return ruleset_forFlags(*settings.flags_key())

    return ruleset_forFlags(
        bool(settings.gfm),
        bool(settings.breaks),
        bool(settings.pedantic),
        bool(settings.footnotes),
    )
