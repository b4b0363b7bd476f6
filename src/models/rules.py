"""
Rule data models

Type-safe structures for the prefix-anchored rules that drive the inline
scanner, and the result of finding the winning rule at a scan position.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple


# Fixed dispatch priority. The first rule that matches at the current
# position wins; ``text`` is the catch-all and must stay last.
RULE_ORDER: Tuple[str, ...] = (
    'escape',
    'autolink',
    'url',
    'tag',
    'link',
    'reflink',
    'footnote',
    'nolink',
    'strikethrough',
    'strong',
    'em',
    'code',
    'br',
    'text',
)

# Matches nothing: end-of-string followed by start-of-string
NEVER = re.compile(r'\Z\A')


@dataclass(frozen=True)
class Rule:
    """
    A named pattern recognising one inline construct

    Attributes:
        name: Construct name (one of RULE_ORDER)
        pattern: Compiled pattern, only ever applied with ``match`` so it
                 is anchored at the start of the remaining text

    Example:
        Rule(name="code", pattern=re.compile(r"^(`+)(.+?)(?<!`)\\1(?!`)", re.S))
    """
    name: str
    pattern: 're.Pattern[str]'

    def match(self, src: str) -> Optional['re.Match[str]']:
        """Match against the start of ``src``"""
        return self.pattern.match(src)

    @property
    def enabled(self) -> bool:
        """False for the placeholder rule of a disabled construct"""
        return self.pattern is not NEVER


@dataclass(frozen=True)
class RuleMatch:
    """
    Result of finding the winning rule at the start of the remaining text

    Returned by Converter.rule_find().

    Attributes:
        name: Name of the rule that matched
        match: The regex match; ``match.group(0)`` is the consumed prefix

    Example:
        For remaining text "**hi** there":
        RuleMatch(name="strong", match=<re.Match '**hi**'>)
    """
    name: str
    match: 're.Match[str]'

    @property
    def source(self) -> str:
        """The consumed source prefix"""
        return self.match.group(0)


class RuleSet(Mapping[str, Rule]):
    """
    Immutable mapping from construct name to Rule

    Built once per flag combination by ``ruleset_build`` and shared
    read-only by every scan that uses it.
    """

    def __init__(self, rules: Mapping[str, Rule]) -> None:
        missing = [name for name in RULE_ORDER if name not in rules]
        if missing:
            raise ValueError(f"Rule set is missing rules: {', '.join(missing)}")
        self._rules: Mapping[str, Rule] = MappingProxyType(dict(rules))

    def __getitem__(self, name: str) -> Rule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def ordered(self) -> Iterator[Rule]:
        """Yield rules in dispatch priority order"""
        for name in RULE_ORDER:
            yield self._rules[name]

    def __repr__(self) -> str:
        enabled = [rule.name for rule in self.ordered() if rule.enabled]
        return f"RuleSet(enabled={enabled})"
