"""
Typographic prettification of plain text runs

Straight quotes become curly quotes, ``--`` an em dash and ``...`` an
ellipsis. Substitutions run in a fixed order; none of them matches a
character introduced by an earlier one.
"""

import re
from typing import List, Tuple

# Opening context: start of text, whitespace, or punctuation that
# precedes a quotation
_OPEN_BEFORE_SINGLE = r'(^|[-—/(\[{"”“\s])'
_OPEN_BEFORE_DOUBLE = r'(^|[-—/(\[{‘\s])'

SUBSTITUTIONS: List[Tuple['re.Pattern[str]', str]] = [
    (re.compile(r'--'), '—'),
    (re.compile(_OPEN_BEFORE_SINGLE + r"'"), r'\1‘'),
    (re.compile(r"'"), '’'),
    (re.compile(_OPEN_BEFORE_DOUBLE + r'"'), r'\1“'),
    (re.compile(r'"'), '”'),
    (re.compile(r'\.\.\.'), '…'),
]


def smartypants(text: str) -> str:
    """
    Apply typographic substitutions to a plain text run

    Example:
        >>> smartypants('"It\\'s here" -- wait...')
        '“It’s here” — wait…'
    """
    for pattern, replacement in SUBSTITUTIONS:
        text = pattern.sub(replacement, text)
    return text


def identity(text: str) -> str:
    """Hook used when prettification or sanitizing is disabled"""
    return text
