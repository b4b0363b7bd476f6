"""
Text helpers shared by the inline handlers

Escaping for HTML-bound text, percent-encoding for hrefs, and prefix
removal for the scanner.
"""

import re
from typing import Union
from urllib.parse import quote

# Characters URI encoding leaves alone besides letters, digits and "-._~":
# the reserved set, plus "%" so already-encoded input is not encoded twice.
_URI_SAFE = ":/?#[]@!$&'()*+,;=%"

# An ampersand that does not already start an entity (&amp; &#39; &#x27;)
_BARE_AMPERSAND = re.compile(r'&(?!#?\w+;)')


def escape(text: str, encode: bool = False) -> str:
    """
    HTML-escape text

    Args:
        text: Text to escape
        encode: When False, ampersands that already begin an entity are
                kept as-is; when True every ampersand is escaped (used for
                code spans, whose content is always literal)

    Returns:
        Escaped text

    Example:
        >>> escape('a < b & c &amp; "d"')
        'a &lt; b &amp; c &amp; &quot;d&quot;'
        >>> escape('&amp;', encode=True)
        '&amp;amp;'
    """
    if encode:
        text = text.replace('&', '&amp;')
    else:
        text = _BARE_AMPERSAND.sub('&amp;', text)
    return (
        text.replace('<', '&lt;')
        .replace('>', '&gt;')
        .replace('"', '&quot;')
        .replace("'", '&#39;')
    )


def encode(url: str) -> str:
    """
    Percent-encode a URL for use as an href

    Reserved URI characters are preserved; spaces, non-ASCII and other
    unsafe characters are UTF-8 percent-encoded.

    Example:
        >>> encode('http://example.com/a b?q=ü')
        'http://example.com/a%20b?q=%C3%BC'
    """
    return quote(url, safe=_URI_SAFE)


def mangle_link(link: str) -> str:
    """Obfuscation hook for email autolinks (identity)"""
    return link


def behead(text: str, prefix: Union[str, int]) -> str:
    """
    Remove a consumed prefix from the front of text

    Args:
        text: Remaining source
        prefix: The consumed string, or its length

    Example:
        >>> behead("**a** b", "**a**")
        ' b'
    """
    length = prefix if isinstance(prefix, int) else len(prefix)
    return text[length:]
