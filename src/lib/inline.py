"""
Inline converter for markdown spans

Transforms one span of inline markdown into a sequence of renderer
outputs.

The converter operates in a single loop:
1. Scanning: Find the first rule, in fixed priority order, whose pattern
   matches at the start of the remaining text
2. Handling: Pass the match to that construct's handler, which calls the
   renderer (recursing first for emphasis, strong, strikethrough and link
   text)
3. Consuming: Drop the matched prefix and continue with the remainder

Key features:
- Ordered, prefix-anchored rule dispatch (first match wins)
- Recursive conversion of nested spans, bounded by a nesting limit
- Reference and footnote lookup with graceful degradation
- Configurable prettify (smartypants) and sanitize hooks

Example:
    >>> context = context_build(HtmlRenderer())
    >>> outputs_join(convert("**bold** and `code`", context))
    '<strong>bold</strong> and <code class="inline">code</code>'
"""

import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from ..models.context import ConversionContext
from ..models.references import (
    Footnote,
    LinkReference,
    footnoteTable_build,
    linkTable_build,
    referenceId_normalize,
)
from ..models.rules import RuleMatch
from .helpers import behead, encode, escape, mangle_link
from .log import LOG, context_connectToLogger, context_disconnectFromLogger
from .renderer import HtmlRenderer, outputs_join
from .rules import ruleset_build
from .smartypants import identity, smartypants


class InlineScanError(RuntimeError):
    """Raised when no rule consumes input at a scan position (a rule set defect)"""
    pass


# Nested scans allowed below the top level before spans degrade to text
NESTING_LIMIT = 64

# Rules whose handlers scan their inner text again
NESTED_RULES = frozenset({'link', 'reflink', 'nolink', 'strikethrough', 'strong', 'em'})


def context_build(
    renderer: Any,
    links: Optional[Mapping[str, Union[LinkReference, Dict[str, Any]]]] = None,
    footnotes: Optional[Mapping[str, Union[Footnote, int, Dict[str, Any]]]] = None,
    settings: Optional[Any] = None,
) -> ConversionContext:
    """
    Create the immutable context for a conversion

    Args:
        renderer: Render capability (see ``Renderer``)
        links: Link reference table; keys are normalized here
        footnotes: Footnote table keyed by raw footnote id
        settings: InlineSettings; defaults to ``appsettings``

    Returns:
        ConversionContext with the cached rule set for the settings' flags
        and the prettify/sanitize hooks selected by smartypants/sanitize
    """
    if settings is None:
        from ..config import appsettings
        settings = appsettings

    return ConversionContext(
        rules=ruleset_build(settings),
        links=linkTable_build(links),
        footnotes=footnoteTable_build(footnotes),
        renderer=renderer,
        prettify=smartypants if settings.smartypants else identity,
        sanitize=escape if settings.sanitize else identity,
        verbosity=settings.verbosity,
    )


class Converter:
    """
    Scanner and construct handlers for one ConversionContext

    Handles:
    - Backslash escapes, autolinks, bare URLs (gfm) and raw tags
    - Inline links and images, reference links, footnote references
    - Strikethrough (gfm), strong, emphasis, code spans, line breaks
    - Plain text runs
    """

    def __init__(self, context: ConversionContext, nesting_limit: int = NESTING_LIMIT):
        """
        Initialize converter with its context

        Args:
            context: Immutable conversion context shared by every nested scan
            nesting_limit: Nested scans allowed below the top level; deeper
                           links, emphasis and strikethrough are output as text

        Attributes:
            context: The conversion context
            renderer: Shortcut to context.renderer
            depth: Current scan depth, 1 for the top-level scan
            handlers: Dict mapping rule names to handler methods
        """
        self.context = context
        self.renderer = context.renderer
        self.nesting_limit = nesting_limit
        self.depth = 0
        self.handlers: Dict[str, Callable[[Any], Any]] = {
            'escape': self.escape_handle,
            'autolink': self.autolink_handle,
            'url': self.url_handle,
            'tag': self.tag_handle,
            'link': self.link_handle,
            'reflink': self.reflink_handle,
            'footnote': self.footnote_handle,
            'nolink': self.nolink_handle,
            'strikethrough': self.strikethrough_handle,
            'strong': self.strong_handle,
            'em': self.em_handle,
            'code': self.code_handle,
            'br': self.br_handle,
            'text': self.text_handle,
        }

    def convert(self, src: Union[str, List[str]]) -> List[Any]:
        """
        Convert inline source to a sequence of renderer outputs

        Args:
            src: Source text, or a list of lines (joined with newlines)

        Returns:
            Renderer outputs in source order; empty for empty source

        Raises:
            InlineScanError: If a scan position is reached where no rule
                             consumes any input

        Example:
            For "a *b*" with the HTML renderer:
            ['a ', '<em>b</em>']
        """
        if isinstance(src, list):
            src = '\n'.join(src)

        self.depth += 1
        try:
            return self.span_scan(src)
        finally:
            self.depth -= 1

    def span_scan(self, src: str) -> List[Any]:
        """Scan loop for one span; see ``convert``"""
        result: List[Any] = []
        # Every iteration consumes at least one character
        iteration_cap = len(src) + 1
        iterations = 0

        while src:
            iterations += 1
            if iterations > iteration_cap:
                raise InlineScanError(f"Scan did not terminate; stopped at {src[:40]!r}")

            found = self.rule_find(src)
            if found is None:
                raise InlineScanError(f"No inline rule matches at {src[:40]!r}")

            consumed = found.source
            if not consumed:
                raise InlineScanError(f"Rule '{found.name}' matched without consuming input at {src[:40]!r}")

            LOG(f"{found.name} consumed {consumed!r}", level=3)
            if found.name in NESTED_RULES and self.depth > self.nesting_limit:
                LOG(f"Nesting limit reached; {found.name} output as text", level=2)
                output = self.renderer.text(escape(consumed))
            else:
                output = self.handlers[found.name](found.match)

            # None: an unresolved footnote, which renders nothing
            if output is not None:
                result.append(output)

            src = behead(src, consumed)

        return result

    def rule_find(self, src: str) -> Optional[RuleMatch]:
        """
        Find the first rule, in priority order, matching at the start of src

        Returns:
            RuleMatch for the winning rule, or None if nothing matches
        """
        for rule in self.context.rules.ordered():
            match = rule.match(src)
            if match:
                return RuleMatch(name=rule.name, match=match)
        return None

    # ------------------------------------------------------------------
    # Construct handlers
    # ------------------------------------------------------------------

    def escape_handle(self, match: 're.Match[str]') -> Any:
        """Backslash escape: the escaped character as plain text"""
        return self.renderer.text(escape(match.group(1)))

    def autolink_handle(self, match: 're.Match[str]') -> Any:
        """<http://...> or <user@host>"""
        href, text = self.autolink_convert(match.group(1), match.group(2))
        return self.renderer.link(href, [self.renderer.text(text)])

    def url_handle(self, match: 're.Match[str]') -> Any:
        """Bare http(s) URL (gfm only)"""
        href, text = self.autolink_convert(match.group(1), '://')
        return self.renderer.link(href, [self.renderer.text(text)])

    def autolink_convert(self, link: str, separator: str) -> Tuple[str, str]:
        """
        Compute href and text for an autolink

        Email addresses are mangled and get a mailto: href; anything else
        is percent-encoded for the href and escaped for the text.

        Example:
            ("me@example.com", "@") -> ("mailto:me@example.com", "me@example.com")
        """
        if separator == '@':
            if link.lower().startswith('mailto:'):
                link = link[len('mailto:'):]
            text = mangle_link(link)
            href = mangle_link('mailto:') + text
            return encode(href), escape(text)

        link = encode(link)
        return link, escape(link)

    def tag_handle(self, match: 're.Match[str]') -> Any:
        """Raw tag or comment, passed through the sanitize hook"""
        return self.renderer.text(self.context.sanitize(match.group(0)))

    def link_handle(self, match: 're.Match[str]') -> Any:
        """[text](href "title") or ![alt](src "title")"""
        source, text, href, title = match.group(0, 1, 2, 3)
        return self.imageOrLink_output(source, text, href, title)

    def reflink_handle(self, match: 're.Match[str]') -> Any:
        """[text][id], or [id][] which uses the text as id"""
        source, text, ref_id = match.group(0, 1, 2)
        if not ref_id:
            ref_id = text
        return self.reference_resolve(source, text, ref_id)

    def nolink_handle(self, match: 're.Match[str]') -> Any:
        """[id] on its own"""
        source, ref_id = match.group(0, 1)
        return self.reference_resolve(source, ref_id, ref_id)

    def footnote_handle(self, match: 're.Match[str]') -> Any:
        """
        [^id] footnote reference

        Returns None when the id is not in the footnote table, so nothing
        is emitted for it.
        """
        footnote_id = match.group(1)
        footnote = self.context.footnotes.get(footnote_id)
        if footnote is None:
            LOG(f"Unresolved footnote reference [^{footnote_id}]", level=2)
            return None

        number = footnote.number
        return self.renderer.footnote_link(encode(f"fn:{number}"), encode(f"fnref:{number}"), number)

    def strikethrough_handle(self, match: 're.Match[str]') -> Any:
        return self.renderer.strikethrough(self.convert(match.group(1)))

    def strong_handle(self, match: 're.Match[str]') -> Any:
        return self.renderer.strong(self.convert(self.content_pick(match)))

    def em_handle(self, match: 're.Match[str]') -> Any:
        return self.renderer.emphasis(self.convert(self.content_pick(match)))

    def code_handle(self, match: 're.Match[str]') -> Any:
        """Code span: trimmed, always fully escaped, never re-scanned"""
        content = match.group(2).strip()
        return self.renderer.codespan(escape(content, encode=True))

    def br_handle(self, match: 're.Match[str]') -> Any:
        return self.renderer.line_break()

    def text_handle(self, match: 're.Match[str]') -> Any:
        """Plain text run: prettified, then escaped"""
        return self.renderer.text(escape(self.context.prettify(match.group(0))))

    # ------------------------------------------------------------------
    # Shared output helpers
    # ------------------------------------------------------------------

    @staticmethod
    def content_pick(match: 're.Match[str]') -> str:
        """Inner span of a strong/em match; the two delimiters capture separately"""
        content = match.group(1)
        return content if content is not None else match.group(2)

    def reference_resolve(self, source: str, text: str, ref_id: str) -> Any:
        """
        Look up a reference link and output it

        Args:
            source: Whole matched source (starts with "!" for images)
            text: Link text or image alt text
            ref_id: Reference id, normalized here before lookup

        Returns:
            Link/image output on a hit; on a miss, the matched source as
            plain text
        """
        link = self.context.links.get(referenceId_normalize(ref_id))
        if link is None:
            LOG(f"Unresolved link reference {source!r}", level=2)
            return self.renderer.text(escape(source))

        return self.imageOrLink_output(source, text, link.url, link.title)

    def imageOrLink_output(self, source: str, text: str, href: str, title: Optional[str]) -> Any:
        """Output an image if the source starts with "!", otherwise a link"""
        href = encode(href)
        title = escape(title) if title else None

        if source.startswith('!'):
            return self.renderer.image(href, escape(text), title)

        return self.renderer.link(href, self.convert(text), title)


def convert(src: Union[str, List[str]], context: ConversionContext) -> List[Any]:
    """
    Convert inline markdown to renderer outputs

    Main entry point. Connects the context to the logger for the duration
    of the scan.

    Args:
        src: Source text, or a list of lines joined with newlines
        context: Context from ``context_build``

    Returns:
        Renderer outputs in source order
    """
    token = context_connectToLogger(context)
    try:
        return Converter(context).convert(src)
    finally:
        context_disconnectFromLogger(token)


def html_render(
    src: Union[str, List[str]],
    links: Optional[Mapping[str, Any]] = None,
    footnotes: Optional[Mapping[str, Any]] = None,
    settings: Optional[Any] = None,
) -> str:
    """
    Convert inline markdown straight to an HTML string

    Example:
        >>> html_render("[docs][]", links={"Docs": {"url": "http://x"}})
        '<a href="http://x">docs</a>'
    """
    context = context_build(HtmlRenderer(), links=links, footnotes=footnotes, settings=settings)
    return outputs_join(convert(src, context))
