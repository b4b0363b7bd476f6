"""
Render capability

The inline engine never builds markup itself. It calls one method per
recognised construct on a renderer and only sequences what comes back.

``Renderer`` is the protocol a renderer must satisfy. ``HtmlRenderer`` is
the reference implementation producing HTML fragments as strings; chat
dialect renderers live with the platforms that need them.

Arguments arrive already prepared by the engine:
- text / codespan strings are escaped
- hrefs are percent-encoded
- titles and image alt text are escaped
- ``inner`` is the output sequence of a nested scan
"""

from typing import Any, Iterable, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class Renderer(Protocol):
    """One operation per inline construct; return values are opaque"""

    def text(self, text: str) -> Any: ...

    def emphasis(self, inner: List[Any]) -> Any: ...

    def strong(self, inner: List[Any]) -> Any: ...

    def strikethrough(self, inner: List[Any]) -> Any: ...

    def codespan(self, text: str) -> Any: ...

    def link(self, href: str, inner: List[Any], title: Optional[str] = None) -> Any: ...

    def image(self, href: str, alt: str, title: Optional[str] = None) -> Any: ...

    def line_break(self) -> Any: ...

    def footnote_link(self, ref: str, back_ref: str, number: int) -> Any: ...


def outputs_join(outputs: Iterable[Any]) -> str:
    """Concatenate a sequence of string outputs"""
    return ''.join(str(output) for output in outputs)


class HtmlRenderer:
    """
    Render inline constructs as HTML fragments

    Example:
        >>> r = HtmlRenderer()
        >>> r.link("http://x", [r.text("site")], "Home")
        '<a href="http://x" title="Home">site</a>'
    """

    def text(self, text: str) -> str:
        return text

    def emphasis(self, inner: List[Any]) -> str:
        return f"<em>{outputs_join(inner)}</em>"

    def strong(self, inner: List[Any]) -> str:
        return f"<strong>{outputs_join(inner)}</strong>"

    def strikethrough(self, inner: List[Any]) -> str:
        return f"<del>{outputs_join(inner)}</del>"

    def codespan(self, text: str) -> str:
        return f'<code class="inline">{text}</code>'

    def link(self, href: str, inner: List[Any], title: Optional[str] = None) -> str:
        title_attr = f' title="{title}"' if title else ''
        return f'<a href="{href}"{title_attr}>{outputs_join(inner)}</a>'

    def image(self, href: str, alt: str, title: Optional[str] = None) -> str:
        title_attr = f' title="{title}"' if title else ''
        return f'<img src="{href}" alt="{alt}"{title_attr}/>'

    def line_break(self) -> str:
        return "<br/>"

    def footnote_link(self, ref: str, back_ref: str, number: int) -> str:
        return (
            f'<a href="#{ref}" id="{back_ref}" class="footnote" '
            f'title="see footnote">{number}</a>'
        )
