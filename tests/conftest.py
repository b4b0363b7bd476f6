"""
Shared fixtures

RecordingRenderer turns every renderer call into a tuple so tests can
assert on the exact sequence of constructs the converter produced.
"""

import pytest

from inkline.config import InlineSettings
from inkline.lib.inline import context_build, convert


class RecordingRenderer:
    """Renderer returning ("kind", ...) tuples instead of markup"""

    def text(self, text):
        return ("text", text)

    def emphasis(self, inner):
        return ("em", inner)

    def strong(self, inner):
        return ("strong", inner)

    def strikethrough(self, inner):
        return ("del", inner)

    def codespan(self, text):
        return ("code", text)

    def link(self, href, inner, title=None):
        return ("link", href, inner, title)

    def image(self, href, alt, title=None):
        return ("image", href, alt, title)

    def line_break(self):
        return ("br",)

    def footnote_link(self, ref, back_ref, number):
        return ("footnote", ref, back_ref, number)


def kinds_flatten(outputs):
    """Flatten recorded outputs to their kinds, depth first"""
    found = []
    for output in outputs:
        found.append(output[0])
        if output[0] in ("em", "strong", "del"):
            found.extend(kinds_flatten(output[1]))
        elif output[0] == "link":
            found.extend(kinds_flatten(output[2]))
    return found


@pytest.fixture
def recorder():
    return RecordingRenderer()


@pytest.fixture
def scan(recorder):
    """
    Convert source with a RecordingRenderer

    Usage:
        scan("**a**", gfm=False, links={"x": {"url": "/x"}})
        scan("[^1]", footnotes=True, footnote_table={"1": 1})
    """

    def _scan(src, links=None, footnote_table=None, **flags):
        flags.setdefault("smartypants", False)
        settings = InlineSettings(**flags)
        context = context_build(recorder, links=links, footnotes=footnote_table, settings=settings)
        return convert(src, context)

    return _scan


@pytest.fixture
def kinds():
    """kinds(outputs) -> ["strong", "text", "em", ...]"""
    return kinds_flatten
