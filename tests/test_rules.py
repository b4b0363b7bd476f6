"""
Rule set builder tests

Tests flag-driven rule derivation, totality over construct names,
caching and immutability.
"""

import itertools
from types import SimpleNamespace

import pytest

from inkline.config import InlineSettings
from inkline.lib.rules import ruleset_build, ruleset_forFlags
from inkline.models.rules import Rule, RuleSet, RULE_ORDER, NEVER


ALL_FLAGS = list(itertools.product([False, True], repeat=4))


class TestRuleSetShape:
    """Every configuration yields a total rule set"""

    @pytest.mark.parametrize("gfm,breaks,pedantic,footnotes", ALL_FLAGS)
    def test_every_construct_has_a_rule(self, gfm, breaks, pedantic, footnotes):
        rules = ruleset_forFlags(gfm, breaks, pedantic, footnotes)
        assert set(rules) == set(RULE_ORDER)
        assert [rule.name for rule in rules.ordered()] == list(RULE_ORDER)

    def test_text_rule_is_last(self):
        assert RULE_ORDER[-1] == "text"

    def test_missing_rule_rejected(self):
        with pytest.raises(ValueError, match="missing rules"):
            RuleSet({"text": Rule(name="text", pattern=NEVER)})

    def test_rule_set_is_read_only(self):
        rules = ruleset_build(InlineSettings())
        with pytest.raises(TypeError):
            rules["text"] = Rule(name="text", pattern=NEVER)  # type: ignore[index]

    def test_rules_are_frozen(self):
        rule = ruleset_build(InlineSettings())["text"]
        with pytest.raises(AttributeError):
            rule.name = "other"  # type: ignore[misc]


class TestCaching:
    """Rule sets are built once per flag combination"""

    def test_same_flags_same_object(self):
        first = ruleset_build(InlineSettings(gfm=True, smartypants=True))
        second = ruleset_build(InlineSettings(gfm=True, smartypants=False, sanitize=True))
        assert first is second

    def test_different_flags_different_object(self):
        assert ruleset_build(InlineSettings(gfm=True)) is not ruleset_build(InlineSettings(gfm=False))

    def test_settings_share_entry_with_their_flags_key(self):
        inline_settings = InlineSettings(gfm=False, breaks=True, pedantic=True)
        assert ruleset_build(inline_settings) is ruleset_forFlags(*inline_settings.flags_key())

    def test_plain_object_with_flags_accepted(self):
        flags = SimpleNamespace(gfm=True, breaks=0, pedantic=None, footnotes=1)
        assert ruleset_build(flags) is ruleset_forFlags(True, False, False, True)


class TestFlagDerivation:
    """Which rules each flag enables"""

    def test_base_disables_gfm_rules(self):
        rules = ruleset_build(InlineSettings(gfm=False))
        assert not rules["strikethrough"].enabled
        assert not rules["url"].enabled
        assert rules["strikethrough"].match("~~x~~") is None

    def test_gfm_enables_strikethrough_and_url(self):
        rules = ruleset_build(InlineSettings(gfm=True))
        assert rules["strikethrough"].match("~~gone~~").group(1) == "gone"
        assert rules["url"].match("https://example.com/x, more").group(1) == "https://example.com/x"

    def test_gfm_escape_adds_tilde_and_pipe(self):
        assert ruleset_build(InlineSettings(gfm=True))["escape"].match("\\~")
        assert ruleset_build(InlineSettings(gfm=True))["escape"].match("\\|")
        assert ruleset_build(InlineSettings(gfm=False))["escape"].match("\\~") is None

    def test_footnote_rule_only_with_footnotes(self):
        assert ruleset_build(InlineSettings(footnotes=False))["footnote"].match("[^1]") is None
        assert ruleset_build(InlineSettings(footnotes=True))["footnote"].match("[^1]").group(1) == "1"

    def test_breaks_only_with_gfm(self):
        with_gfm = ruleset_build(InlineSettings(gfm=True, breaks=True))
        without_gfm = ruleset_build(InlineSettings(gfm=False, breaks=True))
        assert with_gfm["br"].match("\nnext")
        assert without_gfm["br"].match("\nnext") is None
        assert without_gfm["br"].match("  \nnext")

    def test_pedantic_only_without_gfm(self):
        pedantic = ruleset_build(InlineSettings(gfm=False, pedantic=True))
        gfm_pedantic = ruleset_build(InlineSettings(gfm=True, pedantic=True))
        assert pedantic["em"].match("* a *") is None
        assert gfm_pedantic["em"].match("* a *")

    def test_br_requires_following_content(self):
        rules = ruleset_build(InlineSettings(gfm=False))
        assert rules["br"].match("  \n") is None
        assert rules["br"].match("  \n  ") is None
        assert rules["br"].match("  \nx")


class TestPatterns:
    """Spot checks of individual patterns"""

    def test_link_with_title(self):
        match = ruleset_build(InlineSettings())["link"].match('[site](http://x.com "Home") rest')
        assert match.group(0, 1, 2, 3) == ('[site](http://x.com "Home")', "site", "http://x.com", "Home")

    def test_link_without_title(self):
        match = ruleset_build(InlineSettings())["link"].match("![alt](/img.png)")
        assert match.group(1, 2, 3) == ("alt", "/img.png", None)

    def test_code_matches_equal_backtick_runs(self):
        code = ruleset_build(InlineSettings())["code"]
        assert code.match("`` a ` b ``").group(2) == " a ` b "
        assert code.match("``a") is None

    def test_tag_and_comment(self):
        tag = ruleset_build(InlineSettings())["tag"]
        assert tag.match('<a href="x">link').group(0) == '<a href="x">'
        assert tag.match("<!-- note --> after").group(0) == "<!-- note -->"
        assert tag.match("< b") is None

    def test_autolink_separator(self):
        autolink = ruleset_build(InlineSettings())["autolink"]
        assert autolink.match("<me@example.com>").group(2) == "@"
        assert autolink.match("<http://example.com>").group(2) == ":/"
