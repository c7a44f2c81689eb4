"""Tests for modifier rules."""

import pytest

from question_pipeline.core.exceptions import ModifierError, UnknownModifierError
from question_pipeline.question.modifier import BUILTIN_RULES, Modifier, apply

SAMPLES = [
    "",
    "plain",
    "  padded  ",
    "\tmixed \n whitespace\r\n",
    "MiXeD cAsE",
    "multiple   inner    spaces",
    "élan vital ",
    "line\n\n",
    "\u0149 expands",
]


class TestBuiltinRules:
    """Tests for each built-in rule."""

    def test_trim(self):
        assert apply(["trim"], "  hello world \n") == "hello world"

    def test_strip_is_trim_alias(self):
        assert apply(["strip"], "  x  ") == "x"

    def test_chomp(self):
        assert apply(["chomp"], "answer\r\n") == "answer"
        assert apply(["chomp"], "  answer  ") == "  answer  "

    def test_collapse(self):
        assert apply(["collapse"], "a   b \t\n c") == "a b c"

    def test_remove(self):
        assert apply(["remove"], " a b\tc ") == "abc"

    @pytest.mark.parametrize("rule", ["up", "upcase", "uppercase"])
    def test_upcase(self, rule):
        assert apply([rule], "abc") == "ABC"

    @pytest.mark.parametrize("rule", ["down", "downcase", "lowercase"])
    def test_downcase(self, rule):
        assert apply([rule], "ABC") == "abc"

    def test_capitalize(self):
        assert apply(["capitalize"], "hELLO world") == "Hello world"

    def test_capitalize_expanding_letter(self):
        """A first letter whose uppercase form is two characters settles."""
        assert apply(["capitalize"], "\u0149") == "\u02bcn"

    @pytest.mark.parametrize("rule", sorted(BUILTIN_RULES))
    @pytest.mark.parametrize("value", SAMPLES)
    def test_rules_are_idempotent(self, rule, value):
        """Reapplying a rule to its own output changes nothing."""
        once = apply([rule], value)

        assert apply([rule], once) == once

    @pytest.mark.parametrize("rule", sorted(BUILTIN_RULES))
    def test_rules_are_idempotent_for_every_character(self, rule):
        for code in range(0x10000):
            once = apply([rule], chr(code))
            assert apply([rule], once) == once, hex(code)


class TestApply:
    """Tests for rule sequencing."""

    def test_rules_apply_in_order(self):
        """Each rule receives the previous rule's output."""
        assert apply(["trim", "collapse", "capitalize"], "  hELLO   wORLD ") == "Hello world"

    def test_order_matters(self):
        suffix = lambda value: value + "!"  # noqa: E731

        assert apply([suffix, "upcase"], "hi") == "HI!"
        assert apply(["trim", suffix], " hi ") == "hi!"
        assert apply([suffix, "trim"], " hi ") == "hi !"

    def test_custom_callable(self):
        assert apply([lambda value: value[::-1]], "abc") == "cba"

    def test_unknown_rule(self):
        with pytest.raises(UnknownModifierError) as exc_info:
            apply(["shout"], "hi")

        assert exc_info.value.rule == "shout"
        assert isinstance(exc_info.value, ModifierError)

    def test_no_rules_returns_input(self):
        assert apply([], " as is ") == " as is "


class TestModifier:
    """Tests for the Modifier wrapper."""

    def test_apply_to(self):
        assert Modifier("trim", "up").apply_to(" yes ") == "YES"

    def test_accepts_list(self):
        assert Modifier(["trim", "down"]).rules == ("trim", "down")

    def test_unknown_rule_rejected_at_construction(self):
        with pytest.raises(UnknownModifierError):
            Modifier("trim", "sparkle")

    def test_empty_modifier_is_falsy(self):
        assert not Modifier()
        assert Modifier("trim")
