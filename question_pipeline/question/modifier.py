"""String modifiers applied to an answer after it has been validated.

Rules run in declaration order, each one receiving the previous output.
Built-in rules are referenced by name; any callable can be used as a custom
rule.
"""

import re
from typing import Any, Callable, Dict, Iterable, Tuple, Union

from question_pipeline.core.exceptions import UnknownModifierError

Rule = Union[str, Callable[[Any], Any]]

_WHITESPACE = re.compile(r"\s+")


def _chomp(value: str) -> str:
    return value.rstrip("\r\n")


def _capitalize(value: str) -> str:
    # str.capitalize is not stable when the first letter expands, e.g. "ŉ" -> "ʼN"
    capitalized = value.capitalize()
    while capitalized != value:
        value, capitalized = capitalized, capitalized.capitalize()
    return value


BUILTIN_RULES: Dict[str, Callable[[str], str]] = {
    # Whitespace
    "trim": str.strip,
    "strip": str.strip,
    "chomp": _chomp,
    "collapse": lambda value: _WHITESPACE.sub(" ", value),
    "remove": lambda value: _WHITESPACE.sub("", value),
    # Letter case
    "up": str.upper,
    "upcase": str.upper,
    "uppercase": str.upper,
    "down": str.lower,
    "downcase": str.lower,
    "lowercase": str.lower,
    "capitalize": _capitalize,
}


def _resolve(rule: Rule) -> Callable[[Any], Any]:
    if isinstance(rule, str):
        try:
            return BUILTIN_RULES[rule]
        except KeyError:
            raise UnknownModifierError(rule) from None
    if callable(rule):
        return rule
    raise UnknownModifierError(rule)


def apply(rules: Iterable[Rule], value: Any) -> Any:
    """Apply each rule in sequence to the running value.

    Raises:
        UnknownModifierError: A rule name is not a built-in rule
    """
    for rule in rules:
        value = _resolve(rule)(value)
    return value


class Modifier:
    """Ordered, immutable set of modifier rules for one question."""

    def __init__(self, *rules: Rule):
        # Flatten Modifier("trim", "up") and Modifier(["trim", "up"])
        if len(rules) == 1 and isinstance(rules[0], (list, tuple)):
            rules = tuple(rules[0])
        for rule in rules:
            _resolve(rule)
        self._rules: Tuple[Rule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def __bool__(self) -> bool:
        return bool(self._rules)

    def apply_to(self, value: Any) -> Any:
        return apply(self._rules, value)

    def __repr__(self) -> str:
        return f"Modifier{self._rules!r}"
