"""Built-in conversions.

Every converter takes the raw value plus a ``strict`` flag. In strict mode a
value that cannot be converted raises ConversionError; otherwise the value is
returned unchanged so the caller can decide what to do with it.
"""

import re
from datetime import date
from typing import Any, List

from question_pipeline.converters.registry import ConverterRegistry
from question_pipeline.core.exceptions import ConversionError
from question_pipeline.domain.models.answer_range import AnswerRange

_NUMBER = r"-?\d+(?:\.\d+)?"
_SEPARATOR = r"\s*(?P<sep>\.\s*\.\s*\.|\.\s*\.|-|,)\s*"

SINGLE_DIGIT_MATCHER = re.compile(rf"^\s*(?P<digit>{_NUMBER})\s*$")
DIGIT_MATCHER = re.compile(rf"^\s*(?P<open>{_NUMBER}){_SEPARATOR}(?P<close>{_NUMBER})\s*$")
LETTER_MATCHER = re.compile(rf"^\s*(?P<open>\w){_SEPARATOR}(?P<close>\w)\s*$")

TRUE_VALUES = frozenset({"1", "y", "yes", "t", "true", "on"})
FALSE_VALUES = frozenset({"0", "n", "no", "f", "false", "off"})


def _number(text: str):
    return float(text) if "." in text else int(text)


def _fail(value: Any, target: str, strict: bool) -> Any:
    if strict:
        raise ConversionError(value, target)
    return value


def to_string(value: Any, strict: bool = False) -> Any:
    if value is None:
        return _fail(value, "string", strict)
    return str(value)


def to_integer(value: Any, strict: bool = False) -> Any:
    if isinstance(value, bool):
        return _fail(value, "integer", strict)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return _fail(value, "integer", strict)


def to_float(value: Any, strict: bool = False) -> Any:
    if isinstance(value, bool):
        return _fail(value, "float", strict)
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return _fail(value, "float", strict)


def to_boolean(value: Any, strict: bool = False) -> Any:
    """Convert yes/no style answers to a bool."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return _fail(value, "boolean", strict)


def to_list(value: Any, strict: bool = False) -> Any:
    """Split a comma separated answer into stripped, non-empty items."""
    if isinstance(value, list):
        return value
    if not isinstance(value, str):
        return _fail(value, "list", strict)
    items: List[str] = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def to_date(value: Any, strict: bool = False) -> Any:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return _fail(value, "date", strict)


def to_range(value: Any, strict: bool = False) -> Any:
    """Parse a range expression into an AnswerRange.

    Accepted forms: ``"5"`` (5..5), ``"1-10"``, ``"1,10"``, ``"1..10"``,
    ``"1...10"`` (end excluded), decimals such as ``"0.5..1.5"`` and single
    letters such as ``"a-z"``.
    """
    if isinstance(value, AnswerRange):
        return value
    if not isinstance(value, str):
        return _fail(value, "range", strict)

    match = SINGLE_DIGIT_MATCHER.match(value)
    if match:
        digit = _number(match.group("digit"))
        return AnswerRange(first=digit, last=digit)

    match = DIGIT_MATCHER.match(value)
    if match:
        first = _number(match.group("open"))
        last = _number(match.group("close"))
    else:
        match = LETTER_MATCHER.match(value)
        if not match:
            return _fail(value, "range", strict)
        first = match.group("open")
        last = match.group("close")

    exclude_end = re.sub(r"\s", "", match.group("sep")) == "..."
    if isinstance(first, float) or isinstance(last, float):
        first, last = float(first), float(last)
    return AnswerRange(first=first, last=last, exclude_end=exclude_end)


DEFAULT_CONVERTERS = {
    "str": to_string,
    "string": to_string,
    "int": to_integer,
    "integer": to_integer,
    "float": to_float,
    "bool": to_boolean,
    "boolean": to_boolean,
    "list": to_list,
    "array": to_list,
    "date": to_date,
    "range": to_range,
}

# Shared process-wide registry; extend it with register(), which returns a copy
DEFAULT_REGISTRY = ConverterRegistry(DEFAULT_CONVERTERS)
