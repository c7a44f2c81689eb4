"""Validation rule for question answers.

A Validation wraps a single rule: a regular expression (compiled or as a
pattern string), a predicate callable, or nothing. Checking a value never
raises for an answer that simply fails the rule; the failure comes back as
an EvaluationResult carrying a ValidationError.
"""

import re
from re import Pattern
from typing import Any, Callable, Literal, Optional, Union

import structlog

from question_pipeline.converters.builtin import DEFAULT_REGISTRY
from question_pipeline.converters.registry import ConverterRef, ConverterRegistry
from question_pipeline.core.exceptions import ConversionError, ValidationError
from question_pipeline.domain.models.evaluation import EvaluationResult

log = structlog.get_logger(__name__)

RuleSpec = Union[str, Pattern, Callable[[Any], Any], None]
MatchMode = Literal["full", "search"]


class Validation:
    """Single validation rule with an optional post-validation conversion.

    Example:
        Validation(r"\\d+").check("123").ok            # True
        Validation(r"\\d+").check("abc").kind          # FailureKind.VALIDATION
        Validation(lambda v: len(v) > 2).check("ab").ok  # False
    """

    def __init__(
        self,
        rule: RuleSpec = None,
        description: Optional[str] = None,
        mode: MatchMode = "full",
        converter: Optional[ConverterRef] = None,
        registry: Optional[ConverterRegistry] = None,
    ):
        """
        Args:
            rule: Pattern string, compiled pattern, predicate, or None for no
                validation
            description: Human-readable shape of a valid answer, used in the
                failure message (defaults to the pattern text)
            mode: "full" requires the pattern to match the whole answer,
                "search" accepts a match anywhere in it
            converter: Converter name or callable applied to valid answers
            registry: Registry used to resolve a named converter
        """
        if mode not in ("full", "search"):
            raise ValueError(f"Unknown validation mode: {mode!r}")

        if isinstance(rule, str):
            rule = re.compile(rule)
        elif rule is not None and not isinstance(rule, Pattern) and not callable(rule):
            raise TypeError(
                f"Validation rule must be a pattern or a callable, got {type(rule).__name__}"
            )

        self.rule = rule
        self.mode = mode
        self.converter = converter
        self.registry = registry if registry is not None else DEFAULT_REGISTRY

        if description is None and isinstance(rule, Pattern):
            description = rule.pattern
        self.description = description

        if converter is not None:
            # Fail at configuration time for unknown converter names
            self.registry.resolve(converter)

    @property
    def is_set(self) -> bool:
        return self.rule is not None

    def __bool__(self) -> bool:
        return self.is_set

    def check(self, value: Any, convert: bool = True) -> EvaluationResult:
        """Validate ``value`` against the rule.

        Args:
            value: Answer to validate
            convert: Apply the converter to a valid answer. Question passes
                False and converts after its modifiers have run.

        Returns:
            Success carrying the (optionally converted) value, or a failure
            carrying ValidationError(value, description)

        Raises:
            Exception: Anything a predicate raises other than ValidationError
                is an internal error and propagates
        """
        if self.rule is None:
            return EvaluationResult.success(value)

        if self._matches(value):
            if convert:
                return self.apply_converter(value)
            return EvaluationResult.success(value)

        log.debug("validation_failed", value=value, description=self.description)
        return EvaluationResult.failure(ValidationError(value, self.description))

    __call__ = check

    def apply_converter(self, value: Any) -> EvaluationResult:
        """Convert an already validated answer; a no-op without a converter."""
        if self.rule is None or self.converter is None:
            return EvaluationResult.success(value)
        try:
            return EvaluationResult.success(self._convert(value))
        except ConversionError as e:
            return EvaluationResult.failure(e)

    def _convert(self, value: Any) -> Any:
        # Named converters follow the strict/lenient protocol, direct ones don't
        if isinstance(self.converter, str):
            return self.registry.invoke(self.converter, value, strict=True)
        return self.registry.invoke(self.converter, value)

    def _matches(self, value: Any) -> bool:
        if isinstance(self.rule, Pattern):
            text = value if isinstance(value, str) else str(value)
            if self.mode == "full":
                return self.rule.fullmatch(text) is not None
            return self.rule.search(text) is not None

        try:
            return bool(self.rule(value))
        except ValidationError:
            return False
        except Exception as e:
            log.error(
                "validation_rule_failed",
                rule=getattr(self.rule, "__name__", repr(self.rule)),
                error=str(e),
                exc_info=True,
            )
            raise

    def __repr__(self) -> str:
        return f"Validation({self.description or self.rule!r}, mode={self.mode!r})"
