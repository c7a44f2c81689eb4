"""
Result object for question evaluation.

Question.evaluate returns an EvaluationResult instead of raising for bad
input, so the ask loop can inspect the failure kind and decide whether to
re-prompt.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from question_pipeline.core.exceptions import (
    ConversionError,
    MissingRequiredValueError,
    OutOfRangeError,
    QuestionPipelineError,
    ValidationError,
)


class FailureKind(str, Enum):
    """Kind of evaluation failure."""

    MISSING_REQUIRED_VALUE = "missing_required_value"
    OUT_OF_RANGE = "out_of_range"
    VALIDATION = "validation"
    CONVERSION = "conversion"


_KIND_BY_ERROR = (
    (MissingRequiredValueError, FailureKind.MISSING_REQUIRED_VALUE),
    (OutOfRangeError, FailureKind.OUT_OF_RANGE),
    (ValidationError, FailureKind.VALIDATION),
    (ConversionError, FailureKind.CONVERSION),
)


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of evaluating one answer.

    Exactly one of the two shapes is produced:
    - success: ``error`` is None and ``value`` holds the answer (which may
      itself be None when nothing was entered)
    - failure: ``error`` holds the typed error and ``value`` is None
    """

    value: Any = None
    error: Optional[QuestionPipelineError] = None

    @classmethod
    def success(cls, value: Any) -> "EvaluationResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: QuestionPipelineError) -> "EvaluationResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def kind(self) -> Optional[FailureKind]:
        """Failure kind, or None for a successful result."""
        if self.error is None:
            return None
        for error_type, kind in _KIND_BY_ERROR:
            if isinstance(self.error, error_type):
                return kind
        raise TypeError(f"Unexpected evaluation error type: {type(self.error).__name__}")

    def unwrap(self) -> Any:
        """Return the answer, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
