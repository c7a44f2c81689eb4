"""
Custom exception hierarchy for the question pipeline.

All application exceptions inherit from QuestionPipelineError.

Configuration-time errors (duplicate converters, bad range expressions,
unknown modifiers) are raised at the call site. Evaluation errors describe
bad user input; Question.evaluate returns them inside an EvaluationResult
instead of raising them.
"""

from typing import Any, Optional, Tuple


class QuestionPipelineError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(QuestionPipelineError):
    """Invalid or missing configuration."""

    pass


class InvalidRangeExpressionError(ConfigurationError):
    """Range expression could not be parsed when it was assigned."""

    def __init__(self, expression: Any):
        self.expression = expression
        super().__init__(f"Invalid range expression: {expression!r}")


class QuestionStateError(ConfigurationError):
    """Operation not allowed in the question's current state."""

    pass


# =============================================================================
# Converter Errors
# =============================================================================


class ConverterError(QuestionPipelineError):
    """Base for converter registry errors."""

    pass


class DuplicateConverterError(ConverterError):
    """Attempted to register a converter name twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Converter for {name!r} already registered")


class UnknownConverterError(ConverterError):
    """Converter name is not registered."""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"{name!r} is not registered")


class ConversionError(ConverterError):
    """Strict conversion could not handle the value."""

    def __init__(self, value: Any, target: str):
        self.value = value
        self.target = target
        super().__init__(f"{value!r} could not be converted to {target}")


# =============================================================================
# Modifier Errors
# =============================================================================


class ModifierError(QuestionPipelineError):
    """Base for modifier errors."""

    pass


class UnknownModifierError(ModifierError):
    """Modifier rule name is not a built-in rule."""

    def __init__(self, rule: Any):
        self.rule = rule
        super().__init__(f"Unknown modifier rule: {rule!r}")


# =============================================================================
# Evaluation Errors
# =============================================================================


class EvaluationError(QuestionPipelineError):
    """Base for user-input failures produced by Question.evaluate."""

    pass


class MissingRequiredValueError(EvaluationError):
    """Required question answered with no value and no default."""

    def __init__(self, message: str = "No value provided for required"):
        super().__init__(message)


class OutOfRangeError(EvaluationError):
    """Value falls outside the question's accepted range."""

    def __init__(self, value: Any, bounds: Tuple[Any, Any], exclude_end: bool = False):
        self.value = value
        self.bounds = bounds
        self.exclude_end = exclude_end
        separator = "..." if exclude_end else ".."
        super().__init__(
            f"Value {value} is not included in the range {bounds[0]}{separator}{bounds[1]}"
        )


class ValidationError(EvaluationError):
    """Input validation failed."""

    def __init__(self, value: Any, description: Optional[str] = None):
        self.value = value
        self.description = description
        if description:
            message = f"Your answer {value!r} is invalid (must match {description})"
        else:
            message = f"Your answer {value!r} is invalid"
        super().__init__(message)


# =============================================================================
# Prompt Errors
# =============================================================================


class PromptError(QuestionPipelineError):
    """Base for ask-loop errors."""

    pass


class InputClosedError(PromptError):
    """Input stream ended before a valid answer was read."""

    pass


class RetryLimitExceededError(PromptError):
    """Question was re-asked more times than allowed."""

    def __init__(self, attempts: int, last_error: QuestionPipelineError):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"No valid answer after {attempts} attempts: {last_error.message}"
        )
