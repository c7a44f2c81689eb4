"""Question: configuration and evaluation of a single prompt answer.

A Question turns a raw answer (or the absence of one) into a final value by
applying, in a fixed order:

    1. default      - no answer and a default is set: return the default
    2. required     - required, no default, empty answer: fail
    3. absent       - no answer at all: return None
    4. range        - answer must lie within the accepted range
    5. validation   - answer must pass the validation rule
    6. modification - modifier rules transform the answer, then the
                      validation converter (if any) types it

Evaluation failures are returned inside an EvaluationResult. Configuration
mistakes (bad range expression, unknown modifier, unknown converter) raise
immediately.

Lifecycle: UNSET -> CONFIGURED (message set) -> EVALUATED (answer
accepted). clean() returns the question to UNSET for reuse.
"""

from enum import Enum
from typing import Any, Callable, Optional, Union

import structlog

from question_pipeline.converters.builtin import DEFAULT_REGISTRY
from question_pipeline.converters.registry import ConverterRef, ConverterRegistry
from question_pipeline.core.exceptions import (
    ConversionError,
    InvalidRangeExpressionError,
    MissingRequiredValueError,
    OutOfRangeError,
    QuestionPipelineError,
    QuestionStateError,
)
from question_pipeline.domain.models.answer_range import AnswerRange
from question_pipeline.domain.models.evaluation import EvaluationResult
from question_pipeline.domain.models.question_options import QuestionOptions
from question_pipeline.question.modifier import Modifier, Rule
from question_pipeline.question.validation import MatchMode, RuleSpec, Validation

log = structlog.get_logger(__name__)

ErrorAction = Union[str, Callable[[QuestionPipelineError], Any]]

ERROR_ACTIONS = ("retry", "raise")

_OPTION_NAMES = frozenset(
    {
        "message",
        "default",
        "required",
        "echo",
        "raw",
        "mask",
        "character",
        "range",
        "validation",
        "validation_mode",
        "validation_description",
        "modify",
        "read",
        "on_error",
    }
)


class QuestionState(str, Enum):
    """Lifecycle state of a Question."""

    UNSET = "unset"
    CONFIGURED = "configured"
    EVALUATED = "evaluated"


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


class Question:
    """A command line question and the rules its answer must satisfy.

    Example:
        question = Question().call(
            "How many?", lambda q: q.configure(range="1-10", modify=["trim"])
        )
        question.evaluate("5").value     # "5"
        question.evaluate("15").kind     # FailureKind.OUT_OF_RANGE
    """

    def __init__(self, registry: Optional[ConverterRegistry] = None, **options: Any):
        """Initialize a question.

        Args:
            registry: Converter registry used to parse range expressions and
                resolve the read type (defaults to the shared registry)
            **options: Any option accepted by configure()
        """
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self._reset()
        if options:
            self.configure(**options)

    @classmethod
    def from_options(
        cls, options: QuestionOptions, registry: Optional[ConverterRegistry] = None
    ) -> "Question":
        """Build a configured question from declarative options."""
        question = cls(registry=registry)
        question.configure(**options.to_kwargs())
        return question.call(options.message)

    def _reset(self) -> None:
        self._state = QuestionState.UNSET
        self._message: Optional[str] = None
        self._default: Any = None
        self._has_default = False
        self._required = False
        self._echo = True
        self._raw = False
        self._mask: Optional[str] = None
        self._character = False
        self._range: Optional[AnswerRange] = None
        self._on_error: Optional[ErrorAction] = None
        self._read: Optional[ConverterRef] = None
        self._validation = Validation(registry=self.registry)
        self._modifier = Modifier()

    # =========================================================================
    # Entry points
    # =========================================================================

    def call(
        self, message: str, configure: Optional[Callable[["Question"], Any]] = None
    ) -> "Question":
        """Set the message and apply a configuration callable.

        Args:
            message: Prompt text
            configure: Called with this question to set further options

        Returns:
            self, now CONFIGURED
        """
        self.message = message
        if configure is not None:
            configure(self)
        log.debug(
            "question_configured",
            message=self._message,
            has_default=self._has_default,
            required=self._required,
            range=str(self._range) if self._range else None,
        )
        return self

    def configure(self, **options: Any) -> "Question":
        """Set several options at once.

        Accepts the property names (message, default, required, echo, raw,
        mask, character, range, read, on_error) plus ``validation`` with its
        ``validation_mode`` and ``validation_description``, and ``modify``
        (a list of modifier rules).

        Raises:
            TypeError: An option name is not recognised
        """
        unknown = set(options) - _OPTION_NAMES
        if unknown:
            raise TypeError(f"Unknown question options: {sorted(unknown)}")

        if "validation" in options:
            self.validate(
                options["validation"],
                description=options.get("validation_description"),
                mode=options.get("validation_mode", "full"),
            )
        if "modify" in options:
            rules = options["modify"] or ()
            if isinstance(rules, str) or callable(rules):
                rules = (rules,)
            self.modify(*rules)
        for name in (
            "default",
            "required",
            "echo",
            "raw",
            "mask",
            "character",
            "range",
            "read",
            "on_error",
        ):
            if name in options:
                setattr(self, name, options[name])
        # Message last so a bad option leaves the question unconfigured
        if "message" in options:
            self.message = options["message"]
        return self

    def evaluate(self, raw: Any) -> EvaluationResult:
        """Check an answer against all of the question's requirements.

        Args:
            raw: Answer as read from input, or None when nothing was supplied

        Returns:
            EvaluationResult with the final answer, or with the typed error
            (MissingRequiredValueError, OutOfRangeError, ValidationError,
            ConversionError)

        Raises:
            QuestionStateError: Question has no message, or was already
                answered and not cleaned
        """
        if self._state is QuestionState.UNSET:
            raise QuestionStateError("Cannot evaluate a question without a message")
        if self._state is QuestionState.EVALUATED:
            raise QuestionStateError(
                "Question was already answered; call clean() before reusing it"
            )

        result = self._evaluate(raw)

        if result.ok:
            self._state = QuestionState.EVALUATED
            log.debug("question_evaluated", message=self._message)
        else:
            log.info(
                "question_evaluation_failed",
                message=self._message,
                kind=result.kind.value,
                error=result.error.message,
            )
        return result

    def _evaluate(self, raw: Any) -> EvaluationResult:
        if raw is None and self._has_default:
            return EvaluationResult.success(self._default)

        if self._required and not self._has_default and _is_empty(raw):
            return EvaluationResult.failure(MissingRequiredValueError())

        if raw is None:
            return EvaluationResult.success(None)

        # Only the empty string skips the range; "   " is an answer
        if self._range is not None and raw != "":
            if not self._range.contains(raw):
                return EvaluationResult.failure(
                    OutOfRangeError(raw, self._range.bounds, self._range.exclude_end)
                )

        validated = self._validation.check(raw, convert=False)
        if validated.failed:
            return validated

        # Modifiers work on strings, so the validation converter runs last
        modified = self._modifier.apply_to(validated.value)
        return self._validation.apply_converter(modified)

    def convert(self, answer: Any) -> Any:
        """Convert an accepted answer to the configured read type.

        None and answers taken from the default are passed through untouched
        when no read type is configured.

        Raises:
            ConversionError: The named converter could not handle the answer
        """
        if self._read is None or answer is None:
            return answer
        if isinstance(self._read, str):
            return self.registry.invoke(self._read, answer, strict=True)
        try:
            return self.registry.invoke(self._read, answer)
        except (TypeError, ValueError) as e:
            raise ConversionError(answer, getattr(self._read, "__name__", "value")) from e

    def reopen(self) -> "Question":
        """Return an answered question to CONFIGURED so it can be re-asked.

        Used by the ask loop when an accepted answer is later rejected, e.g.
        by the read-type conversion.

        Raises:
            QuestionStateError: Question has not been answered
        """
        if self._state is not QuestionState.EVALUATED:
            raise QuestionStateError("Only an answered question can be reopened")
        self._state = QuestionState.CONFIGURED
        return self

    def clean(self) -> "Question":
        """Reset the question to its unconfigured state for reuse."""
        log.debug("question_cleaned", message=self._message)
        self._reset()
        return self

    # =========================================================================
    # Configuration surface
    # =========================================================================

    @property
    def state(self) -> QuestionState:
        return self._state

    @property
    def message(self) -> Optional[str]:
        return self._message

    @message.setter
    def message(self, value: Optional[str]) -> None:
        if self._state is QuestionState.EVALUATED:
            raise QuestionStateError(
                "Question was already answered; call clean() before reusing it"
            )
        if not value:
            raise QuestionStateError("Question message must not be empty")
        self._message = value
        self._state = QuestionState.CONFIGURED

    @property
    def default(self) -> Any:
        return self._default

    @default.setter
    def default(self, value: Any) -> None:
        self._default = value
        self._has_default = True

    @property
    def has_default(self) -> bool:
        return self._has_default

    def clear_default(self) -> None:
        self._default = None
        self._has_default = False

    @property
    def required(self) -> bool:
        return self._required

    @required.setter
    def required(self, value: bool) -> None:
        self._required = bool(value)

    @property
    def echo(self) -> bool:
        """Whether typed characters are echoed back (read by the I/O layer)."""
        return self._echo

    @echo.setter
    def echo(self, value: bool) -> None:
        self._echo = bool(value)

    @property
    def raw(self) -> bool:
        """Whether input is read in raw mode (read by the I/O layer)."""
        return self._raw

    @raw.setter
    def raw(self, value: bool) -> None:
        self._raw = bool(value)

    @property
    def mask(self) -> Optional[str]:
        return self._mask

    @mask.setter
    def mask(self, value: Optional[str]) -> None:
        if value is not None and (not isinstance(value, str) or len(value) != 1):
            raise ValueError("mask must be a single character")
        self._mask = value

    @property
    def has_mask(self) -> bool:
        return self._mask is not None

    @property
    def character(self) -> bool:
        """True to read a single keystroke instead of a full line."""
        return self._character

    @character.setter
    def character(self, value: bool) -> None:
        self._character = bool(value)

    @property
    def range(self) -> Optional[AnswerRange]:
        return self._range

    @range.setter
    def range(self, value: Union[str, AnswerRange, None]) -> None:
        """Parse and store the accepted range.

        Raises:
            InvalidRangeExpressionError: ``value`` is not a valid range
        """
        if value is None or isinstance(value, AnswerRange):
            self._range = value
            return
        try:
            self._range = self.registry.invoke("range", value, strict=True)
        except (ConversionError, ValueError) as e:
            raise InvalidRangeExpressionError(value) from e

    @property
    def has_range(self) -> bool:
        return self._range is not None

    @property
    def validation(self) -> Validation:
        return self._validation

    @validation.setter
    def validation(self, value: Union[Validation, RuleSpec]) -> None:
        if isinstance(value, Validation):
            self._validation = value
        else:
            self.validate(value)

    def validate(
        self,
        rule: RuleSpec = None,
        description: Optional[str] = None,
        mode: MatchMode = "full",
        converter: Optional[ConverterRef] = None,
    ) -> "Question":
        """Replace the validation rule.

        Args:
            rule: Pattern, compiled pattern or predicate; None removes validation
            description: Human-readable shape of a valid answer
            mode: "full" or "search" pattern matching
            converter: Optional conversion applied to answers that pass
        """
        self._validation = Validation(
            rule,
            description=description,
            mode=mode,
            converter=converter,
            registry=self.registry,
        )
        return self

    @property
    def modifier(self) -> Modifier:
        return self._modifier

    def modify(self, *rules: Rule) -> "Question":
        """Replace the modifier rules (applied in the given order)."""
        self._modifier = Modifier(*rules)
        return self

    @property
    def read(self) -> Optional[ConverterRef]:
        """Converter the I/O layer applies to the accepted answer."""
        return self._read

    @read.setter
    def read(self, value: Optional[ConverterRef]) -> None:
        if value is not None:
            self.registry.resolve(value)
        self._read = value

    @property
    def on_error(self) -> Optional[ErrorAction]:
        return self._on_error

    @on_error.setter
    def on_error(self, action: Optional[ErrorAction]) -> None:
        if action is not None and not callable(action) and action not in ERROR_ACTIONS:
            raise ValueError(
                f"on_error must be one of {ERROR_ACTIONS} or a callable, got {action!r}"
            )
        self._on_error = action

    @property
    def has_error_action(self) -> bool:
        return self._on_error is not None

    def __str__(self) -> str:
        return self._message or ""

    def __repr__(self) -> str:
        return f"<Question message={self._message!r} state={self._state.value}>"
