"""Declarative question options.

QuestionOptions is the validated, serialisable form of a question's
configuration, as found in YAML question files or built by the CLI. It only
covers values that can be written down as data; callables (custom
validators, modifiers, error actions) are configured on the Question itself.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuestionOptions(BaseModel):
    """Options for a single question.

    ``default`` is only considered set when it appears in the input, so a
    default of ``false``, ``0`` or ``""`` is honoured.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(
        default=None, description="Key for the answer when asking several questions"
    )
    message: str = Field(min_length=1, description="Prompt text shown to the user")
    default: Any = Field(default=None, description="Answer used when nothing is entered")
    required: bool = Field(default=False, description="Reject empty answers")
    echo: bool = Field(default=True, description="Echo typed characters")
    raw: bool = Field(default=False, description="Read in raw terminal mode")
    mask: Optional[str] = Field(default=None, description="Character shown instead of input")
    character: bool = Field(default=False, description="Read one keystroke instead of a line")
    range: Optional[str] = Field(default=None, description="Accepted range, e.g. '1-10'")
    validation: Optional[str] = Field(default=None, description="Regular expression answers must match")
    validation_mode: Literal["full", "search"] = Field(
        default="full", description="Match the whole answer or search within it"
    )
    validation_description: Optional[str] = Field(
        default=None, description="Human-readable description of the expected answer"
    )
    modify: List[str] = Field(default_factory=list, description="Modifier rules in order")
    read: Optional[str] = Field(default=None, description="Converter name for the final answer")
    on_error: Optional[Literal["retry", "raise"]] = Field(
        default=None, description="What the ask loop does when an answer is rejected"
    )

    @field_validator("mask")
    @classmethod
    def single_character_mask(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) != 1:
            raise ValueError("mask must be a single character")
        return v

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword options accepted by Question.configure.

        Returns:
            Dict of question options, excluding ``name`` and ``message``.
            ``default`` is present only when it was explicitly set.
        """
        kwargs: Dict[str, Any] = {
            "required": self.required,
            "echo": self.echo,
            "raw": self.raw,
            "mask": self.mask,
            "character": self.character,
            "range": self.range,
            "modify": list(self.modify),
            "read": self.read,
            "on_error": self.on_error,
        }
        if self.has_default:
            kwargs["default"] = self.default
        if self.validation is not None:
            kwargs["validation"] = self.validation
            kwargs["validation_mode"] = self.validation_mode
            kwargs["validation_description"] = self.validation_description
        return kwargs


class QuestionFile(BaseModel):
    """Top-level structure of a YAML question file."""

    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = Field(default=None, description="Questionnaire identifier")
    description: Optional[str] = None
    questions: List[QuestionOptions] = Field(min_length=1)

    @field_validator("questions")
    @classmethod
    def unique_names(cls, v: List[QuestionOptions]) -> List[QuestionOptions]:
        """Named questions must not share a name."""
        names = [q.name for q in v if q.name is not None]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate question names: {sorted(duplicates)}")
        return v
