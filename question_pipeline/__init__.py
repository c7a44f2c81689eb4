"""Interactive question evaluation pipeline.

Turns raw line input into validated, typed, transformed answers.
"""

from question_pipeline.converters import DEFAULT_REGISTRY, ConverterRegistry
from question_pipeline.domain.models import AnswerRange, EvaluationResult, FailureKind
from question_pipeline.question import Modifier, Question, QuestionState, Validation
from question_pipeline.services import PromptService

__version__ = "0.1.0"

__all__ = [
    "AnswerRange",
    "ConverterRegistry",
    "DEFAULT_REGISTRY",
    "EvaluationResult",
    "FailureKind",
    "Modifier",
    "PromptService",
    "Question",
    "QuestionState",
    "Validation",
]
