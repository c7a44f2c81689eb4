"""Domain models package."""

from .answer_range import AnswerRange
from .evaluation import EvaluationResult, FailureKind
from .question_options import QuestionFile, QuestionOptions

__all__ = [
    "AnswerRange",
    "EvaluationResult",
    "FailureKind",
    "QuestionFile",
    "QuestionOptions",
]
