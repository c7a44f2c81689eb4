"""
Question evaluation pipeline.

Question orchestrates default, required, range, validation and modifier
policies into a single evaluation contract.
"""

from .modifier import BUILTIN_RULES, Modifier, apply
from .question import ERROR_ACTIONS, Question, QuestionState
from .validation import Validation

__all__ = [
    "BUILTIN_RULES",
    "ERROR_ACTIONS",
    "Modifier",
    "Question",
    "QuestionState",
    "Validation",
    "apply",
]
