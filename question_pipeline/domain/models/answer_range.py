"""Accepted answer range.

An AnswerRange is produced by the ``range`` converter from expressions such
as ``"1-10"``, ``"1..10"``, ``"0.5...2.5"`` or ``"a-z"`` and answers whether a
raw answer lies within it.
"""

from typing import Any, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

Bound = Union[int, float, str]


class AnswerRange(BaseModel):
    """Closed (or end-exclusive) range of accepted answers.

    Numeric ranges coerce string answers to the bound type before comparing,
    so ``"5"`` is contained in ``1..10``. Letter ranges compare single
    characters.
    """

    model_config = ConfigDict(frozen=True)

    first: Bound = Field(description="Lower bound (inclusive)")
    last: Bound = Field(description="Upper bound")
    exclude_end: bool = Field(default=False, description="True for 'a...b' ranges")

    @model_validator(mode="after")
    def check_bound_types(self) -> "AnswerRange":
        """Both bounds must be numbers or both single characters."""
        numeric = (int, float)
        first_numeric = isinstance(self.first, numeric)
        last_numeric = isinstance(self.last, numeric)
        if first_numeric != last_numeric:
            raise ValueError("Range bounds must both be numbers or both be letters")
        if not first_numeric and (len(self.first) != 1 or len(self.last) != 1):
            raise ValueError("Letter range bounds must be single characters")
        return self

    @property
    def bounds(self) -> Tuple[Bound, Bound]:
        return (self.first, self.last)

    @property
    def is_numeric(self) -> bool:
        return not isinstance(self.first, str)

    def contains(self, value: Any) -> bool:
        """Check whether value lies within the range.

        Args:
            value: Raw answer (usually a string) or an already typed value

        Returns:
            True if the value is within bounds; values that cannot be compared
            with the bounds are never contained
        """
        candidate = self._coerce(value)
        if candidate is None:
            return False
        if candidate < self.first:
            return False
        if self.exclude_end:
            return candidate < self.last
        return candidate <= self.last

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def _coerce(self, value: Any):
        if isinstance(value, bool):
            return None
        if self.is_numeric:
            if isinstance(value, (int, float)):
                return value
            if not isinstance(value, str):
                return None
            text = value.strip()
            # Integer ranges only accept integer text
            as_int = isinstance(self.first, int) and isinstance(self.last, int)
            try:
                return int(text) if as_int else float(text)
            except ValueError:
                return None
        if isinstance(value, str) and len(value) == 1:
            return value
        return None

    def __str__(self) -> str:
        separator = "..." if self.exclude_end else ".."
        return f"{self.first}{separator}{self.last}"
