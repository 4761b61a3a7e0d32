"""Field constraint table for book records.

The schema is data, not behaviour: each ``FieldConstraint`` names a field and
the check that coerces its raw value. ``BookValidator`` walks the table in
order, so the order below is also the order in which violations are reported.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


class ConstraintUnmet(Exception):
    """Raised by a field check when the raw value breaks its constraint."""

    def __init__(self, constraint: str, message: str) -> None:
        super().__init__(message)
        self.constraint = constraint
        self.message = message


def is_number(field: str, value: Any) -> int:
    """Accept a JSON number holding an integer.

    Numeric-looking strings and booleans are rejected. Integral floats such as
    ``1.0`` are coerced to ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConstraintUnmet("isNumber", f"{field} must be a number")
    if isinstance(value, int):
        return value
    if not math.isfinite(value):
        raise ConstraintUnmet("isNumber", f"{field} must be a number")
    if not value.is_integer():
        raise ConstraintUnmet("isInteger", f"{field} must be an integer number")
    return int(value)


def is_string(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConstraintUnmet("isString", f"{field} must be a string")
    return value


@dataclass(frozen=True)
class FieldConstraint:
    """Constraint descriptor for one record field."""

    field: str
    type_name: str
    check: Callable[[str, Any], Any]
    required: bool = True

    def apply(self, value: Any) -> Any:
        return self.check(self.field, value)


BOOK_SCHEMA: tuple[FieldConstraint, ...] = (
    FieldConstraint(field="id", type_name="integer", check=is_number),
    FieldConstraint(field="name", type_name="string", check=is_string),
)
