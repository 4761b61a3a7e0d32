"""Book schema and validation exports."""

from .schema import BOOK_SCHEMA, ConstraintUnmet, FieldConstraint
from .validator import BookValidator, parse_book_id

__all__ = [
    "BOOK_SCHEMA",
    "BookValidator",
    "ConstraintUnmet",
    "FieldConstraint",
    "parse_book_id",
]
