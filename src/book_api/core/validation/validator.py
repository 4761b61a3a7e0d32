"""Book body validation and path identifier parsing."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from loguru import logger

from src.book_api.core.errors import ClientInputError, ValidationError
from src.book_api.core.validation.schema import (
    BOOK_SCHEMA,
    ConstraintUnmet,
    FieldConstraint,
)
from src.book_api.entities.service.book import BookRecord, ConstraintViolation
from src.book_api.runtime.config.config_data import ValidationConfig

_INTEGER_PATTERN = re.compile(r"-?[0-9]+")
_NUMERIC_STRING_EXPECTED = "Validation failed (numeric string is expected)"


def parse_book_id(raw: str) -> int:
    """Parse a path parameter as an integer.

    Only an optional leading minus sign followed by ASCII digits is accepted;
    whitespace, ``+``, underscores and decimal points are rejected even though
    ``int()`` would take some of them.

    Raises:
        ClientInputError: If ``raw`` is not an integer string.
    """
    if not isinstance(raw, str) or not _INTEGER_PATTERN.fullmatch(raw):
        raise ClientInputError(_NUMERIC_STRING_EXPECTED)
    try:
        return int(raw)
    except ValueError as e:
        # digit strings beyond the interpreter's int conversion limit
        raise ClientInputError(_NUMERIC_STRING_EXPECTED) from e


class BookValidator:
    """Coerce untyped input into a ``BookRecord`` and check the schema.

    Instances are stateless apart from their configuration, so one validator
    is built at startup and shared by every request.
    """

    def __init__(
        self,
        config: ValidationConfig | None = None,
        schema: tuple[FieldConstraint, ...] = BOOK_SCHEMA,
    ) -> None:
        self.config = config or ValidationConfig()
        self.schema = schema
        self._known_fields = frozenset(constraint.field for constraint in schema)

    def validate(self, payload: Any) -> BookRecord:
        """Return the record built from ``payload``.

        A payload that is not a mapping has no recognised fields, so every
        required field is reported as missing.

        Raises:
            ValidationError: With every violation found, or only the first one
                when ``stop_at_first_error`` is enabled.
        """
        data: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
        values: dict[str, Any] = {}
        violations: list[ConstraintViolation] = []

        for constraint in self.schema:
            raw = data.get(constraint.field)
            if raw is None:
                if constraint.required:
                    violations.append(
                        ConstraintViolation(
                            field=constraint.field,
                            constraint="required",
                            message=f"{constraint.field} is required",
                        )
                    )
                continue
            try:
                values[constraint.field] = constraint.apply(raw)
            except ConstraintUnmet as unmet:
                violations.append(
                    ConstraintViolation(
                        field=constraint.field,
                        constraint=unmet.constraint,
                        message=unmet.message,
                    )
                )

        if self.config.forbid_unknown_fields:
            for key in data:
                if key not in self._known_fields:
                    violations.append(
                        ConstraintViolation(
                            field=str(key),
                            constraint="whitelist",
                            message=f"property {key} should not exist",
                        )
                    )

        if violations:
            if self.config.stop_at_first_error:
                violations = violations[:1]
            logger.debug(
                "Book payload rejected",
                fields=[violation.field for violation in violations],
            )
            raise ValidationError(violations)

        return BookRecord(**values)
