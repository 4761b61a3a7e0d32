"""Request-scoped error types.

Both error kinds are caused by the client and resolved within the single
request that raised them. The HTTP layer renders every ``BadRequestError``
as a 400 response; nothing here is a server fault.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.book_api.entities.service.book import ConstraintViolation


class BadRequestError(Exception):
    """Base class for errors reported to the caller as 400 Bad Request."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(BadRequestError):
    """Raised when a path parameter or raw body cannot be interpreted."""


class ValidationError(BadRequestError):
    """Raised when a request body violates the book schema.

    Attributes:
        violations: Ordered, non-empty tuple of constraint violations.
    """

    def __init__(
        self,
        violations: Iterable[ConstraintViolation],
        message: str = "Validation failed",
    ) -> None:
        self.violations = tuple(violations)
        if not self.violations:
            raise ValueError("ValidationError requires at least one violation")
        super().__init__(message)

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields, in report order."""
        return [violation.field for violation in self.violations]

    def to_list(self) -> list[dict[str, str]]:
        """Serialize the violations for a JSON response body."""
        return [violation.model_dump() for violation in self.violations]

    def __str__(self) -> str:
        details = "; ".join(violation.message for violation in self.violations)
        return f"{self.message}: {details}"
