"""Entity package: Book."""

from .entity import BookRecord, ConstraintViolation

__all__ = ["BookRecord", "ConstraintViolation"]
