"""Entities module with entity-centric structure.

Each entity has its own package holding its domain model. The book entity is
transient: it is validated per request and never stored.
"""

from .service.book import BookRecord, ConstraintViolation

__all__ = [
    "BookRecord",
    "ConstraintViolation",
]
