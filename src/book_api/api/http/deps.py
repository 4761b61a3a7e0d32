"""FastAPI dependency implementations."""

from __future__ import annotations

import json
from typing import Any

from fastapi import Depends, Request

from src.book_api.api.http.app_data import ApplicationDependencies
from src.book_api.core.errors import ClientInputError
from src.book_api.core.validation import BookValidator, parse_book_id
from src.book_api.entities.service.book import BookRecord


def get_book_validator(request: Request) -> BookValidator:
    """Get the book validator instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.book_validator


def get_book_id(id: str) -> int:
    """Parse the ``id`` path parameter, raising ClientInputError when malformed."""
    return parse_book_id(id)


async def get_json_body(request: Request) -> Any:
    """Decode the raw request body as JSON."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    # ValueError covers JSONDecodeError, UnicodeDecodeError and the int digit limit
    except (ValueError, RecursionError) as e:
        raise ClientInputError(f"Malformed JSON body: {e}") from e


def get_valid_book(
    payload: Any = Depends(get_json_body),
    validator: BookValidator = Depends(get_book_validator),
) -> BookRecord:
    """Validate the request body into a BookRecord."""
    return validator.validate(payload)
