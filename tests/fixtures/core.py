from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from src.book_api.api.http.app_data import ApplicationDependencies
from src.book_api.core.validation import BookValidator
from src.book_api.runtime.config.config_data import ValidationConfig

__all__ = [
    "client",
    "configure_validation",
    "strict_validator",
    "validator",
]


@pytest.fixture
def validator() -> BookValidator:
    return BookValidator()


@pytest.fixture
def strict_validator() -> BookValidator:
    """Validator that rejects unknown keys."""
    return BookValidator(ValidationConfig(forbid_unknown_fields=True))


@pytest.fixture
def client() -> Generator[TestClient]:
    """Test client with the application lifespan running."""
    from src.book_api.api.http.app import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def configure_validation(
    client: TestClient,
) -> Callable[..., TestClient]:
    """Swap the running app's validator for one built from the given options."""

    def _configure(**options: bool) -> TestClient:
        client.app.state.app_dependencies = ApplicationDependencies(
            book_validator=BookValidator(ValidationConfig(**options)),
        )
        return client

    return _configure
