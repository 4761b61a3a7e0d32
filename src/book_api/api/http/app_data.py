from dataclasses import dataclass

from src.book_api.core.validation import BookValidator
from src.book_api.runtime.context import get_config


@dataclass
class ApplicationDependencies:
    book_validator: BookValidator


def build_dependencies() -> ApplicationDependencies:
    """Construct the application-wide services from the active configuration."""
    config = get_config()
    return ApplicationDependencies(
        book_validator=BookValidator(config.validation),
    )
