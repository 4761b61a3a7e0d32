"""Loading of the templated config.yaml.

Placeholders are resolved against a snapshot of the environment in which
``<MODE>_NAME`` variables (``MODE`` being ``APP_ENVIRONMENT``) take precedence
over plain ``NAME``. The process environment itself is never modified.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.book_api.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def resolve_environment(
    environ: Mapping[str, str] | None = None,
    env_mode: str | None = None,
) -> dict[str, str]:
    """Return a copy of ``environ`` with the mode-prefixed overrides applied.

    With ``APP_ENVIRONMENT=test``, ``TEST_LOG_LEVEL=DEBUG`` yields
    ``LOG_LEVEL=DEBUG`` in the returned mapping.
    """
    source = os.environ if environ is None else environ
    mode = env_mode or source.get("APP_ENVIRONMENT", "development")
    prefix = f"{mode.upper()}_"

    resolved = dict(source)
    for name, value in source.items():
        if name.startswith(prefix) and len(name) > len(prefix):
            resolved[name[len(prefix):]] = value
    return resolved


def _resolve_placeholder(expression: str, environ: Mapping[str, str]) -> str:
    if ":-" in expression:
        name, default = expression.split(":-", 1)
        return environ.get(name, default)

    if ":?" in expression:
        name, error_msg = expression.split(":?", 1)
        if name not in environ:
            raise ValueError(f"Required environment variable {name}: {error_msg}")
        return environ[name]

    if expression not in environ:
        raise ValueError(f"Required environment variable {expression} not set")
    return environ[expression]


def substitute_env_vars(text: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message

    Args:
        text: Template text
        environ: Variables to resolve against, ``os.environ`` when omitted
    """
    source = os.environ if environ is None else environ
    return _PLACEHOLDER.sub(lambda match: _resolve_placeholder(match.group(1), source), text)


def load_templated_yaml(
    file_path: Path, environ: Mapping[str, str] | None = None
) -> ConfigData:
    """
    Load the ``config`` section of a templated YAML file.

    Args:
        file_path: Path to the YAML file
        environ: Variables to resolve against, ``os.environ`` when omitted

    Raises:
        ValueError: If required environment variables are missing or the
            content is not a valid configuration
        FileNotFoundError: If the YAML file doesn't exist
    """
    content = Path(file_path).read_text()

    variables = resolve_environment(environ)
    logger.debug(
        "Loading {} for environment {}",
        file_path,
        variables.get("APP_ENVIRONMENT", "development"),
    )

    try:
        loaded = yaml.safe_load(substitute_env_vars(content, variables))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not loaded or not isinstance(loaded, dict):
        raise ValueError("Failed to parse YAML")

    try:
        return ConfigData.model_validate(loaded.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
