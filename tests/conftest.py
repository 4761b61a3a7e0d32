"""Test configuration and fixtures for the book API."""

from tests.fixtures import *  # noqa: F401,F403
