"""
Shared test fixtures for the railway_result test suite.

structlog keeps its configuration in module globals, so every test starts
and ends from the library defaults.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog.configure() a test performed."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture()
def calls() -> list[str]:
    """Ordered record of which instrumented callbacks ran."""
    return []
