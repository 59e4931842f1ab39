"""Shared fixtures."""
from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from typedmap.config import clear_settings_cache


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    """Reload settings from the (patched) environment for one test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Restore structlog defaults after a test reconfigures it."""
    yield
    structlog.reset_defaults()
