"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest

from tests.factories import GitHubStub, make_debugger
from workflow_debugger.config import get_settings
from workflow_debugger.logging import configure_logging

if TYPE_CHECKING:
    from collections.abc import Generator

    from workflow_debugger.service import WorkflowDebugger


@pytest.fixture(autouse=True)
def quiet_logging() -> io.StringIO:
    """Send log output to a buffer instead of the terminal."""
    stream = io.StringIO()
    configure_logging(log_level="DEBUG", json_format=True, stream=stream)
    return stream


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Reset cached settings so each test sees its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def github() -> GitHubStub:
    return GitHubStub()


@pytest.fixture
def debugger(github: GitHubStub) -> WorkflowDebugger:
    return make_debugger(github)
