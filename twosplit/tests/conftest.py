"""Shared pytest fixtures for twosplit tests."""

import logging
import os

import pytest

from twosplit.services.orchestrator import Orchestrator
from twosplit.services.tool import TwosplitTool

from .fakes import WELL_FORMED_SYNTHESIS, FakeBackend, create_mock_anthropic_client


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep real configuration out of tests."""
    for key in (
        "ANTHROPIC_API_KEY",
        "TWOSPLIT_LOG_LEVEL",
        "TWOSPLIT_LOG_FORMAT",
        "TWOSPLIT_BACKEND_TIMEOUT",
        "TWOSPLIT_MAX_TOKENS",
        "OTLP_ENDPOINT",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def api_key_env(monkeypatch):
    """Provide a test API key through the environment."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test-key-1234567890")
    return os.environ["ANTHROPIC_API_KEY"]


# =============================================================================
# Backend, Orchestrator and Tool
# =============================================================================


@pytest.fixture
def backend():
    """Backend scripted for one successful invocation."""
    return FakeBackend(["First answer", "Second answer", WELL_FORMED_SYNTHESIS])


@pytest.fixture
def orchestrator(backend):
    return Orchestrator(backend)


@pytest.fixture
def tool(orchestrator):
    return TwosplitTool(orchestrator)


@pytest.fixture
def mock_anthropic_client():
    return create_mock_anthropic_client()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def restore_root_logger():
    """Put the root logger back after setup_logging replaces its handlers."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
