"""
Global test configuration with support for different test types.
"""

import logging
import os

import pytest

from dental_vision.api import reset_clients
from dental_vision.pickers import default_host_context


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Unit tests for individual components",
        "contract: Behavioural contracts that must hold across implementations",
        "integration: Tests that talk to real services (need credentials)",
        "allow_env_pollution: Keep the caller's DENTAL_VISION_* environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


def pytest_collection_modifyitems(config, items):  # noqa: ARG001
    """Skip integration tests unless credentials are present."""
    if os.getenv("DENTAL_VISION_INFERENCE_TOKEN") and os.getenv(
        "DENTAL_VISION_GEMINI_API_KEY"
    ):
        return
    skip_integration = pytest.mark.skip(reason="integration credentials not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_dental_vision_env(request, monkeypatch):
    """Ensure a clean DENTAL_VISION_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env, and
    integration tests always see the real environment.
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "integration" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("DENTAL_VISION_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def fresh_singletons():
    """Shared clients and the picker host never leak between tests."""
    reset_clients()
    default_host_context.clear()
    yield
    reset_clients()
    default_host_context.clear()


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
