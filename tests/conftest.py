"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (no .env, fake LLM)
  - Provide reusable deck fixtures
  - Register markers

Collaborators:
  - pytest: Test framework
  - cardsmith.domain: Domain entities

Notes:
  - Fixtures are auto-discovered by pytest
  - Settings cache is cleared per test so env overrides apply
"""

import os

import pytest

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("FAKE_LLM", "1")

from cardsmith.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from cardsmith.domain.entities import Segment  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    app_config.get_settings.cache_clear()
    yield
    app_config.get_settings.cache_clear()


# ============================================================================
# Deck Fixtures
# ============================================================================


@pytest.fixture
def sample_deck() -> list[Segment]:
    """R: Create a minimal valid deck (cover, two bodies, cover)."""
    return [
        Segment.cover("Project Text"),
        Segment(title="Intro", content="First paragraph.\n\nSecond paragraph."),
        Segment(title="", content="Hello **world**"),
        Segment.cover("The End"),
    ]
