"""Shared pytest fixtures for gitversion tests."""

import pytest
from loguru import logger

from gitversion.config import Settings
from gitversion.models import VersionInfo


@pytest.fixture(autouse=True)
def disable_loguru():
    """Disable loguru output during tests for cleaner output."""
    logger.disable("gitversion")
    yield
    logger.enable("gitversion")


@pytest.fixture
def clean_settings(monkeypatch):
    """Settings built from defaults only, ignoring .env and FALLBACK_BRANCH."""
    monkeypatch.delenv("FALLBACK_BRANCH", raising=False)
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def sample_info():
    return VersionInfo(
        version_string="1.2.3-dirty",
        version_branch="main",
        version_fullhash="abcdef1234567890",
        version_shorthash="abcdef1",
        version_isdirty=True,
        version_distance=5,
        version_flag="debug",
        version_major=1,
        version_minor=2,
        version_patch=3,
        success=True,
    )
