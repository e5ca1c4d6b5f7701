"""Shared pytest fixtures."""

import pytest

from folkit.utils.config import reset_config


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Run every test against the packaged default configuration."""
    monkeypatch.delenv("FOLKIT_CONFIG", raising=False)
    reset_config()
    yield
    reset_config()
