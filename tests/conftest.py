"""Root conftest — shared test configuration and the in-memory store fixture."""

import os

import pytest

# Ensure tests never reach a real store
os.environ.setdefault("STORE_BASE_URL", "http://store.test")
os.environ.setdefault("LOG_FORMAT", "text")

from tests.fake_store import FakeContentStore  # noqa: E402


@pytest.fixture
def store():
    return FakeContentStore()
