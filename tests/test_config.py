"""Settings tests — defaults and validators."""

import pytest
from pydantic import ValidationError

from retrieval_gateway.config import Settings


def test_defaults():
    settings = Settings(_env_file=None, store_base_url="http://store.test")
    assert settings.store_search_path == "/query/search"
    assert settings.store_fetch_path == "/query/fetch/{hash}"
    assert settings.api_prefix == "/api/v1"
    assert settings.store_max_retries == 2


def test_trailing_slash_stripped():
    settings = Settings(_env_file=None, store_base_url="http://store.test/")
    assert settings.store_base_url == "http://store.test"


def test_fetch_path_requires_hash_placeholder():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, store_fetch_path="/query/fetch")
