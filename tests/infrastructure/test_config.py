"""Tests for environment-based settings."""

from pathlib import Path

import pytest

from orderdesk.domain.exceptions import ValidationError
from orderdesk.infrastructure.config import DEFAULT_API_URL, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.api_url == DEFAULT_API_URL
    assert settings.api_token is None
    assert settings.timeout == 10.0
    assert settings.max_products == 20
    assert settings.search_limit == 50
    assert settings.catalog_file.name == "catalog.json"


def test_overrides():
    settings = Settings.from_env({
        "ORDERDESK_API_URL": "https://shop.example/api/",
        "ORDERDESK_API_TOKEN": "secret",
        "ORDERDESK_TIMEOUT": "2.5",
        "ORDERDESK_MAX_PRODUCTS": "5",
        "ORDERDESK_SEARCH_LIMIT": "10",
        "ORDERDESK_CATALOG_FILE": "/tmp/c.json",
    })
    assert settings.api_url == "https://shop.example/api"
    assert settings.api_token == "secret"
    assert settings.timeout == 2.5
    assert settings.max_products == 5
    assert settings.search_limit == 10
    assert settings.catalog_file == Path("/tmp/c.json")


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_numbers_rejected(value):
    with pytest.raises(ValidationError, match="ORDERDESK_MAX_PRODUCTS"):
        Settings.from_env({"ORDERDESK_MAX_PRODUCTS": value})
