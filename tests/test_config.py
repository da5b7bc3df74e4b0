"""Tests for routekit.config."""

import dataclasses

import pytest

from routekit.config import AppConfig


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.debug is False
        assert config.base_url == ""
        assert config.not_found_body == "<h1>404 Not Found</h1>"

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.debug = True  # type: ignore[misc]

    def test_replace(self) -> None:
        config = dataclasses.replace(AppConfig(), base_url="https://example.com")
        assert config.base_url == "https://example.com"
