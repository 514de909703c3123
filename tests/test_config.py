"""Tests for fauxapi.config — MockConfig defaults, normalization and validation."""

import pytest

from fauxapi.config import MockConfig, normalize_namespace
from fauxapi.errors import ConfigurationError


class TestMockConfig:
    def test_defaults(self) -> None:
        config = MockConfig()
        assert config.namespace == ""
        assert config.delay is None
        assert config.debug is False

    def test_frozen(self) -> None:
        config = MockConfig()
        with pytest.raises(AttributeError):
            config.debug = True  # type: ignore[misc]

    def test_namespace_is_normalized(self) -> None:
        assert MockConfig(namespace="api/v1/").namespace == "/api/v1"

    def test_fixed_delay(self) -> None:
        assert MockConfig(delay=150).delay == 150
        assert MockConfig(delay=0.5).delay == 0.5

    def test_range_delay(self) -> None:
        assert MockConfig(delay=(50, 200)).delay == (50, 200)

    def test_list_delay_becomes_tuple(self) -> None:
        assert MockConfig(delay=[10, 20]).delay == (10, 20)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "delay",
        ["100", True, (1, 2, 3), (1,), ("a", 2), [None, None]],
    )
    def test_invalid_delay(self, delay: object) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            MockConfig(delay=delay)  # type: ignore[arg-type]
        assert exc_info.value.code == "CONFIGURATION_ERROR"


class TestNormalizeNamespace:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, ""),
            ("", ""),
            ("/", ""),
            ("///", ""),
            ("api", "/api"),
            ("/api", "/api"),
            ("/api/", "/api"),
            ("api/v1", "/api/v1"),
        ],
    )
    def test_normalize(self, raw: str | None, expected: str) -> None:
        assert normalize_namespace(raw) == expected
