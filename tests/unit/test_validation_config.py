"""
Tests for ValidationConfig dataclass.
"""

import pytest

from validation_core.config import DEFAULT_CONFIG, DEFAULT_ERROR_MESSAGE, DEFAULT_EXECUTION_DELAY_MS
from validation_core.errors import ConfigurationError
from validation_core.validation_config import ValidationConfig


def passwords_match(text):
    return text == "Johndoe1234"


class TestValidationConfig:
    """Test ValidationConfig functionality."""

    def test_defaults(self):
        config = ValidationConfig()

        assert config.validator is None
        assert config.custom_validator is None
        assert config.execution_delay_ms == DEFAULT_EXECUTION_DELAY_MS == 0
        assert config.default_value == ""
        assert config.required is False
        assert config.error_message == DEFAULT_ERROR_MESSAGE == "Invalid entry"

    def test_defaults_match_default_config(self):
        assert ValidationConfig.from_dict(DEFAULT_CONFIG) == ValidationConfig()

    def test_negative_delay_raises(self):
        with pytest.raises(ConfigurationError):
            ValidationConfig(execution_delay_ms=-1)

    def test_non_callable_custom_validator_raises(self):
        with pytest.raises(ConfigurationError):
            ValidationConfig(custom_validator="password")  # type: ignore[arg-type]

    def test_none_default_value_becomes_empty(self):
        config = ValidationConfig(default_value=None)  # type: ignore[arg-type]
        assert config.default_value == ""

    def test_from_dict(self):
        config = ValidationConfig.from_dict(
            {
                "validator": "email",
                "execution_delay_ms": "250",
                "default_value": "john@doe.com",
                "unknown_key": "ignored",
            }
        )

        assert config.validator == "email"
        assert config.execution_delay_ms == 250
        assert config.default_value == "john@doe.com"

    def test_to_dict_names_predicates(self):
        config = ValidationConfig(validator="password", custom_validator=passwords_match)

        result = config.to_dict()

        assert result["validator"] == "password"
        assert result["custom_validator"] == "passwords_match"
        assert result["execution_delay_ms"] == 0
