"""
ValidationConfig dataclass for validated input fields.

This module provides a typed configuration class that bundles everything a
validation session needs: the validator identifier, an optional predicate,
the debounce delay and the initial text.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .config import DEFAULT_ERROR_MESSAGE, DEFAULT_EXECUTION_DELAY_MS
from .errors import ConfigurationError

Predicate = Callable[[str], bool]


@dataclass
class ValidationConfig:
    """
    Configuration for a single validated field.

    `validator` is a built-in name, a regular-expression source or a
    predicate. `custom_validator` is an extra predicate whose result always
    takes precedence. `required` is stored for the host but never consulted
    by the engine.
    """

    validator: str | Predicate | None = None
    custom_validator: Predicate | None = None
    execution_delay_ms: int = DEFAULT_EXECUTION_DELAY_MS
    default_value: str = ""
    required: bool = False
    error_message: str = DEFAULT_ERROR_MESSAGE

    def __post_init__(self) -> None:
        if self.execution_delay_ms < 0:
            raise ConfigurationError(
                f"Execution delay must be non-negative, got {self.execution_delay_ms}",
                validator=self.validator,
            )
        if self.custom_validator is not None and not callable(self.custom_validator):
            raise ConfigurationError("Custom validator must be callable", validator=self.custom_validator)
        if self.default_value is None:
            self.default_value = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationConfig:
        """
        Create a ValidationConfig from a dictionary (e.g., from widget properties).

        Args:
            data: Dictionary containing configuration values

        Returns:
            ValidationConfig instance
        """
        config_data = data.copy()

        if "execution_delay_ms" in config_data and config_data["execution_delay_ms"] is not None:
            config_data["execution_delay_ms"] = int(config_data["execution_delay_ms"])

        # Filter out keys that aren't valid fields
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in config_data.items() if k in valid_fields}

        return cls(**filtered_data)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the configuration to a dictionary for logging.

        Predicates are reported by name since functions do not serialize.
        """
        result = {}

        for field_name in self.__dataclass_fields__:
            value = getattr(self, field_name)

            if callable(value):
                result[field_name] = getattr(value, "__name__", type(value).__name__)
            else:
                result[field_name] = value

        return result
