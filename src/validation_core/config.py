"""
Configuration constants for the input validation engine.

This module provides application identifiers and the default values used when
a validated field is created without explicit settings.
"""

from typing import Any

from PySide6.QtCore import QCoreApplication

# Application identifiers for QSettings and QStandardPaths
APP_ORGANIZATION = "InputValidation"
APP_NAME = "Demo"

# Quiet period before a text change is validated (0 = next event loop tick)
DEFAULT_EXECUTION_DELAY_MS = 0

# Message shown under an invalid field
DEFAULT_ERROR_MESSAGE = "Invalid entry"

# Default field configuration with all supported keys
DEFAULT_CONFIG: dict[str, Any] = {
    "validator": None,
    "custom_validator": None,
    "execution_delay_ms": DEFAULT_EXECUTION_DELAY_MS,
    "default_value": "",
    "required": False,
    "error_message": DEFAULT_ERROR_MESSAGE,
}


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    This should be called early in application startup so that the error
    log lands in a per-application data directory.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
