"""
Debounced validation engine for single text inputs.

This package resolves validator identifiers into decision functions and runs
them against a field's text through a debounced validation session.
"""

from .errors import ConfigurationError, PredicateError
from .scheduler import QtTimerScheduler, ScheduledCall
from .session import SessionState, ValidationSession
from .validation_config import ValidationConfig
from .validators import BUILT_IN_VALIDATORS, ValidatorKind, ValidatorSpec, resolve

__all__ = [
    "BUILT_IN_VALIDATORS",
    "ConfigurationError",
    "PredicateError",
    "QtTimerScheduler",
    "ScheduledCall",
    "SessionState",
    "ValidationConfig",
    "ValidationSession",
    "ValidatorKind",
    "ValidatorSpec",
    "resolve",
]
