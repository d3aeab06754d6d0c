"""
Error taxonomy for the input validation engine.

Three failures reach a host: a validator that cannot be compiled, a custom
predicate that raises while deciding validity, and anything else escaping
the demo application's event loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorType(Enum):
    """Where a failure originated."""

    CONFIG = "config"
    PREDICATE = "predicate"
    UNHANDLED = "unhandled"


class ErrorCode(Enum):
    """Specific error codes logged with every handled failure."""

    CONFIG_INVALID = "CONFIG_INVALID"
    INVALID_PATTERN = "INVALID_PATTERN"
    PREDICATE_FAILED = "PREDICATE_FAILED"
    UNHANDLED_EXCEPTION = "UNHANDLED_EXCEPTION"


class ErrorSeverity(Enum):
    """Error severity levels."""

    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class BaseAppError(Exception):
    """
    Base application error with structured metadata.

    ``user_message`` is safe to show next to a field, ``technical_message``
    is meant for the log.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.user_message


class ConfigurationError(BaseAppError):
    """
    The configured validator cannot be turned into a decision function.

    Raised for identifiers that are neither a built-in name, a compilable
    pattern, nor a callable, and for out-of-range settings such as a
    negative delay.
    """

    def __init__(
        self,
        user_message: str,
        validator: Any = None,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
        technical_message: str | None = None,
    ):
        super().__init__(
            type=ErrorType.CONFIG,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=ErrorSeverity.HIGH,
            context={"validator": validator} if validator is not None else {},
        )

    @property
    def validator(self) -> Any:
        """Get the offending validator identifier."""
        return self.context.get("validator")


class PredicateError(BaseAppError):
    """An external predicate raised while deciding validity."""

    def __init__(self, original_error: Exception, text: str | None = None):
        # Field contents may be a password: only the length is kept
        super().__init__(
            type=ErrorType.PREDICATE,
            code=ErrorCode.PREDICATE_FAILED,
            user_message="Custom validator failed",
            technical_message=f"{type(original_error).__name__}: {original_error}",
            context={"text_length": len(text)} if text is not None else {},
        )
        self.original_error = original_error


class UnhandledError(BaseAppError):
    """Any other exception that escaped to the application's exception hook."""

    def __init__(self, original_error: Exception):
        super().__init__(
            type=ErrorType.UNHANDLED,
            code=ErrorCode.UNHANDLED_EXCEPTION,
            user_message="An unexpected error occurred",
            technical_message=f"{type(original_error).__name__}: {original_error}",
            severity=ErrorSeverity.HIGH,
        )
        self.original_error = original_error


def from_exception(exc: Exception) -> BaseAppError:
    """Return ``exc`` itself when it is already an application error, else wrap it."""
    if isinstance(exc, BaseAppError):
        return exc
    return UnhandledError(exc)
