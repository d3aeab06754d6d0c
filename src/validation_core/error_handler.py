"""
Error reporting for failures that have no synchronous caller.

Debounced evaluations run from a timer callback and the demo's uncaught
exceptions arrive through ``sys.excepthook``. Both end up in the singleton
ErrorHandler, which logs them to a rotating file and re-emits them as a Qt
signal.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, ClassVar

from PySide6.QtCore import QObject, QStandardPaths, Signal

from .config import APP_NAME, APP_ORGANIZATION
from .errors import BaseAppError, ErrorSeverity, from_exception

MAX_CONTEXT_VALUE_LENGTH = 200

_LOG_LEVELS = {
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
}


class ErrorHandler(QObject):
    """Process-wide sink for validation failures and uncaught exceptions."""

    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook

        self._setup_logging()

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Log an exception with its error code and emit ``errorOccurred``.

        Args:
            exception: A BaseAppError, or any exception caught by the hook
            context: Where the failure was seen, merged into the error's context

        Returns:
            The application error that was reported
        """
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        app_error = from_exception(exception)
        for key, value in (context or {}).items():
            app_error.context[key] = self._shorten(value)

        if self._logger:
            self._logger.log(
                _LOG_LEVELS[app_error.severity],
                f"[{app_error.code.value}] {app_error.user_message}",
                extra={
                    "app_code": app_error.code.value,
                    "error_type": app_error.type.value,
                },
                exc_info=exception,
            )

        self.errorOccurred.emit(app_error)
        return app_error

    @staticmethod
    def _shorten(value: Any) -> str:
        text = value if isinstance(value, str) else repr(value)
        if len(text) > MAX_CONTEXT_VALUE_LENGTH:
            return text[:MAX_CONTEXT_VALUE_LENGTH] + "..."
        return text

    def _setup_logging(self) -> None:
        """Attach a rotating ``logs/app.log`` under the app data directory."""
        try:
            app_data_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
            if app_data_location:
                logs_dir = Path(app_data_location) / "logs"
            else:
                config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
                logs_dir = Path(config_location) / APP_ORGANIZATION / APP_NAME / "logs"
            logs_dir.mkdir(parents=True, exist_ok=True)

            ErrorHandler._logger = logging.getLogger("input_validation.errors")
            ErrorHandler._logger.setLevel(logging.DEBUG)
            ErrorHandler._logger.propagate = False

            if not ErrorHandler._logger.handlers:
                file_handler = logging.handlers.RotatingFileHandler(
                    logs_dir / "app.log",
                    maxBytes=5_242_880,  # 5MB
                    backupCount=5,
                    encoding="utf-8",
                )
                formatter = logging.Formatter(
                    "%(asctime)s | %(levelname)s | %(name)s | code=%(app_code)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
                file_handler.setFormatter(formatter)
                ErrorHandler._logger.addHandler(file_handler)

                if __debug__:
                    console_handler = logging.StreamHandler()
                    console_handler.setFormatter(formatter)
                    console_handler.setLevel(logging.WARNING)
                    ErrorHandler._logger.addHandler(console_handler)

        except OSError as e:
            # No writable log directory: report through the root logger
            logging.basicConfig(level=logging.ERROR)
            logging.error(f"Failed to set up validation error log: {e}")

    def install_hooks(self) -> None:
        """Route uncaught exceptions to :meth:`handle`."""

        def exception_hook(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
            if issubclass(exc_type, KeyboardInterrupt) or not isinstance(exc_value, Exception):
                self._original_excepthook(exc_type, exc_value, exc_traceback)
                return

            self.handle(exc_value, {"source": "sys.excepthook"})

        sys.excepthook = exception_hook

    def restore_hooks(self) -> None:
        sys.excepthook = self._original_excepthook


def get_error_handler() -> ErrorHandler:
    """Return the process-wide ErrorHandler."""
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """Install the exception hook once at application startup."""
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: int = logging.INFO) -> None:
    """Create the error log and set the format for every other module logger."""
    get_error_handler()

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
