"""
Validation session for a single text input.

This module provides the state machine that owns a field's current text and
validity, debounces re-evaluation while the user types, and publishes the
result of every completed evaluation through a Qt signal.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Any

from PySide6.QtCore import QObject, Signal

from .error_handler import get_error_handler
from .errors import BaseAppError, ConfigurationError
from .scheduler import QtTimerScheduler, ScheduledCall, Scheduler
from .validation_config import Predicate, ValidationConfig
from .validators import ValidatorSpec, resolve

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Validation state of a session."""

    UNVALIDATED = "unvalidated"
    VALID = "valid"
    INVALID = "invalid"


class ValidationSession(QObject):
    """
    Debounced validation state machine for one input field.

    Text changes are stored immediately and validated after the configured
    quiet period; only the latest pending evaluation ever runs. Focus and
    explicit host requests evaluate at once.

    Signals:
        validityChanged(bool): Emitted after every completed evaluation
        evaluationFailed(object): A debounced evaluation raised a BaseAppError
    """

    validityChanged = Signal(bool)
    evaluationFailed = Signal(object)

    def __init__(
        self,
        config: ValidationConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
        parent: QObject | None = None,
    ) -> None:
        """
        Initialize the session.

        The session starts UNVALIDATED; call initialize() once listeners are
        connected to run the first evaluation.

        Args:
            config: Field configuration (defaults to no validator, no delay)
            scheduler: Debounce scheduler (defaults to a QTimer-backed one)
            parent: Parent QObject for lifetime management
        """
        super().__init__(parent)

        # Private copy, mutated by set_validator and set_execution_delay
        self._config = replace(config) if config is not None else ValidationConfig()
        self._spec = ValidatorSpec.from_config(self._config.validator, self._config.custom_validator)
        self._scheduler: Scheduler = scheduler if scheduler is not None else QtTimerScheduler(self)

        self._current_text = self._config.default_value or ""
        self._is_valid = False
        self._state = SessionState.UNVALIDATED
        self._pending: ScheduledCall | None = None

        # Re-entrancy bookkeeping for evaluate_now()
        self._notifying = False
        self._renotify = False

    # Configuration

    @property
    def config(self) -> ValidationConfig:
        return self._config

    @property
    def spec(self) -> ValidatorSpec:
        return self._spec

    @property
    def required(self) -> bool:
        """Required flag as configured. Enforcement is left to the host."""
        return self._config.required

    @property
    def execution_delay_ms(self) -> int:
        return self._config.execution_delay_ms

    def set_validator(self, validator: str | Predicate | None, custom_validator: Predicate | None = None) -> None:
        """
        Swap the active rule. Takes effect on the next evaluation.

        Raises:
            ConfigurationError: If the identifier has an unsupported type
        """
        self._spec = ValidatorSpec.from_config(validator, custom_validator)
        self._config.validator = validator
        self._config.custom_validator = custom_validator
        logger.debug(f"Validator set to {self._spec.describe()}")

    def set_execution_delay(self, delay_ms: int) -> None:
        """Change the debounce quiet period used by later text changes."""
        if delay_ms < 0:
            raise ConfigurationError(f"Execution delay must be non-negative, got {delay_ms}")
        self._config.execution_delay_ms = delay_ms

    # Lifecycle

    def initialize(self, initial_text: str | None = None) -> bool:
        """
        Seed the text and run the first evaluation synchronously.

        Args:
            initial_text: Starting text; falls back to the configured default

        Returns:
            The resulting validity
        """
        if initial_text is not None:
            self._current_text = initial_text
        return self.evaluate_now()

    def dispose(self) -> None:
        """Drop any pending evaluation. The session must not be used afterwards."""
        self._cancel_pending()

    # Inbound commands

    def on_text_changed(self, text: str) -> None:
        """
        Record new text and schedule a debounced evaluation.

        Any evaluation still waiting for its quiet period is replaced.
        """
        self._current_text = text or ""
        self._cancel_pending()
        self._pending = self._scheduler.schedule(self._config.execution_delay_ms, self._run_scheduled)

    def on_focus_gained(self) -> bool:
        """Evaluate immediately, skipping any pending quiet period."""
        return self.force_evaluate()

    def force_evaluate(self) -> bool:
        """Cancel the pending evaluation and evaluate the current text now."""
        self._cancel_pending()
        return self.evaluate_now()

    def evaluate_now(self) -> bool:
        """
        Run the active rule against the current text and publish the result.

        This is the only place validity changes. When called from inside a
        validityChanged slot, the new value is stored immediately and
        re-published once the outer emission returns.

        Returns:
            The new validity

        Raises:
            ConfigurationError: If the rule cannot be compiled
            PredicateError: If the predicate raised; validity is left unchanged
        """
        is_valid = resolve(self._spec)(self._current_text)

        self._is_valid = is_valid
        self._state = SessionState.VALID if is_valid else SessionState.INVALID
        logger.debug(f"Evaluated {self._spec.describe()}: valid={is_valid}")

        if self._notifying:
            self._renotify = True
            return is_valid

        self._notifying = True
        try:
            while True:
                self._renotify = False
                self.validityChanged.emit(self._is_valid)
                if not self._renotify:
                    break
        finally:
            self._notifying = False

        return is_valid

    # Aliases used by presentation layers and hosts
    notify_text_changed = on_text_changed
    notify_focus_gained = on_focus_gained

    # Queries

    def current_text(self) -> str:
        return self._current_text

    def is_currently_valid(self) -> bool:
        return self._is_valid

    current_validity = is_currently_valid

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def error_visible(self) -> bool:
        """Whether a presentation layer should show the error message."""
        return self._state is SessionState.INVALID

    def has_pending_evaluation(self) -> bool:
        return self._pending is not None and self._pending.pending

    def snapshot(self) -> dict[str, Any]:
        """State summary for logging and debugging."""
        return {
            "text_length": len(self._current_text),
            "state": self._state.value,
            "validator": self._spec.describe(),
            "pending": self.has_pending_evaluation(),
        }

    # Internal

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._scheduler.cancel(self._pending)
            self._pending = None

    def _run_scheduled(self) -> None:
        self._pending = None
        try:
            self.evaluate_now()
        except BaseAppError as e:
            app_error = get_error_handler().handle(e, {"validator": self._spec.describe()})
            self.evaluationFailed.emit(app_error)
