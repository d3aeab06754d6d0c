"""
Validated line edit widget.

A QLineEdit wrapped in a rounded container with an optional label and icon,
driven by a ValidationSession. The error message is shown under the input
while the session reports the text as invalid.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from PySide6.QtCore import QEvent, QObject, QSize, Signal
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QLineEdit, QVBoxLayout, QWidget

from validation_core.error_handler import get_error_handler
from validation_core.errors import BaseAppError
from validation_core.scheduler import Scheduler
from validation_core.session import ValidationSession
from validation_core.validation_config import Predicate, ValidationConfig
from validation_gui.utils.styling import StyleSheets, apply_validation_style

logger = logging.getLogger(__name__)


class ValidatedLineEdit(QWidget):
    """
    Text input that validates itself against a built-in rule, a pattern or a predicate.

    Signals:
        textChanged(str): Forwarded from the inner line edit
        validatorExecuted(bool): Emitted after every completed evaluation
    """

    textChanged = Signal(str)
    validatorExecuted = Signal(bool)

    def __init__(
        self,
        config: ValidationConfig | None = None,
        *,
        label: str | None = None,
        icon_name: str | None = None,
        icon_size: int = 20,
        placeholder: str = "",
        scheduler: Scheduler | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)

        self._config = replace(config) if config is not None else ValidationConfig()
        self._session = ValidationSession(self._config, scheduler=scheduler, parent=self)

        self.label: QLabel | None = None
        self.icon_label: QLabel | None = None
        self._icon_name: str | None = None
        self._icon_size = icon_size
        self._setup_ui(label, placeholder)
        self.set_icon(icon_name)
        self._connect_signals()

        # Seed the editor without triggering a debounced run
        self.line_edit.blockSignals(True)
        self.line_edit.setText(self._session.current_text())
        self.line_edit.blockSignals(False)

        self._session.initialize()

    def _setup_ui(self, label: str | None, placeholder: str) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        if label:
            self.label = QLabel(label)
            self.label.setObjectName("inputLabel")
            layout.addWidget(self.label)

        self.container = QFrame()
        self.container.setObjectName("inputContainer")
        self._row = QHBoxLayout(self.container)
        self._row.setContentsMargins(15, 0, 5, 0)

        self.line_edit = QLineEdit()
        self.line_edit.setPlaceholderText(placeholder)
        self.line_edit.installEventFilter(self)
        self._row.addWidget(self.line_edit, 1)
        layout.addWidget(self.container)

        self.error_label = QLabel(self._config.error_message)
        self.error_label.setObjectName("errorMessage")
        self.error_label.setStyleSheet(StyleSheets.get_error_message_style())
        self.error_label.setVisible(False)
        layout.addWidget(self.error_label)

        if self.label is not None:
            self.label.setBuddy(self.line_edit)

        apply_validation_style(self.container, has_error=False)

    def _connect_signals(self) -> None:
        self.line_edit.textChanged.connect(self._on_text_changed)
        self._session.validityChanged.connect(self._on_validity_changed)
        self._session.evaluationFailed.connect(self._on_evaluation_failed)

    # Public API

    @property
    def session(self) -> ValidationSession:
        return self._session

    def text(self) -> str:
        """Latest text, even if validation has not caught up yet."""
        return self._session.current_text()

    def setText(self, text: str) -> None:
        """Replace the text. Validation follows the usual debounce."""
        self.line_edit.setText(text)

    def is_input_valid(self) -> bool:
        return self._session.is_currently_valid()

    def execute_validators(self) -> bool:
        """Validate the current text immediately."""
        return self._session.force_evaluate()

    def set_validator(self, validator: str | Predicate | None, custom_validator: Predicate | None = None) -> None:
        """Swap the rule and re-validate the current text."""
        self._session.set_validator(validator, custom_validator)
        self._session.force_evaluate()

    def set_error_message(self, message: str) -> None:
        self._config.error_message = message
        self.error_label.setText(message)

    def set_icon(self, icon_name: str | None, icon_size: int | None = None) -> None:
        """Show a theme icon left of the text, or hide it when no name is given."""
        if icon_size is not None:
            self._icon_size = icon_size
        self._icon_name = icon_name or None

        if self._icon_name is None:
            if self.icon_label is not None:
                self.icon_label.hide()
            return

        if self.icon_label is None:
            self.icon_label = QLabel()
            self.icon_label.setObjectName("inputIcon")
            self._row.insertWidget(0, self.icon_label)

        size = QSize(self._icon_size, self._icon_size)
        self.icon_label.setPixmap(QIcon.fromTheme(self._icon_name).pixmap(size))
        self.icon_label.show()

    def icon_name(self) -> str | None:
        return self._icon_name

    def is_error_visible(self) -> bool:
        """Whether the error message is currently shown."""
        return not self.error_label.isHidden()

    def cleanup(self) -> None:
        """Cancel pending validation before the widget is torn down."""
        self._session.dispose()

    # Event handling

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self.line_edit and event.type() == QEvent.Type.FocusIn:
            self._evaluate_on_focus()
        return super().eventFilter(watched, event)

    def _evaluate_on_focus(self) -> None:
        try:
            self._session.on_focus_gained()
        except BaseAppError as e:
            # No caller to propagate to from inside the event loop
            self._on_evaluation_failed(get_error_handler().handle(e, {"source": "focus"}))

    def _on_text_changed(self, text: str) -> None:
        self.textChanged.emit(text)
        self._session.on_text_changed(text)

    def _on_validity_changed(self, is_valid: bool) -> None:
        has_error = self._session.error_visible
        self.error_label.setVisible(has_error)
        apply_validation_style(self.container, has_error=has_error)
        self.validatorExecuted.emit(is_valid)

    def _on_evaluation_failed(self, error: BaseAppError) -> None:
        logger.warning(f"Validation failed for input: {error.user_message}")
        self.error_label.setVisible(True)
        apply_validation_style(self.container, has_error=True)
