"""
Demo window for the validated input widget.

Lets the user switch between the built-in rules and toggle the input between
a known-good and a known-bad sample value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QPushButton, QVBoxLayout, QWidget

from validation_core.validation_config import ValidationConfig
from validation_gui.utils.styling import StyleSheets
from validation_gui.widgets.validated_input import ValidatedLineEdit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoMode:
    """A built-in rule with sample values that pass and fail it."""

    name: str
    validator: str
    correct_value: str
    incorrect_value: str
    icon_name: str


DEMO_MODES: dict[str, DemoMode] = {
    "password": DemoMode("Password", "password", "Johndoe1234", "HelloWorld", "dialog-password"),
    "username": DemoMode("Username", "username", "Johndoe123", "Hello", "user-identity"),
    "email": DemoMode("Email", "email", "john@doe.com", "John Doe", "mail-message"),
}


class DemoWindow(QMainWindow):
    """Main window of the demo application."""

    def __init__(self, execution_delay_ms: int = 300) -> None:
        super().__init__()
        self.setWindowTitle("Input Validation Demo")

        self._mode = DEMO_MODES["email"]
        self._show_correct = True

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.mode_label = QLabel()
        layout.addWidget(self.mode_label)

        buttons = QHBoxLayout()
        self.mode_buttons: dict[str, QPushButton] = {}
        for key, mode in DEMO_MODES.items():
            button = QPushButton(mode.name)
            button.clicked.connect(lambda _checked=False, k=key: self.select_mode(k))
            buttons.addWidget(button)
            self.mode_buttons[key] = button
        layout.addLayout(buttons)

        self.input = ValidatedLineEdit(
            ValidationConfig(
                validator=self._mode.validator,
                execution_delay_ms=execution_delay_ms,
                default_value=self._mode.correct_value,
            ),
            label="Input label",
            icon_name=self._mode.icon_name,
            placeholder="Type text",
        )
        layout.addWidget(self.input)

        self.toggle_button = QPushButton()
        self.toggle_button.setStyleSheet(StyleSheets.get_button_style())
        self.toggle_button.clicked.connect(self.toggle_value)
        layout.addWidget(self.toggle_button)

        self.setCentralWidget(central)
        self._refresh_labels()

    @property
    def mode(self) -> DemoMode:
        return self._mode

    def select_mode(self, key: str) -> None:
        """Switch to another built-in rule and show its sample value."""
        self._mode = DEMO_MODES[key]
        logger.info(f"Selected mode: {self._mode.name}")
        self._apply_sample_value()
        self.input.set_validator(self._mode.validator)
        self.input.set_icon(self._mode.icon_name)
        self._refresh_labels()

    def toggle_value(self) -> None:
        """Flip between the correct and incorrect sample and validate at once."""
        self._show_correct = not self._show_correct
        self._apply_sample_value()
        self.input.execute_validators()
        self._refresh_labels()

    def _apply_sample_value(self) -> None:
        mode = self._mode
        self.input.setText(mode.correct_value if self._show_correct else mode.incorrect_value)

    def _refresh_labels(self) -> None:
        self.mode_label.setText(f"Selected mode: {self._mode.name}")
        self.toggle_button.setText("Set incorrect value" if self._show_correct else "Set valid value")

    def closeEvent(self, event: QCloseEvent) -> None:
        self.input.cleanup()
        super().closeEvent(event)
