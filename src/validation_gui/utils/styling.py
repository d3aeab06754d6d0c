"""
Shared styling utilities for validated input widgets.

This module contains the palette and stylesheet builders used by the
validated line edit and the demo window.
"""

from typing import Any, Protocol


class StyleableWidget(Protocol):
    """Protocol for widgets that can be styled."""

    def setStyleSheet(self, styleSheet: str) -> None: ...
    def style(self) -> Any: ...


class AccessiblePalette:
    """
    Color palette with WCAG AA contrast for text on light backgrounds.
    """

    BORDER_DEFAULT = "#7e7e7e"  # Neutral input border
    BORDER_FOCUS = "#0d6efd"  # Blue focus indicator
    BORDER_ERROR = "#dc3545"  # Error state border

    ERROR_TEXT = "#dc3545"  # Error message text

    BACKGROUND_DEFAULT = "#ffffff"
    TEXT_PRIMARY = "#212529"
    TEXT_SECONDARY = "#6c757d"

    BUTTON_PRIMARY_BG = "#0d6efd"
    BUTTON_PRIMARY_TEXT = "#ffffff"


# Container geometry for the rounded input box
INPUT_HEIGHT = 46
INPUT_RADIUS = 23


class StyleSheets:
    """Collection of reusable stylesheet definitions using the accessible palette."""

    @staticmethod
    def get_input_container_style(has_error: bool) -> str:
        """Get the stylesheet for the frame around the line edit."""
        border = AccessiblePalette.BORDER_ERROR if has_error else AccessiblePalette.BORDER_DEFAULT
        return f"""
            QFrame#inputContainer {{
                border: 1px solid {border};
                border-radius: {INPUT_RADIUS}px;
                background-color: {AccessiblePalette.BACKGROUND_DEFAULT};
                min-height: {INPUT_HEIGHT}px;
            }}

            QFrame#inputContainer QLineEdit {{
                border: none;
                background: transparent;
                color: {AccessiblePalette.TEXT_PRIMARY};
            }}
        """

    @staticmethod
    def get_error_message_style() -> str:
        """Get the stylesheet for the error message label."""
        return f"""
            QLabel#errorMessage {{
                color: {AccessiblePalette.ERROR_TEXT};
                font-size: 12px;
                background-color: transparent;
                padding-left: 15px;
            }}
        """

    @staticmethod
    def get_button_style() -> str:
        """Get the stylesheet for primary buttons."""
        return f"""
            QPushButton {{
                background-color: {AccessiblePalette.BUTTON_PRIMARY_BG};
                color: {AccessiblePalette.BUTTON_PRIMARY_TEXT};
                border: 2px solid {AccessiblePalette.BUTTON_PRIMARY_BG};
                border-radius: 4px;
                padding: 8px 16px;
                font-weight: bold;
            }}

            QPushButton:hover {{
                background-color: #0b5ed7;
                border-color: #0b5ed7;
            }}
        """


def apply_validation_style(widget: StyleableWidget, has_error: bool) -> None:
    """
    Apply validation-based styling to an input container.

    Args:
        widget: The container to style
        has_error: Whether the error state should be shown
    """
    widget.setStyleSheet(StyleSheets.get_input_container_style(has_error))

    # Force style refresh
    widget.style().unpolish(widget)
    widget.style().polish(widget)
