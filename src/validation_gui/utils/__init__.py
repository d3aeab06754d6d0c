"""
GUI-specific utilities for validated input widgets.
"""

from .styling import AccessiblePalette, StyleSheets, apply_validation_style

__all__ = [
    "AccessiblePalette",
    "StyleSheets",
    "apply_validation_style",
]
