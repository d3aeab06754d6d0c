"""
Reusable validated input widgets.
"""

from .validated_input import ValidatedLineEdit

__all__ = ["ValidatedLineEdit"]
