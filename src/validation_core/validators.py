"""
Validator resolution for validated input fields.

This module turns a validator identifier (a built-in name, a free-form
regular expression or an external predicate) into a single decision
function mapping the current text to a validity flag.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from .errors import ConfigurationError, ErrorCode, PredicateError

logger = logging.getLogger(__name__)

Predicate = Callable[[str], bool]

# Pre-defined rules, compiled lazily when a session first evaluates them
BUILT_IN_VALIDATORS: dict[str, str] = {
    "email": r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)*$",
    "password": r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)[a-zA-Z\d]{8,}$",
    "username": r"^\w{6,20}$",
}

# Every rule, built-in or user pattern, matches ASCII word/digit classes only
PATTERN_FLAGS = re.ASCII


class ValidatorKind(Enum):
    """Shape of the rule a field is validated against."""

    NONE = "none"
    BUILT_IN = "built_in"
    PATTERN = "pattern"
    PREDICATE = "predicate"


@dataclass(frozen=True)
class ValidatorSpec:
    """
    Immutable description of the active validation rule.

    For PREDICATE specs, `source` holds the pattern configured next to the
    predicate (if any). It is still compiled so a malformed rule is reported,
    but the predicate's answer is the one that counts.
    """

    kind: ValidatorKind = ValidatorKind.NONE
    name: str | None = None
    source: str | None = None
    predicate: Predicate | None = None

    @classmethod
    def from_config(cls, validator: Any = None, custom_validator: Predicate | None = None) -> ValidatorSpec:
        """
        Build a spec from the raw widget configuration.

        Args:
            validator: Built-in name, regular-expression source, predicate or None
            custom_validator: Optional predicate overriding any pattern result

        Returns:
            ValidatorSpec for the configured rule

        Raises:
            ConfigurationError: If the identifier has an unsupported type
        """
        if custom_validator is not None and not callable(custom_validator):
            raise ConfigurationError("Custom validator must be callable", validator=custom_validator)

        if validator is None or validator == "":
            if custom_validator is not None:
                return cls(kind=ValidatorKind.PREDICATE, predicate=custom_validator)
            return cls()

        if callable(validator):
            if custom_validator is not None:
                # Both are predicates: the explicit custom one is authoritative
                return cls(kind=ValidatorKind.PREDICATE, predicate=custom_validator)
            return cls(kind=ValidatorKind.PREDICATE, predicate=validator)

        if not isinstance(validator, str):
            raise ConfigurationError(
                f"Unsupported validator of type {type(validator).__name__}",
                validator=validator,
            )

        if custom_validator is not None:
            name = validator if is_built_in(validator) else None
            source = BUILT_IN_VALIDATORS.get(validator, validator)
            return cls(kind=ValidatorKind.PREDICATE, name=name, source=source, predicate=custom_validator)

        if is_built_in(validator):
            return cls(kind=ValidatorKind.BUILT_IN, name=validator, source=BUILT_IN_VALIDATORS[validator])

        return cls(kind=ValidatorKind.PATTERN, source=validator)

    @property
    def is_configured(self) -> bool:
        """True when any rule is active."""
        return self.kind is not ValidatorKind.NONE

    def describe(self) -> str:
        """Short human-readable description for logs."""
        if self.kind is ValidatorKind.BUILT_IN:
            return f"built-in '{self.name}'"
        if self.kind is ValidatorKind.PATTERN:
            return f"pattern {self.source!r}"
        if self.kind is ValidatorKind.PREDICATE:
            return f"predicate {getattr(self.predicate, '__name__', type(self.predicate).__name__)}"
        return "no validator"


def is_built_in(name: Any) -> bool:
    """Check whether a name refers to a catalog entry."""
    return isinstance(name, str) and name in BUILT_IN_VALIDATORS


@lru_cache(maxsize=128)
def compile_pattern(source: str, flags: int = PATTERN_FLAGS) -> re.Pattern[str]:
    """
    Compile a regular-expression source.

    Raises:
        ConfigurationError: If the source is not a valid regular expression
    """
    try:
        return re.compile(source, flags)
    except re.error as e:
        logger.warning(f"Invalid validator pattern {source!r}: {e}")
        raise ConfigurationError(
            f"Invalid validator pattern: {e}",
            validator=source,
            code=ErrorCode.INVALID_PATTERN,
            technical_message=f"re.error at position {e.pos}: {e.msg}",
        ) from e
    except ValueError as e:
        # Inline (?u) conflicts with the ASCII flag
        logger.warning(f"Invalid validator pattern {source!r}: {e}")
        raise ConfigurationError(
            f"Invalid validator pattern: {e}",
            validator=source,
            code=ErrorCode.INVALID_PATTERN,
            technical_message=f"ValueError: {e}",
        ) from e


def _pattern_for(spec: ValidatorSpec) -> re.Pattern[str] | None:
    if spec.source is None:
        return None
    return compile_pattern(spec.source)


def resolve(spec: ValidatorSpec) -> Callable[[str | None], bool]:
    """
    Resolve a spec into a decision function.

    Precedence:
        1. No rule: every text is valid.
        2. Built-in name: the catalog pattern is searched in the text.
        3. Any other string: the string itself is the pattern.
        4. A predicate, when present, overrides steps 1-3.

    Empty or missing text is always valid once a rule is configured.

    Raises:
        ConfigurationError: If the pattern does not compile
    """
    if not spec.is_configured:
        return lambda text: True

    pattern = _pattern_for(spec)
    predicate = spec.predicate

    def decide(text: str | None) -> bool:
        if not text:
            return True

        is_valid = bool(pattern.search(text)) if pattern is not None else True

        if predicate is not None:
            try:
                is_valid = bool(predicate(text))
            except Exception as e:
                raise PredicateError(e, text) from e

        return is_valid

    return decide


def evaluate(spec: ValidatorSpec, text: str | None) -> bool:
    """Resolve a spec and run it against a single text."""
    return resolve(spec)(text)
