"""
Tests for ValidationSession state, accessors and immediate evaluation.
"""

import pytest

from validation_core.errors import ConfigurationError
from validation_core.session import SessionState, ValidationSession
from validation_core.validation_config import ValidationConfig
from validation_core.validators import ValidatorKind


class TestSessionInitialization:
    """Test session creation and the first evaluation."""

    def test_starts_unvalidated(self, make_session):
        session = make_session(validator="email", default_value="john@doe.com")

        assert session.state is SessionState.UNVALIDATED
        assert session.is_currently_valid() is False
        assert session.current_text() == "john@doe.com"
        assert not session.error_visible

    def test_initialize_evaluates_default_value(self, make_session, recorder):
        session = make_session(validator="email", default_value="john@doe.com")
        session.validityChanged.connect(recorder)

        assert session.initialize() is True
        assert recorder.values == [True]
        assert session.state is SessionState.VALID

    def test_initialize_with_explicit_text(self, make_session, recorder):
        session = make_session(validator="username", default_value="Johndoe123")
        session.validityChanged.connect(recorder)

        assert session.initialize("abc") is False
        assert session.current_text() == "abc"
        assert session.state is SessionState.INVALID
        assert session.error_visible
        assert recorder.values == [False]

    def test_initialize_without_default_uses_empty_text(self, make_session):
        session = make_session(validator="password")

        assert session.initialize() is True
        assert session.current_text() == ""

    def test_default_session_has_no_rule(self, fake_scheduler):
        session = ValidationSession(scheduler=fake_scheduler)

        assert session.spec.kind is ValidatorKind.NONE
        assert session.initialize("whatever") is True

    def test_default_scheduler_is_created(self):
        session = ValidationSession(ValidationConfig(validator="email"))
        try:
            assert session.initialize("john@doe.com") is True
        finally:
            session.dispose()


class TestEvaluateNow:
    """Test the single validity mutation point."""

    def test_idempotent(self, make_session, recorder):
        session = make_session(validator="email")
        session.initialize("John Doe")
        session.validityChanged.connect(recorder)

        first = session.evaluate_now()
        second = session.evaluate_now()

        assert first == second is False
        assert recorder.values == [False, False]

    def test_predicate_wins_over_built_in(self, make_session):
        session = make_session(validator="email", custom_validator=lambda text: False)

        assert session.initialize("john@doe.com") is False

    def test_required_flag_is_inert(self, make_session):
        session = make_session(validator="email", required=True)

        assert session.required is True
        assert session.initialize("") is True

    def test_current_validity_alias(self, make_session):
        session = make_session(validator="username")
        session.initialize("Johndoe123")

        assert session.current_validity() is session.is_currently_valid() is True


class TestReentrancy:
    """Listeners may re-evaluate from inside validityChanged."""

    def test_nested_evaluation_republishes_latest_value(self, make_session):
        session = make_session(validator="username", default_value="Johndoe123")
        first_listener = []
        second_listener = []

        def swap_rule(is_valid):
            first_listener.append(is_valid)
            if len(first_listener) == 1:
                session.set_validator("email")
                assert session.evaluate_now() is False

        session.validityChanged.connect(swap_rule)
        session.validityChanged.connect(second_listener.append)

        assert session.initialize() is True

        assert first_listener == [True, False]
        assert second_listener == [True, False]
        assert session.is_currently_valid() is False


class TestReconfiguration:
    """Test live configuration changes."""

    def test_set_validator(self, make_session):
        session = make_session(validator="email")
        session.initialize("Johndoe123")
        assert session.is_currently_valid() is False

        session.set_validator("username")
        assert session.spec.kind is ValidatorKind.BUILT_IN
        assert session.evaluate_now() is True
        assert session.config.validator == "username"

    def test_set_validator_to_predicate(self, make_session):
        session = make_session(validator="email")
        session.initialize("anything")

        session.set_validator(None, lambda text: text == "anything")
        assert session.evaluate_now() is True

    def test_set_validator_rejects_unsupported_type(self, make_session):
        session = make_session(validator="email")

        with pytest.raises(ConfigurationError):
            session.set_validator(3.14)

    def test_set_execution_delay(self, make_session, fake_scheduler):
        session = make_session(validator="email")
        session.set_execution_delay(250)

        session.on_text_changed("john@doe.com")

        assert session.execution_delay_ms == 250
        assert fake_scheduler.pending()[0].delay_ms == 250

    def test_negative_execution_delay_raises(self, make_session):
        session = make_session()

        with pytest.raises(ConfigurationError):
            session.set_execution_delay(-5)

    def test_sessions_do_not_share_config(self, fake_scheduler):
        shared = ValidationConfig(validator="email")
        first = ValidationSession(shared, scheduler=fake_scheduler)
        second = ValidationSession(shared, scheduler=fake_scheduler)

        first.set_execution_delay(500)
        first.set_validator("username")
        second.on_text_changed("x")

        assert second.execution_delay_ms == 0
        assert fake_scheduler.pending()[0].delay_ms == 0
        assert second.config.validator == "email"
        assert second.spec.describe() == "built-in 'email'"
        assert shared.execution_delay_ms == 0
        assert shared.validator == "email"
        assert first.config is not shared

    def test_snapshot(self, make_session):
        session = make_session(validator="email", default_value="john@doe.com")
        session.initialize()

        assert session.snapshot() == {
            "text_length": 12,
            "state": "valid",
            "validator": "built-in 'email'",
            "pending": False,
        }
