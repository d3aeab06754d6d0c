"""
Shared fixtures for validation session and widget tests.
"""

import itertools

import pytest

from validation_core.scheduler import ScheduledCall
from validation_core.session import ValidationSession
from validation_core.validation_config import ValidationConfig


class FakeScheduler:
    """Scheduler that only fires when the test says so."""

    def __init__(self):
        self.calls = []
        self._ids = itertools.count(1)

    def schedule(self, delay_ms, callback):
        token = ScheduledCall(call_id=next(self._ids), delay_ms=delay_ms)
        self.calls.append((token, callback))
        return token

    def cancel(self, token):
        if token is not None and token.pending:
            token.cancelled = True

    def pending(self):
        return [token for token, _callback in self.calls if token.pending]

    def run_pending(self):
        """Fire every call that is still pending, in scheduling order."""
        for token, callback in list(self.calls):
            if token.pending:
                token.fired = True
                callback()


class SignalRecorder:
    """Collects the arguments of every emission it is connected to."""

    def __init__(self):
        self.values = []

    def __call__(self, value):
        self.values.append(value)


@pytest.fixture
def fake_scheduler():
    """Manually driven scheduler."""
    return FakeScheduler()


@pytest.fixture
def recorder():
    """Signal argument recorder."""
    return SignalRecorder()


@pytest.fixture
def make_session(fake_scheduler):
    """Factory for sessions wired to the fake scheduler."""
    sessions = []

    def factory(**config_kwargs):
        session = ValidationSession(ValidationConfig(**config_kwargs), scheduler=fake_scheduler)
        sessions.append(session)
        return session

    yield factory

    for session in sessions:
        session.dispose()
