"""Shared pytest fixtures for test files."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from state_waiter.cancellation import CancellationToken
from state_waiter.probes import FunctionProbe, ProbeResult
from state_waiter.wait_policy import POLL_DELAY_ENV_VAR, TIMEOUT_ENV_VAR, WaitPolicy


class _StubBotoClient:
    """Minimal stub for boto3 clients used in tests."""

    def __init__(self, service_name: str, **kwargs):
        self.service_name = service_name
        self.region_name = kwargs.get("region_name")
        self.exceptions = ClientError

    def __getattr__(self, name: str):
        def _method(*args, **kwargs):
            del args, kwargs
            return {}

        return _method


@pytest.fixture(autouse=True)
def stub_boto3_client(monkeypatch):
    """Replace boto3.client with a stub so tests don't call real AWS."""

    def fake_client(service_name, **kwargs):
        return _StubBotoClient(service_name, **kwargs)

    monkeypatch.setattr("boto3.client", fake_client)


@pytest.fixture(autouse=True)
def stub_credentials(monkeypatch):
    """Provide fake AWS credentials so create_client doesn't fail."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "stub-key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "stub-secret")


@pytest.fixture(autouse=True)
def clean_wait_env(monkeypatch):
    """Remove polling overrides; undo also clears anything a .env load adds."""
    for name in (POLL_DELAY_ENV_VAR, TIMEOUT_ENV_VAR, "AWS_SESSION_TOKEN"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture(name="policy")
def fixture_policy():
    """Small policy: 2s interval, 10s timeout, 6 not-found ticks."""
    return WaitPolicy(poll_interval=2, timeout=10)


@pytest.fixture(name="cancel_token")
def fixture_cancel_token():
    return CancellationToken()


@pytest.fixture(name="scripted_probe")
def fixture_scripted_probe():
    """Build a probe that replays ProbeResults in order, repeating the last one."""

    def _build(*results: ProbeResult) -> FunctionProbe:
        remaining = list(results)

        def _poll():
            if len(remaining) > 1:
                return remaining.pop(0)
            return remaining[0]

        return FunctionProbe(MagicMock(side_effect=_poll))

    return _build
