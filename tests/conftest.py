"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from proctrack.config import runtime
from tests.helpers.process_fakes import FakeClock, FakeProcessTable


@pytest.fixture(autouse=True)
def reset_runtime_state(monkeypatch):
    """Keep local .env files out of every test."""
    monkeypatch.setattr(runtime, "_DOTENV_CANDIDATES", ())
    runtime.reset_default_values()
    yield
    runtime.reset_default_values()


@pytest.fixture
def fake_table() -> FakeProcessTable:
    return FakeProcessTable()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
