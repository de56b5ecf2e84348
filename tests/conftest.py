"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from fakes import FakeTransport, RecordingSink, ScriptedGate


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def gate() -> ScriptedGate:
    return ScriptedGate(answer=True)
