"""
Shared pytest configuration for the notes client test suite.

This file centralizes the reusable pieces so that:
    • controller and session tests share one deterministic fake gateway
    • sample notes are built the same way everywhere
    • environment-dependent tests start from a clean environment

Async code is driven with asyncio.run() inside plain test functions.
"""

from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from notes_client.controller import NotesController
from tests.fixtures.fake_gateway import FakeGateway, timestamp


# ============================================================================
# SHARED TEST INFRASTRUCTURE
# ============================================================================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provides a fresh Typer CliRunner instance for CLI tests."""
    return CliRunner()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove Supabase settings from the environment for config tests."""
    for name in ("SUPABASE_URL", "SUPABASE_KEY", "NOTES_TABLE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ============================================================================
# NOTES AND GATEWAYS
# ============================================================================


@pytest.fixture
def sample_notes() -> List[Dict[str, Any]]:
    """Two stored notes; id 2 is the most recently updated."""
    return [
        {"id": 1, "title": "A", "content": "first", "updated_at": timestamp(1)},
        {"id": 2, "title": "Groceries", "content": "milk, eggs", "updated_at": timestamp(2)},
    ]


@pytest.fixture
def gateway(sample_notes) -> FakeGateway:
    return FakeGateway(sample_notes)


@pytest.fixture
def empty_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def snapshots() -> List[Any]:
    """Collector for snapshots emitted by a controller."""
    return []


@pytest.fixture
def controller(gateway, snapshots) -> NotesController:
    """A controller over the sample notes, not yet loaded."""
    ctrl = NotesController(gateway)
    ctrl.subscribe(snapshots.append)
    return ctrl
