"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import time
import pytest
from pathlib import Path

from skvs.store import Store


class FakeClock:
    """
    Controllable replacement for time.time.

    Usage:
        def test_something(clock):
            clock.advance(5)
    """

    def __init__(self, start: int = 1_700_000_000):
        self.now = start

    def __call__(self) -> float:
        return float(self.now)

    def advance(self, seconds: int = 1) -> None:
        self.now += seconds


# ============================================================================
# Clock Fixtures
# ============================================================================

@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    """Freeze time.time at a known value for the duration of a test."""
    fake = FakeClock()
    monkeypatch.setattr(time, "time", fake)
    return fake


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def store() -> Store:
    """Create a fresh in-memory Store (no snapshot path)."""
    return Store()


@pytest.fixture
def snapshot_path(tmp_path: Path) -> str:
    """Path to a snapshot file that does not exist yet."""
    return str(tmp_path / "kvs.json")


@pytest.fixture
def disk_store(snapshot_path: str) -> Store:
    """Create a fresh Store bound to a temporary snapshot file."""
    return Store(snapshot_path)


@pytest.fixture
def camera_store(disk_store: Store) -> Store:
    """A disk-backed store with a few keys already written."""
    disk_store.insert("X-Pro2", "Fujifilm")
    disk_store.insert("D800", "Nikon")
    disk_store.insert("EOS 5D Mark II", "Canon")
    return disk_store


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
