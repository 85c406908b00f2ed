"""
Global pytest fixtures for morfeusz tests.

This module provides:
- Fault handling for native crashes
- An in-process fake of the shim library (``fake_lib``) with an allocation
  ledger, so the ownership rules of the binding are checked without
  Morfeusz 2 installed
- Engine fixtures bound to the fake

=============================================================================
Skip Policy
=============================================================================

pytest.skip(): infrastructure issues, not test failures:
  - Shim library not built or not loadable
  - SGJP dictionary not installed
  Only tests under tests/reference/ need either of these.
"""

import faulthandler
import gc

import pytest

# Enable faulthandler to trace native crashes (segfaults)
faulthandler.enable()


# =============================================================================
# Fake Library Fixtures
# =============================================================================


@pytest.fixture
def fake_lib(monkeypatch):
    """
    Install a fresh FakeShim as the loaded library.

    Engines created while the fixture is active keep using the fake after
    the test, so late ``__del__`` releases still land in its ledger.
    """
    from morfeusz import _bindings
    from tests.fixtures.fake_native import FakeShim

    fake = FakeShim()
    monkeypatch.setattr(_bindings, "_lib", fake)
    yield fake
    gc.collect()


@pytest.fixture
def ledger(fake_lib):
    """Allocation ledger of the active fake library."""
    return fake_lib.ledger


@pytest.fixture
def morf(fake_lib):
    """Default engine (default dictionary, analysis and generation)."""
    from morfeusz import Morfeusz

    m = Morfeusz()
    yield m
    m.close()


@pytest.fixture
def collect():
    """Force garbage collection so dropped wrappers release native memory."""

    def _collect():
        for _ in range(3):
            gc.collect()

    return _collect


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "memory: marks ownership and leak tests")
