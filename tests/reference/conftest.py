"""
Fixtures for tests against a real Morfeusz 2 installation.

Every test here is skipped when the shim library cannot be loaded or the
default SGJP dictionary is missing.
"""

import pytest


def pytest_collection_modifyitems(items):
    for item in items:
        if "tests/reference/" in str(item.fspath).replace("\\", "/"):
            item.add_marker(pytest.mark.reference)


@pytest.fixture(scope="session")
def real_lib():
    from morfeusz import _bindings
    from morfeusz.exceptions import LibraryError

    try:
        return _bindings.get_lib()
    except LibraryError as e:
        pytest.skip(f"Shim library not available: {e}")


@pytest.fixture
def sgjp(real_lib):
    """Default engine over the installed dictionary."""
    from morfeusz import DictionaryError, Morfeusz

    try:
        m = Morfeusz()
    except DictionaryError as e:
        pytest.skip(f"SGJP dictionary not installed: {e}")
    yield m
    m.close()
