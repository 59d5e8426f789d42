"""Pytest configuration for ni_netinstall tests."""

from pathlib import Path

import pytest

from tests.helpers.optional_imports import module_available

HAS_PYSIDE6 = module_available("PySide6")

# Skip collection of test files if the Qt bindings are missing.
if not HAS_PYSIDE6:
    collect_ignore = [
        path.name
        for path in Path(__file__).parent.glob("test_*.py")
        if path.name
        not in {
            "test_dependencies.py",
            "test_decoder.py",
            "test_groups.py",
            "test_settings.py",
            "test_sources.py",
        }
    ]


@pytest.fixture
def fake_transport():
    from tests.helpers.fake_transport import FakeTransport

    return FakeTransport()


@pytest.fixture
def storage():
    from ni_common.storage import GlobalStorage

    return GlobalStorage()


@pytest.fixture
def netinstall(fake_transport, storage):
    from ni_netinstall.config import NetInstallConfig

    config = NetInstallConfig(transport=fake_transport, storage=storage)
    yield config
    config.shutdown()
