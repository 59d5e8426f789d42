"""Tests for the host-wide key/value store."""

from __future__ import annotations

import pytest

from ni_common.storage import GlobalStorage, global_storage


pytestmark = pytest.mark.unit_common


def test_insert_and_read() -> None:
    storage = GlobalStorage()
    storage.insert("groupsUrl", "local")

    assert storage.value("groupsUrl") == "local"
    assert storage.contains("groupsUrl")
    assert "groupsUrl" in storage
    assert len(storage) == 1


def test_missing_key_default() -> None:
    storage = GlobalStorage()

    assert storage.value("missing") is None
    assert storage.value("missing", "fallback") == "fallback"
    assert 42 not in storage


def test_global_storage_is_shared() -> None:
    assert global_storage() is global_storage()
