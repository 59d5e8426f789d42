"""Tests for group list normalization."""

from __future__ import annotations

import logging

import pytest

from ni_common.errors import BadDataError
from ni_netinstall.groups import group_name, normalize_groups


pytestmark = pytest.mark.unit_netinstall


def test_sequence_is_the_group_list() -> None:
    tree = [{"name": "a"}, {"name": "b"}]

    assert normalize_groups(tree) == tree


def test_map_with_groups_key_extracts_exactly_that_value() -> None:
    tree = {"groups": [{"name": "a"}], "other": [{"name": "ignored"}]}

    assert normalize_groups(tree) == [{"name": "a"}]


def test_map_without_groups_key_is_empty() -> None:
    assert normalize_groups({"packages": ["vim"]}) == []


def test_scalar_does_not_form_a_sequence(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="ni_netinstall.groups"):
        assert normalize_groups("just text") == []
    assert "does not form a sequence" in caplog.text


def test_groups_key_holding_a_scalar_yields_nothing() -> None:
    assert normalize_groups({"groups": 42}) == []


def test_non_map_entries_are_bad_data() -> None:
    with pytest.raises(BadDataError) as excinfo:
        normalize_groups([{"name": "a"}, "oops"], origin="https://example.org/g.yaml")

    assert excinfo.value.context["index"] == 1
    assert excinfo.value.status_name == "FailedBadData"


def test_order_is_preserved() -> None:
    tree = [{"name": str(i)} for i in range(10)]

    assert [group_name(g) for g in normalize_groups(tree)] == [str(i) for i in range(10)]


def test_group_name_missing() -> None:
    assert group_name({}) == ""
