"""Tests for YAML decoding of groups data."""

from __future__ import annotations

import logging

import pytest

from ni_common.errors import BadDataError
from ni_netinstall.decoder import decode_groups_data, error_snippet, explain_yaml_error


pytestmark = pytest.mark.unit_netinstall


def test_decode_sequence() -> None:
    result = decode_groups_data(b"- name: base\n  packages: [vim]\n")

    assert result.ok
    assert result.value == [{"name": "base", "packages": ["vim"]}]


def test_decode_json_document() -> None:
    result = decode_groups_data(b'{"groups": [{"name": "kde"}]}')

    assert result.ok
    assert result.value == {"groups": [{"name": "kde"}]}


def test_decode_empty_input_is_none() -> None:
    result = decode_groups_data(b"")

    assert result.ok
    assert result.value is None


def test_decode_malformed_yaml_returns_positioned_error() -> None:
    data = b"- name: base\n- name: [unclosed\n- name: other\n"

    result = decode_groups_data(data)

    assert not result.ok
    assert isinstance(result.error, BadDataError)
    assert result.error.line is not None
    assert result.error.column is not None
    assert "[unclosed" in result.error.context["snippet"]


def test_error_snippet_marks_failing_line() -> None:
    data = b"a: 1\nb: 2\nc: [\nd: 4\n"

    snippet = error_snippet(data, 2, 3)

    lines = snippet.splitlines()
    marked = [i for i, line in enumerate(lines) if line.startswith(">")]
    assert len(marked) == 1
    assert "c: [" in lines[marked[0]]
    assert lines[marked[0] + 1].endswith("^")


def test_error_snippet_empty_input() -> None:
    assert error_snippet(b"", 0, 0) == ""


def test_explain_yaml_error_logs_context(caplog: pytest.LogCaptureFixture) -> None:
    result = decode_groups_data(b"groups:\n  - name: [unclosed\n")
    assert result.error is not None

    with caplog.at_level(logging.WARNING, logger="ni_netinstall.decoder"):
        explain_yaml_error(result.error, "netinstall groups data")

    text = caplog.text
    assert "netinstall groups data" in text
    assert "[unclosed" in text
