"""YAML decoding of groups data into a plain value tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import yaml

from ni_common.errors import BadDataError

logger = logging.getLogger(__name__)

# Lines of input shown on each side of a failing line.
SNIPPET_CONTEXT_LINES = 2


@dataclass(frozen=True)
class DecodeResult:
    """Either a decoded value tree or the error that prevented decoding."""

    value: Any = None
    error: BadDataError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _error_mark(error: yaml.YAMLError) -> yaml.Mark | None:
    mark = getattr(error, "problem_mark", None)
    if mark is None:
        mark = getattr(error, "context_mark", None)
    return mark


def error_snippet(data: bytes, line: int | None, column: int | None) -> str:
    """Render the input around a zero-based line/column position.

    The failing line is prefixed with ``>`` and followed by a caret under the
    failing column.
    """
    text = data.decode("utf-8", errors="replace")
    lines = text.splitlines()
    if not lines:
        return ""
    if line is None:
        line = 0
    line = min(max(line, 0), len(lines) - 1)
    start = max(line - SNIPPET_CONTEXT_LINES, 0)
    stop = min(line + SNIPPET_CONTEXT_LINES + 1, len(lines))
    width = len(str(stop))

    rendered: list[str] = []
    for index in range(start, stop):
        marker = ">" if index == line else " "
        rendered.append(f"{marker}{index + 1:>{width}} | {lines[index]}")
        if index == line and column is not None:
            rendered.append(f" {' ' * width} | {' ' * column}^")
    return "\n".join(rendered)


def explain_yaml_error(error: BadDataError, label: str) -> None:
    """Log a decode failure together with the offending input context."""
    line = error.line
    column = error.column
    if line is None:
        logger.warning("YAML error in %s: %s", label, error)
    else:
        logger.warning(
            "YAML error in %s at line %d, column %d: %s",
            label,
            line + 1,
            (column or 0) + 1,
            error,
        )
    snippet = error.context.get("snippet")
    if snippet:
        logger.warning("Offending %s:\n%s", label, snippet)


def decode_groups_data(data: bytes) -> DecodeResult:
    """Parse ``data`` as YAML (JSON is accepted as well).

    Never raises for malformed input; the failure is returned as a
    ``BadDataError`` carrying the position and a snippet of the input.
    """
    try:
        value = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        mark = _error_mark(exc)
        line = mark.line if mark is not None else None
        column = mark.column if mark is not None else None
        problem = getattr(exc, "problem", None) or str(exc)
        return DecodeResult(
            error=BadDataError(
                problem,
                context={
                    "line": line,
                    "column": column,
                    "snippet": error_snippet(data, line, column),
                },
                cause=exc,
            )
        )
    return DecodeResult(value=value)
