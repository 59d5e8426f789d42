"""Shared error taxonomy for netinstall-groups."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class NetInstallError(Exception):
    """Base error type for a failed groups load.

    Subclasses name the status the load attempt ends in through ``status_name``
    so the config object can turn any of them into a status transition.
    """

    status_name: str = "FailedInternalError"

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class BadConfigurationError(NetInstallError):
    """Malformed source descriptor, bad URL or a request refused outright."""

    status_name = "FailedBadConfiguration"


class NetworkError(NetInstallError):
    """The transport reported a failure for a remote fetch."""

    status_name = "FailedNetworkError"


class BadDataError(NetInstallError):
    """Groups data could not be decoded or is not a sequence of maps."""

    status_name = "FailedBadData"

    @property
    def line(self) -> int | None:
        return self.context.get("line")

    @property
    def column(self) -> int | None:
        return self.context.get("column")


class InternalError(NetInstallError):
    """Protocol violation, such as a completion reported before the reply finished."""

    status_name = "FailedInternalError"


T = TypeVar("T", bound=NetInstallError)


def wrap_error(
    error_cls: type[T],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> T:
    """Create a typed NetInstallError with optional context and cause."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: NetInstallError) -> dict[str, Any]:
    """Convert a NetInstallError to a structured log payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
