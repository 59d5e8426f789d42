"""Public API surface for ni_common."""

from ni_common.config import parse_bool_env
from ni_common.errors import (
    BadConfigurationError,
    BadDataError,
    InternalError,
    NetInstallError,
    NetworkError,
    error_to_payload,
    wrap_error,
)
from ni_common.logging import configure_logging
from ni_common.storage import GlobalStorage, global_storage

__all__ = [
    "BadConfigurationError",
    "BadDataError",
    "GlobalStorage",
    "InternalError",
    "NetInstallError",
    "NetworkError",
    "configure_logging",
    "error_to_payload",
    "global_storage",
    "parse_bool_env",
    "wrap_error",
]
