"""Load status of the netinstall groups and its transition rules."""

from __future__ import annotations

import logging
from enum import Enum

from PySide6.QtCore import QCoreApplication, QObject, Signal

from ni_common.errors import NetInstallError

logger = logging.getLogger(__name__)

# Translation context shared with the sidebar labels.
TRANSLATION_CONTEXT = "NetInstallViewStep"


class Status(str, Enum):
    """Outcome of the current load attempt."""

    OK = "Ok"
    FAILED_BAD_CONFIGURATION = "FailedBadConfiguration"
    FAILED_BAD_DATA = "FailedBadData"
    FAILED_INTERNAL_ERROR = "FailedInternalError"
    FAILED_NETWORK_ERROR = "FailedNetworkError"

    @property
    def is_failure(self) -> bool:
        return self is not Status.OK


_MESSAGES: dict[Status, str] = {
    Status.OK: "",
    Status.FAILED_BAD_CONFIGURATION: (
        "Network Installation. (Disabled: Incorrect configuration)"
    ),
    Status.FAILED_BAD_DATA: (
        "Network Installation. (Disabled: Received invalid groups data)"
    ),
    Status.FAILED_INTERNAL_ERROR: "Network Installation. (Disabled: internal error)",
    Status.FAILED_NETWORK_ERROR: (
        "Network Installation. (Disabled: Unable to fetch package lists, "
        "check your network connection)"
    ),
}


def status_message(status: Status) -> str:
    """Return the translated, human-facing message for a status."""
    text = _MESSAGES[status]
    if not text:
        return ""
    return QCoreApplication.translate(TRANSLATION_CONTEXT, text)


def status_for_error(error: NetInstallError) -> Status:
    """Map a typed load error onto the failure status it causes."""
    try:
        return Status(error.status_name)
    except ValueError:
        return Status.FAILED_INTERNAL_ERROR


class StatusMachine(QObject):
    """Single owner of the load status.

    Starts at ``Ok``. Any failure may replace ``Ok``; once failed, further
    failures are ignored until :meth:`reset` starts a new attempt. Every
    effective change emits ``status_changed`` before returning.
    """

    status_changed = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._status = Status.OK

    @property
    def status(self) -> Status:
        return self._status

    @property
    def message(self) -> str:
        return status_message(self._status)

    def transition(self, status: Status) -> bool:
        """Move to ``status``; returns False when the request was a no-op."""
        if status is self._status:
            return False
        if self._status.is_failure:
            logger.debug(
                "Ignoring status %s, already in %s", status.value, self._status.value
            )
            return False
        if not status.is_failure:
            return False
        self._status = status
        logger.info("NetInstall status changed to %s", status.value)
        self.status_changed.emit(self.message)
        return True

    def fail(self, error: NetInstallError) -> bool:
        """Record a typed load error as a failure transition."""
        return self.transition(status_for_error(error))

    def reset(self) -> None:
        """Return to ``Ok`` for a new load attempt."""
        if self._status is Status.OK:
            return
        self._status = Status.OK
        self.status_changed.emit(self.message)

    def retranslate(self) -> None:
        """Re-emit the current message, e.g. after a language change."""
        self.status_changed.emit(self.message)
