"""Tests for the load status state machine."""

from __future__ import annotations

import pytest

from ni_common.errors import BadDataError, NetInstallError, NetworkError
from ni_netinstall.status import Status, StatusMachine, status_for_error, status_message
from tests.helpers.signals import SignalRecorder


pytestmark = pytest.mark.unit_netinstall


@pytest.fixture
def machine() -> StatusMachine:
    return StatusMachine()


@pytest.fixture
def messages(machine: StatusMachine) -> SignalRecorder:
    return SignalRecorder(machine.status_changed)


def test_initial_state(machine: StatusMachine) -> None:
    assert machine.status is Status.OK
    assert machine.message == ""


def test_failure_transition_emits_message(
    machine: StatusMachine, messages: SignalRecorder
) -> None:
    assert machine.transition(Status.FAILED_NETWORK_ERROR) is True

    assert machine.status is Status.FAILED_NETWORK_ERROR
    assert messages.values == [status_message(Status.FAILED_NETWORK_ERROR)]
    assert "check your network connection" in messages.values[0]


def test_first_failure_wins(machine: StatusMachine, messages: SignalRecorder) -> None:
    machine.transition(Status.FAILED_BAD_CONFIGURATION)

    assert machine.transition(Status.FAILED_BAD_DATA) is False
    assert machine.transition(Status.FAILED_INTERNAL_ERROR) is False

    assert machine.status is Status.FAILED_BAD_CONFIGURATION
    assert messages.count == 1


def test_ok_to_ok_is_a_no_op(machine: StatusMachine, messages: SignalRecorder) -> None:
    assert machine.transition(Status.OK) is False
    assert messages.count == 0


def test_failure_cannot_transition_back_to_ok(machine: StatusMachine) -> None:
    machine.transition(Status.FAILED_BAD_DATA)

    assert machine.transition(Status.OK) is False
    assert machine.status is Status.FAILED_BAD_DATA


def test_reset_starts_new_attempt(machine: StatusMachine, messages: SignalRecorder) -> None:
    machine.transition(Status.FAILED_BAD_DATA)
    machine.reset()

    assert machine.status is Status.OK
    assert messages.values[-1] == ""
    assert machine.transition(Status.FAILED_NETWORK_ERROR) is True


def test_reset_when_ok_is_silent(machine: StatusMachine, messages: SignalRecorder) -> None:
    machine.reset()
    assert messages.count == 0


def test_fail_maps_typed_errors(machine: StatusMachine) -> None:
    machine.fail(BadDataError("broken"))

    assert machine.status is Status.FAILED_BAD_DATA


def test_status_for_error() -> None:
    assert status_for_error(NetworkError("down")) is Status.FAILED_NETWORK_ERROR
    assert status_for_error(NetInstallError("generic")) is Status.FAILED_INTERNAL_ERROR


def test_every_failure_has_a_message() -> None:
    for status in Status:
        if status is Status.OK:
            assert status_message(status) == ""
        else:
            assert status_message(status).startswith("Network Installation.")


def test_retranslate_reemits(machine: StatusMachine, messages: SignalRecorder) -> None:
    machine.retranslate()
    assert messages.values == [""]
