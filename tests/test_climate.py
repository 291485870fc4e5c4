import pytest

from ceres_bridge.accessories.climate import (
    ObservedState, TargetState, from_target_command, to_observed_state, to_target_state,
)
from ceres_bridge.device.models import AcStatus, ControlCommand, ControlVariable


@pytest.mark.parametrize(
    "on, mode, observed, target",
    [
        (False, "heat", ObservedState.INACTIVE, TargetState.AUTO),
        (False, "cool", ObservedState.INACTIVE, TargetState.AUTO),
        (True, "heat", ObservedState.HEATING, TargetState.HEAT),
        (True, "cool", ObservedState.COOLING, TargetState.COOL),
        (True, "fan", ObservedState.COOLING, TargetState.COOL),
        (True, None, ObservedState.COOLING, TargetState.COOL),
    ],
)
def test_state_mapping(on, mode, observed, target):
    status = AcStatus(on=on, mode=mode, swing=False)
    assert to_observed_state(status) is observed
    assert to_target_state(status) is target


def test_homekit_values():
    assert [int(s) for s in ObservedState] == [0, 2, 3]
    assert [int(s) for s in TargetState] == [0, 1, 2]


def test_target_commands():
    assert from_target_command(TargetState.HEAT) == ControlCommand(ControlVariable.MODE, "heat")
    assert from_target_command(TargetState.COOL) == ControlCommand(ControlVariable.MODE, "cool")
    assert from_target_command(TargetState.AUTO) is None


def test_target_command_accepts_raw_int():
    assert from_target_command(1) == ControlCommand(ControlVariable.MODE, "heat")
