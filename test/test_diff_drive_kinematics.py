import numpy as np
import pytest

from diffdrive_fake.physics.diff_drive_kinematics import DiffDriveKinematics, LEFT, RIGHT


@pytest.fixture
def kin():
    return DiffDriveKinematics(wheel_radius=0.033, wheel_separation=0.16)


def test_inverse_turtlebot3_burger(kin):
    w = kin.inverse(0.1, 0.5)
    assert w.shape == (2,)
    assert w[LEFT] == (0.1 - 0.5 * 0.08) / 0.033
    assert w[RIGHT] == (0.1 + 0.5 * 0.08) / 0.033


def test_inverse_straight_line_equal_wheels(kin):
    w = kin.inverse(0.22, 0.0)
    assert w[LEFT] == w[RIGHT]
    assert w[LEFT] == pytest.approx(0.22 / 0.033)


def test_inverse_spin_in_place_opposite_wheels(kin):
    w = kin.inverse(0.0, 2.84)
    assert w[LEFT] == pytest.approx(-w[RIGHT])
    assert w[RIGHT] > 0.0


@pytest.mark.parametrize("linear, angular", [
    (0.0, 0.0), (0.22, 0.0), (0.0, -2.84), (0.1, 0.5), (-0.15, 1.2),
])
def test_forward_recovers_body_velocity(kin, linear, angular):
    v, w = kin.forward(kin.inverse(linear, angular))
    assert v == pytest.approx(linear, abs=1e-12)
    assert w == pytest.approx(angular, abs=1e-12)


def test_forward_accepts_plain_sequence(kin):
    v, w = kin.forward([10.0, 10.0])
    assert isinstance(v, float)
    assert v == pytest.approx(0.33)
    assert w == 0.0


def test_waffle_geometry_changes_only_turning():
    burger = DiffDriveKinematics(0.033, 0.16)
    waffle = DiffDriveKinematics(0.033, 0.287)
    assert np.array_equal(burger.inverse(0.2, 0.0), waffle.inverse(0.2, 0.0))
    assert waffle.inverse(0.0, 1.0)[RIGHT] > burger.inverse(0.0, 1.0)[RIGHT]
