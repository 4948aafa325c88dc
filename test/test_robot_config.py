import pytest

from diffdrive_fake.objects.robot_config import (
    FakeRobotConfig, RobotModelType, TaskPeriods, WaffleConfig, config_for,
)


def test_burger_defaults():
    cfg = FakeRobotConfig()
    assert cfg.model == RobotModelType.BURGER
    assert cfg.wheel_radius == 0.033
    assert cfg.wheel_separation == 0.16
    assert cfg.max_linear_velocity == 0.22
    assert cfg.max_angular_velocity == 2.84
    assert cfg.clamp_command is False
    assert cfg.joint_names == ("left_wheel", "right_wheel")


def test_waffle_overrides_geometry():
    cfg = WaffleConfig()
    assert cfg.model == RobotModelType.WAFFLE
    assert cfg.wheel_radius == 0.033
    assert cfg.wheel_separation == 0.287


@pytest.mark.parametrize("name, expected", [
    ("burger", FakeRobotConfig),
    ("WAFFLE", WaffleConfig),
    (" waffle ", WaffleConfig),
    (RobotModelType.BURGER, FakeRobotConfig),
])
def test_config_for_model_name(name, expected):
    assert type(config_for(name)) is expected


def test_config_for_applies_overrides():
    cfg = config_for("waffle", cmd_vel_timeout=0.25, clamp_command=True)
    assert cfg.cmd_vel_timeout == 0.25
    assert cfg.clamp_command is True
    assert cfg.wheel_separation == 0.287


def test_config_for_unknown_model():
    with pytest.raises(ValueError, match="unknown robot model"):
        config_for("waffle_pi_xl")


@pytest.mark.parametrize("field, value", [
    ("wheel_radius", 0.0),
    ("wheel_separation", -0.16),
    ("cmd_vel_timeout", 0.0),
    ("max_linear_velocity", -1.0),
    ("encoder_min", 2147483647),
    ("joint_names", ("only_one",)),
])
def test_invalid_config_rejected(field, value):
    with pytest.raises(ValueError):
        FakeRobotConfig(**{field: value})


def test_default_periods():
    periods = TaskPeriods()
    assert periods.control == pytest.approx(1 / 30)
    assert periods.imu == pytest.approx(1 / 200)
    assert set(periods.as_dict()) == {"control", "drive_information", "sensor_state", "imu"}


def test_non_positive_period_rejected():
    with pytest.raises(ValueError, match="imu"):
        TaskPeriods(imu=0.0)


def test_period_order_is_task_registration_order():
    assert list(TaskPeriods().as_dict()) == [
        "control", "drive_information", "sensor_state", "imu"]
