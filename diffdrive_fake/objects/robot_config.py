"""
robot_config.py — Konstanta fisik & timing robot differential drive (TurtleBot3).

Mendukung dua model platform:
  - BURGER : roda r=0.033 m, separation 0.16 m
  - WAFFLE : roda r=0.033 m, separation 0.287 m

Semua besaran SI:
    panjang  : meter
    sudut    : radian
    periode  : detik

Konfigurasi bersifat konstan setelah startup (tidak diubah saat runtime).
"""

from dataclasses import dataclass, field
from enum import Enum


class RobotModelType(Enum):
    BURGER = "burger"
    WAFFLE = "waffle"


# ======================================================================
# Timing — periode tiap task scheduler
# ======================================================================

@dataclass
class TaskPeriods:
    """Periode (detik) untuk tiap task periodik node."""

    control: float = 1.0 / 30.0              # command processing + integrasi
    drive_information: float = 1.0 / 30.0    # joint_states, odom, tf
    sensor_state: float = 1.0 / 30.0
    imu: float = 1.0 / 200.0

    def __post_init__(self):
        for name in ("control", "drive_information", "sensor_state", "imu"):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"period '{name}' must be positive")

    def as_dict(self) -> dict:
        return {
            "control": self.control,
            "drive_information": self.drive_information,
            "sensor_state": self.sensor_state,
            "imu": self.imu,
        }


# ======================================================================
# Burger — default platform
# ======================================================================

@dataclass
class FakeRobotConfig:
    """Konfigurasi robot fake (default: TurtleBot3 burger)."""

    model: RobotModelType = RobotModelType.BURGER

    # Geometri
    wheel_radius: float = 0.033        # meter
    wheel_separation: float = 0.16     # meter
    robot_radius: float = 0.078        # meter, hanya untuk rendering

    # Batas kecepatan platform
    max_linear_velocity: float = 0.22   # m/s
    max_angular_velocity: float = 2.84  # rad/s

    # Clamp cmd_vel ke batas platform saat submit (default: pass-through)
    clamp_command: bool = False

    # Command timeout — tanpa cmd_vel baru selama ini, robot dianggap berhenti
    cmd_vel_timeout: float = 1.0        # detik

    # Encoder (Dynamixel XL430): 4096 tick per putaran, counter int32
    tick2rad: float = 0.001533981       # 0.087890625 deg
    encoder_min: int = -2147483648
    encoder_max: int = 2147483647

    # Nama joint & frame
    joint_names: tuple[str, str] = ("left_wheel", "right_wheel")
    odom_frame: str = "odom"
    base_frame: str = "base_footprint"
    joint_states_frame: str = "base_footprint"

    periods: TaskPeriods = field(default_factory=TaskPeriods)

    def __post_init__(self):
        if self.wheel_radius <= 0.0:
            raise ValueError("wheel_radius must be positive")
        if self.wheel_separation <= 0.0:
            raise ValueError("wheel_separation must be positive")
        if self.cmd_vel_timeout <= 0.0:
            raise ValueError("cmd_vel_timeout must be positive")
        if self.max_linear_velocity < 0.0 or self.max_angular_velocity < 0.0:
            raise ValueError("velocity limits must not be negative")
        if self.encoder_min >= self.encoder_max:
            raise ValueError("encoder_min must be below encoder_max")
        if len(self.joint_names) != 2:
            raise ValueError("joint_names needs exactly two entries (left, right)")


# ======================================================================
# Waffle — separation lebih lebar, lebih lambat
# ======================================================================

@dataclass
class WaffleConfig(FakeRobotConfig):
    """Konfigurasi TurtleBot3 waffle."""

    model: RobotModelType = RobotModelType.WAFFLE

    wheel_separation: float = 0.287
    robot_radius: float = 0.294

    max_linear_velocity: float = 0.26
    max_angular_velocity: float = 1.82


def config_for(model, **overrides) -> FakeRobotConfig:
    """Buat config sesuai nama / enum model, dengan override field opsional.

    Parameters
    ----------
    model : RobotModelType | str
        ``"burger"`` atau ``"waffle"`` (case-insensitive).
    **overrides
        Field FakeRobotConfig yang ingin diganti (mis. ``cmd_vel_timeout=0.5``).
    """
    if not isinstance(model, RobotModelType):
        try:
            model = RobotModelType(str(model).strip().lower())
        except ValueError:
            raise ValueError(f"unknown robot model: {model!r}") from None

    if model == RobotModelType.WAFFLE:
        return WaffleConfig(**overrides)
    return FakeRobotConfig(**overrides)
