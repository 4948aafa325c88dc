"""
state_records.py — Record keluaran per tick (tanpa tipe ROS).

Node ROS2 mengonversi record ini ke sensor_msgs/JointState, nav_msgs/Odometry,
TransformStamped, sensor_msgs/Imu, dan turtlebot3_msgs/SensorState.

Orientasi planar di-encode sebagai quaternion terhadap sumbu Z:
    (x, y, z, w) = (0, 0, sin(θ/2), cos(θ/2))
"""

import math
from dataclasses import dataclass

from diffdrive_fake.objects.robot_config import FakeRobotConfig
from diffdrive_fake.physics.diff_drive_kinematics import DiffDriveKinematics, LEFT, RIGHT
from diffdrive_fake.physics.robot_model import Pose2D, WheelState


@dataclass
class JointStateRecord:
    names: list[str]
    positions: list[float]
    velocities: list[float]


@dataclass
class OdometryRecord:
    frame_id: str
    child_frame_id: str
    x: float
    y: float
    orientation: tuple[float, float, float, float]
    linear_x: float
    angular_z: float


@dataclass
class TransformRecord:
    frame_id: str
    child_frame_id: str
    translation: tuple[float, float, float]
    rotation: tuple[float, float, float, float]


@dataclass
class SensorStateRecord:
    left_encoder: int
    right_encoder: int
    torque: bool = True


@dataclass
class ImuRecord:
    orientation: tuple[float, float, float, float]
    angular_velocity_z: float
    linear_acceleration: tuple[float, float, float] = (0.0, 0.0, 0.0)


def heading_to_quaternion(heading: float) -> tuple[float, float, float, float]:
    """Quaternion (x, y, z, w) untuk rotasi `heading` rad terhadap sumbu Z."""
    half = heading / 2.0
    return (0.0, 0.0, math.sin(half), math.cos(half))


def stamp_nanoseconds(now: float) -> int:
    """Waktu tick (detik) → nanodetik integer untuk header stamp."""
    return int(round(now * 1e9))


def build_joint_state(wheels: WheelState, joint_names) -> JointStateRecord:
    return JointStateRecord(
        names=list(joint_names),
        positions=[float(p) for p in wheels.position],
        velocities=[float(v) for v in wheels.velocity],
    )


def build_odometry(pose: Pose2D, wheels: WheelState,
                   kinematics: DiffDriveKinematics,
                   frame_id: str = "odom",
                   child_frame_id: str = "base_footprint") -> OdometryRecord:
    """Pose + twist. Twist diturunkan dari kecepatan roda (forward kinematics),
    sehingga otomatis nol saat command timeout."""
    linear, angular = kinematics.forward(wheels.velocity)
    return OdometryRecord(
        frame_id=frame_id,
        child_frame_id=child_frame_id,
        x=pose.x,
        y=pose.y,
        orientation=heading_to_quaternion(pose.heading),
        linear_x=linear,
        angular_z=angular,
    )


def build_transform(pose: Pose2D,
                    frame_id: str = "odom",
                    child_frame_id: str = "base_footprint") -> TransformRecord:
    return TransformRecord(
        frame_id=frame_id,
        child_frame_id=child_frame_id,
        translation=(pose.x, pose.y, 0.0),
        rotation=heading_to_quaternion(pose.heading),
    )


def wheel_to_encoder_ticks(position: float, tick2rad: float,
                           encoder_min: int, encoder_max: int) -> int:
    """Konversi posisi roda (rad) ke count encoder.

    Count wrap-around seperti counter hardware di [encoder_min, encoder_max].
    Akumulator posisi roda sendiri tidak pernah di-wrap.
    """
    ticks = int(round(position / tick2rad))
    span = encoder_max - encoder_min + 1
    return (ticks - encoder_min) % span + encoder_min


def build_sensor_state(wheels: WheelState, config: FakeRobotConfig) -> SensorStateRecord:
    return SensorStateRecord(
        left_encoder=wheel_to_encoder_ticks(
            float(wheels.position[LEFT]), config.tick2rad,
            config.encoder_min, config.encoder_max),
        right_encoder=wheel_to_encoder_ticks(
            float(wheels.position[RIGHT]), config.tick2rad,
            config.encoder_min, config.encoder_max),
    )


def build_imu(pose: Pose2D, effective_command: tuple[float, float]) -> ImuRecord:
    _, angular = effective_command
    return ImuRecord(
        orientation=heading_to_quaternion(pose.heading),
        angular_velocity_z=angular,
    )
