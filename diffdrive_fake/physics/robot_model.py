"""
robot_model.py — Model kinematik robot fake (pure physics, tanpa ROS).

Semua state dalam odom frame REP-103:
    x, y     : posisi (meter)
    heading  : heading (rad), 0 = +X, positif CCW, TIDAK dinormalisasi
    wheel    : posisi angular roda (rad, unbounded) & kecepatan (rad/s)

Model "fake": kecepatan command dianggap langsung tercapai.
Persamaan update (midpoint, per tick dengan dt):
    dθ    = ω · dt
    θ_mid = θ + dθ / 2
    dx    = v · cos(θ_mid) · dt
    dy    = v · sin(θ_mid) · dt
    θ    += dθ

submit() dan tick() boleh dipanggil dari thread berbeda; semua state
mutable dilindungi satu lock.
"""

import math
import threading
from dataclasses import dataclass, field

import numpy as np

from diffdrive_fake.objects.robot_config import FakeRobotConfig
from diffdrive_fake.physics.diff_drive_kinematics import DiffDriveKinematics


@dataclass(frozen=True)
class VelocityCommand:
    linear_x: float = 0.0
    angular_z: float = 0.0
    received_at: float = 0.0


@dataclass
class Pose2D:
    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0

    def copy(self) -> "Pose2D":
        return Pose2D(self.x, self.y, self.heading)


@dataclass
class WheelState:
    """Posisi & kecepatan angular roda [left, right]."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def copy(self) -> "WheelState":
        return WheelState(self.position.copy(), self.velocity.copy())


@dataclass
class TimingState:
    last_command_time: float = 0.0
    last_update_time: float = 0.0


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


class FakeRobotModel:
    """Command intake + kinematic integrator untuk satu robot differential drive."""

    def __init__(self, config: FakeRobotConfig | None = None,
                 start_time: float = 0.0):
        """
        Parameters
        ----------
        config : FakeRobotConfig | None
            Geometri, batas kecepatan, dan timeout. Default: burger.
        start_time : float
            Waktu awal (detik). Dipakai sebagai last_update_time dan
            last_command_time awal.
        """
        self.config = config if config is not None else FakeRobotConfig()
        self.kinematics = DiffDriveKinematics(
            self.config.wheel_radius, self.config.wheel_separation)

        self._lock = threading.Lock()

        # --- State ---
        self._command = VelocityCommand(received_at=start_time)
        self._timing = TimingState(start_time, start_time)
        self._pose = Pose2D()
        self._wheels = WheelState()

        # Command efektif tick terakhir (setelah timeout)
        self._effective = (0.0, 0.0)
        self._stale = False

    # ------------------------------------------------------------------
    # Command intake
    # ------------------------------------------------------------------

    def submit(self, linear_x: float, angular_z: float, now: float) -> bool:
        """Simpan command terbaru. Return False jika nilai non-finite (ditolak)."""
        if not (math.isfinite(linear_x) and math.isfinite(angular_z)):
            return False

        if self.config.clamp_command:
            linear_x = _clamp(linear_x, self.config.max_linear_velocity)
            angular_z = _clamp(angular_z, self.config.max_angular_velocity)

        cmd = VelocityCommand(float(linear_x), float(angular_z), now)
        with self._lock:
            self._command = cmd
            self._timing.last_command_time = now
        return True

    # ------------------------------------------------------------------
    # Integrator
    # ------------------------------------------------------------------

    def tick(self, now: float) -> tuple[Pose2D, WheelState]:
        """Advance state sampai waktu `now`.

        Returns
        -------
        (Pose2D, WheelState) — snapshot (copy) setelah update.
        """
        with self._lock:
            dt = now - self._timing.last_update_time
            if dt <= 0.0:
                # Clock diam / mundur: no-op, last_update_time tetap
                return self._pose.copy(), self._wheels.copy()

            # 1. Timeout
            self._stale = (now - self._timing.last_command_time
                           > self.config.cmd_vel_timeout)
            if self._stale:
                linear, angular = 0.0, 0.0
            else:
                linear = self._command.linear_x
                angular = self._command.angular_z
            self._effective = (linear, angular)

            # 2. Inverse kinematics
            self._wheels.velocity = self.kinematics.inverse(linear, angular)

            # 3. Akumulasi posisi roda (unbounded, tanpa wrap)
            self._wheels.position = self._wheels.position + self._wheels.velocity * dt

            # 4. Pose (midpoint heading)
            d_heading = angular * dt
            heading_mid = self._pose.heading + d_heading / 2.0
            self._pose.x += linear * math.cos(heading_mid) * dt
            self._pose.y += linear * math.sin(heading_mid) * dt
            self._pose.heading += d_heading

            # 5. Timestamp
            self._timing.last_update_time = now

            return self._pose.copy(), self._wheels.copy()

    # ------------------------------------------------------------------
    # Getter (snapshot, thread-safe)
    # ------------------------------------------------------------------

    def snapshot(self) -> tuple[Pose2D, WheelState]:
        """Pose & roda dari tick yang sama (satu kali ambil lock)."""
        with self._lock:
            return self._pose.copy(), self._wheels.copy()

    @property
    def command(self) -> VelocityCommand:
        with self._lock:
            return self._command

    @property
    def pose(self) -> Pose2D:
        with self._lock:
            return self._pose.copy()

    @property
    def wheels(self) -> WheelState:
        with self._lock:
            return self._wheels.copy()

    @property
    def timing(self) -> TimingState:
        with self._lock:
            return TimingState(self._timing.last_command_time,
                               self._timing.last_update_time)

    @property
    def effective_command(self) -> tuple[float, float]:
        """(linear, angular) yang dipakai pada tick terakhir."""
        with self._lock:
            return self._effective

    @property
    def stale(self) -> bool:
        """True jika tick terakhir memaksa command ke nol karena timeout."""
        with self._lock:
            return self._stale
