"""
diff_drive_kinematics.py — Forward & Inverse kinematics untuk robot differential drive.

Semua kalkulasi dalam frame robot (REP-103):
    linear   = kecepatan maju (+X robot, m/s)
    angular  = kecepatan angular (CCW positif, rad/s)

Konvensi roda:
    index 0 = roda kiri, index 1 = roda kanan.
    Kecepatan roda dalam rad/s (positif = mendorong robot maju).
"""

import numpy as np

LEFT = 0
RIGHT = 1


class DiffDriveKinematics:
    """Kinematics model untuk 2-wheeled differential drive robot."""

    def __init__(self, wheel_radius: float, wheel_separation: float):
        """
        Parameters
        ----------
        wheel_radius : float
            Radius roda (meter).
        wheel_separation : float
            Jarak antar titik kontak roda kiri & kanan (meter).
        """
        self.wheel_radius = wheel_radius
        self.wheel_separation = wheel_separation

    # ------------------------------------------------------------------

    def inverse(self, linear: float, angular: float) -> np.ndarray:
        """Hitung kecepatan angular tiap roda dari body velocity.

        Parameters
        ----------
        linear : float   — kecepatan maju (m/s)
        angular : float  — kecepatan angular (rad/s)

        Returns
        -------
        np.ndarray shape (2,) — [ω_left, ω_right] (rad/s)
        """
        half_track = angular * self.wheel_separation / 2
        v_left = (linear - half_track) / self.wheel_radius
        v_right = (linear + half_track) / self.wheel_radius
        return np.array([v_left, v_right], dtype=float)

    def forward(self, wheel_speeds) -> tuple[float, float]:
        """Hitung body velocity dari kecepatan angular tiap roda.

        Parameters
        ----------
        wheel_speeds : array-like shape (2,) — [ω_left, ω_right] (rad/s)

        Returns
        -------
        (linear, angular) dalam frame robot.
        """
        w = np.asarray(wheel_speeds, dtype=float)
        linear = self.wheel_radius * (w[LEFT] + w[RIGHT]) / 2.0
        angular = self.wheel_radius * (w[RIGHT] - w[LEFT]) / self.wheel_separation
        return float(linear), float(angular)
