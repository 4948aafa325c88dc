"""
renderer.py — Visualisasi Pygame robot fake dengan sidebar informasi.

Layout window:
  ┌─────────────────────┬──────────┐
  │                     │ SIDEBAR  │
  │    ODOM VIEW        │  pose    │
  │   (grid + trail)    │  wheels  │
  │                     │  cmd_vel │
  └─────────────────────┴──────────┘
"""

import math
from collections import deque

import pygame
import pygame.freetype

from diffdrive_fake.objects.robot_config import FakeRobotConfig
from diffdrive_fake.physics.diff_drive_kinematics import LEFT, RIGHT
from diffdrive_fake.physics.robot_model import Pose2D, WheelState
from diffdrive_fake.render.frame_converter import FrameConverter


# ──────────────────────────────────────────────────────────────────────
# View / robot colors
# ──────────────────────────────────────────────────────────────────────
COLOR_FLOOR       = (34, 38, 46)
COLOR_GRID        = (52, 57, 68)
COLOR_GRID_MAJOR  = (74, 80, 96)
COLOR_AXIS_X      = (220, 60, 60)
COLOR_AXIS_Y      = (60, 200, 90)
COLOR_ROBOT_BODY  = (0, 255, 0)
COLOR_ROBOT_STALE = (150, 150, 150)
COLOR_ROBOT_FRONT = (0, 120, 255)
COLOR_WHEEL       = (255, 0, 0)
COLOR_TRAIL       = (0, 200, 200)
COLOR_CYAN        = (0, 200, 200)

# ──────────────────────────────────────────────────────────────────────
# Sidebar design palette
# ──────────────────────────────────────────────────────────────────────
SB_BG          = (18, 20, 26)       # near-black background
SB_ACCENT      = (0, 188, 212)      # teal accent (labels, headers)
SB_BORDER      = (44, 48, 62)       # subtle divider / border
SB_RED         = (231, 76, 60)      # status danger
SB_AMBER       = (243, 156, 18)     # status warning
SB_TEXT        = (220, 224, 235)    # primary text
SB_TEXT_DIM    = (110, 118, 140)    # secondary / dim text
SB_HEADER_BG   = (28, 32, 44)       # header strip fill
SB_BTN_INACT   = (38, 42, 56)       # inactive pill

SIDEBAR_WIDTH = 300
TRAIL_LENGTH = 2000


class Renderer:
    """Render robot fake di odom frame + sidebar informasi."""

    def __init__(self, config: FakeRobotConfig,
                 screen_width: int = 1100, screen_height: int = 700,
                 view_size: float = 3.0):
        pygame.init()
        self.config = config
        self.screen_width  = screen_width
        self.screen_height = screen_height
        self.screen = pygame.display.set_mode((screen_width, screen_height))
        pygame.display.set_caption(f"Fake Differential Drive ({config.model.value})")
        self.clock = pygame.time.Clock()

        self.render_width = screen_width - SIDEBAR_WIDTH
        self.fc = FrameConverter(screen_width, screen_height,
                                 view_size=view_size,
                                 render_width=self.render_width)

        pygame.freetype.init()
        self.font_title = pygame.freetype.SysFont("liberation mono, consolas, courier new", 18, bold=True)
        self.font_sec   = pygame.freetype.SysFont("liberation mono, consolas, courier new", 13, bold=True)
        self.font_label = pygame.freetype.SysFont("liberation mono, consolas, courier new", 11)
        self.font_value = pygame.freetype.SysFont("liberation mono, consolas, courier new", 14, bold=True)

        # Toggle states
        self.show_wheel_speeds = False
        self.show_trail        = True
        self.follow_robot      = True

        self.trail: deque[tuple[float, float]] = deque(maxlen=TRAIL_LENGTH)

    # ==================================================================
    # Public draw API
    # ==================================================================

    def clear(self):
        self.screen.fill(COLOR_FLOOR)

    def draw_grid(self, spacing: float = 0.25, major_every: int = 4):
        """Grid metrik odom frame + sumbu X/Y di origin."""
        x_min, x_max, y_min, y_max = self.fc.visible_bounds()

        i = math.floor(x_min / spacing)
        while i * spacing <= x_max:
            x = i * spacing
            col = COLOR_GRID_MAJOR if i % major_every == 0 else COLOR_GRID
            pygame.draw.line(self.screen, col,
                             self.fc.world_to_screen(x, y_min),
                             self.fc.world_to_screen(x, y_max), 1)
            i += 1

        j = math.floor(y_min / spacing)
        while j * spacing <= y_max:
            y = j * spacing
            col = COLOR_GRID_MAJOR if j % major_every == 0 else COLOR_GRID
            pygame.draw.line(self.screen, col,
                             self.fc.world_to_screen(x_min, y),
                             self.fc.world_to_screen(x_max, y), 1)
            j += 1

        origin = self.fc.world_to_screen(0.0, 0.0)
        pygame.draw.line(self.screen, COLOR_AXIS_X, origin,
                         self.fc.world_to_screen(spacing * 2, 0.0), 3)
        pygame.draw.line(self.screen, COLOR_AXIS_Y, origin,
                         self.fc.world_to_screen(0.0, spacing * 2), 3)

    def record_pose(self, pose: Pose2D):
        """Tambah pose ke trail dan geser view bila follow aktif."""
        if not self.trail or self.trail[-1] != (pose.x, pose.y):
            self.trail.append((pose.x, pose.y))
        if self.follow_robot:
            self.fc.follow(pose.x, pose.y)

    def clear_trail(self):
        self.trail.clear()

    def draw_trail(self):
        if not self.show_trail or len(self.trail) < 2:
            return
        points = [self.fc.world_to_screen(x, y) for x, y in self.trail]
        pygame.draw.lines(self.screen, COLOR_TRAIL, False, points, 2)

    def draw_robot(self, pose: Pose2D, wheels: WheelState, stale: bool = False):
        """Gambar body, indikator depan, dan dua roda."""
        cx, cy = self.fc.world_to_screen(pose.x, pose.y)
        r_px   = max(self.fc.world_length_to_px(self.config.robot_radius), 5)
        color  = COLOR_ROBOT_STALE if stale else COLOR_ROBOT_BODY

        # Body
        pygame.draw.circle(self.screen, color, (cx, cy), r_px, 2)

        # Front indicator
        theta_s = self.fc.theta_world_to_screen(pose.heading)
        fx = cx + r_px * math.cos(theta_s)
        fy = cy + r_px * math.sin(theta_s)
        pygame.draw.line(self.screen, COLOR_ROBOT_FRONT, (cx, cy), (int(fx), int(fy)), 2)
        pygame.draw.circle(self.screen, COLOR_ROBOT_FRONT, (int(fx), int(fy)), 4)

        # Wheels: roda kiri di +Y robot, kanan di -Y robot
        half_sep = self.fc.world_length_to_px(self.config.wheel_separation / 2.0)
        wheel_len = max(self.fc.world_length_to_px(self.config.wheel_radius * 2.0), 6)
        dir_x, dir_y = math.cos(theta_s), math.sin(theta_s)
        # +Y robot di screen = rotasi -90 deg dari arah depan (Y screen terbalik)
        left_x, left_y = dir_y, -dir_x

        for i, side in ((LEFT, 1.0), (RIGHT, -1.0)):
            wx = cx + side * half_sep * left_x
            wy = cy + side * half_sep * left_y
            p1 = (int(wx - dir_x * wheel_len / 2), int(wy - dir_y * wheel_len / 2))
            p2 = (int(wx + dir_x * wheel_len / 2), int(wy + dir_y * wheel_len / 2))
            pygame.draw.line(self.screen, COLOR_WHEEL, p1, p2, 5)

            if self.show_wheel_speeds:
                spd_surf, spd_rect = self.font_label.render(
                    f"{wheels.velocity[i]:.1f}", COLOR_CYAN)
                lx = cx + side * (half_sep + 16) * left_x
                ly = cy + side * (half_sep + 16) * left_y
                self.screen.blit(spd_surf,
                                 (int(lx) - spd_rect.width // 2,
                                  int(ly) - spd_rect.height // 2))

    # ------------------------------------------------------------------
    # Sidebar
    # ------------------------------------------------------------------

    def draw_sidebar(self, pose: Pose2D, wheels: WheelState,
                     command: tuple[float, float],
                     effective: tuple[float, float],
                     stale: bool,
                     extra_lines: list[str] | None = None):
        """Gambar sidebar informasi di sisi kanan.

        Parameters
        ----------
        pose      : pose odom terakhir
        wheels    : state roda terakhir
        command   : (linear, angular) cmd_vel terakhir yang diterima
        effective : (linear, angular) yang dipakai integrasi (setelah timeout)
        stale     : True jika command timeout
        extra_lines : baris teks tambahan (keybindings dsb.)
        """
        sb_x = self.render_width
        sb_w = SIDEBAR_WIDTH
        sb_h = self.screen_height

        pygame.draw.rect(self.screen, SB_BG, (sb_x, 0, sb_w, sb_h))
        pygame.draw.rect(self.screen, SB_ACCENT, (sb_x, 0, 2, sb_h))

        pad  = 14
        rpad = sb_w - 14

        # ── Header strip ─────────────────────────────────────────────
        pygame.draw.rect(self.screen, SB_HEADER_BG, (sb_x + 2, 0, sb_w - 2, 48))
        title_surf, _ = self.font_title.render("FAKE  DIFF  DRIVE", SB_ACCENT)
        self.screen.blit(title_surf, (sb_x + pad, 15))
        model_surf, model_rect = self.font_label.render(
            self.config.model.name, SB_TEXT_DIM)
        self.screen.blit(model_surf, (sb_x + rpad - model_rect.width, 18))
        y = 60

        # ── Pose ─────────────────────────────────────────────────────
        y = self._sb_section_header(y, sb_x + pad, "ODOMETRY")
        y = self._sb_kv_row(y, sb_x + pad, sb_x + rpad, "Position",
                            f"({pose.x:.3f}, {pose.y:.3f})")
        y = self._sb_kv_row(y, sb_x + pad, sb_x + rpad, "Heading",
                            f"{math.degrees(pose.heading):.1f} deg")
        y += 4

        # ── Command ──────────────────────────────────────────────────
        y = self._sb_divider(y, sb_x, sb_w)
        y = self._sb_section_header(y, sb_x + pad, "CMD_VEL")
        y = self._sb_kv_row(y, sb_x + pad, sb_x + rpad, "Received",
                            f"{command[0]:.2f} m/s  {command[1]:.2f} r/s")
        y = self._sb_kv_row(y, sb_x + pad, sb_x + rpad, "Effective",
                            f"{effective[0]:.2f} m/s  {effective[1]:.2f} r/s",
                            val_color=SB_AMBER if stale else SB_TEXT)
        px = sb_x + pad + 8
        px += self._sb_status_pill(px, y, "STALE", stale, SB_RED) + 5
        self._sb_status_pill(px, y, "CLAMP", self.config.clamp_command, SB_AMBER)
        y += 24

        # ── Wheels ───────────────────────────────────────────────────
        y = self._sb_divider(y, sb_x, sb_w)
        y = self._sb_section_header(y, sb_x + pad, "WHEELS")
        for i, name in ((LEFT, "Left"), (RIGHT, "Right")):
            y = self._sb_kv_row(y, sb_x + pad, sb_x + rpad, f"{name} pos",
                                f"{wheels.position[i]:.2f} rad")
            y = self._sb_kv_row(y, sb_x + pad, sb_x + rpad, f"{name} vel",
                                f"{wheels.velocity[i]:.2f} rad/s")
        y += 4

        # ── Extra ────────────────────────────────────────────────────
        if extra_lines:
            y = self._sb_divider(y, sb_x, sb_w)
            for line in extra_lines:
                surf, _ = self.font_label.render(line, SB_TEXT_DIM)
                self.screen.blit(surf, (sb_x + pad, y))
                y += 15

    def _sb_divider(self, y: int, sb_x: int, sb_w: int) -> int:
        """Thin horizontal separator line."""
        pygame.draw.rect(self.screen, SB_BORDER, (sb_x + 2, y, sb_w - 4, 1))
        return y + 9

    def _sb_section_header(self, y: int, pad: int, title: str) -> int:
        """Section label with a left-side teal pip."""
        pygame.draw.rect(self.screen, SB_ACCENT, (pad, y + 1, 3, 14))
        surf, _ = self.font_sec.render(title, SB_ACCENT)
        self.screen.blit(surf, (pad + 8, y))
        return y + 22

    def _sb_kv_row(self, y: int, pad: int, rpad: int,
                   key: str, value: str,
                   val_color: tuple = SB_TEXT) -> int:
        """Left-aligned dim label, right-aligned bold value."""
        k, _ = self.font_label.render(key.upper(), SB_TEXT_DIM)
        v, v_rect = self.font_value.render(value, val_color)
        self.screen.blit(k, (pad + 8, y + 1))
        self.screen.blit(v, (rpad - v_rect.width, y))
        return y + 17

    def _sb_status_pill(self, x: int, y: int, label: str,
                        active: bool,
                        on_color: tuple,
                        off_color: tuple = SB_BTN_INACT) -> int:
        """Inline rounded pill indicator. Returns pill width."""
        col = on_color if active else off_color
        tc  = SB_BG    if active else SB_TEXT_DIM
        surf, surf_rect = self.font_label.render(label, tc)
        pw = surf_rect.width + 10
        ph = 14
        pygame.draw.rect(self.screen, col, pygame.Rect(x, y, pw, ph), border_radius=7)
        if not active:
            pygame.draw.rect(self.screen, SB_BORDER,
                             pygame.Rect(x, y, pw, ph), 1, border_radius=7)
        self.screen.blit(surf, (x + 5, y + 1))
        return pw

    # ------------------------------------------------------------------

    def flip(self, fps: int = 60):
        pygame.display.flip()
        self.clock.tick(fps)
