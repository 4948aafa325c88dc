"""
frame_converter.py — Konversi antara Odom Frame (ROS) dan Screen Frame (Pygame).

Odom Frame (REP-103):
    Origin (0, 0) = posisi awal robot
    X → kanan, Y → atas, θ = 0 menghadap +X, positif CCW

Screen Frame (Pygame):
    Origin (0, 0) di pojok kiri atas layar
    X → kanan
    Y → bawah

Odom frame tidak punya batas, jadi area render berupa jendela `view_size`
meter yang berpusat di `center` (bisa digeser mengikuti robot).
render_width bisa lebih kecil dari screen_width jika ada sidebar.
"""


class FrameConverter:
    """Mengonversi koordinat dan sudut antara odom frame dan screen frame."""

    def __init__(self, screen_width: int, screen_height: int,
                 view_size: float = 4.0,
                 render_width: int | None = None):
        """
        Parameters
        ----------
        screen_width : int
            Lebar total layar Pygame (termasuk sidebar).
        screen_height : int
            Tinggi layar Pygame dalam pixel.
        view_size : float
            Sisi terpendek area render dalam meter.
        render_width : int | None
            Lebar area render (pixel). Jika None, sama dengan screen_width.
            Sidebar menempati screen_width - render_width di sisi kanan.
        """
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.render_width = render_width if render_width is not None else screen_width
        self.view_size = view_size

        # Pixel per meter — sisi terpendek area render = view_size meter
        self.scale = min(self.render_width, screen_height) / view_size

        self.center_x = 0.0
        self.center_y = 0.0

    # ------------------------------------------------------------------

    def set_center(self, wx: float, wy: float):
        """Geser pusat view ke posisi odom (meter)."""
        self.center_x = wx
        self.center_y = wy

    def follow(self, wx: float, wy: float, margin: float = 0.25):
        """Geser view hanya jika (wx, wy) keluar dari area tengah.

        margin : fraksi view_size dari tepi yang memicu pergeseran.
        """
        half_w = self.render_width / self.scale / 2.0
        half_h = self.screen_height / self.scale / 2.0
        limit_x = half_w * (1.0 - 2.0 * margin)
        limit_y = half_h * (1.0 - 2.0 * margin)

        dx = wx - self.center_x
        dy = wy - self.center_y
        if dx > limit_x:
            self.center_x = wx - limit_x
        elif dx < -limit_x:
            self.center_x = wx + limit_x
        if dy > limit_y:
            self.center_y = wy - limit_y
        elif dy < -limit_y:
            self.center_y = wy + limit_y

    # ------------------------------------------------------------------
    # World → Screen
    # ------------------------------------------------------------------

    def world_to_screen(self, wx: float, wy: float) -> tuple[int, int]:
        """Konversi posisi odom (meter) ke posisi screen (pixel). Y di-flip."""
        px = (wx - self.center_x) * self.scale + self.render_width / 2.0
        py = self.screen_height / 2.0 - (wy - self.center_y) * self.scale
        return int(round(px)), int(round(py))

    def world_length_to_px(self, length_m: float) -> int:
        """Konversi panjang/jarak odom (meter) ke pixel."""
        return int(round(abs(length_m) * self.scale))

    def theta_world_to_screen(self, theta: float) -> float:
        """Konversi sudut odom ke screen. Y screen terbalik → negate."""
        return -theta

    # ------------------------------------------------------------------
    # Screen → World
    # ------------------------------------------------------------------

    def screen_to_world(self, px: int, py: int) -> tuple[float, float]:
        """Konversi posisi screen (pixel) ke posisi odom (meter)."""
        wx = (px - self.render_width / 2.0) / self.scale + self.center_x
        wy = (self.screen_height / 2.0 - py) / self.scale + self.center_y
        return wx, wy

    def visible_bounds(self) -> tuple[float, float, float, float]:
        """(x_min, x_max, y_min, y_max) area odom yang terlihat."""
        x_min, y_max = self.screen_to_world(0, 0)
        x_max, y_min = self.screen_to_world(self.render_width, self.screen_height)
        return x_min, x_max, y_min, y_max
