"""
scheduler.py — Satu scheduler untuk beberapa task periodik bernama.

Node ROS2 membuat satu timer pada `base_period` (periode terkecil) yang
memanggil `poll(now)`. Task yang sudah jatuh tempo dijalankan sesuai urutan
registrasi, jadi task yang didaftarkan lebih dulu (mis. "control") selalu
jalan sebelum task berikutnya ("drive_information") pada poll yang sama.

Task yang terlambat beberapa periode hanya dijalankan sekali; deadline
berikutnya digeser melewati `now` (tidak ada burst catch-up).
"""

from dataclasses import dataclass
from typing import Callable


@dataclass
class PeriodicTask:
    name: str
    period: float
    callback: Callable[[float], None]
    next_due: float = 0.0
    run_count: int = 0


class TaskScheduler:
    """Scheduler task periodik bernama (tanpa thread, di-drive dari luar)."""

    def __init__(self):
        self._tasks: list[PeriodicTask] = []
        self._started = False

    def add(self, name: str, period: float, callback: Callable[[float], None]):
        """Daftarkan task. `callback(now)` dipanggil tiap `period` detik."""
        if period <= 0.0:
            raise ValueError(f"task '{name}': period must be positive")
        if any(t.name == name for t in self._tasks):
            raise ValueError(f"task '{name}' already registered")
        self._tasks.append(PeriodicTask(name, period, callback))

    def start(self, now: float):
        """Set deadline pertama semua task ke `now + period`."""
        for task in self._tasks:
            task.next_due = now + task.period
        self._started = True

    def poll(self, now: float) -> list[str]:
        """Jalankan semua task yang jatuh tempo. Return nama task yang jalan."""
        if not self._started:
            self.start(now)
            return []

        ran = []
        for task in self._tasks:
            if now < task.next_due:
                continue
            task.callback(now)
            task.run_count += 1
            ran.append(task.name)

            task.next_due += task.period
            if task.next_due <= now:
                task.next_due = now + task.period
        return ran

    # ------------------------------------------------------------------

    @property
    def base_period(self) -> float:
        if not self._tasks:
            raise ValueError("no tasks registered")
        return min(t.period for t in self._tasks)

    @property
    def task_names(self) -> list[str]:
        return [t.name for t in self._tasks]

    def get(self, name: str) -> PeriodicTask:
        for task in self._tasks:
            if task.name == name:
                return task
        raise KeyError(name)
