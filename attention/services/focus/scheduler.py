from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, Qt, QTimer

from attention.domain.interfaces import IScheduler


class CountdownScheduler(QObject):
    """QTimer-backed tick source living on the GUI thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._on_tick: Callable[[], None] | None = None
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_ticking(self) -> bool:
        return self._on_tick is not None and self._timer.isActive()

    def start_ticking(self, interval_seconds: float, on_tick: Callable[[], None]) -> None:
        if interval_seconds <= 0:
            raise ValueError("Tick interval must be positive")
        self._on_tick = on_tick
        # QTimer.start() on an active timer restarts the interval.
        self._timer.start(max(1, int(round(interval_seconds * 1000))))

    def stop_ticking(self) -> None:
        self._timer.stop()
        self._on_tick = None

    def _on_timeout(self) -> None:
        callback = self._on_tick
        if callback is None:
            return
        callback()


def default_scheduler_factory() -> IScheduler:
    return CountdownScheduler()
