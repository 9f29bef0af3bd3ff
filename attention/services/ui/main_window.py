from __future__ import annotations

import logging
from dataclasses import replace

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QCloseEvent
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from attention.domain.interfaces import IApplicationDirectory, IHistoryStore
from attention.domain.models import (
    Completed,
    Paused,
    Running,
    SessionConfiguration,
    SessionState,
    status_text,
)
from attention.services.focus.session_controller import SessionController
from attention.services.focus.session_settings import SessionSettings
from attention.services.focus.state_machine import SessionAlreadyActiveError
from attention.services.ui.settings_dialog import (
    MUSIC_SOURCE_LABELS,
    SessionSettingsDialog,
    select_music_source,
)

logger = logging.getLogger(__name__)

_PALETTE = {
    "green": ("#0f3d28", "#9ff7c7"),
    "amber": ("#4a3609", "#ffd483"),
    "red": ("#4a1111", "#ff9f9f"),
}


def format_countdown(seconds: int) -> str:
    mins, sec = divmod(max(0, int(seconds)), 60)
    return f"{mins:02d}:{sec:02d}"


def color_level(remaining: int, total: int) -> str:
    if total <= 0 or remaining > total * 0.2:
        return "green"
    if remaining > total * 0.05:
        return "amber"
    return "red"


class MainWindow(QMainWindow):
    """Thin PyQt window: session form, countdown and controls. All logic lives in the controller."""

    def __init__(
        self,
        *,
        controller: SessionController,
        session_settings: SessionSettings,
        history: IHistoryStore,
        apps: IApplicationDirectory,
        app_title: str = "Attention",
    ) -> None:
        super().__init__()
        self.setWindowTitle(app_title)
        self.setMinimumWidth(380)

        self.controller = controller
        self.session_settings = session_settings
        self.history = history
        self.apps = apps

        # Session form
        self.duration_spin = QSpinBox(self)
        self.duration_spin.setRange(1, 240)
        self.duration_spin.setSuffix(" min")
        self.clear_desktop_cb = QCheckBox("Clear desktop", self)
        self.app_combo = QComboBox(self)
        self.start_music_cb = QCheckBox("Start music", self)
        self.music_source_combo = QComboBox(self)
        self.music_source_combo.addItems(list(MUSIC_SOURCE_LABELS.keys()))
        self.starter_task_cb = QCheckBox("Show starter task prompt", self)

        form = QFormLayout()
        form.addRow("Duration", self.duration_spin)
        form.addRow("", self.clear_desktop_cb)
        form.addRow("Open app", self.app_combo)
        form.addRow("", self.start_music_cb)
        form.addRow("Music source", self.music_source_combo)
        form.addRow("", self.starter_task_cb)

        # Countdown
        self.time_label = QLabel(format_countdown(0), self)
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.status_label = QLabel(self)
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.task_label = QLabel(self)
        self.task_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.task_label.setWordWrap(True)
        self.today_label = QLabel(self)
        self.today_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.start_btn = QPushButton("Start Focus Session", self)
        self.pause_btn = QPushButton("Pause", self)
        self.end_btn = QPushButton("End", self)
        buttons = QHBoxLayout()
        buttons.addWidget(self.start_btn)
        buttons.addWidget(self.pause_btn)
        buttons.addWidget(self.end_btn)

        central = QWidget(self)
        root = QVBoxLayout(central)
        root.addLayout(form)
        root.addWidget(self.time_label)
        root.addWidget(self.status_label)
        root.addWidget(self.task_label)
        root.addLayout(buttons)
        root.addWidget(self.today_label)
        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar(self))

        self.act_settings = QAction("Settings…", self, triggered=self._open_settings)
        self.menuBar().addMenu("&Session").addAction(self.act_settings)

        # Signals
        self.start_btn.clicked.connect(self.start_session)
        self.pause_btn.clicked.connect(self.controller.toggle_pause)
        self.end_btn.clicked.connect(self.controller.end)
        self.start_music_cb.toggled.connect(self.music_source_combo.setEnabled)
        self.controller.state_changed.connect(self._on_state_changed)
        self.controller.tick.connect(self._on_tick)
        self.controller.session_finished.connect(lambda _record: self.refresh_today())
        self.controller.history_failed.connect(self.show_status)
        self.controller.break_requested.connect(
            lambda: self.show_status("Break time. Start a new session when you're ready.")
        )

        self.load_applications()
        self.load_defaults()
        self.refresh_today()
        self._on_state_changed(self.controller.state)

    # ---------- Public helpers ----------

    def load_applications(self) -> None:
        self.app_combo.clear()
        self.app_combo.addItem("None", None)
        try:
            installed = self.apps.list_applications()
        except OSError:
            logger.exception("Could not list installed applications")
            installed = []
        for app in installed:
            self.app_combo.addItem(app.name, app.identifier)

    def load_defaults(self) -> None:
        s = self.session_settings
        self.duration_spin.setValue(s.get_duration_min())
        self.clear_desktop_cb.setChecked(s.get_clear_desktop())
        self.start_music_cb.setChecked(s.get_start_music())
        select_music_source(self.music_source_combo, s.get_music_source())
        self.music_source_combo.setEnabled(self.start_music_cb.isChecked())
        self.starter_task_cb.setChecked(s.get_show_starter_task())
        identifier = s.get_app_to_open()
        idx = self.app_combo.findData(identifier) if identifier else 0
        self.app_combo.setCurrentIndex(max(0, idx))

    def build_configuration(self) -> SessionConfiguration:
        """Stored defaults, overridden by whatever the form currently shows."""
        return replace(
            self.session_settings.build_configuration(),
            duration=self.duration_spin.value() * 60,
            clear_desktop=self.clear_desktop_cb.isChecked(),
            app_to_open=self.app_combo.currentData(),
            start_music=self.start_music_cb.isChecked(),
            music_source=MUSIC_SOURCE_LABELS[self.music_source_combo.currentText()],
            show_starter_task=self.starter_task_cb.isChecked(),
        )

    def start_session(self) -> bool:
        config = self.build_configuration()
        try:
            self.controller.start(config)
        except (SessionAlreadyActiveError, ValueError) as exc:
            QMessageBox.warning(self, "Cannot start session", str(exc))
            return False
        # The form choices become the defaults for the next launch.
        self.session_settings.save_configuration(config)
        return True

    def show_starter_task(self, task: str) -> None:
        self.task_label.setText(f"First step: {task}")

    def refresh_today(self) -> None:
        try:
            total = self.history.total_focus_time(self.history.today())
        except (OSError, ValueError):
            logger.exception("Could not read session history")
            self.today_label.setText("Today: history unavailable")
            return
        self.today_label.setText(f"Today: {int(total // 60)} min focused")

    # ---------- Slots ----------

    def _on_state_changed(self, state: SessionState) -> None:
        active = isinstance(state, (Running, Paused))
        self.start_btn.setEnabled(not active)
        self.pause_btn.setEnabled(active)
        self.end_btn.setEnabled(active)
        self.pause_btn.setText("Resume" if isinstance(state, Paused) else "Pause")
        for w in (
            self.duration_spin,
            self.clear_desktop_cb,
            self.app_combo,
            self.start_music_cb,
            self.starter_task_cb,
        ):
            w.setEnabled(not active)
        self.music_source_combo.setEnabled(not active and self.start_music_cb.isChecked())
        self.status_label.setText(status_text(state))
        if isinstance(state, (Running, Paused)):
            self.time_label.setText(format_countdown(state.remaining))
        elif isinstance(state, Completed):
            self.time_label.setText(format_countdown(0))
        else:
            self.time_label.setText(format_countdown(self.duration_spin.value() * 60))
            self._set_color("green")
            self.task_label.clear()

    def _on_tick(self, remaining: int, total: int) -> None:
        self.time_label.setText(format_countdown(remaining))
        self._set_color(color_level(remaining, total))

    def _set_color(self, level: str) -> None:
        bg, fg = _PALETTE.get(level, _PALETTE["green"])
        self.time_label.setStyleSheet(
            "font-size: 34px; font-weight: 700; padding: 10px; "
            f"border-radius: 10px; background: {bg}; color: {fg};"
        )

    def show_status(self, text: str) -> None:
        self.statusBar().showMessage(text, 5000)

    def _open_settings(self) -> None:
        dlg = SessionSettingsDialog(session_settings=self.session_settings, parent=self)
        if dlg.exec() and not self.controller.is_active:
            self.load_defaults()
            self._on_state_changed(self.controller.state)

    def closeEvent(self, event: QCloseEvent) -> None:
        # Closing mid-session still records it.
        if self.controller.is_active:
            self.controller.end()
        super().closeEvent(event)
