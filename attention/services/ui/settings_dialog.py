from __future__ import annotations

from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLineEdit,
    QMessageBox,
    QSpinBox,
    QVBoxLayout,
)

from attention.domain.models import MusicSource
from attention.services.focus.session_settings import SessionSettings

MUSIC_SOURCE_LABELS: dict[str, MusicSource] = {
    "Apple Music": MusicSource.APPLE_MUSIC,
    "Spotify": MusicSource.SPOTIFY,
    "Other": MusicSource.OTHER,
}


def select_music_source(combo: QComboBox, source: MusicSource) -> None:
    for idx, label in enumerate(MUSIC_SOURCE_LABELS):
        if MUSIC_SOURCE_LABELS[label] is source:
            combo.setCurrentIndex(idx)
            return


class SessionSettingsDialog(QDialog):
    """Edit default session settings persisted via QSettings."""

    def __init__(self, *, session_settings: SessionSettings, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Session Settings")
        self._settings = session_settings

        self.duration_spin = QSpinBox(self)
        self.duration_spin.setRange(1, 240)
        self.duration_spin.setValue(session_settings.get_duration_min())

        self.clear_desktop_cb = QCheckBox("Clear desktop on session start", self)
        self.clear_desktop_cb.setChecked(session_settings.get_clear_desktop())
        self.restore_desktop_cb = QCheckBox("Restore desktop when the session ends", self)
        self.restore_desktop_cb.setChecked(session_settings.get_restore_desktop_on_end())

        self.start_music_cb = QCheckBox("Start music automatically", self)
        self.start_music_cb.setChecked(session_settings.get_start_music())
        self.music_source_combo = QComboBox(self)
        self.music_source_combo.addItems(list(MUSIC_SOURCE_LABELS.keys()))
        select_music_source(self.music_source_combo, session_settings.get_music_source())
        self.pause_music_cb = QCheckBox("Pause music when the session ends", self)
        self.pause_music_cb.setChecked(session_settings.get_pause_music_on_end())

        self.starter_task_cb = QCheckBox("Show starter task prompt", self)
        self.starter_task_cb.setChecked(session_settings.get_show_starter_task())
        self.prompt_edit = QLineEdit(self)
        self.prompt_edit.setText(session_settings.get_starter_task_prompt())

        form = QFormLayout()
        form.addRow("Duration (minutes)", self.duration_spin)
        form.addRow("", self.clear_desktop_cb)
        form.addRow("", self.restore_desktop_cb)
        form.addRow("", self.start_music_cb)
        form.addRow("Music source", self.music_source_combo)
        form.addRow("", self.pause_music_cb)
        form.addRow("", self.starter_task_cb)
        form.addRow("Starter task prompt", self.prompt_edit)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel, self
        )
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(buttons)

        self.start_music_cb.toggled.connect(self._on_start_music_toggled)
        self.starter_task_cb.toggled.connect(self.prompt_edit.setEnabled)
        self._on_start_music_toggled(self.start_music_cb.isChecked())
        self.prompt_edit.setEnabled(self.starter_task_cb.isChecked())

    def _on_start_music_toggled(self, checked: bool) -> None:
        self.music_source_combo.setEnabled(checked)
        self.pause_music_cb.setEnabled(checked)

    def _on_accept(self) -> None:
        prompt = self.prompt_edit.text().strip()
        if self.starter_task_cb.isChecked() and not prompt:
            QMessageBox.warning(self, "Missing prompt", "Enter a starter task prompt or turn it off.")
            return
        self._settings.set_duration_min(self.duration_spin.value())
        self._settings.set_clear_desktop(self.clear_desktop_cb.isChecked())
        self._settings.set_restore_desktop_on_end(self.restore_desktop_cb.isChecked())
        self._settings.set_start_music(self.start_music_cb.isChecked())
        self._settings.set_music_source(MUSIC_SOURCE_LABELS[self.music_source_combo.currentText()])
        self._settings.set_pause_music_on_end(self.pause_music_cb.isChecked())
        self._settings.set_show_starter_task(self.starter_task_cb.isChecked())
        if prompt:
            self._settings.set_starter_task_prompt(prompt)
        self.accept()
