from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QInputDialog, QLineEdit, QMessageBox

from attention.domain.models import CompletionChoice
from attention.services.ui.ports.prompts import IPromptService


class QtPromptService(IPromptService):
    """Qt-backed implementation for session prompts and notices."""

    def __init__(self, parent: Any | None = None) -> None:
        self._parent = parent

    def set_parent(self, parent: Any | None) -> None:
        self._parent = parent

    def ask_starter_task(self, prompt_text: str) -> str | None:
        text, ok = QInputDialog.getText(
            self._parent,
            "Ready to focus?",
            prompt_text,
            QLineEdit.EchoMode.Normal,
            "",
        )
        if not ok:
            return None
        return text.strip() or None

    def notify_completion(self) -> CompletionChoice:
        box = QMessageBox(self._parent)
        box.setIcon(QMessageBox.Icon.Information)
        box.setWindowTitle("Focus Session Complete!")
        box.setText("Great job. Take a break or start another session?")
        break_btn = box.addButton("Start Break", QMessageBox.ButtonRole.AcceptRole)
        box.addButton("Close", QMessageBox.ButtonRole.RejectRole)
        box.exec()
        if box.clickedButton() is break_btn:
            return CompletionChoice.START_BREAK
        return CompletionChoice.CLOSE

    def warning(self, title: str, text: str) -> None:
        QMessageBox.warning(self._parent, title, text)
