from __future__ import annotations

from .qt_prompts import QtPromptService

__all__ = [
    "QtPromptService",
]
