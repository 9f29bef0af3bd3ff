from __future__ import annotations

from .prompts import IPromptService

__all__ = [
    "IPromptService",
]
