from __future__ import annotations

from typing import Protocol, runtime_checkable

from attention.domain.models import CompletionChoice


@runtime_checkable
class IPromptService(Protocol):
    """
    Abstract UI port for user prompts. Keeps the session logic decoupled from Qt widgets.
    """

    def ask_starter_task(self, prompt_text: str) -> str | None:
        """Return the task the user typed, or None if they dismissed the prompt."""
        ...

    def notify_completion(self) -> CompletionChoice: ...

    def warning(self, title: str, text: str) -> None: ...
