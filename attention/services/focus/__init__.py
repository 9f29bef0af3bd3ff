from .scheduler import CountdownScheduler
from .session_controller import SessionController
from .session_settings import SessionSettings
from .start_orchestrator import StartOrchestrator
from .state_machine import SessionAlreadyActiveError, transition

__all__ = [
    "CountdownScheduler",
    "SessionAlreadyActiveError",
    "SessionController",
    "SessionSettings",
    "StartOrchestrator",
    "transition",
]
