"""App constants and utilities."""

from .constants import APP_DIR_NAME, APP_NAME, APP_ORG, HISTORY_FILE

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "APP_DIR_NAME",
    "HISTORY_FILE",
]
