from __future__ import annotations

import logging
from collections.abc import Sequence

from PyQt6.QtWidgets import QApplication

from attention.di.container import Container
from attention.services.config.app_config import build_app_config
from attention.utils.constants import APP_NAME, APP_ORG


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container,
    and launches the main window.
    """
    config = build_app_config()
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(
        "Starting %s %s (config: %s)", APP_NAME, config.get_version(), config.loaded_from
    )

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container(config=config)
    win = container.build_main_window(app_title=APP_NAME)
    win.show()

    return app.exec()
