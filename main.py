# main.py
from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn

from PySide6.QtWidgets import QApplication

from rubik_engine import config
from rubik_engine.app.main_window import MainWindow


def main() -> NoReturn:
    """Punto de entrada de la aplicación.

    Configura logging (nivel en la variable de entorno `RUBIK_LOG_LEVEL`),
    crea la instancia de `QApplication`, construye la ventana principal
    (`MainWindow`) y ejecuta el loop de eventos de Qt.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    logging.basicConfig(
        level=os.environ.get(config.LOG_LEVEL_ENV, config.DEFAULT_LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    w = MainWindow()
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
