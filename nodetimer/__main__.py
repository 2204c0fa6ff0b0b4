"""Allow running NØDE timer as a module: python -m nodetimer."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import Database
from .app import NodeTimerApp


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    database = Database()
    database.init()

    app = QApplication(sys.argv)
    app.setApplicationName("NØDE Timer")
    app.setOrganizationName("NODE")

    window = NodeTimerApp(database=database)
    window.show()

    exit_code = app.exec()
    database.dispose()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
