from __future__ import annotations

"""Coffee Time entry point.

Sets up logging, opens the SQLite store, restores progression and history,
and starts the main window.
"""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from coffeetime import config
from coffeetime.ai.phrases import RestPhraseService
from coffeetime.core.audio import CuePlayer
from coffeetime.core.progression import ProgressionStore
from coffeetime.core.rewards import SelectionGuard
from coffeetime.core.session import SessionLog, SessionStateMachine
from coffeetime.data.storage import open_storage
from coffeetime.ui.main_window import MainWindow
from coffeetime.ui.styles import apply_theme


logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def main() -> int:
    """Wire the application together and run the Qt event loop."""
    setup_logging()
    app = QApplication(sys.argv)
    apply_theme(app)

    storage = open_storage(config.DB_PATH)
    logger.info("Using database at %s", storage.db_path)

    store = ProgressionStore(storage)
    progression = store.load()
    logger.info("Loaded level %s with %s XP", progression.level, progression.xp)

    session_log = SessionLog(storage)
    session_log.load()

    cue_player = CuePlayer(config.SOUND_CACHE_DIR)
    machine = SessionStateMachine(store, session_log, cue_player=cue_player)

    window = MainWindow(
        machine=machine,
        store=store,
        guard=SelectionGuard(store),
        cue_player=cue_player,
        phrase_source=RestPhraseService(),
    )
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
