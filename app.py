import logging
import sys
from PySide6.QtCore import QCoreApplication
from BackEnd.core.config import AppConfig
from BackEnd.core.logging_setup import setup_logging
from BackEnd.core.paths import log_dir, store_dir
from BackEnd.repos.store import JsonFileStore
from BackEnd.services.planner import StudyPlanner
from BackEnd.services.sound_service import SoundPlayer

logger = logging.getLogger("app")

def build_planner(config=None):
    """Wire a planner onto the on-disk store described by ``config``."""
    config = config or AppConfig.from_env()
    store = JsonFileStore(store_dir(config.data_dir))
    return StudyPlanner(
        store,
        sound_player=SoundPlayer(config.sounds_dir),
        seed_welcome=config.seed_welcome,
    )

def main():
    # Headless host: a presentation layer attaches to the planner's signals and dispatch().
    config = AppConfig.from_env()
    app = QCoreApplication(sys.argv)
    setup_logging(log_dir=log_dir(config.data_dir), console_level=config.log_level)
    planner = build_planner(config)
    planner.notified.connect(logger.info)
    planner.warning.connect(logger.warning)
    planner.rejected.connect(logger.warning)
    logger.info("Study planner ready: %s tasks, streak %s", planner.task_count, planner.current_streak)
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
