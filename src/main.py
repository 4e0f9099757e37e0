"""PostScroll application entry point."""

import sys

from PyQt6.QtWidgets import QApplication

from src.core.config_manager import ConfigManager
from src.core.logger import setup_logger, install_qt_message_handler
from src.core.i18n_manager import I18nManager
from src.adapters.jsonplaceholder_adapter import JSONPlaceholderAdapter
from src.services.feed_service import FeedService
from src.services.translation import StaticTranslator
from src.gui.feed_controller import FeedController
from src.gui.detail_controller import DetailController
from src.gui.main_window import MainWindow


def main():
    """Main entry point for PostScroll.

    Startup sequence:
    1. ConfigManager init (loads or creates settings.yaml)
    2. Logger init (reads log_level from config)
    3. I18nManager init (reads locale from config)
    4. Adapter + service creation
    5. Translation table load
    6. QApplication creation
    7. Controllers + MainWindow creation
    8. Initial feed fetch, window.show(), event loop
    """
    # 1. ConfigManager (loads or creates settings.yaml)
    config = ConfigManager()

    # 2. Logger (reads log_level from config)
    log_level = config.get("app.log_level", "INFO")
    mask_logs = config.get("security.mask_logs", True)
    logger = setup_logger(log_level=log_level, mask_logs=mask_logs)
    install_qt_message_handler(logger)
    logger.info("PostScroll starting...")

    # 3. I18nManager (reads locale from config)
    i18n = I18nManager()
    locale = config.get("app.locale", "ru_RU")
    i18n.load_locale(locale)

    # 4. Adapter + service
    source = JSONPlaceholderAdapter(
        base_url=config.get("api.base_url", JSONPlaceholderAdapter.BASE_URL),
        timeout=config.get("api.timeout", 30),
        mock_mode=config.get("api.mock_mode", False),
    )
    feed_service = FeedService(source)

    # 5. Static translation table
    translator = StaticTranslator.load(config.get_translation_table_path())

    # 6. QApplication
    app = QApplication(sys.argv)

    # 7. Controllers + window
    page_size = config.get("feed.page_size", 12)
    feed_controller = FeedController(feed_service, page_size=page_size)
    detail_controller = DetailController(feed_service, translator)
    window = MainWindow(feed_controller, detail_controller, config)

    # 8. Fetch, show, run
    feed_controller.initialize()
    window.show()
    logger.info("PostScroll UI ready")

    exit_code = app.exec()

    logger.info("PostScroll shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
