"""Main application window: feed view and post detail view."""

import logging

from PyQt6.QtWidgets import QMainWindow, QStackedWidget

from src.core.config_manager import ConfigManager
from src.core.i18n_manager import I18nManager
from src.gui.detail_controller import DetailController
from src.gui.feed_controller import FeedController
from src.gui.widgets.feed_widget import FeedWidget
from src.gui.widgets.post_detail_widget import PostDetailWidget

logger = logging.getLogger("postscroll")

FEED_VIEW = 0
DETAIL_VIEW = 1


class MainWindow(QMainWindow):
    """Stacked views standing in for routes: the feed ("/") and a post ("/post/<id>").

    The feed widget stays alive while a post is shown, so returning to
    the list keeps the search and the pages already loaded.
    """

    def __init__(
        self,
        feed_controller: FeedController,
        detail_controller: DetailController,
        config: ConfigManager,
    ):
        super().__init__()
        self._config = config
        self._i18n = I18nManager()
        self._feed_controller = feed_controller
        self._detail_controller = detail_controller

        self.setWindowTitle(self._i18n.get("app.title"))
        self.setMinimumSize(900, 600)
        self.setStyleSheet("QMainWindow, QWidget { background-color: #111827; color: white; }")

        self._init_ui()

    def _init_ui(self):
        self._stack = QStackedWidget()

        self._feed_widget = FeedWidget(
            self._feed_controller,
            skeleton_count=self._config.get("feed.skeleton_count", 12),
            debounce_ms=self._config.get("feed.scroll_debounce_ms", 100),
        )
        self._detail_widget = PostDetailWidget(self._detail_controller)

        self._feed_widget.post_selected.connect(self.open_post)
        self._detail_widget.back_requested.connect(self.show_feed)

        self._stack.addWidget(self._feed_widget)    # FEED_VIEW
        self._stack.addWidget(self._detail_widget)  # DETAIL_VIEW
        self.setCentralWidget(self._stack)

    def open_post(self, post_id: int):
        logger.info(f"Opening post {post_id}")
        self._detail_controller.request(post_id)
        self._stack.setCurrentIndex(DETAIL_VIEW)

    def show_feed(self):
        self._stack.setCurrentIndex(FEED_VIEW)

    def closeEvent(self, event):
        self._feed_controller.shutdown()
        self._detail_controller.shutdown()
        super().closeEvent(event)
