"""Qt-side controller of the post feed (initial fetch, search, load more)."""

import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from src.core.i18n_manager import I18nManager
from src.core.types import FeedState
from src.gui.workers import PostFetchWorker, WorkerLauncher, start_worker
from src.services.feed_service import FeedService
from src.services.post_feed import PostFeed, DEFAULT_PAGE_SIZE

logger = logging.getLogger("postscroll")


class FeedController(QObject):
    """Owns a PostFeed and drives its one network read.

    All state changes happen on the thread that owns the controller (the
    UI thread); the worker only delivers results through queued signals.
    Every change is published as a FeedState through ``state_changed``.
    """

    state_changed = pyqtSignal(object)   # FeedState

    def __init__(
        self,
        feed_service: FeedService,
        page_size: int = DEFAULT_PAGE_SIZE,
        launcher: WorkerLauncher = start_worker,
        parent=None,
    ):
        super().__init__(parent)
        self._service = feed_service
        self._feed = PostFeed(page_size)
        self._launch = launcher
        self._i18n = I18nManager()
        self._worker: Optional[PostFetchWorker] = None

    def initialize(self) -> bool:
        """Fetch the whole collection. Only the first call does anything."""
        if not self._feed.begin_loading():
            return False

        self._worker = PostFetchWorker(self._service)
        self._worker.posts_ready.connect(self._on_posts_ready)
        self._worker.error_occurred.connect(self._on_error)
        self._worker.fetch_posts()

        self._publish()
        self._launch(self._worker)
        return True

    def set_search_query(self, query: str) -> None:
        if self._feed.set_search_query(query):
            self._publish()

    def load_more(self) -> bool:
        if not self._feed.load_more():
            return False
        self._publish()
        return True

    def shutdown(self) -> None:
        """Drop any pending result and wait for the worker thread."""
        if self._worker is not None:
            self._worker.stop()
            self._worker.wait(2000)

    @property
    def state(self) -> FeedState:
        return self._feed.snapshot()

    @property
    def revision(self) -> int:
        return self._feed.revision

    @property
    def loading(self) -> bool:
        return self._feed.loading

    @property
    def has_more(self) -> bool:
        return self._feed.has_more

    # ------------------------------------------------------------------
    # Worker callbacks
    # ------------------------------------------------------------------

    def _on_posts_ready(self, request_id: int, posts: list):
        self._feed.set_posts(posts)
        self._publish()

    def _on_error(self, request_id: int, error_key: str):
        self._feed.set_error(self._i18n.get(error_key))
        self._publish()

    def _publish(self):
        self.state_changed.emit(self._feed.snapshot())
