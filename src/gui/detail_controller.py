"""Qt-side controller of the post detail view."""

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from src.core.i18n_manager import I18nManager
from src.core.types import DetailState
from src.gui.workers import PostFetchWorker, WorkerLauncher, start_worker
from src.services.feed_service import FeedService
from src.services.post_detail import PostDetail
from src.services.translation import StaticTranslator

logger = logging.getLogger("postscroll")


class DetailController(QObject):
    """Loads one post with its comments and exposes the translation toggle.

    Navigating to another post while a fetch is still running starts a new
    fetch; the old worker is told to stop and any answer it still delivers
    is discarded by generation.
    """

    state_changed = pyqtSignal(object)   # DetailState

    def __init__(
        self,
        feed_service: FeedService,
        translator: StaticTranslator,
        launcher: WorkerLauncher = start_worker,
        parent=None,
    ):
        super().__init__(parent)
        self._service = feed_service
        self._detail = PostDetail(translator)
        self._launch = launcher
        self._i18n = I18nManager()
        self._workers: list[PostFetchWorker] = []  # kept alive until finished

    def request(self, post_id: int) -> bool:
        """Show post_id, loading it unless it is already loading or shown."""
        if post_id == self._detail.post_id and self._detail.status in ("loading", "ready"):
            return False
        self.load(post_id)
        return True

    def load(self, post_id: int) -> None:
        """Fetch post_id and its comments from scratch."""
        for worker in self._workers:
            worker.stop()

        generation = self._detail.begin_load(post_id)

        worker = PostFetchWorker(self._service)
        worker.detail_ready.connect(self._on_detail_ready)
        worker.not_found.connect(self._on_not_found)
        worker.error_occurred.connect(self._on_error)
        worker.finished.connect(self._on_worker_finished)
        worker.fetch_detail(post_id, request_id=generation)
        self._workers.append(worker)

        self._publish()
        self._launch(worker)

    def toggle_translation(self) -> None:
        self._detail.toggle_translation()
        self._publish()

    def shutdown(self) -> None:
        for worker in self._workers:
            worker.stop()
            worker.wait(2000)

    @property
    def state(self) -> DetailState:
        return self._detail.snapshot()

    # ------------------------------------------------------------------
    # Worker callbacks
    # ------------------------------------------------------------------

    def _on_detail_ready(self, request_id: int, post, comments: list):
        if self._detail.set_result(request_id, post, comments):
            self._publish()

    def _on_not_found(self, request_id: int):
        if self._detail.set_not_found(request_id):
            self._publish()

    def _on_error(self, request_id: int, error_key: str):
        if self._detail.set_error(request_id, self._i18n.get(error_key)):
            self._publish()

    def _on_worker_finished(self):
        worker = self.sender()
        self._workers = [w for w in self._workers if w is not worker]
        if worker is not None:
            worker.deleteLater()

    def _publish(self):
        self.state_changed.emit(self._detail.snapshot())
