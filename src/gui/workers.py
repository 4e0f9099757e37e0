"""QThread workers for background fetches."""

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QThread, pyqtSignal

from src.core.exceptions import PostScrollError, PostNotFoundError

logger = logging.getLogger("postscroll")

# How a controller starts a configured worker. Production code runs it on
# its own thread; tests pass ``lambda w: w.run()`` to stay synchronous.
WorkerLauncher = Callable[[QThread], None]


def start_worker(worker: QThread) -> None:
    worker.start()


class PostFetchWorker(QThread):
    """Background worker for post API reads.

    Used for both the full collection and a post detail.
    Every signal carries the request id the worker was configured with, so
    the receiving controller can drop answers to superseded requests.
    """
    posts_ready = pyqtSignal(int, list)            # request id, list[PostDTO]
    detail_ready = pyqtSignal(int, object, list)   # request id, PostDTO, list[CommentDTO]
    not_found = pyqtSignal(int)                    # request id
    error_occurred = pyqtSignal(int, str)          # request id, i18n error key

    def __init__(self, feed_service, parent=None):
        """Initialize the fetch worker.

        Args:
            feed_service: FeedService instance
            parent: Optional parent QObject
        """
        super().__init__(parent)
        self._feed = feed_service
        self._task: Optional[str] = None  # "posts" or "detail"
        self._request_id: int = 0
        self._post_id: int = 0
        self._stopped = False

    def fetch_posts(self, request_id: int = 0):
        """Configure worker to fetch the whole collection, then call start()."""
        self._task = "posts"
        self._request_id = request_id
        self._stopped = False

    def fetch_detail(self, post_id: int, request_id: int = 0):
        """Configure worker to fetch a post with its comments, then call start()."""
        self._task = "detail"
        self._post_id = post_id
        self._request_id = request_id
        self._stopped = False

    @property
    def request_id(self) -> int:
        return self._request_id

    def stop(self):
        """Request the worker to drop its result."""
        self._stopped = True

    def run(self):
        """Execute the configured fetch task."""
        try:
            if self._task == "posts":
                posts = self._feed.fetch_all_posts()
                if not self._stopped:
                    self.posts_ready.emit(self._request_id, posts)
            elif self._task == "detail":
                post, comments = self._feed.fetch_post_detail(self._post_id)
                if not self._stopped:
                    self.detail_ready.emit(self._request_id, post, comments)
        except PostNotFoundError as e:
            if self._stopped:
                return
            if self._task == "detail":
                logger.info(f"Post {self._post_id} not found")
                self.not_found.emit(self._request_id)
            else:
                logger.error(f"Fetch error: {e}")
                self.error_occurred.emit(self._request_id, self._error_key())
        except PostScrollError as e:
            if not self._stopped:
                self.error_occurred.emit(self._request_id, self._error_key())
                logger.error(f"Fetch error: {e}")
        except Exception as e:
            if not self._stopped:
                self.error_occurred.emit(self._request_id, self._error_key())
                logger.error(f"Unexpected fetch error: {e}")

    def _error_key(self) -> str:
        """i18n key of the single user-facing message for this task."""
        if self._task == "detail":
            return "errors.detail_fetch_failed"
        return "errors.posts_fetch_failed"
