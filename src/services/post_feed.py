"""Client-side search + pagination state of the post feed.

The whole collection is fetched once; everything else (filtering,
"load more" pages) happens locally over that list:

    all posts --filter_posts(query)--> filtered --materialize(page)--> items

Both derivations are pure and always recomputed in that order, so the
exposed items can never lag behind a query change.
"""

import logging
from typing import Iterable, Optional

from src.core.types import PostDTO, FeedState

logger = logging.getLogger("postscroll")

DEFAULT_PAGE_SIZE = 12


def matches_query(post: PostDTO, query: str) -> bool:
    """Case-insensitive substring match on title or body. Empty query matches."""
    if not query:
        return True
    needle = query.lower()
    return needle in post.title.lower() or needle in post.body.lower()


def filter_posts(posts: list[PostDTO], query: str) -> list[PostDTO]:
    """Posts matching query, in their original order."""
    if not query:
        return list(posts)
    return [post for post in posts if matches_query(post, query)]


def materialize(filtered: list[PostDTO], page_cursor: int, page_size: int) -> list[PostDTO]:
    """Leading min(page_cursor * page_size, len(filtered)) posts."""
    return filtered[:page_cursor * page_size]


class PostFeed:
    """Collection view state: fetched posts, query, page cursor.

    Status flow: idle -> loading -> ready | error. The collection is loaded
    at most once per instance; a failed load stays failed.

    Every change of the exposed items bumps ``revision`` so that deferred
    callers (the scroll trigger) can tell whether what they saw is current.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._page_size = page_size
        self._all_posts: list[PostDTO] = []
        self._query: str = ""
        self._filtered: list[PostDTO] = []
        self._page_cursor: int = 1
        self._items: list[PostDTO] = []
        self._status: str = "idle"  # "idle" | "loading" | "ready" | "error"
        self._error: Optional[str] = None
        self._revision: int = 0

    # ------------------------------------------------------------------
    # Loading lifecycle
    # ------------------------------------------------------------------

    def begin_loading(self) -> bool:
        """Enter the loading state. False if a load was already issued."""
        if self._status != "idle":
            logger.debug(f"Feed load skipped (status: {self._status})")
            return False
        self._status = "loading"
        self._error = None
        return True

    def set_posts(self, posts: Iterable[PostDTO]) -> None:
        """Install the fetched collection and show its first page."""
        self._all_posts = list(posts)
        self._status = "ready"
        self._error = None
        self._rederive()
        logger.debug(f"Feed ready: {len(self._all_posts)} posts")

    def set_error(self, message: str) -> None:
        """Terminal failure: no posts, message kept for display."""
        self._all_posts = []
        self._status = "error"
        self._error = message
        self._rederive()

    # ------------------------------------------------------------------
    # Search and pagination
    # ------------------------------------------------------------------

    def set_search_query(self, query: str) -> bool:
        """Apply a new query and reset to the first page.

        Returns False (and changes nothing) if the query is unchanged.
        """
        if query == self._query:
            return False
        self._query = query
        self._rederive()
        logger.debug(f"Search '{query}': {len(self._filtered)} matches")
        return True

    def load_more(self) -> bool:
        """Materialize the next page. Returns False when it was a no-op."""
        if self.loading or not self.has_more:
            return False
        self._page_cursor += 1
        self._items = materialize(self._filtered, self._page_cursor, self._page_size)
        self._revision += 1
        logger.debug(f"Page {self._page_cursor}: {len(self._items)}/{len(self._filtered)} posts")
        return True

    def _rederive(self) -> None:
        self._filtered = filter_posts(self._all_posts, self._query)
        self._page_cursor = 1
        self._items = materialize(self._filtered, self._page_cursor, self._page_size)
        self._revision += 1

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self._status == "loading"

    @property
    def status(self) -> str:
        return self._status

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def items(self) -> list[PostDTO]:
        return list(self._items)

    @property
    def has_more(self) -> bool:
        return len(self._filtered) > len(self._items)

    @property
    def query(self) -> str:
        return self._query

    @property
    def page_cursor(self) -> int:
        return self._page_cursor

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def filtered_count(self) -> int:
        return len(self._filtered)

    @property
    def revision(self) -> int:
        return self._revision

    def snapshot(self) -> FeedState:
        return FeedState(
            loading=self.loading,
            error=self._error,
            items=list(self._items),
            has_more=self.has_more,
        )
