"""Feed service: fetch orchestration over a PostSource."""

import logging
from concurrent.futures import ThreadPoolExecutor, wait

from src.adapters.post_source import PostSource
from src.core.exceptions import PostScrollError, PostFetchError, PostNotFoundError
from src.core.types import PostDTO, CommentDTO

logger = logging.getLogger("postscroll")


class FeedService:
    """Orchestrates reads from the post API.

    Responsibilities:
    - Fetch the full post collection in one request
    - Fetch a post and its comments in parallel, all-or-nothing

    Methods block; they are called from QThread workers, never from the
    UI thread.
    """

    def __init__(self, source: PostSource):
        self._source = source

    def fetch_all_posts(self) -> list[PostDTO]:
        """Fetch the entire post collection.

        Raises:
            PostFetchError: Transport, HTTP or payload failure
        """
        posts = self._source.list_posts()
        logger.info(f"Fetched {len(posts)} posts")
        return posts

    def fetch_post_detail(self, post_id: int) -> tuple[PostDTO, list[CommentDTO]]:
        """Fetch one post and its comments concurrently.

        Both requests are awaited before anything is returned, so the caller
        never sees a post without its comments or vice versa.

        Raises:
            PostNotFoundError: The post id does not exist
            PostFetchError: Either request failed
        """
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="detail") as pool:
            post_future = pool.submit(self._source.get_post, post_id)
            comments_future = pool.submit(self._source.list_comments, post_id)
            wait([post_future, comments_future])

        post_error = post_future.exception()
        comments_error = comments_future.exception()

        # "Not found" on the post wins over whatever happened to the comments
        if isinstance(post_error, PostNotFoundError):
            raise post_error
        for error in (post_error, comments_error):
            if isinstance(error, PostFetchError):
                raise error
            if isinstance(error, PostScrollError):
                raise PostFetchError(error.message) from error
            if error is not None:
                raise PostFetchError(f"Failed to fetch post {post_id}: {error}") from error

        post = post_future.result()
        comments = comments_future.result()
        logger.info(f"Fetched post {post_id} with {len(comments)} comments")
        return post, comments
