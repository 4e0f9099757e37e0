"""JSONPlaceholder REST adapter (read-only, no API key needed)."""

import logging
import random

import requests

from src.adapters.post_source import PostSource
from src.core.exceptions import PostFetchError, PostNotFoundError
from src.core.types import PostDTO, CommentDTO


logger = logging.getLogger("postscroll")

# App version for User-Agent
_APP_VERSION = "1.0.0"

MOCK_POST_COUNT = 100
MOCK_COMMENTS_PER_POST = 5

_MOCK_WORDS = (
    "sunt aut facere repellat provident occaecati excepturi optio reprehenderit "
    "qui est esse quia et suscipit recusandae consequuntur expedita rerum "
    "ullam nostrum dolorem eum magnam quis tempora voluptas sed ut "
    "molestiae nesciunt dolor beatae ea dolores neque fugiat blanditiis "
    "voluptate porro vel nihil odit aut accusamus iure"
).split()


class JSONPlaceholderAdapter(PostSource):
    """Fetches posts and comments from the JSONPlaceholder endpoints.

    Endpoints:
        GET /posts                 -> list of posts
        GET /posts/{id}            -> one post (404 if unknown)
        GET /posts/{id}/comments   -> comments of a post (may be empty)

    No retries: a failed request surfaces as PostFetchError immediately.
    """

    BASE_URL = "https://jsonplaceholder.typicode.com"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 30,
        mock_mode: bool = False,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._mock_mode = mock_mode
        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": f"desktop:postscroll:v{_APP_VERSION}",
            "Accept": "application/json",
        })

    def list_posts(self) -> list[PostDTO]:
        if self._mock_mode:
            return self._mock_posts()

        data = self._fetch_json(f"{self._base_url}/posts")
        if not isinstance(data, list):
            raise PostFetchError("Unexpected posts response format")
        return [self._parse_post(item) for item in data]

    def get_post(self, post_id: int) -> PostDTO:
        if self._mock_mode:
            if not 1 <= post_id <= MOCK_POST_COUNT:
                raise PostNotFoundError(f"Post {post_id} not found")
            return self._mock_posts()[post_id - 1]

        data = self._fetch_json(f"{self._base_url}/posts/{post_id}")
        if not isinstance(data, dict):
            raise PostFetchError("Unexpected post response format")
        if not data:
            # An empty object is how the endpoint answers for some unknown ids
            raise PostNotFoundError(f"Post {post_id} not found")
        return self._parse_post(data)

    def list_comments(self, post_id: int) -> list[CommentDTO]:
        if self._mock_mode:
            if not 1 <= post_id <= MOCK_POST_COUNT:
                return []
            return self._mock_comments(post_id)

        data = self._fetch_json(f"{self._base_url}/posts/{post_id}/comments")
        if not isinstance(data, list):
            raise PostFetchError("Unexpected comments response format")
        return [self._parse_comment(item) for item in data]

    def _fetch_json(self, url: str) -> dict | list:
        """GET a URL and decode its JSON body.

        Maps 404 to PostNotFoundError and every other failure (transport,
        HTTP status, HTML or undecodable body) to PostFetchError.
        """
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise PostFetchError(f"Failed to fetch data: {e}")

        if response.status_code == 404:
            raise PostNotFoundError(f"Not found: {url}")

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"HTTP error: {e}")
            raise PostFetchError(f"Failed to fetch data: {e}")

        content_type = response.headers.get("Content-Type", "")
        if "json" not in content_type and "text/html" in content_type:
            raise PostFetchError("Endpoint returned HTML instead of JSON")

        try:
            return response.json()
        except ValueError as e:
            raise PostFetchError(f"Invalid JSON payload: {e}")

    @staticmethod
    def _parse_post(item: dict) -> PostDTO:
        try:
            return PostDTO(
                id=int(item["id"]),
                title=item.get("title", ""),
                body=item.get("body", ""),
                user_id=int(item.get("userId", 0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PostFetchError(f"Malformed post record: {e}")

    @staticmethod
    def _parse_comment(item: dict) -> CommentDTO:
        try:
            return CommentDTO(
                id=int(item["id"]),
                post_id=int(item["postId"]),
                name=item.get("name", ""),
                email=item.get("email", ""),
                body=item.get("body", ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PostFetchError(f"Malformed comment record: {e}")

    @staticmethod
    def _mock_text(seed: int, words: int) -> str:
        rng = random.Random(seed)
        return " ".join(rng.choice(_MOCK_WORDS) for _ in range(words))

    @staticmethod
    def _mock_posts() -> list[PostDTO]:
        """Return a deterministic fake collection for mock mode (no network)."""
        return [
            PostDTO(
                id=i,
                title=JSONPlaceholderAdapter._mock_text(i, 6),
                body=JSONPlaceholderAdapter._mock_text(i * 1000, 24),
                user_id=(i - 1) // 10 + 1,
            )
            for i in range(1, MOCK_POST_COUNT + 1)
        ]

    @staticmethod
    def _mock_comments(post_id: int) -> list[CommentDTO]:
        """Return deterministic fake comments for mock mode."""
        first_id = (post_id - 1) * MOCK_COMMENTS_PER_POST + 1
        return [
            CommentDTO(
                id=comment_id,
                post_id=post_id,
                name=JSONPlaceholderAdapter._mock_text(comment_id + 50000, 4),
                email=f"reader{comment_id}@example.org",
                body=JSONPlaceholderAdapter._mock_text(comment_id + 90000, 16),
            )
            for comment_id in range(first_id, first_id + MOCK_COMMENTS_PER_POST)
        ]
