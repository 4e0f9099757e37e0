"""Detail view state: one post, its comments, and a translated twin."""

import logging
from typing import Optional

from src.core.types import PostDTO, CommentDTO, DetailState
from src.services.translation import StaticTranslator

logger = logging.getLogger("postscroll")


class PostDetail:
    """State machine for the post detail view.

    Status flow: idle -> loading -> ready | error | not_found, and back to
    loading only through begin_load().

    Each begin_load() opens a new generation. Results are applied only if
    they carry the current generation, so a slow response for a post the
    user already navigated away from is dropped instead of displayed.
    """

    def __init__(self, translator: StaticTranslator):
        self._translator = translator
        self._generation: int = 0
        self._post_id: Optional[int] = None
        self._status: str = "idle"  # "idle" | "loading" | "ready" | "error" | "not_found"
        self._error: Optional[str] = None
        self._original_post: Optional[PostDTO] = None
        self._translated_post: Optional[PostDTO] = None
        self._original_comments: list[CommentDTO] = []
        self._translated_comments: list[CommentDTO] = []
        self._is_translated: bool = False

    def begin_load(self, post_id: int) -> int:
        """Start loading post_id. Returns the generation results must carry."""
        self._generation += 1
        self._post_id = post_id
        self._status = "loading"
        self._error = None
        self._clear_data()
        logger.debug(f"Detail load #{self._generation} for post {post_id}")
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def set_result(self, generation: int, post: PostDTO, comments: list[CommentDTO]) -> bool:
        """Apply a fetched post + comments. False if the result is stale."""
        if not self._accept(generation):
            return False
        self._original_post = post
        self._original_comments = list(comments)
        self._translated_post = self._translator.translate_post(post)
        self._translated_comments = [
            self._translator.translate_comment(comment) for comment in comments
        ]
        self._status = "ready"
        return True

    def set_not_found(self, generation: int) -> bool:
        if not self._accept(generation):
            return False
        self._clear_data()
        self._status = "not_found"
        return True

    def set_error(self, generation: int, message: str) -> bool:
        if not self._accept(generation):
            return False
        self._clear_data()
        self._status = "error"
        self._error = message
        return True

    def toggle_translation(self) -> bool:
        """Switch between original and translated text. Returns the new flag."""
        self._is_translated = not self._is_translated
        return self._is_translated

    def _accept(self, generation: int) -> bool:
        if self.is_current(generation) and self._status == "loading":
            return True
        logger.debug(
            f"Discarding detail result #{generation} "
            f"(current #{self._generation}, status: {self._status})"
        )
        return False

    def _clear_data(self) -> None:
        self._original_post = None
        self._translated_post = None
        self._original_comments = []
        self._translated_comments = []

    @property
    def status(self) -> str:
        return self._status

    @property
    def post_id(self) -> Optional[int]:
        return self._post_id

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_translated(self) -> bool:
        return self._is_translated

    @property
    def original_post(self) -> Optional[PostDTO]:
        return self._original_post

    @property
    def original_comments(self) -> list[CommentDTO]:
        return list(self._original_comments)

    def snapshot(self) -> DetailState:
        if self._is_translated:
            post, comments = self._translated_post, self._translated_comments
        else:
            post, comments = self._original_post, self._original_comments
        return DetailState(
            loading=self._status == "loading",
            error=self._error,
            not_found=self._status == "not_found",
            post=post,
            comments=list(comments),
            is_translated=self._is_translated,
            post_id=self._post_id,
        )
