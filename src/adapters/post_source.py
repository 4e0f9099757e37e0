"""Abstract base class for read-only post data access."""

from abc import ABC, abstractmethod

from src.core.types import PostDTO, CommentDTO


class PostSource(ABC):
    """Abstract interface for fetching posts and comments."""

    @abstractmethod
    def list_posts(self) -> list[PostDTO]:
        """Fetch the entire post collection in one call.

        No server-side pagination, filtering or sorting is requested.

        Returns:
            List of PostDTO in server order

        Raises:
            PostFetchError: Transport, HTTP or payload failure
        """
        ...

    @abstractmethod
    def get_post(self, post_id: int) -> PostDTO:
        """Fetch one post by id.

        Raises:
            PostNotFoundError: No post has that id
            PostFetchError: Transport, HTTP or payload failure
        """
        ...

    @abstractmethod
    def list_comments(self, post_id: int) -> list[CommentDTO]:
        """Fetch the comments of a post.

        Returns:
            List of CommentDTO, empty if the post has none

        Raises:
            PostFetchError: Transport, HTTP or payload failure
        """
        ...
