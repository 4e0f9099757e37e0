"""Data Transfer Objects for PostScroll."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class PostDTO:
    """Post data transfer object."""

    id: int
    title: str
    body: str = ""
    user_id: int = 0                 # owning user ("userId" on the wire)


@dataclass(frozen=True)
class CommentDTO:
    """Comment data transfer object."""

    id: int
    post_id: int                     # parent post ("postId" on the wire)
    name: str = ""                   # author name
    email: str = ""
    body: str = ""


@dataclass(frozen=True)
class FeedState:
    """Snapshot handed to the feed view on every render cycle."""

    loading: bool = False
    error: Optional[str] = None
    items: list[PostDTO] = field(default_factory=list)
    has_more: bool = False


@dataclass(frozen=True)
class DetailState:
    """Snapshot handed to the detail view on every render cycle."""

    loading: bool = False
    error: Optional[str] = None
    not_found: bool = False
    post: Optional[PostDTO] = None
    comments: list[CommentDTO] = field(default_factory=list)
    is_translated: bool = False
    post_id: Optional[int] = None
