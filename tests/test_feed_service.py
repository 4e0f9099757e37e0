"""Tests for FeedService."""

import pytest
from unittest.mock import MagicMock

from src.core.exceptions import PostFetchError, PostNotFoundError, DataError
from src.services.feed_service import FeedService
from conftest import make_post, make_comment


class TestFetchAllPosts:
    def test_returns_source_posts(self):
        posts = [make_post(1), make_post(2)]
        source = MagicMock()
        source.list_posts.return_value = posts

        service = FeedService(source)

        assert service.fetch_all_posts() == posts
        source.list_posts.assert_called_once_with()

    def test_propagates_fetch_errors(self):
        source = MagicMock()
        source.list_posts.side_effect = PostFetchError("fail")
        with pytest.raises(PostFetchError):
            FeedService(source).fetch_all_posts()


class TestFetchPostDetail:
    def test_returns_post_and_comments(self):
        source = MagicMock()
        source.get_post.return_value = make_post(4)
        source.list_comments.return_value = [make_comment(1, 4), make_comment(2, 4)]

        post, comments = FeedService(source).fetch_post_detail(4)

        assert post.id == 4
        assert len(comments) == 2
        source.get_post.assert_called_once_with(4)
        source.list_comments.assert_called_once_with(4)

    def test_comments_failure_fails_whole_detail(self):
        source = MagicMock()
        source.get_post.return_value = make_post(1)
        source.list_comments.side_effect = PostFetchError("comments down")

        with pytest.raises(PostFetchError):
            FeedService(source).fetch_post_detail(1)

    def test_post_failure_still_issues_comments_request(self):
        source = MagicMock()
        source.get_post.side_effect = PostFetchError("post down")
        source.list_comments.return_value = []

        with pytest.raises(PostFetchError):
            FeedService(source).fetch_post_detail(1)
        source.list_comments.assert_called_once_with(1)

    def test_not_found_wins_over_comment_error(self):
        source = MagicMock()
        source.get_post.side_effect = PostNotFoundError()
        source.list_comments.side_effect = PostFetchError("also down")

        with pytest.raises(PostNotFoundError):
            FeedService(source).fetch_post_detail(999)

    def test_other_app_errors_become_fetch_errors(self):
        source = MagicMock()
        source.get_post.return_value = make_post(1)
        source.list_comments.side_effect = DataError("weird")

        with pytest.raises(PostFetchError):
            FeedService(source).fetch_post_detail(1)

    def test_unexpected_exception_becomes_fetch_error(self):
        source = MagicMock()
        source.get_post.side_effect = RuntimeError("bug")
        source.list_comments.return_value = []

        with pytest.raises(PostFetchError):
            FeedService(source).fetch_post_detail(1)
