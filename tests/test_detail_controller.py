"""Tests for DetailController (synchronous worker launch)."""

from unittest.mock import MagicMock

from src.core.exceptions import PostFetchError, PostNotFoundError
from src.gui.detail_controller import DetailController
from src.services.translation import StaticTranslator
from conftest import make_post, make_comment


def sync_launcher(worker):
    worker.run()


def make_controller(launcher=sync_launcher):
    service = MagicMock()
    service.fetch_post_detail.side_effect = lambda post_id: (
        make_post(post_id, title=f"post {post_id}"),
        [make_comment(1, post_id, body="Nice post")],
    )
    translator = StaticTranslator(words={"nice": "хороший", "post": "пост"})
    controller = DetailController(service, translator, launcher=launcher)
    states = []
    controller.state_changed.connect(states.append)
    return controller, service, states


class TestLoad:
    def test_publishes_loading_then_ready(self, qapp):
        controller, service, states = make_controller()

        controller.load(3)

        assert states[0].loading
        assert states[0].post_id == 3
        final = states[-1]
        assert not final.loading
        assert final.post.id == 3
        assert len(final.comments) == 1
        service.fetch_post_detail.assert_called_once_with(3)

    def test_not_found(self, qapp):
        controller, service, states = make_controller()
        service.fetch_post_detail.side_effect = PostNotFoundError()

        controller.load(999)

        assert states[-1].not_found
        assert states[-1].error is None

    def test_fetch_error_shows_message_only(self, qapp):
        controller, service, states = make_controller()
        service.fetch_post_detail.side_effect = PostFetchError("comments down")

        controller.load(1)

        final = states[-1]
        assert final.error == "errors.detail_fetch_failed"
        assert final.post is None
        assert final.comments == []

    def test_stale_result_is_discarded(self, qapp):
        pending = []
        controller, _, states = make_controller(launcher=pending.append)

        controller.load(1)
        controller.load(2)
        pending[1].run()
        # the first worker was stopped; even forcing its signal changes nothing
        pending[0].detail_ready.emit(pending[0].request_id, make_post(1), [])

        assert controller.state.post.id == 2
        assert states[-1].post.id == 2


class TestRequest:
    def test_request_loads_new_post(self, qapp):
        controller, service, _ = make_controller()
        assert controller.request(1) is True
        service.fetch_post_detail.assert_called_once_with(1)

    def test_request_same_ready_post_is_skipped(self, qapp):
        controller, service, _ = make_controller()
        controller.request(1)
        assert controller.request(1) is False
        assert service.fetch_post_detail.call_count == 1

    def test_request_same_loading_post_is_skipped(self, qapp):
        pending = []
        controller, _, _ = make_controller(launcher=pending.append)
        controller.request(1)
        assert controller.request(1) is False
        assert len(pending) == 1

    def test_request_retries_after_error(self, qapp):
        controller, service, _ = make_controller()
        service.fetch_post_detail.side_effect = PostFetchError()
        controller.request(1)
        assert controller.request(1) is True
        assert service.fetch_post_detail.call_count == 2


class TestTranslationToggle:
    def test_toggle_publishes_translated_view(self, qapp):
        controller, _, states = make_controller()
        controller.load(1)

        controller.toggle_translation()

        assert states[-1].is_translated
        assert states[-1].post.title == "пост 1"
        assert states[-1].comments[0].body == "Хороший пост"

    def test_toggle_twice_restores_original(self, qapp):
        controller, _, states = make_controller()
        controller.load(1)
        original = states[-1]

        controller.toggle_translation()
        controller.toggle_translation()

        assert states[-1] == original
