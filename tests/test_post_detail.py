"""Tests for PostDetail state machine."""

from src.services.post_detail import PostDetail
from src.services.translation import StaticTranslator
from conftest import make_post, make_comment


def make_translator():
    return StaticTranslator(
        phrases={"Test Post": "Тестовый пост"},
        words={"nice": "хороший", "post": "пост"},
    )


class TestLoading:
    def test_starts_idle(self):
        detail = PostDetail(make_translator())
        state = detail.snapshot()
        assert detail.status == "idle"
        assert state.post is None
        assert not state.loading

    def test_begin_load_enters_loading(self):
        detail = PostDetail(make_translator())
        detail.begin_load(5)
        state = detail.snapshot()
        assert state.loading
        assert state.post_id == 5
        assert state.post is None

    def test_result_makes_ready(self):
        detail = PostDetail(make_translator())
        gen = detail.begin_load(1)
        post = make_post(1)
        comments = [make_comment(1), make_comment(2)]

        assert detail.set_result(gen, post, comments) is True

        state = detail.snapshot()
        assert detail.status == "ready"
        assert state.post == post
        assert state.comments == comments
        assert not state.loading
        assert state.error is None

    def test_empty_comments_is_ready(self):
        detail = PostDetail(make_translator())
        gen = detail.begin_load(1)
        detail.set_result(gen, make_post(1), [])
        assert detail.snapshot().comments == []
        assert detail.status == "ready"

    def test_not_found_is_distinct_from_error(self):
        detail = PostDetail(make_translator())
        gen = detail.begin_load(999)
        detail.set_not_found(gen)
        state = detail.snapshot()
        assert state.not_found
        assert state.error is None
        assert state.post is None

    def test_error_shows_nothing(self):
        detail = PostDetail(make_translator())
        gen = detail.begin_load(1)
        detail.set_error(gen, "Не удалось загрузить данные. Попробуйте снова.")
        state = detail.snapshot()
        assert state.error == "Не удалось загрузить данные. Попробуйте снова."
        assert not state.not_found
        assert state.post is None
        assert state.comments == []


class TestGenerations:
    def test_stale_result_is_discarded(self):
        detail = PostDetail(make_translator())
        first = detail.begin_load(1)
        second = detail.begin_load(2)

        assert detail.set_result(second, make_post(2), []) is True
        assert detail.set_result(first, make_post(1), []) is False
        assert detail.snapshot().post.id == 2

    def test_stale_error_does_not_clobber_ready(self):
        detail = PostDetail(make_translator())
        first = detail.begin_load(1)
        second = detail.begin_load(2)
        detail.set_result(second, make_post(2), [])

        assert detail.set_error(first, "boom") is False
        assert detail.set_not_found(first) is False
        assert detail.status == "ready"

    def test_duplicate_result_for_same_generation_ignored(self):
        detail = PostDetail(make_translator())
        gen = detail.begin_load(1)
        detail.set_result(gen, make_post(1, title="first"), [])
        assert detail.set_result(gen, make_post(1, title="second"), []) is False
        assert detail.snapshot().post.title == "first"

    def test_new_load_clears_previous_post(self):
        detail = PostDetail(make_translator())
        gen = detail.begin_load(1)
        detail.set_result(gen, make_post(1), [make_comment()])
        detail.begin_load(2)
        state = detail.snapshot()
        assert state.post is None
        assert state.comments == []


class TestTranslationToggle:
    def _ready_detail(self):
        detail = PostDetail(make_translator())
        gen = detail.begin_load(1)
        detail.set_result(gen, make_post(1), [make_comment(1, body="Nice post")])
        return detail

    def test_toggle_shows_translated_view(self):
        detail = self._ready_detail()
        detail.toggle_translation()
        state = detail.snapshot()
        assert state.is_translated
        assert state.post.title == "Тестовый пост"
        assert state.comments[0].body == "Хороший пост"

    def test_double_toggle_restores_original(self):
        detail = self._ready_detail()
        before = detail.snapshot()
        detail.toggle_translation()
        detail.toggle_translation()
        assert detail.snapshot() == before

    def test_toggle_never_alters_fetched_data(self):
        detail = self._ready_detail()
        original_post = detail.original_post
        original_comments = detail.original_comments
        detail.toggle_translation()
        assert detail.original_post == original_post
        assert detail.original_comments == original_comments
        assert original_post.title == "Test Post"

    def test_translated_flag_survives_navigation(self):
        detail = self._ready_detail()
        detail.toggle_translation()
        gen = detail.begin_load(2)
        detail.set_result(gen, make_post(2, title="Test Post"), [])
        assert detail.snapshot().post.title == "Тестовый пост"
