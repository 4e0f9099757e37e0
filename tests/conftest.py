"""Shared test fixtures for PostScroll tests."""

import json
import os
import shutil
import tempfile
from pathlib import Path

import pytest
import yaml

from src.core.config_manager import ConfigManager, DEFAULT_CONFIG
from src.core.i18n_manager import I18nManager
from src.core.types import PostDTO, CommentDTO

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def make_post(post_id=1, title="Test Post", body="Test body", user_id=1):
    return PostDTO(id=post_id, title=title, body=body, user_id=user_id)


def make_comment(comment_id=1, post_id=1, name="Commenter", body="Nice post"):
    return CommentDTO(
        id=comment_id, post_id=post_id, name=name,
        email=f"user{comment_id}@example.org", body=body,
    )


def make_collection(count=100):
    """Posts 1..count; "quia" appears in 7 of them, in various cases."""
    posts = []
    for i in range(1, count + 1):
        title = f"post title {i}"
        body = f"body of post number {i}"
        if i % 15 == 0:
            title = f"Quia title {i}"
        if i == 7:
            body = "dolorem QUIA ipsum"
        posts.append(make_post(i, title, body, user_id=(i - 1) // 10 + 1))
    return posts


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset all singletons after each test."""
    yield
    ConfigManager.reset()
    I18nManager.reset()


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def config_file(tmp_dir):
    """Create a temporary settings.yaml and return its path."""
    config_dir = tmp_dir / "config"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "settings.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(dict(DEFAULT_CONFIG), f, default_flow_style=False, sort_keys=False)

    return config_path


@pytest.fixture
def locale_dir(tmp_dir):
    """Create temporary locale directory with test JSON files."""
    loc_dir = tmp_dir / "locales"
    loc_dir.mkdir(parents=True)

    ru_data = {
        "app": {"title": "PostScroll"},
        "feed": {"title": "Поиск постов", "loading": "Загрузка..."},
        "detail": {"comments_header": "Комментарии ({count})"},
    }
    en_data = {
        "app": {"title": "PostScroll"},
        "feed": {"title": "Search posts", "loading": "Loading..."},
        "detail": {"comments_header": "Comments ({count})"},
    }

    with open(loc_dir / "ru_RU.json", "w", encoding="utf-8") as f:
        json.dump(ru_data, f, ensure_ascii=False)
    with open(loc_dir / "en_US.json", "w", encoding="utf-8") as f:
        json.dump(en_data, f, ensure_ascii=False)

    return loc_dir


@pytest.fixture
def collection():
    """A 100-post collection."""
    return make_collection(100)


@pytest.fixture(scope="session")
def qapp():
    """An offscreen QApplication for signals, timers and widgets."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
