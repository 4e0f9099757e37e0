"""Post detail widget: post text, comments and the translation toggle."""

import logging

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QScrollArea, QFrame,
)
from PyQt6.QtCore import Qt, pyqtSignal

from src.core.i18n_manager import I18nManager
from src.core.types import DetailState, CommentDTO
from src.gui.detail_controller import DetailController

logger = logging.getLogger("postscroll")

SKELETON_COMMENTS = 3

_PANEL_STYLE = "background-color: #1f2937; border-radius: 8px;"
_SKELETON_STYLE = "background-color: #374151; border-radius: 6px;"
_BUTTON_STYLE = (
    "QPushButton { background-color: #2563eb; color: white; font-weight: bold;"
    "  padding: 6px 14px; border-radius: 6px; }"
    "QPushButton:hover { background-color: #1d4ed8; }"
)


class PostDetailWidget(QWidget):
    """Renders DetailState snapshots.

    Four faces: skeleton while loading, error or not-found message with the
    back button, and the post with its comments.
    """

    back_requested = pyqtSignal()

    def __init__(self, controller: DetailController, parent=None):
        super().__init__(parent)
        self._controller = controller
        self._i18n = I18nManager()
        self._init_ui()
        controller.state_changed.connect(self.render)

    def _init_ui(self):
        layout = QVBoxLayout(self)

        top_row = QHBoxLayout()
        self._back_btn = QPushButton(self._i18n.get("detail.back"))
        self._back_btn.setStyleSheet(_BUTTON_STYLE)
        self._back_btn.clicked.connect(lambda: self.back_requested.emit())
        top_row.addWidget(self._back_btn)
        top_row.addStretch()

        self._toggle_btn = QPushButton(self._i18n.get("detail.translate"))
        self._toggle_btn.setStyleSheet(_BUTTON_STYLE)
        self._toggle_btn.clicked.connect(self._controller.toggle_translation)
        top_row.addWidget(self._toggle_btn)
        layout.addLayout(top_row)

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        content = QWidget()
        self._content_layout = QVBoxLayout(content)

        self._message_label = QLabel("")
        self._message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message_label.setWordWrap(True)
        self._content_layout.addWidget(self._message_label)

        self._post_panel = QFrame()
        self._post_panel.setStyleSheet(_PANEL_STYLE)
        post_layout = QVBoxLayout(self._post_panel)
        self._title_label = QLabel("")
        self._title_label.setWordWrap(True)
        self._title_label.setStyleSheet("font-size: 26px; font-weight: bold; color: white;")
        post_layout.addWidget(self._title_label)
        self._body_label = QLabel("")
        self._body_label.setWordWrap(True)
        self._body_label.setStyleSheet("font-size: 15px; color: #9ca3af;")
        post_layout.addWidget(self._body_label)
        self._content_layout.addWidget(self._post_panel)

        self._comments_header = QLabel("")
        self._comments_header.setStyleSheet("font-size: 20px; font-weight: bold; margin-top: 16px;")
        self._content_layout.addWidget(self._comments_header)

        self._comments_container = QWidget()
        self._comments_layout = QVBoxLayout(self._comments_container)
        self._comments_layout.setContentsMargins(0, 0, 0, 0)
        self._content_layout.addWidget(self._comments_container)
        self._content_layout.addStretch()

        scroll_area.setWidget(content)
        layout.addWidget(scroll_area)

    def render(self, state: DetailState):
        self._clear_comments()

        if state.loading:
            self._show_skeleton()
            return

        if state.error or state.not_found:
            text = state.error if state.error else self._i18n.get("detail.not_found")
            color = "#ef4444" if state.error else "white"
            self._show_message(text, color)
            return

        if state.post is None:
            self._show_message("", "white")
            return

        self._message_label.hide()
        self._toggle_btn.setVisible(True)
        self._toggle_btn.setText(self._i18n.get(
            "detail.show_original" if state.is_translated else "detail.translate"
        ))
        self._post_panel.setStyleSheet(_PANEL_STYLE)
        self._post_panel.setMinimumHeight(0)
        self._post_panel.show()
        self._title_label.setText(state.post.title)
        self._body_label.setText(state.post.body)

        self._comments_header.setText(
            self._i18n.get("detail.comments_header", count=len(state.comments))
        )
        self._comments_header.show()
        self._comments_container.show()
        if state.comments:
            for comment in state.comments:
                self._comments_layout.addWidget(self._comment_frame(comment))
        else:
            empty = QLabel(self._i18n.get("detail.no_comments"))
            empty.setStyleSheet("color: #9ca3af;")
            self._comments_layout.addWidget(empty)

    def _show_skeleton(self):
        self._message_label.hide()
        self._toggle_btn.setVisible(False)
        self._title_label.setText("")
        self._body_label.setText("")
        self._post_panel.setStyleSheet(_SKELETON_STYLE)
        self._post_panel.setMinimumHeight(180)
        self._post_panel.show()
        self._comments_header.hide()
        self._comments_container.show()
        for _ in range(SKELETON_COMMENTS):
            frame = QFrame()
            frame.setStyleSheet(_SKELETON_STYLE)
            frame.setMinimumHeight(80)
            self._comments_layout.addWidget(frame)

    def _show_message(self, text: str, color: str):
        self._toggle_btn.setVisible(False)
        self._post_panel.hide()
        self._comments_header.hide()
        self._comments_container.hide()
        self._message_label.setText(text)
        self._message_label.setStyleSheet(f"color: {color}; font-size: 18px; padding: 24px;")
        self._message_label.show()

    @staticmethod
    def _comment_frame(comment: CommentDTO) -> QFrame:
        frame = QFrame()
        frame.setStyleSheet(_PANEL_STYLE)
        layout = QVBoxLayout(frame)

        name = QLabel(comment.name)
        name.setWordWrap(True)
        name.setStyleSheet("font-weight: bold; font-size: 15px; color: white;")
        layout.addWidget(name)

        email = QLabel(comment.email)
        email.setStyleSheet("font-size: 11px; color: #9ca3af;")
        layout.addWidget(email)

        body = QLabel(comment.body)
        body.setWordWrap(True)
        body.setStyleSheet("color: #d1d5db;")
        layout.addWidget(body)
        return frame

    def _clear_comments(self):
        while self._comments_layout.count():
            item = self._comments_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
