"""Feed widget: search box + grid of post cards with infinite scroll."""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QGridLayout, QLabel, QLineEdit,
    QScrollArea, QFrame,
)
from PyQt6.QtCore import Qt, pyqtSignal

from src.core.i18n_manager import I18nManager
from src.core.types import FeedState, PostDTO
from src.gui.feed_controller import FeedController
from src.gui.scroll_trigger import (
    InfiniteScrollTrigger, ScrollAreaObserver, DEFAULT_DEBOUNCE_MS,
)

logger = logging.getLogger("postscroll")

GRID_COLUMNS = 3
BODY_PREVIEW_CHARS = 160

_CARD_STYLE = (
    "QFrame#postCard { background-color: #1f2937; border-radius: 8px; }"
    "QFrame#postCard:hover { background-color: #374151; }"
)
_SKELETON_STYLE = "QFrame#skeletonCard { background-color: #374151; border-radius: 8px; }"


class PostCard(QFrame):
    """Clickable summary of one post."""

    clicked = pyqtSignal(int)  # post id

    def __init__(self, post: PostDTO, parent=None):
        super().__init__(parent)
        self._post_id = post.id
        self.setObjectName("postCard")
        self.setStyleSheet(_CARD_STYLE)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setMinimumHeight(160)

        i18n = I18nManager()
        layout = QVBoxLayout(self)

        title = QLabel(post.title)
        title.setWordWrap(True)
        title.setStyleSheet("font-weight: bold; font-size: 15px; color: white;")
        layout.addWidget(title)

        preview = post.body
        if len(preview) > BODY_PREVIEW_CHARS:
            preview = preview[:BODY_PREVIEW_CHARS].rstrip() + "…"
        body = QLabel(preview)
        body.setWordWrap(True)
        body.setStyleSheet("color: #9ca3af; font-size: 12px;")
        layout.addWidget(body)
        layout.addStretch()

        more = QLabel(i18n.get("feed.read_more"))
        more.setAlignment(Qt.AlignmentFlag.AlignRight)
        more.setStyleSheet("color: #60a5fa; font-size: 12px; font-weight: bold;")
        layout.addWidget(more)

    @property
    def post_id(self) -> int:
        return self._post_id

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self._post_id)
        super().mouseReleaseEvent(event)


class FeedWidget(QWidget):
    """Renders FeedState snapshots and feeds scroll events back.

    Cards are appended when a snapshot extends the previous items (next
    page) and rebuilt otherwise (new search). The last card is handed to
    the scroll trigger after every render.
    """

    post_selected = pyqtSignal(int)

    def __init__(self, controller: FeedController, skeleton_count: int = 12,
                 debounce_ms: int = DEFAULT_DEBOUNCE_MS, parent=None):
        super().__init__(parent)
        self._controller = controller
        self._i18n = I18nManager()
        self._skeleton_count = skeleton_count
        self._cards: list[PostCard] = []
        self._skeletons: list[QFrame] = []

        self._init_ui()

        self._trigger = InfiniteScrollTrigger(
            controller, ScrollAreaObserver(self._scroll_area).observe, debounce_ms, self
        )
        controller.state_changed.connect(self.render)

    def _init_ui(self):
        layout = QVBoxLayout(self)

        self._title_label = QLabel(self._i18n.get("feed.title"))
        self._title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._title_label.setStyleSheet("font-size: 22px; font-weight: bold;")
        layout.addWidget(self._title_label)

        self._search_input = QLineEdit()
        self._search_input.setPlaceholderText(self._i18n.get("feed.search_placeholder"))
        self._search_input.textChanged.connect(self._controller.set_search_query)
        layout.addWidget(self._search_input)

        self._scroll_area = QScrollArea()
        self._scroll_area.setWidgetResizable(True)
        content = QWidget()
        content_layout = QVBoxLayout(content)

        self._grid = QGridLayout()
        self._grid.setSpacing(12)
        content_layout.addLayout(self._grid)

        self._status_label = QLabel("")
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._status_label.hide()
        content_layout.addWidget(self._status_label)
        content_layout.addStretch()

        self._scroll_area.setWidget(content)
        layout.addWidget(self._scroll_area)

    @property
    def trigger(self) -> InfiniteScrollTrigger:
        return self._trigger

    def render(self, state: FeedState):
        if state.loading and not state.items:
            self._trigger.detach()
            self._clear_cards()
            self._show_skeletons()
            self._set_status("")
            return

        self._hide_skeletons()
        self._sync_cards(state.items)
        self._set_status(self._status_text(state), is_error=state.error is not None)
        self._trigger.attach(self._cards[-1] if self._cards else None)

    def _status_text(self, state: FeedState) -> str:
        if state.error:
            return state.error
        if state.loading:
            return self._i18n.get("feed.loading")
        if not state.items:
            return self._i18n.get("feed.nothing_found")
        if not state.has_more:
            return self._i18n.get("feed.all_seen")
        return ""

    def _sync_cards(self, items: list[PostDTO]):
        shown = [card.post_id for card in self._cards]
        wanted = [post.id for post in items]
        if wanted[:len(shown)] != shown:
            self._clear_cards()
            shown = []
        for post in items[len(shown):]:
            card = PostCard(post)
            card.clicked.connect(self.post_selected)
            index = len(self._cards)
            self._grid.addWidget(card, index // GRID_COLUMNS, index % GRID_COLUMNS)
            self._cards.append(card)

    def _clear_cards(self):
        for card in self._cards:
            self._grid.removeWidget(card)
            card.deleteLater()
        self._cards = []

    def _show_skeletons(self):
        if self._skeletons:
            return
        for index in range(self._skeleton_count):
            frame = QFrame()
            frame.setObjectName("skeletonCard")
            frame.setStyleSheet(_SKELETON_STYLE)
            frame.setMinimumHeight(160)
            self._grid.addWidget(frame, index // GRID_COLUMNS, index % GRID_COLUMNS)
            self._skeletons.append(frame)

    def _hide_skeletons(self):
        for frame in self._skeletons:
            self._grid.removeWidget(frame)
            frame.deleteLater()
        self._skeletons = []

    def _set_status(self, text: str, is_error: bool = False):
        self._status_label.setText(text)
        color = "#ef4444" if is_error else "#9ca3af"
        self._status_label.setStyleSheet(f"color: {color}; padding: 12px;")
        self._status_label.setVisible(bool(text))
