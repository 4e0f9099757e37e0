"""Infinite scroll: watch the last rendered post and ask for the next page.

Two pieces:

- ``ScrollAreaObserver`` is the visibility capability. ``observe(widget,
  callback)`` calls ``callback`` whenever ``widget`` goes from hidden to
  visible inside a QScrollArea viewport, and returns an observation whose
  ``detach()`` stops it.
- ``InfiniteScrollTrigger`` keeps exactly one observation on the current
  sentinel (last rendered item) and turns visibility signals into a
  debounced ``FeedController.load_more()``.
"""

import logging
from typing import Callable, Optional

from PyQt6 import sip
from PyQt6.QtCore import QObject, QPoint, QRect, QTimer
from PyQt6.QtWidgets import QScrollArea, QWidget

logger = logging.getLogger("postscroll")

DEFAULT_DEBOUNCE_MS = 100


class ScrollAreaObservation(QObject):
    """One widget watched inside one scroll area."""

    def __init__(self, scroll_area: QScrollArea, widget: QWidget,
                 callback: Callable[[], None]):
        super().__init__(scroll_area)
        self._scroll_area = scroll_area
        self._widget = widget
        self._callback = callback
        self._was_visible = False
        self._attached = True

        scroll_bar = scroll_area.verticalScrollBar()
        scroll_bar.valueChanged.connect(self.check)
        scroll_bar.rangeChanged.connect(self.check)
        # First check once layout has settled
        QTimer.singleShot(0, self.check)

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def widget(self) -> QWidget:
        return self._widget

    def detach(self) -> None:
        if not self._attached:
            return
        self._attached = False
        if not sip.isdeleted(self._scroll_area):
            scroll_bar = self._scroll_area.verticalScrollBar()
            scroll_bar.valueChanged.disconnect(self.check)
            scroll_bar.rangeChanged.disconnect(self.check)
        self.deleteLater()

    def check(self, *_args) -> None:
        if not self._attached or sip.isdeleted(self._widget):
            return
        visible = self._is_visible()
        if visible and not self._was_visible:
            self._callback()
        self._was_visible = visible

    def _is_visible(self) -> bool:
        if not self._widget.isVisible():
            return False
        viewport = self._scroll_area.viewport()
        top_left = self._widget.mapTo(viewport, QPoint(0, 0))
        return viewport.rect().intersects(QRect(top_left, self._widget.size()))


class ScrollAreaObserver:
    """Visibility capability backed by a QScrollArea."""

    def __init__(self, scroll_area: QScrollArea):
        self._scroll_area = scroll_area

    def observe(self, widget: QWidget, callback: Callable[[], None]) -> ScrollAreaObservation:
        return ScrollAreaObservation(self._scroll_area, widget, callback)


class InfiniteScrollTrigger(QObject):
    """Debounced bridge from sentinel visibility to ``load_more()``.

    Visibility callbacks may fire several times for one transition. Each
    one restarts a single-shot timer; only the last one calls load_more().
    The controller revision is captured when the timer is armed, and if the
    feed changed in between (new page, new search) the call is dropped.
    """

    def __init__(self, controller, observe, debounce_ms: int = DEFAULT_DEBOUNCE_MS,
                 parent=None):
        """Initialize the trigger.

        Args:
            controller: FeedController (load_more, loading, has_more, revision)
            observe: Callable (widget, callback) -> observation with detach()
            debounce_ms: Delay before load_more() fires
            parent: Optional parent QObject
        """
        super().__init__(parent)
        self._controller = controller
        self._observe = observe
        self._observation = None
        self._sentinel: Optional[QWidget] = None
        self._attached_revision: Optional[int] = None
        self._armed_revision: Optional[int] = None

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(debounce_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def sentinel(self) -> Optional[QWidget]:
        return self._sentinel

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def attach(self, sentinel: Optional[QWidget]) -> None:
        """Watch the last item. Detaches the previous observation first.

        Re-observing the same widget is skipped only while the feed revision
        is unchanged; after a reset the last card may be the same widget but
        has to be checked for visibility again.
        """
        revision = self._controller.revision
        if (sentinel is not None and sentinel is self._sentinel
                and self._observation is not None
                and revision == self._attached_revision):
            return

        self.detach()

        if sentinel is None or self._controller.loading:
            return

        self._sentinel = sentinel
        self._attached_revision = revision
        self._observation = self._observe(sentinel, self._on_visible)

    def detach(self) -> None:
        if self._observation is not None:
            self._observation.detach()
        self._observation = None
        self._sentinel = None
        self._attached_revision = None

    def _on_visible(self) -> None:
        if self._controller.loading or not self._controller.has_more:
            return
        self._armed_revision = self._controller.revision
        self._timer.start()

    def _fire(self) -> None:
        armed, self._armed_revision = self._armed_revision, None
        if armed is None or armed != self._controller.revision:
            logger.debug("Dropping stale load-more request")
            return
        self._controller.load_more()
