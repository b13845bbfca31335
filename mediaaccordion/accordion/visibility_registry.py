# mediaaccordion/accordion/visibility_registry.py
import logging
from dataclasses import dataclass

from PySide6.QtCore import QObject, QTimer

from .viewport import is_element_visible
from ..utils.schemas import DEFAULT_VISIBILITY_THRESHOLD, DEFAULT_VISIBILITY_POLL_MS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntersectionEntry:
    target: object
    is_intersecting: bool
    ratio: float = 0.0


def intersection_ratio(widget):
    """Fraction of the widget's area that is currently unclipped and unobscured."""
    area = widget.width() * widget.height()
    if area <= 0 or not widget.isVisible():
        return 0.0
    visible = widget.visibleRegion().boundingRect().intersected(widget.rect())
    return (visible.width() * visible.height()) / area


class IntersectionObserver(QObject):
    """
    Watches how much of each observed widget is in view.

    One repeating QTimer serves every target. The callback receives a list of
    IntersectionEntry for the targets whose intersecting state changed since
    the previous poll; a freshly observed target is always reported once.
    """

    def __init__(self, callback, threshold=DEFAULT_VISIBILITY_THRESHOLD,
                 interval_ms=DEFAULT_VISIBILITY_POLL_MS, parent=None):
        super().__init__(parent)
        self._callback = callback
        self.threshold = threshold
        self._targets = {}  # widget -> last reported is_intersecting, None until first report
        self._poll_timer = QTimer(self)
        self._poll_timer.setInterval(interval_ms)
        self._poll_timer.timeout.connect(self.poll)

    def observe(self, widget):
        if widget in self._targets:
            return
        self._targets[widget] = None
        if not self._poll_timer.isActive():
            self._poll_timer.start()
        # Report the initial state promptly instead of waiting a full interval.
        QTimer.singleShot(0, self.poll)

    def unobserve(self, widget):
        self._targets.pop(widget, None)
        if not self._targets:
            self._poll_timer.stop()

    def disconnect_all(self):
        self._poll_timer.stop()
        self._targets.clear()

    def observed(self):
        return list(self._targets)

    def poll(self):
        entries = []
        for widget, previous in list(self._targets.items()):
            ratio = intersection_ratio(widget)
            intersecting = ratio > 0 and ratio >= self.threshold
            if intersecting != previous:
                self._targets[widget] = intersecting
                entries.append(IntersectionEntry(widget, intersecting, ratio))
        if entries:
            self._callback(entries)


class VisibilityRegistry:
    """
    Multiplexes one IntersectionObserver over every accordion in the process.

    Instances register with their container widget; visible/not-visible
    transitions are forwarded to the instance's on_visibility_change. The
    observer is created on first registration and dropped by destroy().
    """

    def __init__(self, threshold=DEFAULT_VISIBILITY_THRESHOLD,
                 interval_ms=DEFAULT_VISIBILITY_POLL_MS, observer_factory=IntersectionObserver):
        self.threshold = threshold
        self.interval_ms = interval_ms
        self._observer_factory = observer_factory
        self._observer = None
        self._instances = {}

    def __len__(self):
        return len(self._instances)

    @property
    def observer(self):
        return self._observer

    def init(self):
        if self._observer is None:
            logger.debug("Creating shared intersection observer.")
            self._observer = self._observer_factory(
                self.handle_entries, threshold=self.threshold, interval_ms=self.interval_ms)

    def register(self, instance):
        container = instance.container
        if container in self._instances:
            return
        self.init()
        self._instances[container] = instance
        self._observer.observe(container)
        logger.debug(f"Registered accordion; {len(self._instances)} observed.")

    def unregister(self, instance):
        container = instance.container
        if self._observer is None or container not in self._instances:
            return
        self._observer.unobserve(container)
        del self._instances[container]
        logger.debug(f"Unregistered accordion; {len(self._instances)} observed.")

    def is_registered(self, instance):
        return self._instances.get(instance.container) is instance

    def destroy(self):
        if self._observer is not None:
            self._observer.disconnect_all()
            self._observer = None
        self._instances.clear()
        logger.info("Visibility registry destroyed.")

    def handle_entries(self, entries):
        for entry in entries:
            instance = self._instances.get(entry.target)
            if instance is None:
                continue
            visible = bool(entry.is_intersecting) and is_element_visible(entry.target)
            instance.on_visibility_change(visible)
