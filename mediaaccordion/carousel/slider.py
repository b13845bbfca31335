# mediaaccordion/carousel/slider.py
"""
A minimal swipeable slider for Qt containers.

The slider treats the container's child widgets (or an explicit list) as
slides, shows one at a time and moves between them on horizontal drags.
It exposes a small event hook so plugins can add behaviour without the
slider knowing about them:

    created         after construction and plugin installation
    optionsChanged  after update() was given new options
    slideChanged    whenever the current slide index changes
    updated         after update() recomputed the layout
    destroyed       after destroy()
"""
import logging
from collections import defaultdict

from PySide6.QtCore import QObject, QEvent, Qt

from ..utils.schemas import DEFAULT_SLIDER_SPACING, DEFAULT_SWIPE_THRESHOLD

logger = logging.getLogger(__name__)


class SwipeSlider(QObject):
    def __init__(self, container, options=None, plugins=(), slides=None):
        """
        Args:
            container (QWidget): The widget holding the slides.
            options (dict, optional): initial, spacing, swipe_threshold and a
                slide_changed(slider) callback.
            plugins (iterable): Callables taking the slider; they subscribe to
                events with slider.on(...).
            slides (list, optional): Slide widgets. Defaults to the widgets in
                the container's layout.
        """
        super().__init__(container)
        self.container = container
        self.options = {
            "initial": 0,
            "spacing": DEFAULT_SLIDER_SPACING,
            "swipe_threshold": DEFAULT_SWIPE_THRESHOLD,
            "slide_changed": None,
        }
        self.options.update(options or {})
        self.slides = list(slides) if slides is not None else self._layout_widgets()
        self._handlers = defaultdict(list)
        self._press_x = None
        self._destroyed = False
        self._saved_spacing = None

        count = len(self.slides)
        self.current_index = min(max(int(self.options["initial"]), 0), count - 1) if count else 0

        if self.options.get("slide_changed"):
            self.on("slideChanged", self.options["slide_changed"])
        for plugin in plugins:
            plugin(self)

        self.container.installEventFilter(self)
        self._apply_layout()
        self._emit("created")
        logger.debug(f"SwipeSlider created with {count} slide(s), initial {self.current_index}.")

    def _layout_widgets(self):
        layout = self.container.layout()
        if layout is None:
            return []
        widgets = []
        for i in range(layout.count()):
            widget = layout.itemAt(i).widget()
            if widget is not None:
                widgets.append(widget)
        return widgets

    # --- Events ---

    def on(self, event_name, handler):
        self._handlers[event_name].append(handler)

    def _emit(self, event_name):
        for handler in list(self._handlers[event_name]):
            handler(self)

    # --- Operations ---

    @property
    def is_destroyed(self):
        return self._destroyed

    def move_to_idx(self, index):
        if self._destroyed or not self.slides:
            return
        index = min(max(int(index), 0), len(self.slides) - 1)
        if index == self.current_index:
            return
        self.current_index = index
        self._apply_layout()
        self._emit("slideChanged")

    def next(self):
        self.move_to_idx(self.current_index + 1)

    def prev(self):
        self.move_to_idx(self.current_index - 1)

    def update(self, options=None):
        """Recomputes the layout; with options, merges them first."""
        if self._destroyed:
            return
        if options:
            self.options.update(options)
            self._emit("optionsChanged")
        self._apply_layout()
        self._emit("updated")

    def destroy(self):
        if self._destroyed:
            return
        self._destroyed = True
        self.container.removeEventFilter(self)
        for slide in self.slides:
            slide.setVisible(True)
        layout = self.container.layout()
        if layout is not None and self._saved_spacing is not None:
            layout.setSpacing(self._saved_spacing)
        self._emit("destroyed")
        self._handlers.clear()
        logger.debug("SwipeSlider destroyed.")

    def _apply_layout(self):
        layout = self.container.layout()
        if layout is not None:
            if self._saved_spacing is None:
                self._saved_spacing = layout.spacing()
            layout.setSpacing(int(self.options["spacing"]))
        for index, slide in enumerate(self.slides):
            slide.setVisible(index == self.current_index)
        self.container.updateGeometry()

    # --- Swipe handling ---

    def eventFilter(self, watched, event):
        if watched is self.container and not self._destroyed:
            event_type = event.type()
            if event_type == QEvent.Type.MouseButtonPress and event.button() == Qt.MouseButton.LeftButton:
                self._press_x = event.position().x()
            elif event_type == QEvent.Type.MouseButtonRelease and self._press_x is not None:
                delta = event.position().x() - self._press_x
                self._press_x = None
                self.handle_swipe(delta)
        return super().eventFilter(watched, event)

    def handle_swipe(self, delta_x):
        """Moves one slide for a drag of at least swipe_threshold pixels."""
        if abs(delta_x) < self.options["swipe_threshold"]:
            return
        if delta_x < 0:
            self.next()
        else:
            self.prev()
