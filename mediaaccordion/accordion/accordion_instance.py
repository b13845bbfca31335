# mediaaccordion/accordion/accordion_instance.py
import logging

from PySide6.QtCore import QObject, QEvent
from PySide6.QtWidgets import QWidget, QFrame, QAbstractButton, QButtonGroup, QStyle, QVBoxLayout

from .playback_controller import PlaybackController
from .viewport import (
    is_landscape_or_square, is_element_visible, debounce, parse_duration, format_duration
)
from ..carousel.carousel_adapter import CarouselAdapter
from ..gui.item_timer import QtScheduler
from ..gui.media_view import create_media_view
from ..gui.widget_helpers import set_style_flag, clear_layout
from ..gui.accordion_widget import (
    ITEM_OBJECT_NAME, HEADER_BUTTON_OBJECT_NAME, CONTENT_CONTAINER_OBJECT_NAME,
    MEDIA_WRAP_OBJECT_NAME, PAUSE_BUTTON_OBJECT_NAME,
    ACTIVE_FLAG, PAUSED_FLAG, DURATION_PROPERTY
)
from ..utils.schemas import DEFAULT_ANIMATION_DURATION_MS, DEFAULT_RESIZE_DEBOUNCE_MS, LAYOUT_DEFAULT, LAYOUT_HOVER

logger = logging.getLogger(__name__)

PAUSE_LABEL = "Pause"
RESUME_LABEL = "Resume"


def _read_flag(value, default=True):
    """Reads a boolean container property that may also arrive as text."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() != "false"
    return bool(value)


class AccordionInstance(QObject):
    """
    Drives one accordion container.

    Reads the items and optional parts (media area, pause button, content
    container) from the container once, owns a PlaybackController and turns
    its index and state changes into widget updates. Clicks, hovers, resizes
    and visibility reports are routed into the controller; nothing else
    mutates playback.
    """

    def __init__(self, container, registry, scheduler=None, carousel=None,
                 default_duration_ms=DEFAULT_ANIMATION_DURATION_MS,
                 resize_debounce_ms=DEFAULT_RESIZE_DEBOUNCE_MS,
                 media_factory=create_media_view):
        super().__init__(container)
        self.container = container
        self.registry = registry
        self.scheduler = scheduler or QtScheduler()
        self.carousel = carousel or CarouselAdapter()
        self.default_duration_ms = default_duration_ms
        self._media_factory = media_factory

        self.items = container.findChildren(QFrame, ITEM_OBJECT_NAME)
        self.media_container = container.findChild(QWidget, MEDIA_WRAP_OBJECT_NAME)
        self.pause_button = container.findChild(QAbstractButton, PAUSE_BUTTON_OBJECT_NAME)
        self.content_container = container.findChild(QWidget, CONTENT_CONTAINER_OBJECT_NAME)

        self.autoplay_enabled = _read_flag(container.property("autoplay"))
        self.layout_variant = container.property("layout") or LAYOUT_DEFAULT
        self.is_visible = False
        self.media_view = None

        self._destroyed = False
        self._button_group = None
        self._filtered = []
        self._screen = None

        self.controller = PlaybackController(
            len(self.items), self._duration_for, self.scheduler,
            autoplay_enabled=self.autoplay_enabled,
            on_item_changed=self._on_item_changed,
            on_state_changed=self._on_state_changed,
        )
        self.handle_orientation_change = debounce(
            self._handle_orientation_change, resize_debounce_ms, self.scheduler)

        self._init()

    @property
    def is_dormant(self):
        return not self.items

    @property
    def current_index(self):
        return self.controller.current_index

    def _init(self):
        if not self.items:
            logger.info("Accordion has no items; leaving it dormant.")
            return

        if self.media_container is None:
            logger.warning("Accordion has no media area; media display disabled.")
        if self.pause_button is None:
            logger.warning("Accordion has no pause button; pause control disabled.")

        self._attach_event_listeners()

        # Show the first item straight away; playback waits for visibility.
        self._render_items()
        self._update_media_content()
        self._update_pause_button()

        self.registry.register(self)

        if not is_landscape_or_square(self.container) and is_element_visible(self.container):
            self.init_slider()
        logger.info(f"Accordion initialized with {len(self.items)} item(s), "
                    f"autoplay={self.autoplay_enabled}, layout={self.layout_variant}.")

    # --- Wiring ---

    def _attach_event_listeners(self):
        self._button_group = QButtonGroup(self)
        self._button_group.setExclusive(False)
        for item in self.items:
            header = item.findChild(QAbstractButton, HEADER_BUTTON_OBJECT_NAME)
            if header is not None:
                self._button_group.addButton(header)
        if self.pause_button is not None:
            self._button_group.addButton(self.pause_button)
        self._button_group.buttonClicked.connect(self.handle_click)

        if self.layout_variant == LAYOUT_HOVER:
            for item in self.items:
                self._install_filter(item)

        self._install_filter(self.container.window())

        screen = self.container.screen()
        if screen is not None:
            screen.orientationChanged.connect(self._on_screen_orientation_changed)
            self._screen = screen

    def _install_filter(self, widget):
        if widget is not None and widget not in self._filtered:
            widget.installEventFilter(self)
            self._filtered.append(widget)

    def eventFilter(self, watched, event):
        if not self._destroyed:
            event_type = event.type()
            if event_type == QEvent.Type.Enter and watched in self.items:
                self.handle_item_hover(self.items.index(watched))
            elif event_type == QEvent.Type.Resize and watched is self.container.window():
                self.handle_orientation_change()
        return super().eventFilter(watched, event)

    def _on_screen_orientation_changed(self, _orientation):
        self.handle_orientation_change()

    # --- Input ---

    def handle_click(self, button):
        """Delegated click handler for header and pause buttons."""
        if self._destroyed:
            return
        role = button.property("role")
        if role == "header":
            index = self._item_index_of(button)
            if index is not None:
                self.handle_item_click(index)
        elif role == "pause":
            self.toggle_pause()

    def _item_index_of(self, widget):
        while widget is not None and widget is not self.container:
            if widget in self.items:
                return self.items.index(widget)
            widget = widget.parentWidget()
        return None

    def handle_item_click(self, index):
        # In narrow mode the carousel drives navigation.
        if not is_landscape_or_square(self.container):
            return
        self.controller.jump_to(index)

    def handle_item_hover(self, index):
        self.controller.jump_to(index)

    def toggle_pause(self):
        self.controller.toggle_pause()

    def pause(self):
        self.controller.user_pause()

    def resume(self):
        self.controller.user_resume()

    def on_visibility_change(self, visible):
        if self._destroyed or self.is_dormant:
            return
        self.is_visible = visible
        if visible and not is_landscape_or_square(self.container) and not self.carousel.is_attached:
            self.init_slider()
        self.controller.on_visibility_change(visible)

    # --- Carousel mode ---

    def init_slider(self):
        if self.content_container is None or self.carousel.is_attached:
            return
        if not is_element_visible(self.container):
            return
        self.carousel.attach(self.content_container, self.items,
                             self.controller.current_index, self._on_slide_changed)

    def _on_slide_changed(self, index):
        if not self._destroyed:
            self.controller.jump_to(index)

    def _handle_orientation_change(self):
        if self._destroyed:
            return
        if is_landscape_or_square(self.container):
            self.carousel.detach()
        elif not self.carousel.is_attached and self.is_visible:
            self.init_slider()
        elif self.carousel.is_attached:
            self.carousel.refresh()

    # --- Rendering ---

    def _duration_for(self, index):
        widget = self.items[index]
        self._write_duration(widget)
        return parse_duration(widget.property(DURATION_PROPERTY), self.default_duration_ms)

    def _write_duration(self, widget):
        item = getattr(widget, "item", None)
        if item is not None:
            widget.setProperty(DURATION_PROPERTY, format_duration(item.duration_ms))

    def _on_item_changed(self, previous, current):
        if previous == current:
            # Same item again (a wrap with one item); restart its progress.
            set_style_flag(self.items[current], ACTIVE_FLAG, False)
        self._render_items()
        self._update_media_content()
        self.carousel.sync_to_index(current)

    def _on_state_changed(self, state):
        logger.debug(f"Accordion playback state: {state.value}.")
        current = self.items[self.controller.current_index]
        set_style_flag(current, PAUSED_FLAG, not self.controller.is_running)
        self._update_pause_button()
        self._handle_video_playback()

    def _render_items(self):
        current_index = self.controller.current_index
        paused = not self.controller.is_running
        for index, widget in enumerate(self.items):
            if index != current_index:
                set_style_flag(widget, ACTIVE_FLAG, False)
                set_style_flag(widget, PAUSED_FLAG, False)
        current = self.items[current_index]
        self._write_duration(current)
        set_style_flag(current, PAUSED_FLAG, paused)
        set_style_flag(current, ACTIVE_FLAG, True)

    def _update_media_content(self):
        if self.media_container is None:
            return
        item = getattr(self.items[self.controller.current_index], "item", None)
        if item is None:
            return

        if self.media_view is not None:
            self.media_view.stop()
        layout = self.media_container.layout()
        if layout is None:
            layout = QVBoxLayout(self.media_container)
            layout.setContentsMargins(0, 0, 0, 0)
        clear_layout(layout)
        self.media_view = None

        view = self._media_factory(item, autoplay=self.controller.is_running, parent=self.media_container)
        if view is None:
            return
        layout.addWidget(view)
        self.media_view = view
        # Flag the new media once it has been laid out so a fade-in can run.
        self.scheduler.call_later(0, lambda: self._mark_media_active(view))

    def _mark_media_active(self, view):
        if view is self.media_view and not self._destroyed:
            set_style_flag(view, ACTIVE_FLAG, True)

    def _handle_video_playback(self):
        view = self.media_view
        if view is None or not getattr(view, "is_video", False):
            return
        if self.controller.is_running:
            view.play()
        else:
            view.pause()

    def _update_pause_button(self):
        if self.pause_button is None:
            return
        user_paused = self.controller.is_user_paused
        label = RESUME_LABEL if user_paused else PAUSE_LABEL
        icon = QStyle.StandardPixmap.SP_MediaPlay if user_paused else QStyle.StandardPixmap.SP_MediaPause
        self.pause_button.setIcon(self.pause_button.style().standardIcon(icon))
        self.pause_button.setText(label)
        self.pause_button.setToolTip(label)
        self.pause_button.setAccessibleName(label)

    # --- Teardown ---

    def destroy(self):
        """Stops playback and releases every listener. Safe to call repeatedly."""
        if self._destroyed:
            return
        self._destroyed = True

        self.handle_orientation_change.cancel()
        self.controller.shutdown()
        self.registry.unregister(self)
        self.carousel.detach()

        if self._button_group is not None:
            self._button_group.buttonClicked.disconnect(self.handle_click)
            for button in self._button_group.buttons():
                self._button_group.removeButton(button)
            self._button_group = None
        for widget in self._filtered:
            widget.removeEventFilter(self)
        self._filtered = []
        if self._screen is not None:
            self._screen.orientationChanged.disconnect(self._on_screen_orientation_changed)
            self._screen = None

        if self.media_view is not None:
            self.media_view.stop()
        logger.info("Accordion destroyed.")
