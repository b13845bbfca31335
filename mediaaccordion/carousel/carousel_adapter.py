# mediaaccordion/carousel/carousel_adapter.py
import logging

from .slider import SwipeSlider
from .navigation_plugin import create_navigation_plugin
from ..gui.widget_helpers import set_style_flag
from ..utils.schemas import DEFAULT_SLIDER_SPACING

logger = logging.getLogger(__name__)

CAROUSEL_FLAG = "carousel"
CAROUSEL_SLIDE_FLAG = "carouselSlide"


class CarouselAdapter:
    """
    Owns the swipe slider used in narrow viewports: creates it with the
    navigation dots, tears it down, and keeps it in step with the accordion
    without echoing moves back to it.
    """

    def __init__(self, slider_factory=SwipeSlider, spacing=DEFAULT_SLIDER_SPACING,
                 plugins=(create_navigation_plugin,)):
        self._slider_factory = slider_factory
        self.spacing = spacing
        self.plugins = tuple(plugins)
        self.slider = None
        self._container = None
        self._items = []
        self._on_slide_changed = None
        self._syncing = False

    @property
    def is_attached(self):
        return self.slider is not None

    def attach(self, container, items, initial_index, on_slide_changed):
        """
        Turns container into a slider whose slides are the item widgets.

        Args:
            container (QWidget): Holds the item widgets.
            items (list): The item widgets, in order.
            initial_index (int): Slide to show first.
            on_slide_changed (callable): Receives the new index after a drag
                or a dot click.

        Returns:
            bool: True if a slider was created.
        """
        if self.slider is not None or container is None:
            return False

        self._container = container
        self._items = list(items)
        self._on_slide_changed = on_slide_changed

        set_style_flag(container, CAROUSEL_FLAG, True)
        for item in self._items:
            set_style_flag(item, CAROUSEL_SLIDE_FLAG, True)

        self.slider = self._slider_factory(
            container,
            {
                "initial": initial_index,
                "spacing": self.spacing,
                "slide_changed": self._handle_slide_changed,
            },
            list(self.plugins),
            slides=self._items,
        )
        logger.info(f"Carousel attached with {len(self._items)} slide(s) at index {initial_index}.")
        return True

    def detach(self):
        if self.slider is not None:
            slider, self.slider = self.slider, None
            slider.destroy()
            logger.info("Carousel detached.")
        if self._container is not None:
            set_style_flag(self._container, CAROUSEL_FLAG, False)
        for item in self._items:
            set_style_flag(item, CAROUSEL_SLIDE_FLAG, False)
        self._container = None
        self._items = []
        self._on_slide_changed = None

    def sync_to_index(self, index):
        """Moves the slider to index without reporting the move back."""
        if self.slider is None:
            return
        self._syncing = True
        try:
            self.slider.move_to_idx(index)
        finally:
            self._syncing = False

    def refresh(self):
        if self.slider is not None:
            self.slider.update()

    def _handle_slide_changed(self, slider):
        if self._syncing or self._on_slide_changed is None:
            return
        self._on_slide_changed(slider.current_index)
