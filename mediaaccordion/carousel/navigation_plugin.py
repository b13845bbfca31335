# mediaaccordion/carousel/navigation_plugin.py
import logging

from PySide6.QtWidgets import QWidget, QHBoxLayout, QPushButton, QBoxLayout
from PySide6.QtCore import Qt

from ..gui.widget_helpers import set_style_flag

logger = logging.getLogger(__name__)

DOTS_OBJECT_NAME = "carouselDots"
DOT_OBJECT_NAME = "dot"
DOT_ACTIVE_FLAG = "dotActive"


class DotNavigation:
    """
    Renders one dot per slide below a SwipeSlider's container. Clicking a dot
    moves the slider there; the dot of the current slide carries the
    dotActive flag.
    """

    def __init__(self, slider):
        self.slider = slider
        self.dots = None
        slider.on("created", self._on_created)
        slider.on("optionsChanged", self._on_options_changed)
        slider.on("slideChanged", self.update_dots)
        slider.on("destroyed", self._on_destroyed)

    def _on_created(self, _slider):
        self.create_markup()
        self.update_dots()

    def _on_options_changed(self, _slider):
        self.remove_markup()
        self.create_markup()
        self.update_dots()

    def _on_destroyed(self, _slider):
        self.remove_markup()

    def create_markup(self):
        container = self.slider.container
        self.dots = QWidget()
        self.dots.setObjectName(DOTS_OBJECT_NAME)
        row = QHBoxLayout(self.dots)
        row.setContentsMargins(0, 0, 0, 0)
        row.addStretch(1)
        for index, _slide in enumerate(self.slider.slides):
            dot = QPushButton()
            dot.setObjectName(DOT_OBJECT_NAME)
            dot.setFlat(True)
            dot.setFixedSize(12, 12)
            dot.setCursor(Qt.CursorShape.PointingHandCursor)
            dot.setAccessibleName(f"Go to slide {index + 1}")
            dot.clicked.connect(lambda _checked=False, i=index: self.slider.move_to_idx(i))
            row.addWidget(dot)
        row.addStretch(1)

        parent = container.parentWidget()
        parent_layout = parent.layout() if parent is not None else None
        if isinstance(parent_layout, QBoxLayout) and parent_layout.indexOf(container) >= 0:
            parent_layout.insertWidget(parent_layout.indexOf(container) + 1, self.dots)
        elif container.layout() is not None:
            container.layout().addWidget(self.dots)
        else:
            self.dots.setParent(container)
        self.dots.show()
        logger.debug(f"Rendered {len(self.slider.slides)} navigation dot(s).")

    def remove_markup(self):
        if self.dots is None:
            return
        self.dots.hide()
        self.dots.setParent(None)
        self.dots.deleteLater()
        self.dots = None

    def dot_buttons(self):
        if self.dots is None:
            return []
        return self.dots.findChildren(QPushButton, DOT_OBJECT_NAME)

    def update_dots(self, _slider=None):
        if self.dots is None:
            return
        active = self.slider.current_index
        for index, dot in enumerate(self.dot_buttons()):
            set_style_flag(dot, DOT_ACTIVE_FLAG, index == active)


def create_navigation_plugin(slider):
    """Plugin entry point for SwipeSlider(..., plugins=[create_navigation_plugin])."""
    return DotNavigation(slider)
