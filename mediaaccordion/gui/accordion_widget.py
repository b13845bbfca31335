# mediaaccordion/gui/accordion_widget.py
"""
Widgets making up an accordion on screen. They only render: which item is
active or paused is decided elsewhere and arrives as dynamic properties.
"""
import logging
from PySide6.QtWidgets import (
    QFrame, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QProgressBar,
    QScrollArea, QMainWindow, QSizePolicy
)
from PySide6.QtCore import Qt, QEvent, QPropertyAnimation, QAbstractAnimation

from .widget_helpers import create_button
from ..accordion.viewport import parse_duration

logger = logging.getLogger(__name__)

ACCORDION_OBJECT_NAME = "mediaAccordion"
ITEM_OBJECT_NAME = "accordionItem"
HEADER_BUTTON_OBJECT_NAME = "headerButton"
CONTENT_CONTAINER_OBJECT_NAME = "contentContainer"
MEDIA_WRAP_OBJECT_NAME = "mediaWrap"
PAUSE_BUTTON_OBJECT_NAME = "pauseButton"

ACTIVE_FLAG = "active"
PAUSED_FLAG = "paused"
DURATION_PROPERTY = "animationDuration"

PROGRESS_RANGE = 1000

STYLE_SHEET = """
QFrame#accordionItem { border-left: 3px solid transparent; }
QFrame#accordionItem[active="true"] { border-left: 3px solid #2271b1; background: #f0f6fc; }
QFrame#accordionItem[carouselSlide="true"] { border-left: none; }
QProgressBar#progress { max-height: 3px; border: none; background: #dcdcde; }
QProgressBar#progress::chunk { background: #2271b1; }
QPushButton#dot { border-radius: 6px; background: #c3c4c7; }
QPushButton#dot[dotActive="true"] { background: #1d2327; }
"""


class ItemWidget(QFrame):
    """
    One accordion item: a header button and a progress bar.

    The progress bar animates over the item's animationDuration while the item
    is active and not paused, pauses with it, and resets when it goes inactive.
    """

    def __init__(self, item, index, parent=None):
        super().__init__(parent)
        self.item = item
        self.setObjectName(ITEM_OBJECT_NAME)
        self.setProperty("itemIndex", index)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)

        self.header_button = create_button(item.title, object_name=HEADER_BUTTON_OBJECT_NAME)
        self.header_button.setFlat(True)
        self.header_button.setProperty("role", "header")
        self.header_button.setProperty("itemIndex", index)
        layout.addWidget(self.header_button)

        self.progress = QProgressBar(self)
        self.progress.setObjectName("progress")
        self.progress.setRange(0, PROGRESS_RANGE)
        self.progress.setValue(0)
        self.progress.setTextVisible(False)
        layout.addWidget(self.progress)

        self.progress_animation = QPropertyAnimation(self.progress, b"value", self)
        self.progress_animation.setStartValue(0)
        self.progress_animation.setEndValue(PROGRESS_RANGE)
        self._was_active = False

    def event(self, event):
        if event.type() == QEvent.Type.DynamicPropertyChange:
            name = bytes(event.propertyName()).decode()
            if name in (ACTIVE_FLAG, PAUSED_FLAG, DURATION_PROPERTY):
                self._sync_progress()
        return super().event(event)

    def _sync_progress(self):
        active = bool(self.property(ACTIVE_FLAG))
        paused = bool(self.property(PAUSED_FLAG))
        animation = self.progress_animation

        if not active:
            animation.stop()
            self.progress.setValue(0)
        elif not self._was_active:
            animation.stop()
            animation.setDuration(int(parse_duration(self.property(DURATION_PROPERTY))))
            animation.start()
            if paused:
                animation.pause()
        elif paused and animation.state() == QAbstractAnimation.State.Running:
            animation.pause()
        elif not paused and animation.state() == QAbstractAnimation.State.Paused:
            animation.resume()
        self._was_active = active


class AccordionContainer(QFrame):
    """
    The on-screen accordion built from an AccordionDefinition: items on the
    left, the active item's media on the right, a pause button underneath.
    The autoplay and layout settings travel as dynamic properties.
    """

    def __init__(self, definition, parent=None):
        super().__init__(parent)
        self.definition = definition
        self.setObjectName(ACCORDION_OBJECT_NAME)
        self.setProperty("autoplay", definition.autoplay)
        self.setProperty("layout", definition.layout)
        self.setMinimumHeight(240)

        outer = QVBoxLayout(self)
        body = QHBoxLayout()
        outer.addLayout(body, 1)

        column = QWidget(self)
        column_layout = QVBoxLayout(column)
        column_layout.setContentsMargins(0, 0, 0, 0)
        self.content_container = QWidget(column)
        self.content_container.setObjectName(CONTENT_CONTAINER_OBJECT_NAME)
        content_layout = QVBoxLayout(self.content_container)
        content_layout.setContentsMargins(0, 0, 0, 0)
        for index, item in enumerate(definition.items):
            content_layout.addWidget(ItemWidget(item, index, self.content_container))
        content_layout.addStretch(1)
        column_layout.addWidget(self.content_container)
        body.addWidget(column, 1)

        self.media_wrap = QWidget(self)
        self.media_wrap.setObjectName(MEDIA_WRAP_OBJECT_NAME)
        self.media_wrap.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        media_layout = QVBoxLayout(self.media_wrap)
        media_layout.setContentsMargins(0, 0, 0, 0)
        body.addWidget(self.media_wrap, 2)

        controls = QHBoxLayout()
        controls.addStretch(1)
        self.pause_button = create_button("Pause", object_name=PAUSE_BUTTON_OBJECT_NAME)
        self.pause_button.setProperty("role", "pause")
        controls.addWidget(self.pause_button)
        outer.addLayout(controls)
        logger.debug(f"AccordionContainer built with {len(definition.items)} item(s).")


class AccordionPageWindow(QMainWindow):
    """A scrollable page holding any number of accordions."""

    def __init__(self, title, definitions, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title or "Media Accordion")
        self.setStyleSheet(STYLE_SHEET)

        page = QWidget()
        page_layout = QVBoxLayout(page)
        if title:
            heading = QLabel(title)
            heading.setObjectName("pageTitle")
            page_layout.addWidget(heading)

        self.containers = []
        for definition in definitions:
            container = AccordionContainer(definition, page)
            page_layout.addWidget(container)
            self.containers.append(container)
        page_layout.addStretch(1)

        self.scroll_area = QScrollArea(self)
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.scroll_area.setWidget(page)
        self.setCentralWidget(self.scroll_area)
        self.resize(1024, 720)
