# mediaaccordion/accordion/viewport.py
"""
Viewport classification and small timing helpers shared by the accordion.
"""
import logging
import re

from PySide6.QtCore import QSize
from PySide6.QtWidgets import QGraphicsOpacityEffect

from ..utils.schemas import DEFAULT_ANIMATION_DURATION_MS

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(ms|s)?\s*$", re.IGNORECASE)


def is_wide_aspect(width, height):
    """True for landscape or square proportions (min-aspect-ratio 1/1)."""
    return width >= height


def viewport_size(widget_or_size):
    """Size of the viewport a widget lives in: its top-level window."""
    if isinstance(widget_or_size, QSize):
        return widget_or_size
    return widget_or_size.window().size()


def is_landscape_or_square(widget_or_size):
    """
    Checks whether the viewport is "wide".

    Args:
        widget_or_size (QWidget | QSize): Any widget in the window to classify,
            or an explicit viewport size.

    Returns:
        bool: True if the aspect ratio is 1/1 or wider.
    """
    size = viewport_size(widget_or_size)
    return is_wide_aspect(size.width(), size.height())


def is_element_visible(widget):
    """
    Checks that a widget is shown, has a non-zero size and is not transparent.

    This says nothing about whether it is scrolled into view; that is the
    intersection observer's job.
    """
    if widget is None:
        return False
    if not widget.isVisible() or widget.width() <= 0 or widget.height() <= 0:
        return False
    effect = widget.graphicsEffect()
    if isinstance(effect, QGraphicsOpacityEffect) and effect.isEnabled() and effect.opacity() <= 0:
        return False
    return widget.window().windowOpacity() > 0


def parse_duration(value, default_ms=DEFAULT_ANIMATION_DURATION_MS):
    """
    Parses a duration into milliseconds.

    Strings follow CSS time syntax ("250ms", "3s"); a bare number in a string is
    taken as seconds. Numbers are milliseconds already. Anything empty, non-positive
    or unparseable yields default_ms.
    """
    if value is None or isinstance(value, bool):
        return default_ms
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else default_ms

    match = _DURATION_RE.match(str(value))
    if not match:
        return default_ms
    amount = float(match.group(1))
    if amount <= 0:
        return default_ms
    unit = (match.group(2) or "s").lower()
    return amount if unit == "ms" else amount * 1000


def format_duration(duration_ms):
    """Formats milliseconds as a CSS time value, e.g. '3000ms'."""
    return f"{int(round(duration_ms))}ms"


def debounce(func, delay_ms, scheduler):
    """
    Wraps func so that a burst of calls results in one call, delay_ms after the
    last one, with the last call's arguments.

    Args:
        func (callable): The function to debounce.
        delay_ms (int): Quiet period in milliseconds.
        scheduler: Anything with call_later(delay_ms, callback) returning a
            handle that has stop().

    Returns:
        callable: The wrapper. wrapper.cancel() drops a pending call.
    """
    pending = []

    def cancel():
        while pending:
            pending.pop().stop()

    def wrapper(*args, **kwargs):
        cancel()

        def fire():
            pending.clear()
            func(*args, **kwargs)

        pending.append(scheduler.call_later(delay_ms, fire))

    wrapper.cancel = cancel
    wrapper.__wrapped__ = func
    return wrapper
