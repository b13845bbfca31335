# tests/test_accordion/test_viewport.py
import pytest
from PySide6.QtCore import QSize
from PySide6.QtWidgets import QWidget, QGraphicsOpacityEffect

from mediaaccordion.accordion.viewport import (
    is_wide_aspect, is_landscape_or_square, is_element_visible,
    parse_duration, format_duration, debounce
)


@pytest.mark.parametrize("width,height,expected", [
    (1920, 1080, True),
    (800, 800, True),
    (390, 844, False),
])
def test_is_wide_aspect(width, height, expected):
    assert is_wide_aspect(width, height) is expected
    assert is_landscape_or_square(QSize(width, height)) is expected


def test_is_landscape_uses_top_level_window(qapp):
    window = QWidget()
    child = QWidget(window)
    window.resize(400, 900)
    child.resize(300, 100)
    assert is_landscape_or_square(child) is False
    window.resize(900, 400)
    assert is_landscape_or_square(child) is True


def test_is_element_visible(qapp):
    assert is_element_visible(None) is False

    window = QWidget()
    window.resize(200, 200)
    widget = QWidget(window)
    widget.resize(50, 50)
    assert is_element_visible(widget) is False  # never shown

    window.show()
    assert is_element_visible(widget) is True

    effect = QGraphicsOpacityEffect(widget)
    effect.setOpacity(0.0)
    widget.setGraphicsEffect(effect)
    assert is_element_visible(widget) is False

    widget.setGraphicsEffect(None)
    assert is_element_visible(widget) is True
    widget.resize(0, 50)
    assert is_element_visible(widget) is False
    window.hide()


@pytest.mark.parametrize("value,expected", [
    ("250ms", 250),
    ("3s", 3000),
    ("1.5s", 1500),
    ("2", 2000),
    (4000, 4000),
    ("", 5000),
    (None, 5000),
    ("fast", 5000),
    ("0ms", 5000),
    (-10, 5000),
])
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


def test_parse_duration_custom_default():
    assert parse_duration("", default_ms=1234) == 1234


def test_format_duration_round_trips_through_parse():
    assert format_duration(3000) == "3000ms"
    assert parse_duration(format_duration(2500.4)) == 2500


def test_debounce_coalesces_calls(fake_scheduler):
    calls = []
    debounced = debounce(lambda *args: calls.append(args), 500, fake_scheduler)

    debounced(1)
    fake_scheduler.advance(300)
    debounced(2)
    fake_scheduler.advance(300)
    debounced(3)
    assert calls == []
    assert len(fake_scheduler.pending()) == 1

    fake_scheduler.advance(499)
    assert calls == []
    fake_scheduler.advance(1)
    assert calls == [(3,)]


def test_debounce_cancel(fake_scheduler):
    calls = []
    debounced = debounce(lambda: calls.append(True), 100, fake_scheduler)
    debounced()
    debounced.cancel()
    debounced.cancel()
    fake_scheduler.advance(1000)
    assert calls == []
