# tests/test_accordion/test_visibility_registry.py
import pytest
from unittest.mock import MagicMock, patch
from PySide6.QtWidgets import QWidget

from mediaaccordion.accordion.visibility_registry import (
    VisibilityRegistry, IntersectionEntry, IntersectionObserver, intersection_ratio
)


class FakeObserver:
    created = []

    def __init__(self, callback, threshold, interval_ms):
        self.callback = callback
        self.threshold = threshold
        self.interval_ms = interval_ms
        self.targets = []
        self.disconnected = False
        FakeObserver.created.append(self)

    def observe(self, widget):
        self.targets.append(widget)

    def unobserve(self, widget):
        self.targets.remove(widget)

    def disconnect_all(self):
        self.disconnected = True
        self.targets.clear()


@pytest.fixture(autouse=True)
def reset_fake_observers():
    FakeObserver.created = []


@pytest.fixture
def registry():
    return VisibilityRegistry(threshold=0.1, interval_ms=50, observer_factory=FakeObserver)


def make_instance(name="container"):
    instance = MagicMock()
    instance.container = MagicMock(name=name)
    return instance


def test_observer_is_created_lazily_once(registry):
    assert registry.observer is None
    registry.register(make_instance("a"))
    registry.register(make_instance("b"))
    assert len(FakeObserver.created) == 1
    assert registry.observer.threshold == 0.1
    assert registry.observer.interval_ms == 50
    assert len(registry) == 2


def test_register_is_idempotent(registry):
    instance = make_instance()
    registry.register(instance)
    registry.register(instance)
    assert registry.observer.targets == [instance.container]
    assert len(registry) == 1
    assert registry.is_registered(instance)


def test_unregister_stops_observing(registry):
    instance = make_instance()
    registry.register(instance)
    registry.unregister(instance)
    registry.unregister(instance)
    assert registry.observer.targets == []
    assert not registry.is_registered(instance)
    assert len(registry) == 0


def test_unregister_without_observer_is_noop(registry):
    registry.unregister(make_instance())
    assert registry.observer is None


@patch('mediaaccordion.accordion.visibility_registry.is_element_visible', return_value=True)
def test_entries_are_dispatched_to_owning_instance(mock_visible, registry):
    first, second = make_instance("a"), make_instance("b")
    registry.register(first)
    registry.register(second)

    registry.handle_entries([
        IntersectionEntry(first.container, True, 0.5),
        IntersectionEntry(second.container, False, 0.0),
    ])

    first.on_visibility_change.assert_called_once_with(True)
    second.on_visibility_change.assert_called_once_with(False)


@patch('mediaaccordion.accordion.visibility_registry.is_element_visible', return_value=False)
def test_intersecting_but_hidden_counts_as_not_visible(mock_visible, registry):
    instance = make_instance()
    registry.register(instance)
    registry.handle_entries([IntersectionEntry(instance.container, True, 1.0)])
    instance.on_visibility_change.assert_called_once_with(False)


def test_stale_entries_are_ignored(registry):
    instance = make_instance()
    registry.register(instance)
    registry.unregister(instance)
    registry.handle_entries([IntersectionEntry(instance.container, True, 1.0)])
    instance.on_visibility_change.assert_not_called()


def test_destroy_disconnects_and_clears(registry):
    instance = make_instance()
    registry.register(instance)
    observer = registry.observer
    registry.destroy()
    registry.destroy()
    assert observer.disconnected
    assert registry.observer is None
    assert len(registry) == 0

    registry.register(instance)
    assert len(FakeObserver.created) == 2


def test_intersection_ratio_of_hidden_widget_is_zero(qapp):
    widget = QWidget()
    widget.resize(100, 100)
    assert intersection_ratio(widget) == 0.0


def test_observer_reports_only_transitions(qapp):
    received = []
    observer = IntersectionObserver(received.append, threshold=0.1, interval_ms=1000)
    widget = QWidget()
    widget.resize(100, 100)

    observer.observe(widget)
    observer.poll()
    observer.poll()
    assert len(received) == 1
    assert received[0][0].target is widget
    assert received[0][0].is_intersecting is False

    with patch('mediaaccordion.accordion.visibility_registry.intersection_ratio', return_value=0.5):
        observer.poll()
    assert len(received) == 2
    assert received[1][0].is_intersecting is True
    assert received[1][0].ratio == 0.5

    with patch('mediaaccordion.accordion.visibility_registry.intersection_ratio', return_value=0.05):
        observer.poll()
    assert received[2][0].is_intersecting is False

    observer.unobserve(widget)
    observer.disconnect_all()
    assert observer.observed() == []
