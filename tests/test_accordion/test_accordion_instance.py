# tests/test_accordion/test_accordion_instance.py
import time
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch
from PySide6.QtCore import QPointF, QAbstractAnimation
from PySide6.QtGui import QEnterEvent
from PySide6.QtWidgets import QApplication, QWidget, QVBoxLayout, QLabel

from mediaaccordion.accordion.accordion_instance import AccordionInstance, PAUSE_LABEL, RESUME_LABEL
from mediaaccordion.accordion.items import Item, AccordionDefinition
from mediaaccordion.accordion.playback_controller import PlaybackState
from mediaaccordion.accordion.visibility_registry import VisibilityRegistry
from mediaaccordion.carousel.carousel_adapter import CAROUSEL_FLAG, CAROUSEL_SLIDE_FLAG
from mediaaccordion.gui.accordion_widget import AccordionContainer, ACTIVE_FLAG, PAUSED_FLAG, DURATION_PROPERTY

MODULE = "mediaaccordion.accordion.accordion_instance"

ITEMS = (Item("Plan", 3000), Item("Build", 5000), Item("Ship", 2000))


class FakeMediaView(QLabel):
    """Stands in for a video view and records the playback calls it receives."""
    is_video = True

    def __init__(self, item, autoplay, parent=None):
        super().__init__(item.title, parent)
        self.item = item
        self.autoplay = autoplay
        self.calls = []

    def play(self):
        self.calls.append("play")

    def pause(self):
        self.calls.append("pause")

    def stop(self):
        self.calls.append("stop")


@pytest.fixture
def viewport():
    """Wide and visible unless a test says otherwise."""
    with patch(f"{MODULE}.is_landscape_or_square", return_value=True) as landscape, \
            patch(f"{MODULE}.is_element_visible", return_value=True) as visible:
        yield SimpleNamespace(landscape=landscape, visible=visible)


@pytest.fixture
def media_views():
    return []


@pytest.fixture
def make_accordion(qapp, fake_scheduler, viewport, media_views):
    windows = []
    instances = []

    def media_factory(item, autoplay=True, parent=None):
        view = FakeMediaView(item, autoplay, parent)
        media_views.append(view)
        return view

    def factory(definition=None, carousel=None, registry=None):
        window = QWidget()
        layout = QVBoxLayout(window)
        container = AccordionContainer(definition or AccordionDefinition(items=ITEMS), window)
        layout.addWidget(container)
        window.resize(1000, 700)
        window.show()
        windows.append(window)

        instance = AccordionInstance(container, registry if registry is not None else MagicMock(),
                                     scheduler=fake_scheduler,
                                     carousel=carousel, media_factory=media_factory)
        instances.append(instance)
        return instance

    yield factory

    for instance in instances:
        instance.destroy()
    for window in windows:
        window.hide()


class RecordingObserver:
    def __init__(self, callback, threshold=0.1, interval_ms=100):
        self.callback = callback
        self.targets = []

    def observe(self, widget):
        self.targets.append(widget)

    def unobserve(self, widget):
        self.targets.remove(widget)

    def disconnect_all(self):
        self.targets = []


def active_flags(instance):
    return [bool(item.property(ACTIVE_FLAG)) for item in instance.items]


def test_initial_render_shows_first_item_and_registers(make_accordion):
    instance = make_accordion()

    assert len(instance.items) == 3
    assert active_flags(instance) == [True, False, False]
    assert instance.items[0].property(PAUSED_FLAG) is True
    assert instance.controller.state is PlaybackState.IDLE
    assert instance.container.pause_button.text() == PAUSE_LABEL
    instance.registry.register.assert_called_once_with(instance)


def test_visibility_starts_playback_and_advances(make_accordion, fake_scheduler, media_views):
    instance = make_accordion()
    instance.on_visibility_change(True)

    assert instance.controller.is_running
    assert instance.items[0].property(DURATION_PROPERTY) == "3000ms"
    assert instance.items[0].property(PAUSED_FLAG) is False

    fake_scheduler.advance(3000)
    assert instance.current_index == 1
    assert active_flags(instance) == [False, True, False]
    assert instance.items[1].property(DURATION_PROPERTY) == "5000ms"
    assert media_views[-1].item.title == "Build"
    assert media_views[-1].autoplay is True
    assert media_views[-1].property(ACTIVE_FLAG) is True

    fake_scheduler.advance(5000)
    fake_scheduler.advance(2000)
    assert instance.current_index == 0


def test_header_click_jumps_and_restarts_timing(make_accordion, fake_scheduler):
    instance = make_accordion()
    instance.on_visibility_change(True)
    fake_scheduler.advance(1000)

    instance.items[2].header_button.click()
    assert instance.current_index == 2
    assert active_flags(instance) == [False, False, True]

    fake_scheduler.advance(1999)
    assert instance.current_index == 2
    fake_scheduler.advance(1)
    assert instance.current_index == 0


def test_pause_button_toggles_label_and_video(make_accordion, fake_scheduler, media_views):
    instance = make_accordion()
    instance.on_visibility_change(True)
    button = instance.container.pause_button
    fake_scheduler.advance(1000)

    button.click()
    assert instance.controller.is_user_paused
    assert button.text() == RESUME_LABEL
    assert button.accessibleName() == RESUME_LABEL
    assert instance.items[0].property(PAUSED_FLAG) is True
    assert media_views[-1].calls[-1] == "pause"
    assert not instance.controller.has_pending_advance

    fake_scheduler.advance(60000)
    assert instance.current_index == 0

    button.click()
    assert button.text() == PAUSE_LABEL
    assert media_views[-1].calls[-1] == "play"
    fake_scheduler.advance(2000)
    assert instance.current_index == 1


def test_leaving_the_viewport_pauses_without_relabelling(make_accordion, fake_scheduler):
    instance = make_accordion()
    instance.on_visibility_change(True)
    fake_scheduler.advance(1000)

    instance.on_visibility_change(False)
    assert instance.controller.state is PlaybackState.PAUSED_HIDDEN
    assert instance.items[0].property(PAUSED_FLAG) is True
    assert instance.container.pause_button.text() == PAUSE_LABEL

    fake_scheduler.advance(10000)
    assert instance.current_index == 0
    instance.on_visibility_change(True)
    fake_scheduler.advance(2000)
    assert instance.current_index == 1


def test_autoplay_disabled_waits_for_the_user(make_accordion, fake_scheduler):
    instance = make_accordion(AccordionDefinition(items=ITEMS, autoplay=False))
    assert instance.container.pause_button.text() == RESUME_LABEL
    assert instance.items[0].property(PAUSED_FLAG) is True
    instance.on_visibility_change(True)

    assert instance.controller.is_user_paused
    assert instance.container.pause_button.text() == RESUME_LABEL
    fake_scheduler.advance(10000)
    assert instance.current_index == 0

    instance.resume()
    fake_scheduler.advance(3000)
    assert instance.current_index == 1


def test_resume_click_before_first_visibility(make_accordion, fake_scheduler):
    instance = make_accordion(AccordionDefinition(items=ITEMS, autoplay=False))
    instance.container.pause_button.click()
    assert instance.container.pause_button.text() == PAUSE_LABEL
    assert instance.controller.state is PlaybackState.PAUSED_HIDDEN

    instance.on_visibility_change(True)
    assert instance.controller.is_running
    fake_scheduler.advance(3000)
    assert instance.current_index == 1


def test_hover_navigates_only_in_hover_layout(make_accordion):
    hover = make_accordion(AccordionDefinition(items=ITEMS, layout="layout-2"))
    plain = make_accordion(AccordionDefinition(items=ITEMS, layout="layout-1"))

    for instance in (hover, plain):
        event = QEnterEvent(QPointF(1, 1), QPointF(1, 1), QPointF(1, 1))
        QApplication.sendEvent(instance.items[2], event)

    assert hover.current_index == 2
    assert plain.current_index == 0


def test_empty_container_stays_dormant(make_accordion, fake_scheduler):
    instance = make_accordion(AccordionDefinition(items=()))

    assert instance.is_dormant
    instance.registry.register.assert_not_called()
    instance.on_visibility_change(True)
    assert instance.controller.state is PlaybackState.IDLE
    assert fake_scheduler.pending() == []


def test_destroy_is_idempotent_and_silences_input(make_accordion, fake_scheduler):
    instance = make_accordion()
    instance.on_visibility_change(True)

    instance.destroy()
    instance.destroy()

    instance.registry.unregister.assert_called_once_with(instance)
    assert not instance.controller.has_pending_advance

    instance.items[1].header_button.click()
    instance.on_visibility_change(True)
    fake_scheduler.advance(10000)
    assert instance.current_index == 0


def test_narrow_viewport_uses_carousel(make_accordion, viewport, fake_scheduler):
    viewport.landscape.return_value = False
    instance = make_accordion()
    carousel = instance.carousel

    assert carousel.is_attached
    assert instance.content_container.property(CAROUSEL_FLAG) is True
    assert all(item.property(CAROUSEL_SLIDE_FLAG) is True for item in instance.items)

    # Header clicks are left to the carousel in narrow mode.
    instance.items[1].header_button.click()
    assert instance.current_index == 0

    carousel.slider.move_to_idx(2)
    assert instance.current_index == 2

    instance.handle_item_hover(1)
    assert carousel.slider.current_index == 1

    viewport.landscape.return_value = True
    instance.handle_orientation_change()
    fake_scheduler.advance(500)
    assert not carousel.is_attached
    assert instance.content_container.property(CAROUSEL_FLAG) is False


def test_slider_is_not_built_while_hidden(make_accordion, viewport):
    viewport.landscape.return_value = False
    viewport.visible.return_value = False
    instance = make_accordion()
    assert not instance.carousel.is_attached

    viewport.visible.return_value = True
    instance.on_visibility_change(True)
    assert instance.carousel.is_attached


def test_orientation_policy(make_accordion, viewport, fake_scheduler):
    carousel = MagicMock()
    carousel.is_attached = False
    instance = make_accordion(carousel=carousel)
    instance.on_visibility_change(True)

    carousel.reset_mock()
    instance.handle_orientation_change()
    fake_scheduler.advance(500)
    carousel.detach.assert_called_once()

    viewport.landscape.return_value = False
    carousel.reset_mock()
    instance.handle_orientation_change()
    fake_scheduler.advance(500)
    carousel.attach.assert_called_once()
    args = carousel.attach.call_args[0]
    assert args[0] is instance.content_container
    assert args[2] == instance.current_index

    carousel.is_attached = True
    carousel.reset_mock()
    instance.handle_orientation_change()
    fake_scheduler.advance(500)
    carousel.refresh.assert_called_once()
    carousel.attach.assert_not_called()


def test_orientation_changes_are_debounced(make_accordion, fake_scheduler):
    carousel = MagicMock()
    carousel.is_attached = False
    instance = make_accordion(carousel=carousel)
    carousel.reset_mock()

    instance.handle_orientation_change()
    fake_scheduler.advance(200)
    instance.handle_orientation_change()
    fake_scheduler.advance(200)
    instance.handle_orientation_change()
    fake_scheduler.advance(499)
    carousel.detach.assert_not_called()

    fake_scheduler.advance(1)
    carousel.detach.assert_called_once()


def test_destroy_leaves_no_registry_entries(make_accordion):
    registry = VisibilityRegistry(observer_factory=RecordingObserver)
    instance = make_accordion(registry=registry)
    assert registry.is_registered(instance)
    assert registry.observer.targets == [instance.container]

    instance.destroy()
    instance.destroy()

    assert len(registry) == 0
    assert registry.observer.targets == []
    assert not instance.controller.has_pending_advance


def test_single_item_wrap_restarts_progress(qapp, make_accordion, fake_scheduler):
    instance = make_accordion(AccordionDefinition(items=(Item("Solo", 50),)))
    animation = instance.items[0].progress_animation
    instance.on_visibility_change(True)
    assert animation.state() == QAbstractAnimation.State.Running

    deadline = time.monotonic() + 2.0
    while animation.state() != QAbstractAnimation.State.Stopped and time.monotonic() < deadline:
        qapp.processEvents()
    assert animation.state() == QAbstractAnimation.State.Stopped

    fake_scheduler.advance(50)
    assert instance.current_index == 0
    assert instance.controller.has_pending_advance
    assert animation.state() == QAbstractAnimation.State.Running
