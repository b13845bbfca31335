# mediaaccordion/accordion/playback_controller.py
"""
The playback state machine behind an accordion.

The controller owns the active index, the pause state and the single pending
auto-advance. Clicks, timer fires and visibility changes all come through its
public methods; it never touches widgets. Listeners are told about index and
state changes and render them.

States:
    IDLE           nothing started yet, no timer
    RUNNING        timer armed, counting toward the next auto-advance
    PAUSED_USER    paused from the pause button; survives visibility changes
    PAUSED_HIDDEN  paused because the accordion is out of view; resumes on return

While paused, ``remaining_ms`` holds the time left on the current item. A
value of None means the current item was never started, so the next run uses
its full duration.
"""
import enum
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PlaybackState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED_USER = "paused-user"
    PAUSED_HIDDEN = "paused-hidden"


class PlaybackController:
    def __init__(self, item_count: int, duration_for: Callable[[int], float], scheduler,
                 autoplay_enabled: bool = True,
                 on_item_changed: Optional[Callable[[int, int], None]] = None,
                 on_state_changed: Optional[Callable[[PlaybackState], None]] = None):
        """
        Args:
            item_count: Number of items; fixed for the controller's lifetime.
            duration_for: Returns the duration in ms of the item at an index.
            scheduler: Provides now_ms() and call_later(delay_ms, callback).
            autoplay_enabled: When False, the controller starts out user-paused
                and start() does nothing.
            on_item_changed: Called with (previous_index, current_index).
            on_state_changed: Called with the new PlaybackState.
        """
        self._item_count = item_count
        self._duration_for = duration_for
        self._scheduler = scheduler
        self.autoplay_enabled = autoplay_enabled
        self._on_item_changed = on_item_changed
        self._on_state_changed = on_state_changed

        # Without autoplay nothing runs until the user resumes.
        self._state = PlaybackState.IDLE if autoplay_enabled else PlaybackState.PAUSED_USER
        self._current_index = 0
        self._is_visible = False
        self._timer = None
        self.item_duration_ms = 0.0
        self.item_start_ms = 0.0
        self.remaining_ms: Optional[float] = None

    # --- Queries ---

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def item_count(self) -> int:
        return self._item_count

    @property
    def is_visible(self) -> bool:
        return self._is_visible

    @property
    def is_running(self) -> bool:
        return self._state is PlaybackState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self._state in (PlaybackState.PAUSED_USER, PlaybackState.PAUSED_HIDDEN)

    @property
    def is_user_paused(self) -> bool:
        return self._state is PlaybackState.PAUSED_USER

    @property
    def has_pending_advance(self) -> bool:
        return self._timer is not None and self._timer.is_active()

    def remaining_time_ms(self) -> Optional[float]:
        """Time left on the current item; derived while running, the snapshot otherwise."""
        if self._state is PlaybackState.RUNNING:
            return self._elapsed_remaining()
        return self.remaining_ms

    # --- Operations ---

    def start(self):
        """Begins playback once; later calls are ignored."""
        if self._state is not PlaybackState.IDLE or self._item_count == 0:
            logger.debug(f"start() ignored in state {self._state.value}.")
            return

        self._show(0)
        if self._is_visible:
            self._run(None)
        else:
            self.remaining_ms = None
            self._set_state(PlaybackState.PAUSED_HIDDEN)

    def advance_to_next(self):
        if self._item_count == 0:
            return
        self._show((self._current_index + 1) % self._item_count)

    def jump_to(self, index: int):
        if not 0 <= index < self._item_count or index == self._current_index:
            logger.debug(f"jump_to({index}) ignored; current index is {self._current_index}.")
            return
        self._show(index)

    def user_pause(self):
        if self._state is PlaybackState.PAUSED_USER:
            return
        if self._state is PlaybackState.RUNNING:
            self._snapshot_remaining()
        elif self._state is PlaybackState.IDLE:
            self.remaining_ms = None
        self._cancel_timer()
        self._set_state(PlaybackState.PAUSED_USER)

    def user_resume(self):
        if self._state is not PlaybackState.PAUSED_USER or self._item_count == 0:
            return
        if self._is_visible:
            self._run(self.remaining_ms)
        else:
            self._set_state(PlaybackState.PAUSED_HIDDEN)

    def toggle_pause(self):
        """Pause when running or hidden-paused, resume when user-paused."""
        if self._state is PlaybackState.PAUSED_USER:
            self.user_resume()
        else:
            self.user_pause()

    def on_visibility_change(self, visible: bool):
        self._is_visible = bool(visible)

        if not self._is_visible:
            if self._state is PlaybackState.RUNNING:
                self._snapshot_remaining()
                self._cancel_timer()
                self._set_state(PlaybackState.PAUSED_HIDDEN)
            return

        if self._state is PlaybackState.IDLE:
            self.start()
        elif self._state is PlaybackState.PAUSED_HIDDEN:
            self._run(self.remaining_ms)

    def shutdown(self):
        """Cancels any pending advance. The controller is unusable afterwards."""
        self._cancel_timer()
        self._is_visible = False

    # --- Internals ---

    def _show(self, index):
        """The single place an item transition happens."""
        self._cancel_timer()
        previous = self._current_index
        self._current_index = index
        self.item_duration_ms = self._read_duration(index)
        logger.debug(f"Item {previous} -> {index} ({self.item_duration_ms:.0f} ms).")

        if self._on_item_changed is not None:
            self._on_item_changed(previous, index)

        if self._state is PlaybackState.RUNNING and self._is_visible:
            self._arm(self.item_duration_ms)
        elif self.is_paused:
            self.remaining_ms = self.item_duration_ms

    def _run(self, remaining):
        """Enter RUNNING with remaining ms left; None starts the current item afresh."""
        if remaining is None:
            self.item_duration_ms = self._read_duration(self._current_index)
            remaining = self.item_duration_ms
        self.remaining_ms = None
        self._set_state(PlaybackState.RUNNING)
        self._arm(remaining)

    def _arm(self, delay_ms):
        self._cancel_timer()
        delay_ms = max(0.0, float(delay_ms))
        # Keep remaining == duration - (now - start) true for continuations too.
        self.item_start_ms = self._scheduler.now_ms() - (self.item_duration_ms - delay_ms)
        self._timer = self._scheduler.call_later(delay_ms, self._on_timer_fired)

    def _on_timer_fired(self):
        self._timer = None
        if self._state is not PlaybackState.RUNNING or not self._is_visible:
            logger.debug("Stale auto-advance ignored.")
            return
        self.advance_to_next()

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _elapsed_remaining(self):
        elapsed = self._scheduler.now_ms() - self.item_start_ms
        return max(0.0, self.item_duration_ms - elapsed)

    def _snapshot_remaining(self):
        self.remaining_ms = self._elapsed_remaining()

    def _read_duration(self, index):
        return max(0.0, float(self._duration_for(index)))

    def _set_state(self, state):
        if state is self._state:
            return
        logger.debug(f"Playback state {self._state.value} -> {state.value}.")
        self._state = state
        if self._on_state_changed is not None:
            self._on_state_changed(state)
