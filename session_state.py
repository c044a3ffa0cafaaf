"""
Shared session state - the record both the control surface and the loop touch.

Every read or write holds the lock for that single access only. Callers
never keep it across a sleep or a call into the pointer/screen backends.
"""

from __future__ import annotations

import dataclasses
import threading
import time
from typing import Any, Callable, Optional

from models import SessionConfig, SessionSnapshot


class ConfigurationLockedError(RuntimeError):
    """Raised when the configuration is changed while a session runs."""


class SessionStore:
    """
    Holds SessionConfig and the mutable session fields behind one lock.

    The control surface toggles `enabled` and edits the config while idle;
    the session loop owns the counters, button parity and start time.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.Lock()
        self._clock = clock
        self._config = config or SessionConfig()

        self._enabled = False
        self._session_id = 0
        self._button_pressed = False
        self._start_time = clock()
        self._total_clicks = 0
        self._last_enabled_seen = False
        self._last_error: Optional[str] = None
        self._self_terminated = False

    @property
    def clock(self) -> Callable[[], float]:
        return self._clock

    # Control surface ---------------------------------------------------

    @property
    def config(self) -> SessionConfig:
        with self._lock:
            return self._config

    def update_config(self, **changes: Any) -> SessionConfig:
        """Replace config fields; only allowed while the clicker is disabled."""
        with self._lock:
            if self._enabled:
                raise ConfigurationLockedError("Stop the clicker before changing settings")
            self._config = dataclasses.replace(self._config, **changes)
            return self._config

    def replace_config(self, config: SessionConfig) -> None:
        with self._lock:
            if self._enabled:
                raise ConfigurationLockedError("Stop the clicker before changing settings")
            self._config = config

    def toggle_enabled(self) -> bool:
        """Flip the requested run state and return the new value."""
        with self._lock:
            self._enabled = not self._enabled
            return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._enabled = enabled

    def is_enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(
                enabled=self._enabled,
                session_id=self._session_id,
                button_pressed=self._button_pressed,
                start_time=self._start_time,
                total_clicks=self._total_clicks,
                last_error=self._last_error,
                self_terminated=self._self_terminated,
            )

    def consume_enabled_edge(self) -> Optional[bool]:
        """
        Return the new `enabled` value if it changed since the last call.

        Returns None when there was no transition.
        """
        with self._lock:
            if self._enabled == self._last_enabled_seen:
                return None
            self._last_enabled_seen = self._enabled
            return self._enabled

    # Session loop ------------------------------------------------------

    def begin_session(self) -> int:
        """Reset the per-session fields and return the new session id."""
        with self._lock:
            self._session_id += 1
            self._total_clicks = 0
            self._button_pressed = False
            self._start_time = self._clock()
            self._last_error = None
            self._self_terminated = False
            return self._session_id

    def check_tick(self, session_id: int, should_stop: Callable[[SessionConfig, int, float], bool]):
        """
        Top-of-tick check in one lock acquisition.

        Returns (status, config) where status is "superseded" (a newer
        session exists), "disabled", "limit" (and `enabled` was cleared)
        or "run".
        """
        with self._lock:
            if self._session_id != session_id:
                return "superseded", self._config
            if not self._enabled:
                return "disabled", self._config
            if should_stop(self._config, self._total_clicks, self._start_time):
                self._enabled = False
                self._self_terminated = True
                return "limit", self._config
            return "run", self._config

    def record_fire(self, session_id: int, button_pressed: bool) -> Optional[int]:
        """
        Store the outcome of a fired action.

        Returns the new click total, or None when the session was superseded
        meanwhile and nothing was written.
        """
        with self._lock:
            if self._session_id != session_id:
                return None
            self._button_pressed = button_pressed
            self._total_clicks += 1
            return self._total_clicks

    def abort_session(self, session_id: int, reason: str) -> bool:
        """Disable a failed session. Returns False if it was already superseded."""
        with self._lock:
            if self._session_id != session_id:
                return False
            self._enabled = False
            self._self_terminated = True
            self._last_error = reason
            return True

    def take_pressed_button(self, session_id: Optional[int] = None) -> bool:
        """
        Clear `button_pressed` and report whether it was set.

        With a session id, only that session's button is claimed. The
        caller performs the physical release afterwards, outside the lock.
        """
        with self._lock:
            if session_id is not None and self._session_id != session_id:
                return False
            was_pressed = self._button_pressed
            self._button_pressed = False
            return was_pressed
