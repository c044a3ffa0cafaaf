"""
Auto-Clicker Engine - the core business logic.

SRP: SessionLoop executes one session's ticks; SessionSupervisor watches the
shared `enabled` flag and starts or cleans up sessions. Neither knows about
UI, hotkeys or logging (Dependency Inversion Principle): pointer input,
screen sampling, clock and sleep are all injected.
"""

import threading
import time
from typing import Callable, Optional

from models import SessionConfig
from pointer import ActionExecutor, PointerError
from policies import GatePolicy, IntervalPolicy, LimitPolicy
from session_state import SessionStore

STOPPED_UNEXPECTEDLY = "Automation stopped unexpectedly"
PROGRESS_EVERY = 10


class SessionLoop:
    """
    Runs the tick state machine for sessions of a SessionStore.

    Clean Code principles applied:
    - One public entry per transition (begin, run, end)
    - The lock is only held inside SessionStore calls, never across
      a sleep or a pointer/screen call
    """

    def __init__(
        self,
        store: SessionStore,
        executor: ActionExecutor,
        gate: Optional[GatePolicy] = None,
        interval: Optional[IntervalPolicy] = None,
        limit: Optional[LimitPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._store = store
        self._executor = executor
        self._gate = gate or GatePolicy()
        self._interval = interval or IntervalPolicy()
        self._limit = limit or LimitPolicy()
        self._sleep = sleep
        self._status_callback: Optional[Callable[[str], None]] = None

    def register_status_callback(self, callback: Callable[[str], None]) -> None:
        """
        Register a callback for status updates.

        OCP: Open for extension (can add callbacks) without modifying core logic.
        """
        self._status_callback = callback

    def begin(self) -> int:
        """Idle -> Running: reset counters and claim a fresh session id."""
        session_id = self._store.begin_session()
        config = self._store.config
        self._notify_status(
            f"Auto-clicker started ({config.button.value} {config.click_mode.value}, "
            f"limit: {config.limit_mode})"
        )
        return session_id

    def run(self, session_id: int) -> None:
        """Tick until the session is disabled, superseded or limited."""
        clock = self._store.clock
        while True:
            status, config = self._store.check_tick(
                session_id,
                lambda cfg, clicks, start: self._limit.should_stop(cfg.limit_mode, clicks, start, clock()),
            )
            if status == "superseded":
                return
            if status == "disabled":
                # A press may have landed after the control surface released.
                self.force_release(config, session_id)
                return
            if status == "limit":
                self.force_release(config, session_id)
                self._notify_status(f"Completed. Total clicks: {self._store.snapshot().total_clicks}")
                return

            if self._gate.should_fire(config):
                if not self._fire(session_id, config):
                    return

            self._sleep(self._interval.next_delay(config))

    def end(self) -> None:
        """
        Running -> Idle: release any held button.

        Only a stop requested by the control surface is reported here; a
        session that ended itself already sent its final status.
        """
        self.force_release(self._store.config)
        snapshot = self._store.snapshot()
        if snapshot.self_terminated:
            return
        self._notify_status(f"Auto-clicker stopped. Total clicks: {snapshot.total_clicks}")

    def force_release(self, config: SessionConfig, session_id: Optional[int] = None) -> bool:
        """
        Release the held button, if any. Never counts as a click.

        Returns True when a release was performed.
        """
        if not self._store.take_pressed_button(session_id):
            return False
        try:
            self._executor.release(config.button)
        except PointerError as e:
            self._notify_status(f"Failed to release {config.button.value} button: {e}")
        return True

    def _fire(self, session_id: int, config: SessionConfig) -> bool:
        """Execute one action; returns False if the session had to be aborted."""
        # Parity is re-read right before acting, after the gate's I/O.
        pressed = self._store.snapshot().button_pressed
        try:
            new_pressed = self._executor.execute(config.button, config.click_mode, pressed)
        except PointerError as e:
            if self._store.abort_session(session_id, str(e)):
                self._notify_status(f"{STOPPED_UNEXPECTEDLY}: {e}")
            return False

        total = self._store.record_fire(session_id, new_pressed)
        if total is None:
            return False
        if total % PROGRESS_EVERY == 0:
            self._notify_status(f"Clicks executed: {total}")
        return True

    def _notify_status(self, message: str) -> None:
        """
        Notify registered callbacks about status changes.

        DRY: Centralized status notification logic.
        """
        if self._status_callback:
            self._status_callback(message)


class SessionSupervisor:
    """
    Watches the `enabled` flag and reacts to its edges.

    false -> true starts a new session on a daemon thread; true -> false
    releases a button still held by Toggle mode. A UI calls poll() from its
    own refresh loop, or watch() runs polling on a background thread.
    """

    def __init__(self, store: SessionStore, loop: SessionLoop) -> None:
        self._store = store
        self._loop = loop
        self._worker_thread: Optional[threading.Thread] = None
        self._watch_thread: Optional[threading.Thread] = None
        self._stop_flag = threading.Event()

    @property
    def worker_thread(self) -> Optional[threading.Thread]:
        return self._worker_thread

    def poll(self) -> Optional[bool]:
        """One edge-detection step. Returns the new `enabled` value on an edge."""
        edge = self._store.consume_enabled_edge()
        if edge is True:
            session_id = self._loop.begin()
            self._worker_thread = threading.Thread(
                target=self._loop.run, args=(session_id,), daemon=True
            )
            self._worker_thread.start()
        elif edge is False:
            self._loop.end()
        return edge

    def watch(self, poll_interval: float = 0.02) -> None:
        """Start polling on a background thread."""
        if self._watch_thread and self._watch_thread.is_alive():
            return
        self._stop_flag.clear()
        self._watch_thread = threading.Thread(
            target=self._watch_worker, args=(poll_interval,), daemon=True
        )
        self._watch_thread.start()

    def shutdown(self, timeout: float = 2.0) -> None:
        """Disable the clicker, release any held button and stop watching."""
        self._store.set_enabled(False)
        self._stop_flag.set()
        if self._watch_thread and self._watch_thread.is_alive():
            self._watch_thread.join(timeout=timeout)
        self.poll()
        if self._worker_thread and self._worker_thread.is_alive():
            self._worker_thread.join(timeout=timeout)

    def _watch_worker(self, poll_interval: float) -> None:
        while not self._stop_flag.is_set():
            self.poll()
            self._stop_flag.wait(poll_interval)
