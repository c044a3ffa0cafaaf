"""
Main entry point for the click automation runner.

Clean Code principles:
- Minimal main file
- Dependency injection at the root
- Clear program flow
"""

from __future__ import annotations

import argparse
import sys
import threading
from typing import List, Optional

from clicker_engine import SessionLoop, SessionSupervisor
from hotkey_manager import DEFAULT_TOGGLE_HOTKEY, HotkeyManager
from logger import StatusLogger
from models import (
    BLACK,
    RGB,
    ClickMode,
    ColorGate,
    ConstantInterval,
    IntervalMode,
    LimitMode,
    MouseButton,
    RandomIntervalBounds,
    SessionConfig,
)
from pointer import ActionExecutor, PointerError, create_default_pointer
from policies import GatePolicy, cps_warning, estimated_cps
from policies.interval import CpsWarning
from screen_sampler import ScreenSampler, suspend_while_focused
from session_state import SessionStore


def _enable_high_dpi_awareness() -> None:
    """Make pyautogui coordinates match physical pixels on scaled Windows displays."""
    if not sys.platform.startswith("win"):
        return

    try:
        import ctypes

        try:
            ctypes.windll.shcore.SetProcessDpiAwareness(2)
            return
        except AttributeError:
            pass

        try:
            ctypes.windll.user32.SetProcessDPIAware()
        except AttributeError:
            pass
    except OSError:
        # Ignore DPI awareness errors; sampling falls back to scaled coordinates.
        pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Click automatically at the mouse cursor; a global hotkey starts and stops clicking.",
    )
    interval = parser.add_argument_group("interval")
    interval.add_argument("--hours", type=int, default=0)
    interval.add_argument("--minutes", type=int, default=0)
    interval.add_argument("--seconds", type=int, default=0)
    interval.add_argument("--milliseconds", type=int, default=100)
    interval.add_argument(
        "--random", nargs=2, type=float, metavar=("MIN", "MAX"),
        help="wait a random number of seconds between MIN and MAX instead",
    )

    clicking = parser.add_argument_group("clicking")
    clicking.add_argument("--button", choices=[b.value for b in MouseButton], default=MouseButton.LEFT.value)
    clicking.add_argument("--mode", choices=[m.value for m in ClickMode], default=ClickMode.SINGLE.value)

    limits = parser.add_mutually_exclusive_group()
    limits.add_argument("--clicks", type=int, help="stop after this many clicks")
    limits.add_argument("--duration", type=float, help="stop after this many seconds")

    gate = parser.add_argument_group("gating")
    gate.add_argument("--color", help="only click while hovering this color (#RRGGBB)")
    gate.add_argument("--threshold", type=int, default=0, help="color tolerance, 0-255")
    gate.add_argument("--pause-in-window", metavar="TITLE", help="do not click while a window with this title is focused")

    parser.add_argument("--hotkey", default=DEFAULT_TOGGLE_HOTKEY, help="global start/stop key (default: %(default)s)")
    parser.add_argument("--start", action="store_true", help="start clicking immediately")
    parser.add_argument("--exit-on-stop", action="store_true", help="exit once the clicker stops")
    parser.add_argument("--log-file", metavar="PATH", help="write the status history to PATH on exit")
    return parser


def config_from_args(args: argparse.Namespace) -> SessionConfig:
    """Translate parsed options into a SessionConfig; raises ValueError on bad values."""
    if args.clicks is not None:
        limit = LimitMode.click_count(args.clicks)
    elif args.duration is not None:
        limit = LimitMode.elapsed_time(args.duration)
    else:
        limit = LimitMode.none()

    bounds = RandomIntervalBounds(*args.random) if args.random else RandomIntervalBounds()
    return SessionConfig(
        interval_mode=IntervalMode.RANDOM if args.random else IntervalMode.CONSTANT,
        constant_interval=ConstantInterval(args.hours, args.minutes, args.seconds, args.milliseconds),
        random_interval_bounds=bounds,
        button=MouseButton(args.button),
        click_mode=ClickMode(args.mode),
        limit_mode=limit,
        color_gate=ColorGate(
            enabled=args.color is not None,
            target_color=RGB.from_hex(args.color) if args.color else BLACK,
            threshold=args.threshold,
        ),
        focus_gate=suspend_while_focused(args.pause_in_window) if args.pause_in_window else None,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Application entry point.

    Clean Code: Simple, clear main function that wires the parts and waits.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    _enable_high_dpi_awareness()
    status_log = StatusLogger(listener=print)

    try:
        pointer = create_default_pointer()
    except PointerError as exc:
        status_log.log_error(str(exc))
        return 1

    warning = cps_warning(estimated_cps(config))
    if warning != CpsWarning.NONE:
        status_log.log_warning(warning.value)

    store = SessionStore(config)
    gate = GatePolicy(ScreenSampler() if config.color_gate.enabled else None)
    gate.register_sample_error_callback(lambda exc: status_log.log_warning(f"Color sampling failed: {exc}"))
    loop = SessionLoop(store, ActionExecutor(pointer), gate=gate)
    loop.register_status_callback(status_log.update_status)
    supervisor = SessionSupervisor(store, loop)

    stopped = threading.Event()

    hotkeys = HotkeyManager(args.hotkey, error_callback=status_log.log_warning)
    hotkeys.register_toggle_callback(store.toggle_enabled)
    if hotkeys.enable_hotkeys():
        status_log.log_info(f"Press {hotkeys.get_toggle_hotkey()} to start or stop clicking")
    elif not args.start:
        status_log.log_error("No hotkey available and --start not given; nothing to do")
        return 1

    if args.start:
        store.set_enabled(True)

    try:
        while not stopped.is_set():
            if supervisor.poll() is False and args.exit_on_stop:
                stopped.set()
            stopped.wait(0.02)
    except KeyboardInterrupt:
        status_log.log_info("Interrupted")
    finally:
        hotkeys.disable_hotkeys()
        supervisor.shutdown()
        if args.log_file and not status_log.export_logs_to_file(args.log_file):
            status_log.log_warning(f"Could not write {args.log_file}")

    return 1 if store.snapshot().last_error else 0


if __name__ == "__main__":
    raise SystemExit(main())
