"""
Pointer control: the action executor and the backends that inject input.

Notes
-----
- pynput is preferred for button injection; pyautogui is the fallback
  when pynput has no usable backend (e.g. missing accessibility rights).
- Both libraries are imported lazily so the engine can be imported and
  tested on machines without a display.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Tuple

from models import ClickMode, MouseButton


class PointerError(Exception):
    """The platform refused or failed to inject pointer input."""


class PointerBackend(Protocol):
    """Capability used by the executor; all methods raise PointerError."""

    def press(self, button: MouseButton) -> None: ...

    def release(self, button: MouseButton) -> None: ...

    def click(self, button: MouseButton, count: int = 1) -> None: ...


class PynputPointer:
    """Injects button events with pynput.mouse.Controller."""

    def __init__(self) -> None:
        ctrl_cls, btn_mod = _get_pynput_mouse()
        if ctrl_cls is None or btn_mod is None:
            raise PointerError("pynput mouse backend not available")
        try:
            self._controller = ctrl_cls()
        except Exception as e:  # pragma: no cover - system specific
            raise PointerError(f"Failed to create pynput controller: {e}")
        self._buttons = btn_mod

    def _button(self, button: MouseButton) -> Any:
        return getattr(self._buttons, button.value)

    def press(self, button: MouseButton) -> None:
        try:
            self._controller.press(self._button(button))
        except Exception as e:  # pragma: no cover - system specific
            raise PointerError(f"press {button.value} failed: {e}")

    def release(self, button: MouseButton) -> None:
        try:
            self._controller.release(self._button(button))
        except Exception as e:  # pragma: no cover - system specific
            raise PointerError(f"release {button.value} failed: {e}")

    def click(self, button: MouseButton, count: int = 1) -> None:
        try:
            self._controller.click(self._button(button), count)
        except Exception as e:  # pragma: no cover - system specific
            raise PointerError(f"click {button.value} failed: {e}")


class PyAutoGuiPointer:
    """Injects button events with pyautogui at the current cursor position."""

    def __init__(self) -> None:
        try:
            import pyautogui  # local import to avoid hard dep at import time
        except Exception as e:
            raise PointerError(f"pyautogui not available: {e}")
        pyautogui.FAILSAFE = True  # Move mouse to corner to stop
        pyautogui.PAUSE = 0.0  # Allow CPS above 100 without artificial delay
        self._gui = pyautogui

    def press(self, button: MouseButton) -> None:
        try:
            self._gui.mouseDown(button=button.value)
        except Exception as e:
            raise PointerError(f"press {button.value} failed: {e}")

    def release(self, button: MouseButton) -> None:
        try:
            self._gui.mouseUp(button=button.value)
        except Exception as e:
            raise PointerError(f"release {button.value} failed: {e}")

    def click(self, button: MouseButton, count: int = 1) -> None:
        try:
            self._gui.click(button=button.value, clicks=count)
        except Exception as e:
            raise PointerError(f"click {button.value} failed: {e}")


def create_default_pointer() -> PointerBackend:
    """Prefer pynput; fall back to pyautogui."""
    try:
        return PynputPointer()
    except PointerError as first:
        try:
            return PyAutoGuiPointer()
        except PointerError as second:
            raise PointerError(f"No pointer backend available ({first}; {second})")


class ActionExecutor:
    """
    Performs one pointer action for a button and click mode.

    Toggle mode alternates press-and-hold and release. The caller passes
    the current `button_pressed` parity and stores the returned one; the
    executor itself holds no session state.
    """

    def __init__(self, pointer: PointerBackend) -> None:
        self._pointer = pointer

    def execute(self, button: MouseButton, mode: ClickMode, button_pressed: bool) -> bool:
        """Fire once and return the new `button_pressed` value."""
        if mode == ClickMode.SINGLE:
            self._pointer.click(button, 1)
            return button_pressed
        if mode == ClickMode.DOUBLE:
            self._pointer.click(button, 2)
            return button_pressed
        if mode == ClickMode.TOGGLE:
            if button_pressed:
                self._pointer.release(button)
                return False
            self._pointer.press(button)
            return True
        raise ValueError(f"Unknown click mode: {mode}")

    def release(self, button: MouseButton) -> None:
        """Release a held button outside the normal toggle cycle."""
        self._pointer.release(button)


def _get_pynput_mouse() -> Tuple[Optional[Any], Optional[Any]]:
    """Import pynput.mouse lazily and return (MouseControllerClass, ButtonModule)."""
    try:
        from pynput.mouse import Controller as MouseController, Button as MouseButtonModule  # type: ignore
        return MouseController, MouseButtonModule
    except Exception:
        return None, None
