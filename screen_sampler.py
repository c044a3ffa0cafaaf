"""Screen queries used by the gate policy: hovered pixel color and window focus."""

from __future__ import annotations

from typing import Optional

from models import RGB, FocusPredicate


class ScreenSampler:
    """Reads the color of the pixel under the mouse cursor via pyautogui."""

    def __init__(self) -> None:
        self._gui = None

    def _pyautogui(self):
        if self._gui is None:
            import pyautogui  # type: ignore

            self._gui = pyautogui
        return self._gui

    def pointer_position(self) -> tuple[int, int]:
        x, y = self._pyautogui().position()
        return int(x), int(y)

    def __call__(self) -> RGB:
        """Sample the hovered color. Errors propagate; the gate keeps its last value."""
        x, y = self.pointer_position()
        r, g, b = self._pyautogui().pixel(x, y)[:3]
        return RGB(int(r), int(g), int(b))


def foreground_window_title() -> Optional[str]:
    """Title of the active window, or None where pygetwindow cannot tell."""
    try:
        import pygetwindow as gw  # type: ignore

        active = gw.getActiveWindow()
    except Exception:
        return None
    if active is None:
        return None
    return str(getattr(active, "title", "") or "")


def suspend_while_focused(title_fragment: str) -> FocusPredicate:
    """
    Build a focus gate that suspends ticks while a matching window is active.

    Matching is a case-insensitive substring test on the window title. If
    the active window cannot be determined, ticks are not suspended.
    """
    needle = title_fragment.lower()

    def _predicate() -> bool:
        title = foreground_window_title()
        if title is None:
            return False
        return needle in title.lower()

    return _predicate
