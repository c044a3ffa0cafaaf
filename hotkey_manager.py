"""Platform-agnostic global toggle hotkey built on top of pynput."""

from __future__ import annotations

from typing import Callable, Dict, Optional

try:
    from pynput import keyboard  # type: ignore
except Exception as _e:  # pragma: no cover - environment dependent
    keyboard = None  # type: ignore

DEFAULT_TOGGLE_HOTKEY = "F6"


class HotkeyManager:
    """
    Manages the system-wide key that toggles the clicker.

    The callback runs on pynput's listener thread; it should only flip the
    shared `enabled` flag and return.
    """

    _SPECIAL_KEY_ALIASES: Dict[str, str] = {
        "ctrl": "ctrl",
        "control": "ctrl",
        "alt": "alt",
        "shift": "shift",
        "win": "cmd",
        "cmd": "cmd",
        "command": "cmd",
        "option": "alt",
        "super": "cmd",
        "esc": "esc",
        "escape": "esc",
        "space": "space",
        "tab": "tab",
        "insert": "insert",
        "home": "home",
        "end": "end",
        "pause": "pause",
    }

    def __init__(
        self,
        toggle_hotkey: str = DEFAULT_TOGGLE_HOTKEY,
        error_callback: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._toggle_hotkey = toggle_hotkey
        self._toggle_callback: Optional[Callable[[], None]] = None
        self._error_callback = error_callback or print
        self._listener: Optional[object] = None
        self._is_registered = False

    def register_toggle_callback(self, callback: Callable[[], None]) -> None:
        self._toggle_callback = callback

    def is_registered(self) -> bool:
        return self._is_registered

    def enable_hotkeys(self) -> bool:
        if self._is_registered:
            return True

        if not self._toggle_callback:
            return False

        try:
            hotkey = self.to_pynput_hotkey(self._toggle_hotkey)
        except ValueError as exc:
            self._error_callback(f"Invalid hotkey definition: {exc}")
            return False

        if keyboard is None:
            self._error_callback("pynput/keyboard backend not available; global hotkey disabled")
            self._listener = None
            self._is_registered = False
            return False
        try:
            self._listener = keyboard.GlobalHotKeys({hotkey: self._toggle_callback})
            self._listener.start()
            self._is_registered = True
            return True
        except Exception as exc:  # pragma: no cover - system specific
            self._error_callback(f"Failed to register hotkey: {exc}")
            self._listener = None
            self._is_registered = False
            return False

    def disable_hotkeys(self) -> None:
        if not self._is_registered:
            return

        if self._listener is not None:
            try:
                self._listener.stop()  # type: ignore[attr-defined]
            except Exception as exc:  # pragma: no cover - system specific
                self._error_callback(f"Failed to stop hotkey listener: {exc}")
            self._listener = None

        self._is_registered = False

    def get_toggle_hotkey(self) -> str:
        return self._toggle_hotkey

    def update_hotkey(self, toggle_hotkey: str) -> bool:
        was_registered = self._is_registered
        if was_registered:
            self.disable_hotkeys()

        self._toggle_hotkey = toggle_hotkey

        if was_registered:
            return self.enable_hotkeys()
        return True

    @classmethod
    def to_pynput_hotkey(cls, hotkey: str) -> str:
        """Translate `ctrl+shift+F6` style strings into pynput's `<ctrl>+<shift>+<f6>`."""
        if not hotkey:
            raise ValueError("Empty hotkey string")

        tokens = [token.strip() for token in hotkey.replace("+", " ").split() if token.strip()]
        if not tokens:
            raise ValueError("Hotkey contains no tokens")

        parsed: list[str] = []
        for token in tokens:
            lower_token = token.lower()

            if lower_token in cls._SPECIAL_KEY_ALIASES:
                parsed.append(f"<{cls._SPECIAL_KEY_ALIASES[lower_token]}>")
                continue

            if lower_token.startswith("f") and lower_token[1:].isdigit():
                parsed.append(f"<{lower_token}>")
                continue

            if len(lower_token) == 1:
                parsed.append(lower_token)
                continue

            raise ValueError(f"Unknown key: {token}")

        return "+".join(parsed)
