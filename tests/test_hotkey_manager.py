import pytest

import hotkey_manager
from hotkey_manager import HotkeyManager


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("F6", "<f6>"),
        ("ctrl+shift+a", "<ctrl>+<shift>+a"),
        ("Alt + F12", "<alt>+<f12>"),
        ("win+esc", "<cmd>+<esc>"),
    ],
)
def test_hotkey_translation(raw, expected) -> None:
    assert HotkeyManager.to_pynput_hotkey(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "ctrl+bogus"])
def test_invalid_hotkeys_are_rejected(raw) -> None:
    with pytest.raises(ValueError):
        HotkeyManager.to_pynput_hotkey(raw)


class _FakeGlobalHotKeys:
    instances = []

    def __init__(self, mapping):
        self.mapping = mapping
        self.started = False
        self.stopped = False
        _FakeGlobalHotKeys.instances.append(self)

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True


class _FakeKeyboard:
    GlobalHotKeys = _FakeGlobalHotKeys


def test_enable_registers_toggle_callback(monkeypatch) -> None:
    monkeypatch.setattr(hotkey_manager, "keyboard", _FakeKeyboard)
    _FakeGlobalHotKeys.instances.clear()
    toggled = []
    manager = HotkeyManager("F8")
    manager.register_toggle_callback(lambda: toggled.append(True))

    assert manager.enable_hotkeys() is True
    listener = _FakeGlobalHotKeys.instances[-1]
    assert listener.started
    listener.mapping["<f8>"]()
    assert toggled == [True]

    assert manager.update_hotkey("ctrl+F9") is True
    assert listener.stopped
    assert "<ctrl>+<f9>" in _FakeGlobalHotKeys.instances[-1].mapping

    manager.disable_hotkeys()
    assert not manager.is_registered()


def test_missing_backend_reports_and_declines(monkeypatch) -> None:
    monkeypatch.setattr(hotkey_manager, "keyboard", None)
    errors = []
    manager = HotkeyManager(error_callback=errors.append)
    manager.register_toggle_callback(lambda: None)
    assert manager.enable_hotkeys() is False
    assert errors and "not available" in errors[0]


def test_invalid_binding_declines_registration(monkeypatch) -> None:
    monkeypatch.setattr(hotkey_manager, "keyboard", _FakeKeyboard)
    errors = []
    manager = HotkeyManager("hyper+q", error_callback=errors.append)
    manager.register_toggle_callback(lambda: None)
    assert manager.enable_hotkeys() is False
    assert errors[0].startswith("Invalid hotkey definition")
