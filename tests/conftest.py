from __future__ import annotations

from typing import Callable, List, Optional, Tuple

import pytest

from models import MouseButton
from pointer import PointerError


class FakeClock:
    """Monotonic clock whose sleep() just advances time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []
        self.on_sleep: Optional[Callable[[int], None]] = None

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        if self.on_sleep:
            self.on_sleep(len(self.sleeps))


class FakePointer:
    """Records pointer events with the clock reading at which they happened."""

    def __init__(self, clock: Optional[FakeClock] = None, fail_on: Optional[str] = None) -> None:
        self.events: List[Tuple[str, MouseButton, float]] = []
        self._clock = clock
        self.fail_on = fail_on

    def _record(self, kind: str, button: MouseButton) -> None:
        if self.fail_on == kind:
            raise PointerError(f"{kind} denied")
        self.events.append((kind, button, self._clock() if self._clock else 0.0))

    def press(self, button: MouseButton) -> None:
        self._record("press", button)

    def release(self, button: MouseButton) -> None:
        self._record("release", button)

    def click(self, button: MouseButton, count: int = 1) -> None:
        self._record("double" if count == 2 else "click", button)

    def kinds(self) -> List[str]:
        return [kind for kind, _button, _at in self.events]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def pointer(clock: FakeClock) -> FakePointer:
    return FakePointer(clock)
