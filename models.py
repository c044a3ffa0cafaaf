"""
Domain models for the click automation engine.
Each class follows the Single Responsibility Principle (SRP).
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple


MAX_RANDOM_INTERVAL_SECONDS = 3600.0


class IntervalMode(Enum):
    """How the wait between two ticks is computed."""
    CONSTANT = "constant"
    RANDOM = "random"


class MouseButton(Enum):
    """Pointer buttons the executor can drive."""
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


class ClickMode(Enum):
    """What a single fired tick does with the button."""
    SINGLE = "single"
    DOUBLE = "double"
    TOGGLE = "toggle"


class LimitKind(Enum):
    """When a session ends on its own."""
    NONE = "none"
    CLICK_COUNT = "click_count"
    ELAPSED_TIME = "elapsed_time"


@dataclass(frozen=True)
class ConstantInterval:
    """A fixed delay split into the fields a user types in."""
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 100

    def __post_init__(self):
        for name in ("hours", "minutes", "seconds", "milliseconds"):
            if getattr(self, name) < 0:
                raise ValueError(f"Interval {name} cannot be negative")

    def total_seconds(self) -> float:
        """Returns the delay normalized to fractional seconds."""
        return (
            self.hours * 3600.0
            + self.minutes * 60.0
            + self.seconds
            + self.milliseconds / 1000.0
        )


@dataclass(frozen=True)
class RandomIntervalBounds:
    """
    Bounds for a uniformly drawn delay.

    Values are clamped rather than rejected: max into [0, 3600], then min
    into [0, max].
    """
    minimum: float = 1.0
    maximum: float = 2.0

    def __post_init__(self):
        maximum = min(max(float(self.maximum), 0.0), MAX_RANDOM_INTERVAL_SECONDS)
        minimum = min(max(float(self.minimum), 0.0), maximum)
        object.__setattr__(self, "maximum", maximum)
        object.__setattr__(self, "minimum", minimum)


@dataclass(frozen=True)
class LimitMode:
    """
    Stop condition of a session.

    Use the named constructors; `value` holds the click cap or the number
    of seconds depending on `kind`.
    """
    kind: LimitKind = LimitKind.NONE
    value: float = 0

    def __post_init__(self):
        if self.kind == LimitKind.CLICK_COUNT and int(self.value) != self.value:
            raise ValueError("Click limit must be a whole number")
        if self.kind == LimitKind.CLICK_COUNT and self.value <= 0:
            raise ValueError("Click limit must be positive")
        if self.kind == LimitKind.ELAPSED_TIME and self.value < 0:
            raise ValueError("Time limit cannot be negative")

    @staticmethod
    def none() -> "LimitMode":
        return LimitMode(LimitKind.NONE, 0)

    @staticmethod
    def click_count(clicks: int = 10) -> "LimitMode":
        return LimitMode(LimitKind.CLICK_COUNT, int(clicks))

    @staticmethod
    def elapsed_time(seconds: float = 1.0) -> "LimitMode":
        return LimitMode(LimitKind.ELAPSED_TIME, float(seconds))

    def __str__(self) -> str:
        if self.kind == LimitKind.CLICK_COUNT:
            return f"{int(self.value)} clicks"
        if self.kind == LimitKind.ELAPSED_TIME:
            return f"{self.value:g}s"
        return "unlimited"


@dataclass(frozen=True)
class RGB:
    """An 8-bit per channel screen color."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    def to_tuple(self) -> Tuple[int, int, int]:
        """Returns the color as a tuple for compatibility with screen libraries."""
        return (self.r, self.g, self.b)

    @staticmethod
    def from_hex(text: str) -> "RGB":
        """Parse `#RRGGBB` or `RRGGBB`."""
        raw = text.strip().lstrip("#")
        if len(raw) != 6:
            raise ValueError(f"Expected a RRGGBB color, got {text!r}")
        return RGB(int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16))

    def __str__(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


BLACK = RGB(0, 0, 0)


@dataclass(frozen=True)
class ColorGate:
    """Only fire while the pointer hovers a color close to `target_color`."""
    enabled: bool = False
    target_color: RGB = BLACK
    threshold: int = 0

    def __post_init__(self):
        if not 0 <= self.threshold <= 255:
            raise ValueError("Color threshold must be between 0 and 255")

    def normalized_threshold(self) -> float:
        return self.threshold / 255.0


FocusPredicate = Callable[[], bool]


@dataclass(frozen=True)
class SessionConfig:
    """
    Configuration settings for a click session.

    SRP: This class encapsulates all configuration-related values
    and validation. The nested parts validate themselves.
    """
    interval_mode: IntervalMode = IntervalMode.CONSTANT
    constant_interval: ConstantInterval = field(default_factory=ConstantInterval)
    random_interval_bounds: RandomIntervalBounds = field(default_factory=RandomIntervalBounds)
    button: MouseButton = MouseButton.LEFT
    click_mode: ClickMode = ClickMode.SINGLE
    limit_mode: LimitMode = field(default_factory=LimitMode.none)
    color_gate: ColorGate = field(default_factory=ColorGate)
    # Returns True while ticks should be suspended, e.g. a given window has focus.
    focus_gate: Optional[FocusPredicate] = None

    def is_infinite_mode(self) -> bool:
        """Check if the session should run until stopped."""
        return self.limit_mode.kind == LimitKind.NONE


class ClickerState(Enum):
    """Enumeration of session loop states."""
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of the shared session state, taken under the lock."""
    enabled: bool
    session_id: int
    button_pressed: bool
    start_time: float
    total_clicks: int
    last_error: Optional[str] = None
    # Set when the loop itself ended the session (limit reached or action failed).
    self_terminated: bool = False

    @property
    def state(self) -> ClickerState:
        return ClickerState.RUNNING if self.enabled else ClickerState.IDLE
