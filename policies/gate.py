"""
Gate policy: whether a tick performs its action.

Two conditions, both optional: the color under the pointer must be close
enough to a target color, and a focus predicate must not ask for
suspension.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

from models import BLACK, RGB, SessionConfig

# sqrt(255^2 * 3), the distance between black and white
MAX_COLOR_DISTANCE = math.sqrt(255 ** 2 * 3)

ColorSampler = Callable[[], RGB]


def color_distance(a: RGB, b: RGB) -> float:
    """Euclidean RGB distance normalized to [0, 1]."""
    distance = math.sqrt((a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2)
    return distance / MAX_COLOR_DISTANCE


def color_matches(sampled: RGB, target: RGB, threshold: int) -> bool:
    return color_distance(sampled, target) <= threshold / 255.0


class GatePolicy:
    """
    Evaluates the gate for one tick.

    The sampler is only called while the color gate is enabled. If it
    raises, the last successful sample is reused; sampling problems never
    end a session.
    """

    def __init__(self, sampler: Optional[ColorSampler] = None) -> None:
        self._sampler = sampler
        self._last_color = BLACK
        self._on_sample_error: Optional[Callable[[Exception], None]] = None

    @property
    def last_color(self) -> RGB:
        return self._last_color

    def register_sample_error_callback(self, callback: Callable[[Exception], None]) -> None:
        self._on_sample_error = callback

    def should_fire(self, config: SessionConfig) -> bool:
        if config.focus_gate is not None and config.focus_gate():
            return False

        gate = config.color_gate
        if not gate.enabled:
            return True

        return color_matches(self.sample_color(), gate.target_color, gate.threshold)

    def sample_color(self) -> RGB:
        """Sample the hovered color, falling back to the previous value."""
        if self._sampler is None:
            return self._last_color
        try:
            self._last_color = self._sampler()
        except Exception as exc:
            if self._on_sample_error:
                self._on_sample_error(exc)
        return self._last_color
