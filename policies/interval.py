"""
Interval policy: the wait between two ticks.
"""

from __future__ import annotations

import math
import random
from enum import Enum
from typing import Optional

from models import IntervalMode, SessionConfig


class CpsWarning(Enum):
    """How hard a configured rate is likely to hit the system."""
    NONE = "none"
    MAY_LAG = "Your system may lag!"
    MAY_LAG_MUCH = "Your system may lag much!"


CPS_WARNING_THRESHOLD = 200
CPS_SEVERE_THRESHOLD = 2000


class IntervalPolicy:
    """Computes the delay before the next tick. Never sleeps itself."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def next_delay(self, config: SessionConfig) -> float:
        if config.interval_mode == IntervalMode.CONSTANT:
            return config.constant_interval.total_seconds()
        if config.interval_mode == IntervalMode.RANDOM:
            bounds = config.random_interval_bounds
            if bounds.minimum == bounds.maximum:
                return bounds.minimum
            # uniform() may round to either endpoint, which is allowed
            return min(max(self._rng.uniform(bounds.minimum, bounds.maximum), bounds.minimum), bounds.maximum)
        raise ValueError(f"Unknown interval mode: {config.interval_mode}")


def estimated_cps(config: SessionConfig) -> float:
    """
    Expected clicks per second for the configured interval.

    Random mode is estimated from its lower bound. A zero interval yields
    `math.inf`.
    """
    if config.interval_mode == IntervalMode.RANDOM:
        seconds = config.random_interval_bounds.minimum
    else:
        seconds = config.constant_interval.total_seconds()
    if seconds <= 0:
        return math.inf
    return 1.0 / seconds


def cps_warning(cps: float) -> CpsWarning:
    if cps >= CPS_SEVERE_THRESHOLD:
        return CpsWarning.MAY_LAG_MUCH
    if cps >= CPS_WARNING_THRESHOLD:
        return CpsWarning.MAY_LAG
    return CpsWarning.NONE
