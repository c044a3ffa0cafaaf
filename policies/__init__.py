"""
Policies package: the pure decisions made on every tick of a session.

Key parts
---------
- interval: how long to wait before the next tick (constant or random)
- gate:     whether a tick fires (color proximity, focus predicate)
- limit:    whether the session must end before this tick

None of these sleep or hold the session lock; the session loop in
clicker_engine calls them in the order limit, gate, interval.
"""

from .gate import GatePolicy, color_distance
from .interval import IntervalPolicy, cps_warning, estimated_cps
from .limit import LimitPolicy

__all__ = [
    "GatePolicy",
    "IntervalPolicy",
    "LimitPolicy",
    "color_distance",
    "cps_warning",
    "estimated_cps",
]
