"""
Limit policy: decides, before a tick fires, whether the session is over.
"""

from __future__ import annotations

from models import LimitKind, LimitMode


class LimitPolicy:
    """Click-count and elapsed-time caps. Signals only; never releases buttons."""

    def should_stop(self, limit: LimitMode, total_clicks: int, start_time: float, now: float) -> bool:
        if limit.kind == LimitKind.NONE:
            return False
        if limit.kind == LimitKind.CLICK_COUNT:
            return total_clicks >= limit.value
        if limit.kind == LimitKind.ELAPSED_TIME:
            return now - start_time >= limit.value
        raise ValueError(f"Unknown limit mode: {limit.kind}")
