import math
import random

import pytest

from models import ConstantInterval, IntervalMode, RandomIntervalBounds, SessionConfig
from policies import IntervalPolicy, cps_warning, estimated_cps
from policies.interval import CpsWarning


def test_constant_delay() -> None:
    config = SessionConfig(constant_interval=ConstantInterval(0, 0, 1, 500))
    assert IntervalPolicy().next_delay(config) == pytest.approx(1.5)


def test_zero_constant_delay_is_legal() -> None:
    config = SessionConfig(constant_interval=ConstantInterval(0, 0, 0, 0))
    assert IntervalPolicy().next_delay(config) == 0.0


def test_random_delay_stays_within_bounds() -> None:
    config = SessionConfig(
        interval_mode=IntervalMode.RANDOM,
        random_interval_bounds=RandomIntervalBounds(0.25, 0.75),
    )
    policy = IntervalPolicy(random.Random(1234))
    samples = [policy.next_delay(config) for _ in range(2000)]
    assert all(0.25 <= s <= 0.75 for s in samples)
    assert len(set(samples)) > 1


def test_random_with_equal_bounds_behaves_like_constant() -> None:
    random_config = SessionConfig(
        interval_mode=IntervalMode.RANDOM,
        random_interval_bounds=RandomIntervalBounds(0.05, 0.05),
    )
    constant_config = SessionConfig(constant_interval=ConstantInterval(milliseconds=50))
    policy = IntervalPolicy()
    assert {policy.next_delay(random_config) for _ in range(20)} == {policy.next_delay(constant_config)}


def test_estimated_cps() -> None:
    assert estimated_cps(SessionConfig()) == pytest.approx(10.0)
    assert estimated_cps(SessionConfig(constant_interval=ConstantInterval(milliseconds=0))) == math.inf
    random_config = SessionConfig(
        interval_mode=IntervalMode.RANDOM,
        random_interval_bounds=RandomIntervalBounds(0.5, 2.0),
    )
    assert estimated_cps(random_config) == pytest.approx(2.0)


@pytest.mark.parametrize(
    "cps, expected",
    [
        (10.0, CpsWarning.NONE),
        (199.0, CpsWarning.NONE),
        (200.0, CpsWarning.MAY_LAG),
        (1000.0, CpsWarning.MAY_LAG),
        (2000.0, CpsWarning.MAY_LAG_MUCH),
        (math.inf, CpsWarning.MAY_LAG_MUCH),
    ],
)
def test_cps_warning_levels(cps, expected) -> None:
    assert cps_warning(cps) == expected
