import math

import pytest

from models import RGB, ColorGate, SessionConfig
from policies import GatePolicy, color_distance


def _color_config(target: RGB, threshold: int) -> SessionConfig:
    return SessionConfig(color_gate=ColorGate(enabled=True, target_color=target, threshold=threshold))


def test_distance_is_normalized() -> None:
    assert color_distance(RGB(0, 0, 0), RGB(0, 0, 0)) == 0.0
    assert color_distance(RGB(0, 0, 0), RGB(255, 255, 255)) == pytest.approx(1.0)
    assert color_distance(RGB(0, 0, 0), RGB(0, 0, 1)) == pytest.approx(1 / math.sqrt(255 ** 2 * 3))


def test_disabled_color_gate_always_fires() -> None:
    calls = []
    gate = GatePolicy(lambda: calls.append(1) or RGB(255, 255, 255))
    assert gate.should_fire(SessionConfig()) is True
    assert calls == []


def test_off_by_one_channel_fails_exact_match() -> None:
    gate = GatePolicy(lambda: RGB(0, 0, 1))
    assert gate.should_fire(_color_config(RGB(0, 0, 0), threshold=0)) is False


def test_exact_match_fires_with_zero_threshold() -> None:
    gate = GatePolicy(lambda: RGB(10, 20, 30))
    assert gate.should_fire(_color_config(RGB(10, 20, 30), threshold=0)) is True


def test_full_threshold_accepts_any_color() -> None:
    gate = GatePolicy(lambda: RGB(255, 255, 255))
    assert gate.should_fire(_color_config(RGB(0, 0, 0), threshold=255)) is True


@pytest.mark.parametrize(
    "sampled, target, threshold",
    [
        (RGB(0, 0, 1), RGB(0, 0, 0), 0),
        (RGB(100, 100, 100), RGB(110, 100, 100), 5),
        (RGB(100, 100, 100), RGB(110, 100, 100), 6),
        (RGB(12, 200, 33), RGB(40, 180, 60), 30),
    ],
)
def test_gate_is_deterministic(sampled, target, threshold) -> None:
    expected = color_distance(sampled, target) <= threshold / 255
    gate = GatePolicy(lambda: sampled)
    config = _color_config(target, threshold)
    assert {gate.should_fire(config) for _ in range(5)} == {expected}


def test_sampling_failure_reuses_last_color() -> None:
    samples = iter([RGB(5, 5, 5)])

    def sampler() -> RGB:
        try:
            return next(samples)
        except StopIteration:
            raise OSError("screen grab failed")

    errors = []
    gate = GatePolicy(sampler)
    gate.register_sample_error_callback(errors.append)
    config = _color_config(RGB(5, 5, 5), threshold=0)

    assert gate.should_fire(config) is True
    assert gate.should_fire(config) is True
    assert gate.last_color == RGB(5, 5, 5)
    assert len(errors) == 1


def test_first_sampling_failure_falls_back_to_black() -> None:
    def sampler() -> RGB:
        raise OSError("no display")

    gate = GatePolicy(sampler)
    assert gate.should_fire(_color_config(RGB(0, 0, 0), threshold=0)) is True


def test_focus_predicate_suspends_firing() -> None:
    focused = {"value": True}
    config = SessionConfig(focus_gate=lambda: focused["value"])
    gate = GatePolicy()
    assert gate.should_fire(config) is False
    focused["value"] = False
    assert gate.should_fire(config) is True
