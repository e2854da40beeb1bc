import math

import pytest

from spring_follow.core.constants import (
    SpringTuning, InvalidTuningError, derive_constants, stable_k2,
)


def test_default_constants():
    c = derive_constants(1.0, 0.5, 2.0)
    assert c.k1 == pytest.approx(0.5 / math.pi)
    assert c.k2 == pytest.approx(1.0 / (2 * math.pi) ** 2)
    assert c.k3 == pytest.approx(2.0 * 0.5 / (2 * math.pi))


def test_derivation_is_pure():
    a = derive_constants(1.7, 0.3, -0.8)
    b = derive_constants(1.7, 0.3, -0.8)
    assert (a.k1, a.k2, a.k3) == (b.k1, b.k2, b.k3)


def test_tuning_constants_match_function():
    tuning = SpringTuning(frequency=2.5, damping=0.9, response=1.2)
    assert tuning.constants() == derive_constants(2.5, 0.9, 1.2)


def test_zero_response_or_damping_gives_zero_k3():
    assert derive_constants(1.0, 0.5, 0.0).k3 == 0.0
    assert derive_constants(1.0, 0.0, 2.0).k3 == 0.0


@pytest.mark.parametrize("frequency", [0.05, 0.5, 1.0, 4.0, 30.0])
@pytest.mark.parametrize("dt", [0.0, 1e-4, 1.0 / 60.0, 0.1, 1.0, 5.0])
@pytest.mark.parametrize("damping", [0.0, 0.5, 2.0])
def test_stable_k2_never_below_k2_and_positive(frequency, dt, damping):
    c = derive_constants(frequency, damping, 1.0)
    k2s = stable_k2(c.k2, c.k1, dt)
    assert k2s >= c.k2
    assert k2s > 0


def test_stable_k2_is_k2_at_zero_dt():
    c = derive_constants(1.0, 0.5, 2.0)
    assert stable_k2(c.k2, c.k1, 0.0) == c.k2


def test_stable_k2_floor_kicks_in_for_large_dt():
    c = derive_constants(1.0, 0.5, 2.0)
    dt = 1.0
    expected = 1.1 * (dt * dt / 4.0 + dt * c.k1 / 2.0)
    assert expected > c.k2
    assert c.stable_k2(dt) == pytest.approx(expected)


def test_stable_k2_untouched_at_frame_rate():
    c = derive_constants(1.0, 0.5, 2.0)
    assert c.stable_k2(1.0 / 60.0) == c.k2


def test_default_tuning():
    tuning = SpringTuning()
    assert (tuning.frequency, tuning.damping, tuning.response) == (1.0, 0.5, 2.0)


@pytest.mark.parametrize("frequency", [0.0, -1.0, float('nan'), float('inf')])
def test_invalid_frequency_rejected(frequency):
    with pytest.raises(InvalidTuningError):
        SpringTuning(frequency=frequency)


def test_negative_damping_rejected():
    with pytest.raises(InvalidTuningError):
        SpringTuning(damping=-0.1)


def test_negative_response_allowed():
    assert SpringTuning(response=-3.0).constants().k3 < 0


def test_invalid_tuning_is_value_error():
    with pytest.raises(ValueError):
        SpringTuning(frequency=0.0)


def test_with_changes_validates():
    tuning = SpringTuning()
    assert tuning.with_changes(damping=1.0).damping == 1.0
    with pytest.raises(InvalidTuningError):
        tuning.with_changes(frequency=-2.0)


def test_dict_round_trip_ignores_unknown_keys():
    tuning = SpringTuning.from_dict({'frequency': '2', 'response': 0, 'name': 'x'})
    assert tuning == SpringTuning(frequency=2.0, damping=0.5, response=0.0)
    assert SpringTuning.from_dict(tuning.to_dict()) == tuning
