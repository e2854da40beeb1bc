"""
Spring Tuning & Integration Constants

Converts the human-facing tuning triple into the constants used by the
semi-implicit Euler step:

- frequency (f): natural frequency in Hz, how fast the follower reacts
- damping (z):   0 = undamped oscillation, 1 = critically damped, > 1 = sluggish
- response (r):  initial reaction to target motion. 0 = eases in, > 0 = reacts
                 immediately (> 1 overshoots), < 0 = anticipates (winds up
                 in the opposite direction first)

    k1 = z / (pi f)
    k2 = 1 / (2 pi f)^2
    k3 = r z / (2 pi f)
"""

import numpy as np
from dataclasses import dataclass, asdict, replace
from typing import Dict, Any


DEFAULT_FREQUENCY = 1.0
DEFAULT_DAMPING = 0.5
DEFAULT_RESPONSE = 2.0

# Safety factor applied to the k2 stability floor
K2_STABILITY_MARGIN = 1.1


class InvalidTuningError(ValueError):
    """Raised when a tuning value would make the integrator divide by zero or diverge"""


@dataclass(frozen=True)
class SpringConstants:
    """Integration constants derived from a SpringTuning"""
    k1: float
    k2: float
    k3: float

    def stable_k2(self, dt: float) -> float:
        return stable_k2(self.k2, self.k1, dt)


def derive_constants(frequency: float, damping: float, response: float) -> SpringConstants:
    """
    Derive (k1, k2, k3) from frequency, damping and response.

    Pure function: the same inputs always give bit-identical constants.
    Callers are expected to have validated frequency > 0.
    """
    two_pi_f = 2.0 * np.pi * frequency
    k1 = damping / (np.pi * frequency)
    k2 = 1.0 / (two_pi_f * two_pi_f)
    k3 = (response * damping) / two_pi_f
    return SpringConstants(k1=float(k1), k2=float(k2), k3=float(k3))


def stable_k2(k2: float, k1: float, dt: float) -> float:
    """
    Clamp k2 so the step cannot diverge when dt is large relative to the
    spring's period. Applies to a single tick; the stored k2 is left alone.
    """
    return max(k2, K2_STABILITY_MARGIN * ((dt * dt / 4.0) + (dt * k1 / 2.0)))


def validate_tuning(frequency: float, damping: float, response: float) -> None:
    """Raise InvalidTuningError for any tuning the integrator cannot run with"""
    if not np.isfinite(frequency) or frequency <= 0:
        raise InvalidTuningError(f"frequency must be a finite value > 0, got {frequency}")
    if not np.isfinite(damping) or damping < 0:
        raise InvalidTuningError(f"damping must be a finite value >= 0, got {damping}")
    if not np.isfinite(response):
        raise InvalidTuningError(f"response must be finite, got {response}")


@dataclass(frozen=True)
class SpringTuning:
    """Validated tuning parameters for one follower"""
    frequency: float = DEFAULT_FREQUENCY
    damping: float = DEFAULT_DAMPING
    response: float = DEFAULT_RESPONSE

    def __post_init__(self):
        validate_tuning(self.frequency, self.damping, self.response)

    def constants(self) -> SpringConstants:
        return derive_constants(self.frequency, self.damping, self.response)

    def with_changes(self, **changes) -> 'SpringTuning':
        """Copy with some fields replaced (validated again)"""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SpringTuning':
        """Create from a dictionary, ignoring unrelated keys"""
        return cls(
            frequency=float(data.get('frequency', DEFAULT_FREQUENCY)),
            damping=float(data.get('damping', DEFAULT_DAMPING)),
            response=float(data.get('response', DEFAULT_RESPONSE)),
        )

    # Presets
    @classmethod
    def critically_damped(cls, frequency: float = DEFAULT_FREQUENCY) -> 'SpringTuning':
        """Fastest settle without any oscillation"""
        return cls(frequency=frequency, damping=1.0, response=0.0)

    @classmethod
    def anticipating(cls, frequency: float = DEFAULT_FREQUENCY) -> 'SpringTuning':
        """Winds up against the motion before following it"""
        return cls(frequency=frequency, damping=0.6, response=-1.5)
