"""
Target Motions - Host-side movers for headless runs
"""

from .base import BaseMotion, MotionConfig
from .teleport import TeleportMotion
from .orbit import OrbitMotion
from .simple import StaticMotion, LinearMotion, StepMotion

# Motion registry for easy access
MOTIONS = {
    'teleport': TeleportMotion,
    'random': TeleportMotion,  # Alias
    'orbit': OrbitMotion,
    'circle': OrbitMotion,  # Alias
    'static': StaticMotion,
    'still': StaticMotion,  # Alias
    'linear': LinearMotion,
    'line': LinearMotion,  # Alias
    'step': StepMotion,
    'jump': StepMotion,  # Alias
}


def get_motion(name: str) -> type:
    """Get motion class by name"""
    name = name.lower()
    if name not in MOTIONS:
        raise ValueError(f"Unknown motion: {name}. Available: {sorted(set(m.name for m in MOTIONS.values()))}")
    return MOTIONS[name]


__all__ = [
    'BaseMotion',
    'MotionConfig',
    'TeleportMotion',
    'OrbitMotion',
    'StaticMotion',
    'LinearMotion',
    'StepMotion',
    'MOTIONS',
    'get_motion',
]
