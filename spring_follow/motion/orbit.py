"""
Orbit Motion - Circles around its origin in the XZ plane
Reports its analytic velocity, so followers never estimate it
"""

import numpy as np
from typing import Optional

from .base import BaseMotion, MotionConfig
from ..core.vector import Vec3


class OrbitMotion(BaseMotion):
    """Uniform circular motion"""

    name = "orbit"
    description = "Circle in the XZ plane with known velocity"

    def __init__(self, config: Optional[MotionConfig] = None):
        super().__init__(config)

        self.radius = float(self.config.extra.get('radius', 2.0 * self.config.scale))
        # Revolutions per second
        self.rate = float(self.config.extra.get('rate', 0.25)) * self.config.speed
        self.position = self._position_at(0.0)

    def _angle(self, t: float) -> float:
        return 2 * np.pi * self.rate * t

    def _position_at(self, t: float) -> Vec3:
        a = self._angle(t)
        return self.origin + Vec3(np.cos(a) * self.radius, 0.0, np.sin(a) * self.radius)

    def advance(self, dt: float) -> None:
        self.time += dt
        self.position = self._position_at(self.time)

    @property
    def velocity(self) -> Vec3:
        a = self._angle(self.time)
        omega = 2 * np.pi * self.rate
        return Vec3(-np.sin(a) * self.radius * omega, 0.0, np.cos(a) * self.radius * omega)
