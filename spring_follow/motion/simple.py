"""
Simple motions: static, linear and a single step jump
"""

from typing import Optional

from .base import BaseMotion, MotionConfig
from ..core.vector import Vec3


class StaticMotion(BaseMotion):
    """Stays at its origin"""

    name = "static"
    description = "Fixed target, zero velocity"

    def advance(self, dt: float) -> None:
        self.time += dt

    @property
    def velocity(self) -> Vec3:
        return Vec3()


class LinearMotion(BaseMotion):
    """Moves at constant velocity from its origin"""

    name = "linear"
    description = "Constant velocity with known velocity"

    def __init__(self, config: Optional[MotionConfig] = None):
        super().__init__(config)
        direction = Vec3.from_iterable(self.config.extra.get('direction', (1.0, 0.0, 0.0)))
        self._velocity = direction.normalized() * self.config.speed

    def advance(self, dt: float) -> None:
        self.time += dt
        self.position = self.origin + self._velocity * self.time

    @property
    def velocity(self) -> Vec3:
        return self._velocity


class StepMotion(BaseMotion):
    """At rest, then jumps once by offset when time reaches at"""

    name = "step"
    description = "Single jump, no reported velocity"

    def __init__(self, config: Optional[MotionConfig] = None):
        super().__init__(config)
        self.offset = Vec3.from_iterable(
            self.config.extra.get('offset', (self.config.scale, 0.0, 0.0))
        )
        self.at = float(self.config.extra.get('at', 0.0))
        self.jumped = False

    def advance(self, dt: float) -> None:
        self.time += dt
        if not self.jumped and self.time >= self.at:
            self.position = self.origin + self.offset
            self.jumped = True
