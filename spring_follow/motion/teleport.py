"""
Teleport Motion - Jumps to a random spot on a fixed period
The classic stress test for a follower: the target never moves smoothly and
never reports a velocity
"""

from typing import Optional

from .base import BaseMotion, MotionConfig
from ..core.vector import Vec3


class TeleportMotion(BaseMotion):
    """Teleports to (u * scale, height, v * scale) every period seconds"""

    name = "teleport"
    description = "Random teleport on a repeating timer"

    DEFAULT_PERIOD = 1.0
    DEFAULT_SCALE = 3.0

    def __init__(self, config: Optional[MotionConfig] = None):
        super().__init__(config)

        self.period = float(self.config.extra.get('period', self.DEFAULT_PERIOD))
        self.scale = float(self.config.extra.get('scale', self.DEFAULT_SCALE))
        self.height = float(self.config.extra.get('height', self.origin.y))
        if self.period <= 0:
            raise ValueError(f"period must be > 0, got {self.period}")

        self._elapsed = 0.0
        self.teleports = 0

    def advance(self, dt: float) -> None:
        self.time += dt
        self._elapsed += dt * self.config.speed

        # Repeating timer: fires once per tick at most, keeps the remainder
        if self._elapsed >= self.period:
            self._elapsed %= self.period
            self.position = Vec3(
                self.rng.random() * self.scale,
                self.height,
                self.rng.random() * self.scale
            )
            self.teleports += 1
