"""
Base Motion - Abstract base class for target movers

A motion is the host-side stand-in for whatever a follower chases: it owns a
position, advances it by dt, and reports its velocity only when it actually
tracks one. Motions that report None push followers onto the
finite-difference velocity estimate.
"""

import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..core.system import TargetState
from ..core.vector import Vec3


@dataclass
class MotionConfig:
    """Configuration for a target motion"""
    speed: float = 1.0
    scale: float = 1.0
    origin: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    seed: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)


class BaseMotion(ABC):
    """Abstract base class for target motions"""

    # Motion metadata
    name: str = "base"
    description: str = "Base motion"

    def __init__(self, config: Optional[MotionConfig] = None):
        self.config = config or MotionConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.time = 0.0
        self.origin = Vec3.from_iterable(self.config.origin)
        self.position = self.origin

    @abstractmethod
    def advance(self, dt: float) -> None:
        """Move the target forward by dt seconds."""
        pass

    @property
    def velocity(self) -> Optional[Vec3]:
        """Reported velocity, or None when the motion does not track one"""
        return None

    def state(self) -> TargetState:
        return TargetState(self.position, self.velocity)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self.position.to_tuple()}, time={self.time:.3f})"
