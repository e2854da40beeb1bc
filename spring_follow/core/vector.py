"""
Vector Utilities

Plain 3D value type shared by the integrator, the follower system and the
demo motions. Instances are immutable so a target snapshot taken at the start
of a tick cannot change while followers are being integrated.
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class Vec3:
    """3D vector with physics operations"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: 'Vec3') -> 'Vec3':
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vec3') -> 'Vec3':
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> 'Vec3':
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> 'Vec3':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> 'Vec3':
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> 'Vec3':
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    @property
    def length(self) -> float:
        return float(np.sqrt(self.length_squared))

    @property
    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalized(self) -> 'Vec3':
        l = self.length
        return Vec3(self.x / l, self.y / l, self.z / l) if l > 1e-10 else Vec3()

    def dot(self, other: 'Vec3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def distance_to(self, other: 'Vec3') -> float:
        return (self - other).length

    def lerp(self, other: 'Vec3', t: float) -> 'Vec3':
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t
        )

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.to_array())))

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @staticmethod
    def zero() -> 'Vec3':
        return Vec3()

    @staticmethod
    def from_iterable(values: Iterable[float]) -> 'Vec3':
        """Build from any 3-element sequence or numpy array"""
        x, y, z = (float(v) for v in values)
        return Vec3(x, y, z)


def as_vec3(value) -> Vec3:
    """Coerce a Vec3, tuple, list or numpy array into a Vec3"""
    if isinstance(value, Vec3):
        return value
    return Vec3.from_iterable(value)
