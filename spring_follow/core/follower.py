"""
Spring Follower - semi-implicit Euler follow constraint

One SpringFollower tracks one target. Each tick it:

1. acquires the target's velocity, either as reported by the target or by a
   backward finite difference against the last observed target position
2. stabilizes k2 for the current dt
3. integrates velocity and position from the pre-update state

Example:
    follower = SpringFollower.from_target("player")

    # Each frame
    result = follower.step(dt, target_position=player_pos)
    camera.position = follower.position
"""

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Optional

from .constants import SpringTuning, SpringConstants
from .vector import Vec3, as_vec3


class StepStatus(Enum):
    """Outcome of one follower for one tick"""
    OK = "ok"                        # Integrated
    IDLE = "idle"                    # dt == 0, state unchanged
    TARGET_MISSING = "target_missing"  # Target did not resolve, state unchanged


@dataclass(frozen=True)
class StepResult:
    """Status and post-tick state of one follower"""
    status: StepStatus
    position: Vec3
    velocity: Vec3
    target_velocity: Optional[Vec3] = None

    @property
    def ok(self) -> bool:
        return self.status is StepStatus.OK


class SpringFollower:
    """
    Follows a target with a frequency/damping/response spring.

    The target is referenced by an opaque, hashable id; the follower never
    resolves it itself. Whoever drives the follower looks the target up and
    passes its position (and velocity when it has one) to step().
    """

    def __init__(
        self,
        target_id: Hashable,
        tuning: Optional[SpringTuning] = None,
        position: Vec3 = None,
        velocity: Vec3 = None,
        previous_target_position: Optional[Vec3] = Vec3()
    ):
        self.target_id = target_id
        self.position = as_vec3(position) if position is not None else Vec3()
        self.velocity = as_vec3(velocity) if velocity is not None else Vec3()
        # None means the next observed target position seeds the estimate
        self.previous_target_position = (
            as_vec3(previous_target_position) if previous_target_position is not None else None
        )
        self._tuning = tuning or SpringTuning()
        self._constants = self._tuning.constants()

    @classmethod
    def from_target(cls, target_id: Hashable) -> 'SpringFollower':
        """Follower at the origin with the default tuning (f=1.0, z=0.5, r=2.0)"""
        return cls(target_id)

    def __repr__(self) -> str:
        return (
            f"SpringFollower(target_id={self.target_id!r}, position={self.position.to_tuple()}, "
            f"velocity={self.velocity.to_tuple()}, tuning={self._tuning})"
        )

    # ------------------------------------------------------------------
    # Tuning
    # ------------------------------------------------------------------

    @property
    def tuning(self) -> SpringTuning:
        return self._tuning

    @tuning.setter
    def tuning(self, tuning: SpringTuning):
        self._tuning = tuning
        self._constants = tuning.constants()

    @property
    def constants(self) -> SpringConstants:
        return self._constants

    @property
    def frequency(self) -> float:
        return self._tuning.frequency

    @frequency.setter
    def frequency(self, value: float):
        self.tuning = self._tuning.with_changes(frequency=value)

    @property
    def damping(self) -> float:
        return self._tuning.damping

    @damping.setter
    def damping(self, value: float):
        self.tuning = self._tuning.with_changes(damping=value)

    @property
    def response(self) -> float:
        return self._tuning.response

    @response.setter
    def response(self, value: float):
        self.tuning = self._tuning.with_changes(response=value)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def set_position(self, position: Vec3):
        """Teleport the follower and stop it"""
        self.position = as_vec3(position)
        self.velocity = Vec3()

    def retarget(self, target_id: Hashable, target_position: Optional[Vec3] = None):
        """
        Follow a different target.

        The finite-difference history is reset so the first tick after the
        switch does not see the jump between the two targets as velocity.
        Without a known position the next observation seeds it instead.
        """
        self.target_id = target_id
        self.previous_target_position = (
            as_vec3(target_position) if target_position is not None else None
        )

    # ------------------------------------------------------------------
    # Integration
    # ------------------------------------------------------------------

    def acquire_target_velocity(
        self,
        dt: float,
        target_position: Vec3,
        target_velocity: Optional[Vec3] = None
    ) -> Vec3:
        """
        Velocity of the target for this tick.

        A reported velocity is used as is. Otherwise it is estimated from the
        previous observed position, which is then overwritten.
        """
        if target_velocity is not None:
            return as_vec3(target_velocity)

        target_position = as_vec3(target_position)
        previous = self.previous_target_position
        self.previous_target_position = target_position

        if previous is None or dt == 0:
            return Vec3()
        return (target_position - previous) / dt

    def step(
        self,
        dt: float,
        target_position: Vec3,
        target_velocity: Optional[Vec3] = None
    ) -> StepResult:
        """
        Advance the follower by dt seconds.

        Args:
            dt: Elapsed time in seconds, >= 0
            target_position: Target position for this tick
            target_velocity: Target velocity, if the target tracks one

        Returns:
            StepResult with status OK, or IDLE when dt == 0
        """
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")

        target_position = as_vec3(target_position)
        x_vel = self.acquire_target_velocity(dt, target_position, target_velocity)

        if dt == 0:
            return StepResult(StepStatus.IDLE, self.position, self.velocity, x_vel)

        k1, k3 = self._constants.k1, self._constants.k3
        k2 = self._constants.stable_k2(dt)

        # y, y'
        old_pos, old_vel = self.position, self.velocity

        accel = (target_position + x_vel * k3 - old_pos - old_vel * k1) / k2
        self.velocity = old_vel + accel * dt
        self.position = old_pos + old_vel * dt

        return StepResult(StepStatus.OK, self.position, self.velocity, x_vel)
