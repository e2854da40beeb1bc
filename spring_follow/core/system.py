"""
Follower System - per-tick sweep over every SpringFollower

The host owns the targets. Each tick it hands the system something that can
resolve a target id (a mapping or a callable) and the system:

- takes a snapshot of every referenced target before any follower moves,
  so the result never depends on iteration order (followers may target
  other followers)
- steps each follower against the snapshot
- reports followers whose target did not resolve instead of aborting

Example:
    system = FollowerSystem()
    cam = system.add(SpringFollower.from_target("player"), handle="camera")

    # Each frame
    report = system.tick(dt, {"player": TargetState(player_pos)})
    system.apply(lambda handle, pos, vel: scene[handle].move_to(pos))
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, Iterator, List, Mapping, Optional, Set, Union

from .follower import SpringFollower, StepResult, StepStatus
from .vector import Vec3, as_vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetState:
    """What a follower may read about its target"""
    position: Vec3
    velocity: Optional[Vec3] = None

    def __post_init__(self):
        object.__setattr__(self, 'position', as_vec3(self.position))
        if self.velocity is not None:
            object.__setattr__(self, 'velocity', as_vec3(self.velocity))


TargetLookup = Union[Mapping[Hashable, Optional[TargetState]], Callable[[Hashable], Optional[TargetState]]]
PositionSink = Callable[[Hashable, Vec3, Vec3], None]


class TargetSnapshot:
    """Immutable view of target states as of the start of a tick"""

    def __init__(self, states: Dict[Hashable, Optional[TargetState]]):
        self._states = dict(states)

    @classmethod
    def capture(cls, lookup: TargetLookup, target_ids) -> 'TargetSnapshot':
        """Resolve every id once, before anything is written"""
        resolve = lookup.get if isinstance(lookup, Mapping) else lookup
        states = {}
        for target_id in target_ids:
            if target_id in states:
                continue
            state = resolve(target_id)
            if state is not None and not isinstance(state, TargetState):
                # Bare positions are accepted for targets without velocity
                state = TargetState(as_vec3(state))
            states[target_id] = state
        return cls(states)

    def get(self, target_id: Hashable) -> Optional[TargetState]:
        return self._states.get(target_id)

    def __contains__(self, target_id: Hashable) -> bool:
        return self._states.get(target_id) is not None

    def __len__(self) -> int:
        return len(self._states)


@dataclass
class TickReport:
    """Per-follower results of one tick"""
    dt: float
    results: Dict[Hashable, StepResult] = field(default_factory=dict)

    def handles_with(self, status: StepStatus) -> List[Hashable]:
        return [h for h, r in self.results.items() if r.status is status]

    @property
    def updated(self) -> List[Hashable]:
        return self.handles_with(StepStatus.OK)

    @property
    def idle(self) -> List[Hashable]:
        return self.handles_with(StepStatus.IDLE)

    @property
    def missing(self) -> List[Hashable]:
        return self.handles_with(StepStatus.TARGET_MISSING)

    @property
    def all_resolved(self) -> bool:
        return not self.missing

    def counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in StepStatus}
        for result in self.results.values():
            counts[result.status.value] += 1
        return counts


class FollowerSystem:
    """
    Registry of followers stepped together once per tick.

    Handles are any hashable chosen by the caller, or sequential integers.
    """

    def __init__(self):
        self._followers: Dict[Hashable, SpringFollower] = {}
        self._next_handle = 0
        # Followers whose missing target has already been logged at warning level
        self._reported_missing: Set[Hashable] = set()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def add(self, follower: SpringFollower, handle: Optional[Hashable] = None) -> Hashable:
        """Register a follower and return its handle"""
        if handle is None:
            while self._next_handle in self._followers:
                self._next_handle += 1
            handle = self._next_handle
            self._next_handle += 1
        elif handle in self._followers:
            raise ValueError(f"Handle already in use: {handle!r}")

        self._followers[handle] = follower
        logger.debug("added follower %r -> target %r", handle, follower.target_id)
        return handle

    def remove(self, handle: Hashable) -> Optional[SpringFollower]:
        """Tear down a follow relationship"""
        self._reported_missing.discard(handle)
        follower = self._followers.pop(handle, None)
        if follower is not None:
            logger.debug("removed follower %r", handle)
        return follower

    def get(self, handle: Hashable) -> Optional[SpringFollower]:
        return self._followers.get(handle)

    def retarget(
        self,
        handle: Hashable,
        target_id: Hashable,
        target_position: Optional[Vec3] = None
    ) -> None:
        """Point an existing follower at a new target"""
        follower = self._followers.get(handle)
        if follower is None:
            raise KeyError(handle)
        follower.retarget(target_id, target_position)
        self._reported_missing.discard(handle)

    def __len__(self) -> int:
        return len(self._followers)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._followers)

    def __contains__(self, handle: Hashable) -> bool:
        return handle in self._followers

    def items(self):
        return self._followers.items()

    # ------------------------------------------------------------------
    # Per-tick sweep
    # ------------------------------------------------------------------

    def snapshot(self, targets: TargetLookup) -> TargetSnapshot:
        return TargetSnapshot.capture(targets, (f.target_id for f in self._followers.values()))

    def tick(self, dt: float, targets: TargetLookup) -> TickReport:
        """
        Step every follower by dt against a snapshot of their targets.

        Args:
            dt: Elapsed time in seconds, >= 0
            targets: Mapping or callable from target id to TargetState
                     (None or absent when the target no longer exists)

        Returns:
            TickReport with one StepResult per follower
        """
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")

        snapshot = self.snapshot(targets)
        report = TickReport(dt=dt)

        for handle, follower in self._followers.items():
            state = snapshot.get(follower.target_id)
            if state is None:
                self._report_missing(handle, follower)
                report.results[handle] = StepResult(
                    StepStatus.TARGET_MISSING, follower.position, follower.velocity
                )
                continue

            if handle in self._reported_missing:
                self._reported_missing.discard(handle)
                logger.info("follower %r: target %r resolved again", handle, follower.target_id)
                # Positions seen before the gap are stale, reseed the estimate
                follower.retarget(follower.target_id)

            report.results[handle] = follower.step(dt, state.position, state.velocity)

        return report

    def _report_missing(self, handle: Hashable, follower: SpringFollower) -> None:
        if handle in self._reported_missing:
            logger.debug("follower %r: target %r still missing", handle, follower.target_id)
            return
        self._reported_missing.add(handle)
        logger.warning(
            "follower %r: target %r did not resolve, skipping until it does",
            handle, follower.target_id
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def positions(self) -> Dict[Hashable, Vec3]:
        return {handle: f.position for handle, f in self._followers.items()}

    def apply(self, sink: PositionSink) -> None:
        """Publish every follower's position and velocity to the host"""
        for handle, follower in self._followers.items():
            sink(handle, follower.position, follower.velocity)

    def update(self, dt: float, targets: TargetLookup, sink: Optional[PositionSink] = None) -> TickReport:
        """Tick, then publish"""
        report = self.tick(dt, targets)
        if sink is not None:
            self.apply(sink)
        return report

    def as_targets(self) -> Dict[Hashable, TargetState]:
        """Every follower as a target, so followers can follow followers"""
        return {
            handle: TargetState(f.position, f.velocity)
            for handle, f in self._followers.items()
        }
