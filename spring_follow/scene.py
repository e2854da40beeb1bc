"""
Headless Scene - drives target motions and followers together

Each step the scene moves every target first, then ticks the follower
system once against a combined lookup of motions and followers. Followers
can therefore follow other followers (tails, ribbons, camera rigs), and every
link reads its leader's state from before the tick.

Example:
    scene = Scene()
    scene.add_target("ball", TeleportMotion(MotionConfig(seed=7)))
    scene.add_chain("ball", count=3, tuning=SpringTuning.critically_damped())

    trajectory = scene.run(ticks=600, dt=1 / 60)
    print(trajectory.final_distance("link_0"))
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional

from .core.constants import SpringTuning
from .core.follower import SpringFollower, StepStatus
from .core.system import FollowerSystem, TargetState, TickReport
from .core.vector import Vec3
from .motion import BaseMotion, MotionConfig, get_motion

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Everything needed to build and run a headless scene"""
    motion: str = "teleport"
    dt: float = 1.0 / 60.0
    ticks: int = 600
    chain: int = 1
    seed: Optional[int] = None
    tuning: SpringTuning = field(default_factory=SpringTuning)
    motion_extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.dt < 0:
            raise ValueError(f"dt must be >= 0, got {self.dt}")
        if self.ticks < 0:
            raise ValueError(f"ticks must be >= 0, got {self.ticks}")
        if self.chain < 1:
            raise ValueError(f"chain must be >= 1, got {self.chain}")


@dataclass
class Trajectory:
    """Per-tick record of a scene run"""
    dt: float
    times: List[float] = field(default_factory=list)
    target_positions: Dict[Hashable, List[Vec3]] = field(default_factory=dict)
    follower_positions: Dict[Hashable, List[Vec3]] = field(default_factory=dict)
    follower_velocities: Dict[Hashable, List[Vec3]] = field(default_factory=dict)
    statuses: Dict[Hashable, List[StepStatus]] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.times)

    def record(self, time: float, scene: 'Scene', report: TickReport) -> None:
        self.times.append(time)
        for name, motion in scene.targets.items():
            self.target_positions.setdefault(name, []).append(motion.position)
        for handle, follower in scene.system.items():
            self.follower_positions.setdefault(handle, []).append(follower.position)
            self.follower_velocities.setdefault(handle, []).append(follower.velocity)
            result = report.results.get(handle)
            if result is not None:
                self.statuses.setdefault(handle, []).append(result.status)

    def positions_array(self, handle: Hashable) -> np.ndarray:
        """(N, 3) array of a follower's positions"""
        return np.array([p.to_tuple() for p in self.follower_positions[handle]], dtype=np.float64)

    def speeds(self, handle: Hashable) -> np.ndarray:
        return np.array([v.length for v in self.follower_velocities[handle]], dtype=np.float64)

    def peak_speed(self, handle: Hashable) -> float:
        speeds = self.speeds(handle)
        return float(speeds.max()) if len(speeds) else 0.0

    def final_distance(self, handle: Hashable) -> float:
        """
        Distance between a follower and its target at the last sample.

        NaN when the target has no recorded samples (removed before the run).
        """
        target = self.metadata['followers'][handle]['target']
        if self.target_positions.get(target):
            target_pos = self.target_positions[target][-1]
        elif self.follower_positions.get(target):
            target_pos = self.follower_positions[target][-1]
        else:
            return float('nan')
        return self.follower_positions[handle][-1].distance_to(target_pos)

    def missing_count(self) -> int:
        return sum(
            1 for statuses in self.statuses.values()
            for status in statuses if status is StepStatus.TARGET_MISSING
        )


class Scene:
    """Minimal host: named target motions plus a follower system"""

    def __init__(self):
        self.targets: Dict[Hashable, BaseMotion] = {}
        self.system = FollowerSystem()
        self.time = 0.0

    @classmethod
    def from_config(cls, config: SceneConfig) -> 'Scene':
        motion_class = get_motion(config.motion)
        motion = motion_class(MotionConfig(seed=config.seed, extra=dict(config.motion_extra)))

        scene = cls()
        scene.add_target("target", motion)
        scene.add_chain("target", count=config.chain, tuning=config.tuning)
        return scene

    def add_target(self, name: Hashable, motion: BaseMotion) -> Hashable:
        if name in self.targets or name in self.system:
            raise ValueError(f"Name already in use: {name!r}")
        self.targets[name] = motion
        return name

    def remove_target(self, name: Hashable) -> Optional[BaseMotion]:
        """Drop a target; its followers report it missing from now on"""
        return self.targets.pop(name, None)

    def add_follower(
        self,
        target: Hashable,
        tuning: Optional[SpringTuning] = None,
        handle: Optional[Hashable] = None,
        position: Optional[Vec3] = None
    ) -> Hashable:
        """
        Add a follower chasing a motion or another follower.

        The follower starts on its target (or at position) with its velocity
        history seeded from the target, so the first tick sees no jump.
        """
        if handle is not None and handle in self.targets:
            raise ValueError(f"Name already in use: {handle!r}")

        state = self.lookup().get(target)
        start = state.position if state is not None else Vec3()
        follower = SpringFollower(
            target,
            tuning=tuning,
            position=position if position is not None else start,
            previous_target_position=state.position if state is not None else None,
        )
        handle = self.system.add(follower, handle)
        if handle in self.targets:
            self.system.remove(handle)
            raise ValueError(f"Name already in use: {handle!r}")
        return handle

    def add_chain(
        self,
        target: Hashable,
        count: int,
        tuning: Optional[SpringTuning] = None,
        prefix: str = "link"
    ) -> List[Hashable]:
        """Followers where each link follows the previous one"""
        handles = []
        leader = target
        for i in range(count):
            leader = self.add_follower(leader, tuning=tuning, handle=f"{prefix}_{i}")
            handles.append(leader)
        return handles

    def lookup(self) -> Dict[Hashable, TargetState]:
        """Everything a follower can target, as of now"""
        states = {name: motion.state() for name, motion in self.targets.items()}
        states.update(self.system.as_targets())
        return states

    def step(self, dt: float) -> TickReport:
        """Move targets, then tick followers against the moved targets"""
        for motion in self.targets.values():
            motion.advance(dt)
        self.time += dt
        return self.system.tick(dt, self.lookup())

    def describe(self) -> Dict[str, Any]:
        return {
            'targets': {name: motion.name for name, motion in self.targets.items()},
            'followers': {
                handle: {'target': f.target_id, **f.tuning.to_dict()}
                for handle, f in self.system.items()
            },
        }

    def run(self, ticks: int, dt: float) -> Trajectory:
        """Step the scene ticks times and record every tick"""
        trajectory = Trajectory(dt=dt, metadata=self.describe())
        trajectory.metadata['ticks'] = ticks

        for _ in range(ticks):
            report = self.step(dt)
            trajectory.record(self.time, self, report)

        logger.debug("ran %d ticks at dt=%g, %d missing-target results",
                     ticks, dt, trajectory.missing_count())
        return trajectory
