"""
Spring Follow - Semi-implicit Euler follow constraint for secondary motion
"""

from .core import (
    Vec3, SpringTuning, InvalidTuningError, SpringFollower,
    StepStatus, StepResult, TargetState, FollowerSystem, TickReport,
    TrajectoryExporter, get_preset,
)
from .motion import MOTIONS, get_motion
from .scene import Scene, SceneConfig, Trajectory

__version__ = "0.1.0"
__all__ = [
    'Vec3',
    'SpringTuning',
    'InvalidTuningError',
    'SpringFollower',
    'StepStatus',
    'StepResult',
    'TargetState',
    'FollowerSystem',
    'TickReport',
    'TrajectoryExporter',
    'Scene',
    'SceneConfig',
    'Trajectory',
    'MOTIONS',
    'get_motion',
    'simulate',
]


def simulate(
    motion: str = 'teleport',
    ticks: int = 600,
    dt: float = 1.0 / 60.0,
    chain: int = 1,
    preset: str = None,
    output_path: str = None,
    seed: int = None,
    motion_extra: dict = None,
    **tuning
) -> Trajectory:
    """
    Run a headless follow simulation.

    Args:
        motion: Target motion name ('teleport', 'orbit', 'step', 'linear', 'static')
        ticks: Number of ticks to run
        dt: Seconds per tick
        chain: Number of followers, each following the previous one
        preset: Tuning preset name (explicit tuning kwargs override it)
        output_path: Optional .csv or .json file to export the trajectory to
        seed: Seed for random motions
        motion_extra: Motion-specific parameters (period, radius, offset, ...)
        **tuning: frequency, damping, response

    Returns:
        The recorded Trajectory
    """
    base = SpringTuning()
    if preset is not None:
        found = get_preset(preset)
        if found is None:
            raise ValueError(f"Unknown preset: {preset}")
        base = found.to_tuning()

    overrides = {k: v for k, v in tuning.items() if v is not None}
    config = SceneConfig(
        motion=motion,
        dt=dt,
        ticks=ticks,
        chain=chain,
        seed=seed,
        tuning=base.with_changes(**overrides) if overrides else base,
        motion_extra=motion_extra or {},
    )

    trajectory = Scene.from_config(config).run(config.ticks, config.dt)

    if output_path is not None:
        TrajectoryExporter.export(trajectory, output_path)

    return trajectory
