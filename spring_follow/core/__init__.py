"""
Spring Follow - Core Integrator
"""

from .vector import Vec3, as_vec3
from .constants import (
    # Tuning
    SpringTuning, InvalidTuningError, validate_tuning,
    DEFAULT_FREQUENCY, DEFAULT_DAMPING, DEFAULT_RESPONSE,
    # Constants
    SpringConstants, derive_constants, stable_k2,
)
from .follower import (
    SpringFollower, StepStatus, StepResult,
)
from .system import (
    TargetState, TargetSnapshot, TickReport, FollowerSystem,
)
from .exporter import TrajectoryExporter
from .presets import (
    # Data structures
    TuningPreset,
    # Manager
    PresetManager,
    # Convenience
    get_preset_manager, get_preset, list_presets,
    save_preset, search_presets, preset_exists,
    # Built-in presets dict
    BUILTIN_PRESETS,
)

__all__ = [
    'Vec3', 'as_vec3',
    # Tuning & constants
    'SpringTuning', 'InvalidTuningError', 'validate_tuning',
    'DEFAULT_FREQUENCY', 'DEFAULT_DAMPING', 'DEFAULT_RESPONSE',
    'SpringConstants', 'derive_constants', 'stable_k2',
    # Integrator
    'SpringFollower', 'StepStatus', 'StepResult',
    # System
    'TargetState', 'TargetSnapshot', 'TickReport', 'FollowerSystem',
    # Export
    'TrajectoryExporter',
    # Presets
    'TuningPreset', 'PresetManager',
    'get_preset_manager', 'get_preset', 'list_presets',
    'save_preset', 'search_presets', 'preset_exists',
    'BUILTIN_PRESETS',
]
