"""
Tuning Presets Library - Named frequency/damping/response settings
Lets users pick a follow feel with a single flag
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict

from .constants import (
    SpringTuning, validate_tuning,
    DEFAULT_FREQUENCY, DEFAULT_DAMPING, DEFAULT_RESPONSE,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Preset Data Structures
# ============================================================================

@dataclass
class TuningPreset:
    """A single follower tuning preset"""

    name: str
    description: str = ""

    frequency: float = DEFAULT_FREQUENCY
    damping: float = DEFAULT_DAMPING
    response: float = DEFAULT_RESPONSE

    # Tags for organization
    tags: List[str] = field(default_factory=list)

    def __post_init__(self):
        validate_tuning(self.frequency, self.damping, self.response)

    def to_tuning(self) -> SpringTuning:
        return SpringTuning(self.frequency, self.damping, self.response)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        data = asdict(self)
        if not data['tags']:
            del data['tags']
        if not data['description']:
            del data['description']
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TuningPreset':
        """Create from dictionary"""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        for key in ('frequency', 'damping', 'response'):
            if key in known:
                known[key] = float(known[key])
        return cls(**known)


# ============================================================================
# Built-in Presets
# ============================================================================

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "default": {
        "name": "default",
        "description": "Springy follow that reacts immediately and overshoots a little",
        "frequency": 1.0,
        "damping": 0.5,
        "response": 2.0,
        "tags": ["general"],
    },
    "critical": {
        "name": "critical",
        "description": "Critically damped, settles as fast as possible without wobble",
        "frequency": 1.0,
        "damping": 1.0,
        "response": 0.0,
        "tags": ["general", "smooth"],
    },
    "camera_lag": {
        "name": "camera_lag",
        "description": "Soft trailing camera that eases in and never overshoots",
        "frequency": 0.8,
        "damping": 1.0,
        "response": 0.0,
        "tags": ["camera", "smooth"],
    },
    "snappy": {
        "name": "snappy",
        "description": "Quick, responsive follow for UI cursors and game feel",
        "frequency": 3.0,
        "damping": 0.8,
        "response": 1.0,
        "tags": ["ui", "game"],
    },
    "wobbly": {
        "name": "wobbly",
        "description": "Lightly damped, keeps oscillating (antennae, hair tips, jelly)",
        "frequency": 2.0,
        "damping": 0.2,
        "response": 0.0,
        "tags": ["character", "secondary"],
    },
    "heavy": {
        "name": "heavy",
        "description": "Slow and overdamped (chains, heavy props)",
        "frequency": 0.5,
        "damping": 1.2,
        "response": 0.0,
        "tags": ["secondary", "smooth"],
    },
    "anticipate": {
        "name": "anticipate",
        "description": "Winds up against the motion before following it",
        "frequency": 1.5,
        "damping": 0.6,
        "response": -1.5,
        "tags": ["character", "game"],
    },
    "tail": {
        "name": "tail",
        "description": "Chain-friendly tuning for tails and ribbons",
        "frequency": 1.8,
        "damping": 0.35,
        "response": 0.5,
        "tags": ["character", "secondary"],
    },
}


# ============================================================================
# Preset Manager
# ============================================================================

class PresetManager:
    """
    Manages loading, saving, and looking up tuning presets.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        """
        Initialize preset manager.

        Args:
            user_presets_dir: Directory for user presets (default: ~/.spring-follow/presets)
        """
        self.user_presets_dir = Path(user_presets_dir) if user_presets_dir else (
            Path.home() / '.spring-follow' / 'presets'
        )

        self._builtin: Dict[str, TuningPreset] = {}
        self._user: Dict[str, TuningPreset] = {}

        self._load_builtin_presets()
        self._load_user_presets()

    def _load_builtin_presets(self) -> None:
        for name, data in BUILTIN_PRESETS.items():
            self._builtin[name] = TuningPreset.from_dict(data)

    def _load_user_presets(self) -> None:
        """Load user-defined presets from YAML files"""
        if not self.user_presets_dir.is_dir():
            return

        for yaml_file in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                with open(yaml_file, 'r') as f:
                    data = yaml.safe_load(f)

                if not isinstance(data, dict):
                    logger.warning("Preset file %s does not contain a mapping, skipped", yaml_file)
                    continue

                if 'presets' in data:
                    # Multiple presets in one file
                    if not isinstance(data['presets'], dict):
                        logger.warning("Preset file %s: 'presets' must be a mapping, skipped", yaml_file)
                        continue
                    for name, preset_data in data['presets'].items():
                        preset_data['name'] = name
                        self._user[name] = TuningPreset.from_dict(preset_data)
                else:
                    # Single preset
                    data.setdefault('name', yaml_file.stem)
                    self._user[data['name']] = TuningPreset.from_dict(data)
            except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
                logger.warning("Could not load preset file %s: %s", yaml_file, e)

    def get(self, name: str) -> Optional[TuningPreset]:
        """
        Get a preset by name.
        User presets override built-in presets with same name.
        """
        return self._user.get(name) or self._builtin.get(name)

    def exists(self, name: str) -> bool:
        return name in self._user or name in self._builtin

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin

    def list_all(self) -> List[str]:
        return sorted(set(self._builtin) | set(self._user))

    def list_by_tag(self, tag: str) -> List[str]:
        matches = []
        for name, preset in {**self._builtin, **self._user}.items():
            if tag.lower() in [t.lower() for t in preset.tags]:
                matches.append(name)
        return sorted(matches)

    def list_tags(self) -> List[str]:
        tags = set()
        for preset in {**self._builtin, **self._user}.values():
            tags.update(preset.tags)
        return sorted(tags)

    def save_preset(self, preset: TuningPreset, filename: Optional[str] = None) -> Path:
        """
        Save a user preset to YAML file.

        Args:
            preset: The preset to save
            filename: Optional filename (default: preset.name.yaml)

        Returns:
            Path to saved file
        """
        filename = filename or f"{preset.name}.yaml"
        if not filename.endswith('.yaml'):
            filename += '.yaml'

        self.user_presets_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.user_presets_dir / filename

        with open(filepath, 'w') as f:
            yaml.dump(preset.to_dict(), f, default_flow_style=False, sort_keys=False)

        self._user[preset.name] = preset
        logger.info("Saved preset %r to %s", preset.name, filepath)
        return filepath

    def delete_preset(self, name: str) -> bool:
        """
        Delete a user preset.

        Returns:
            True if deleted, False if not found or is builtin
        """
        if name not in self._user:
            return False

        for yaml_file in self.user_presets_dir.glob('*.yaml'):
            if yaml_file.stem == name:
                yaml_file.unlink()
                break

        del self._user[name]
        return True

    def get_preset_info(self, name: str) -> Optional[Dict[str, Any]]:
        """Get detailed info about a preset, including derived constants"""
        preset = self.get(name)
        if not preset:
            return None

        constants = preset.to_tuning().constants()
        return {
            'name': preset.name,
            'description': preset.description,
            'frequency': preset.frequency,
            'damping': preset.damping,
            'response': preset.response,
            'k1': constants.k1,
            'k2': constants.k2,
            'k3': constants.k3,
            'tags': preset.tags,
            'is_builtin': name in self._builtin,
            'is_user': name in self._user,
        }

    def search(self, query: str) -> List[str]:
        """Search presets by name, description, or tags"""
        query = query.lower()
        matches = []

        for name, preset in {**self._builtin, **self._user}.items():
            if (query in name.lower() or
                query in preset.description.lower() or
                any(query in tag.lower() for tag in preset.tags)):
                matches.append(name)

        return sorted(matches)


# ============================================================================
# Global Instance & Convenience Functions
# ============================================================================

_manager: Optional[PresetManager] = None


def get_preset_manager() -> PresetManager:
    """Get or create global preset manager"""
    global _manager
    if _manager is None:
        _manager = PresetManager()
    return _manager


def get_preset(name: str) -> Optional[TuningPreset]:
    return get_preset_manager().get(name)


def list_presets(tag: Optional[str] = None) -> List[str]:
    """List available presets, optionally filtered by tag"""
    manager = get_preset_manager()
    if tag:
        return manager.list_by_tag(tag)
    return manager.list_all()


def save_preset(preset: TuningPreset) -> Path:
    return get_preset_manager().save_preset(preset)


def search_presets(query: str) -> List[str]:
    return get_preset_manager().search(query)


def preset_exists(name: str) -> bool:
    return get_preset_manager().exists(name)
