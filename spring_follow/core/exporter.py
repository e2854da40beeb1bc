"""
Trajectory Exporter - Writes recorded runs to CSV or JSON
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, List


class TrajectoryExporter:
    """Exports scene trajectories to various formats"""

    CSV_HEADER = ['tick', 'time', 'name', 'kind', 'x', 'y', 'z', 'vx', 'vy', 'vz', 'status']

    @classmethod
    def _check(cls, trajectory) -> None:
        if len(trajectory) == 0:
            raise ValueError("No samples to export")

    @classmethod
    def to_rows(cls, trajectory) -> List[List[Any]]:
        """One row per target and follower per tick"""
        cls._check(trajectory)
        rows = []
        for tick, time in enumerate(trajectory.times):
            for name, positions in trajectory.target_positions.items():
                p = positions[tick]
                rows.append([tick, time, name, 'target', p.x, p.y, p.z, '', '', '', ''])
            for handle, positions in trajectory.follower_positions.items():
                p = positions[tick]
                v = trajectory.follower_velocities[handle][tick]
                statuses = trajectory.statuses.get(handle, [])
                status = statuses[tick].value if tick < len(statuses) else ''
                rows.append([tick, time, handle, 'follower', p.x, p.y, p.z, v.x, v.y, v.z, status])
        return rows

    @classmethod
    def to_csv(cls, trajectory, path: str | Path) -> Path:
        """Export a trajectory to CSV (one row per object per tick)"""
        path = Path(path)
        rows = cls.to_rows(trajectory)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(cls.CSV_HEADER)
            writer.writerows(rows)

        return path

    @classmethod
    def metadata(cls, trajectory) -> Dict[str, Any]:
        return {
            'dt': trajectory.dt,
            'samples': len(trajectory),
            **{k: v for k, v in trajectory.metadata.items()},
        }

    @classmethod
    def to_json(cls, trajectory, path: str | Path) -> Path:
        """Export a trajectory to JSON with run metadata"""
        path = Path(path)
        cls._check(trajectory)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'metadata': cls.metadata(trajectory),
            'times': trajectory.times,
            'targets': {
                str(name): [p.to_tuple() for p in positions]
                for name, positions in trajectory.target_positions.items()
            },
            'followers': {
                str(handle): {
                    'positions': [p.to_tuple() for p in positions],
                    'velocities': [v.to_tuple() for v in trajectory.follower_velocities[handle]],
                    'statuses': [s.value for s in trajectory.statuses.get(handle, [])],
                }
                for handle, positions in trajectory.follower_positions.items()
            },
        }

        with open(path, 'w') as f:
            json.dump(data, f, indent=2, default=str)

        return path

    @classmethod
    def export(cls, trajectory, path: str | Path) -> Path:
        """Pick the format from the file suffix"""
        suffix = Path(path).suffix.lower()
        if suffix == '.csv':
            return cls.to_csv(trajectory, path)
        elif suffix == '.json':
            return cls.to_json(trajectory, path)
        else:
            raise ValueError(f"Unsupported format: {suffix}")
