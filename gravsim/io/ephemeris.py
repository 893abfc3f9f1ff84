"""Reference ephemeris loading."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

from gravsim.physics.errors import ConfigurationError
from gravsim.physics.state import SystemState


@dataclass
class Ephemeris:
    """Sequence of reference snapshots.

    Attributes:
        dt: Spacing between consecutive snapshots [days]
        snapshots: List of (tt, state) pairs in file order
    """
    dt: float
    snapshots: List[Tuple[float, SystemState]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.snapshots)

    def __getitem__(self, index: int) -> Tuple[float, SystemState]:
        return self.snapshots[index]


def parse_ephemeris(data: dict) -> Ephemeris:
    """Build an Ephemeris from already-decoded JSON data.

    Expected layout::

        {"dt": 36000.0,
         "data": [{"tt": 0.0, "body": {"Sun": {"pos": [...], "vel": [...]}, ...}},
                  ...]}
    """
    try:
        dt = float(data["dt"])
        records = data["data"]
        if not isinstance(records, list):
            raise TypeError(f"'data' is {type(records).__name__}")
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Ephemeris needs numeric 'dt' and a 'data' list: {e}")

    snapshots = []
    for n, record in enumerate(records):
        try:
            bodies = record["body"]
            tt = float(record.get("tt", n * dt))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Malformed ephemeris record {n}: {e}")
        snapshots.append((tt, SystemState.from_mapping(bodies)))

    return Ephemeris(dt=dt, snapshots=snapshots)


def load_ephemeris(input_path: Union[str, Path]) -> Ephemeris:
    """Load reference snapshots from a JSON ephemeris file.

    Args:
        input_path: Path to the .json file

    Returns:
        Ephemeris
    """
    input_path = Path(input_path)
    with open(input_path, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid ephemeris file {input_path}: {e}")
    return parse_ephemeris(data)
