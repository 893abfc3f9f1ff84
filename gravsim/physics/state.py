"""Body and system state snapshots."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

import numpy as np

from gravsim.physics.errors import ConfigurationError
from gravsim.physics.vector import freeze


@dataclass(frozen=True, eq=False)
class BodyState:
    """Kinematic state of one body at a single instant.

    Attributes:
        position: Position vector [AU]
        velocity: Velocity vector [AU/day]
    """
    position: np.ndarray
    velocity: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "position", _as_vector(self.position, "position"))
        object.__setattr__(self, "velocity", _as_vector(self.velocity, "velocity"))

    def __eq__(self, other):
        if not isinstance(other, BodyState):
            return NotImplemented
        return (np.array_equal(self.position, other.position)
                and np.array_equal(self.velocity, other.velocity))

    __hash__ = None

    @classmethod
    def coerce(cls, value) -> "BodyState":
        """Build a BodyState from a BodyState, a dict or a (pos, vel) pair.

        Dict input may use the ephemeris keys ``pos``/``vel`` or the long
        names ``position``/``velocity``.
        """
        if isinstance(value, BodyState):
            return value
        if isinstance(value, Mapping):
            pos = value.get("pos", value.get("position"))
            vel = value.get("vel", value.get("velocity"))
            if pos is None or vel is None:
                raise ConfigurationError(
                    f"Body state needs 'pos' and 'vel' entries, got keys {sorted(value)}"
                )
            return cls(pos, vel)
        try:
            pos, vel = value
        except (TypeError, ValueError):
            raise ConfigurationError(f"Cannot interpret {value!r} as a body state")
        return cls(pos, vel)


def _as_vector(value, label: str) -> np.ndarray:
    try:
        array = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{label} must be numeric, got {value!r}")
    if array.shape != (3,):
        raise ConfigurationError(f"{label} must have 3 components, got shape {array.shape}")
    return freeze(array)


class SystemState(Mapping):
    """Immutable snapshot of every body's position and velocity.

    Bodies keep a fixed order; ``positions`` and ``velocities`` are parallel
    (n, 3) arrays indexed in that order. The snapshot is also a read-only
    mapping from body name to :class:`BodyState`.
    """

    def __init__(self, names: Sequence[str], positions, velocities):
        self._names: Tuple[str, ...] = tuple(names)
        self._index: Dict[str, int] = {name: i for i, name in enumerate(self._names)}
        if len(self._index) != len(self._names):
            raise ConfigurationError(f"Duplicate body names in {self._names}")

        n = len(self._names)
        positions = np.array(positions, dtype=np.float64)
        velocities = np.array(velocities, dtype=np.float64)
        if n == 0:
            positions = positions.reshape(0, 3)
            velocities = velocities.reshape(0, 3)
        if positions.shape != (n, 3) or velocities.shape != (n, 3):
            raise ConfigurationError(
                f"Expected ({n}, 3) position and velocity arrays, "
                f"got {positions.shape} and {velocities.shape}"
            )
        positions.flags.writeable = False
        velocities.flags.writeable = False
        self._positions = positions
        self._velocities = velocities

    @classmethod
    def from_mapping(cls, bodies: Mapping, order: Optional[Iterable[str]] = None) -> "SystemState":
        """Build a snapshot from a mapping of body name to body state.

        Args:
            bodies: Mapping name -> BodyState, dict with pos/vel, or (pos, vel)
            order: Optional body order; defaults to the mapping's own order

        Returns:
            New SystemState
        """
        if isinstance(bodies, SystemState) and order is None:
            return bodies
        names = list(order) if order is not None else list(bodies)
        missing = [name for name in names if name not in bodies]
        if missing:
            raise ConfigurationError(f"No state given for bodies: {missing}")
        states = [BodyState.coerce(bodies[name]) for name in names]
        positions = [s.position for s in states]
        velocities = [s.velocity for s in states]
        return cls(names, positions, velocities)

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def positions(self) -> np.ndarray:
        """Read-only (n, 3) position array [AU]."""
        return self._positions

    @property
    def velocities(self) -> np.ndarray:
        """Read-only (n, 3) velocity array [AU/day]."""
        return self._velocities

    def index(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise ConfigurationError(f"Unknown body '{name}'. Known bodies: {list(self._names)}")

    def replace(self, positions=None, velocities=None) -> "SystemState":
        """Return a new snapshot with the given arrays swapped in."""
        return SystemState(
            self._names,
            self._positions if positions is None else positions,
            self._velocities if velocities is None else velocities,
        )

    def to_dict(self) -> Dict[str, Dict[str, list]]:
        """Plain ``{name: {"pos": [...], "vel": [...]}}`` form of the snapshot."""
        return {
            name: {"pos": self._positions[i].tolist(), "vel": self._velocities[i].tolist()}
            for i, name in enumerate(self._names)
        }

    def __getitem__(self, name: str) -> BodyState:
        i = self._index[name]
        return BodyState(self._positions[i], self._velocities[i])

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name) -> bool:
        return name in self._index

    def __eq__(self, other):
        if not isinstance(other, SystemState):
            return NotImplemented
        return (self._names == other._names
                and np.array_equal(self._positions, other._positions)
                and np.array_equal(self._velocities, other._velocities))

    __hash__ = None

    def __repr__(self) -> str:
        return f"SystemState(bodies={list(self._names)})"
