"""Core N-body physics calculations."""

import logging
from collections.abc import Mapping
from typing import Iterable, Optional

import numpy as np

from gravsim.physics.errors import ConfigurationError, DomainError
from gravsim.physics.state import SystemState
from gravsim.physics.units import DEFAULT_UNITS, MASS_CONVENTIONS, UnitSystem

logger = logging.getLogger(__name__)


class NBodySystem:
    """Set of point masses under mutual Newtonian gravitation.

    Resolves the mass table once into arrays indexed in a fixed body order,
    and provides the two primitives every integrator is built from:
    acceleration evaluation and constant-acceleration movement.
    """

    def __init__(
        self,
        masses: Mapping,
        order: Optional[Iterable[str]] = None,
        mass_convention: str = "gm",
        units: UnitSystem = DEFAULT_UNITS
    ):
        """Initialize the system.

        Args:
            masses: Mapping body name -> mass [kg] or GM [AU^3/day^2]
            order: Body order for all arrays (default: mass table order)
            mass_convention: "mass" if values are masses in kg, "gm" if they
                are gravitational parameters
            units: Physical constants used for the "mass" convention
        """
        if mass_convention not in MASS_CONVENTIONS:
            raise ConfigurationError(
                f"Unknown mass convention '{mass_convention}'. Use one of {MASS_CONVENTIONS}"
            )
        if not masses:
            raise ConfigurationError("Mass table is empty")

        names = tuple(order) if order is not None else tuple(masses)
        if set(names) != set(masses) or len(names) != len(masses):
            raise ConfigurationError(
                f"Body order {sorted(names)} does not match mass table {sorted(masses)}"
            )

        values = np.array([masses[name] for name in names], dtype=np.float64)
        if not np.all(np.isfinite(values)) or np.any(values < 0):
            raise ConfigurationError(f"Masses must be finite and non-negative: {dict(zip(names, values))}")

        self.names = names
        self.mass_convention = mass_convention
        self.units = units
        self.masses = values
        if mass_convention == "mass":
            self.gm = values * units.gravitational_constant
        else:
            self.gm = values.copy()
        self.masses.flags.writeable = False
        self.gm.flags.writeable = False
        self._index = {name: i for i, name in enumerate(names)}
        logger.debug("Resolved %d bodies using '%s' convention: %s", len(names), mass_convention, names)

    @property
    def n_bodies(self) -> int:
        return len(self.names)

    def index(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise ConfigurationError(f"Unknown body '{name}'. Known bodies: {list(self.names)}")

    def conform(self, state) -> SystemState:
        """Return ``state`` as a SystemState in this system's body order.

        Raises:
            ConfigurationError: If the state covers a different set of bodies
        """
        keys = set(state)
        if keys != set(self.names):
            extra = sorted(keys - set(self.names))
            missing = sorted(set(self.names) - keys)
            raise ConfigurationError(
                f"State and mass table disagree: no mass for {extra}, no state for {missing}"
            )
        if isinstance(state, SystemState) and state.names == self.names:
            return state
        return SystemState.from_mapping(state, order=self.names)

    def accelerations(self, state: SystemState) -> np.ndarray:
        """Compute the gravitational acceleration on every body.

        Each body is pulled toward every other body with magnitude GM/r^2.
        All pairs are evaluated directly, which is fine for solar-system
        sized body counts.

        Args:
            state: Snapshot in this system's body order

        Returns:
            (n, 3) acceleration array [AU/day^2]

        Raises:
            DomainError: If two distinct bodies share a position
        """
        positions = state.positions
        # r_diff[i, j] = r_j - r_i: vector from target i toward source j
        r_diff = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
        r_sq = np.sum(r_diff ** 2, axis=2)
        np.fill_diagonal(r_sq, np.inf)

        if np.any(r_sq == 0.0):
            i, j = np.argwhere(r_sq == 0.0)[0]
            raise DomainError(
                f"Bodies '{self.names[i]}' and '{self.names[j]}' occupy the same position"
            )

        # GM / r^2, divided by r once more to turn r_diff into a unit vector
        coeff = self.gm[np.newaxis, :] / (r_sq * np.sqrt(r_sq))
        return np.sum(coeff[:, :, np.newaxis] * r_diff, axis=1)

    @staticmethod
    def movement(state: SystemState, acc: np.ndarray, dt: float) -> SystemState:
        """Move every body holding its acceleration constant over ``dt``.

        pos' = pos + vel*dt + (1/2)acc*dt^2
        vel' = vel + acc*dt

        Returns:
            New SystemState; ``state`` is left untouched
        """
        dv = acc * dt
        dr = state.velocities * dt + dv * (dt / 2.0)
        return state.replace(
            positions=state.positions + dr,
            velocities=state.velocities + dv,
        )

    def mass_ratios(self, reference: int) -> np.ndarray:
        """Masses divided by the mass of the body at index ``reference``."""
        reference_mass = self.masses[reference]
        if reference_mass == 0.0:
            raise ConfigurationError(
                f"Reference body '{self.names[reference]}' has zero mass"
            )
        return self.masses / reference_mass

    def momentum(self, state: SystemState, reference: int) -> np.ndarray:
        """Total linear momentum in units of the reference body's mass."""
        return np.sum(self.mass_ratios(reference)[:, np.newaxis] * state.velocities, axis=0)
