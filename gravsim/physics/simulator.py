"""Main simulator controller."""

import logging
from collections.abc import Mapping
from typing import Callable, Dict, Optional, Union

import numpy as np

from gravsim.physics.errors import ConfigurationError
from gravsim.physics.integrators import (
    ConstantAccelerationIntegrator,
    Integrator,
    PredictorCorrectorIntegrator,
    QuarticFitIntegrator,
    resolve_scheme,
)
from gravsim.physics.nbody import NBodySystem
from gravsim.physics.state import SystemState
from gravsim.physics.units import DEFAULT_UNITS, UnitSystem
from gravsim.physics import vector

logger = logging.getLogger(__name__)


class Simulator:
    """Main simulation controller.

    Owns the mass table and the current snapshot of every body. Each call to
    one of the update methods advances the snapshot by ``dt`` days, replaces
    it wholesale, and returns the new snapshot.

    Precondition: no two distinct bodies may ever share a position; the
    acceleration evaluation raises :class:`DomainError` if they do.
    """

    def __init__(
        self,
        masses: Mapping,
        initial_state: Mapping,
        mass_convention: str = "gm",
        units: UnitSystem = DEFAULT_UNITS,
        probe: Optional[str] = None,
        reference_body: Optional[str] = None,
        tolerance: float = 1.0e-15,
        max_iterations: Optional[int] = 1000,
        refinement_passes: int = 2,
        integrator: Optional[Union[Integrator, str, int]] = None,
        dt: Optional[float] = None,
        epoch: float = 0.0
    ):
        """Initialize simulator.

        Args:
            masses: Mapping body name -> mass [kg] or GM [AU^3/day^2]
            initial_state: Mapping body name -> body state (or a SystemState)
            mass_convention: "mass" for kg values, "gm" for gravitational parameters
            units: Physical constants used with the "mass" convention
            probe: Body whose position decides predictor-corrector convergence.
                Default: the body with the largest initial acceleration
            reference_body: Body whose mass normalizes momentum (default: first body)
            tolerance: Predictor-corrector convergence threshold [AU]
            max_iterations: Predictor-corrector iteration cap (None for unbounded)
            refinement_passes: Fit passes per quartic step
            integrator: Default integrator for step()/run() (default: quartic)
            dt: Default time step for step()/run() [days]
            epoch: Time of the initial state [days]

        Raises:
            ConfigurationError: If masses and state cover different bodies,
                either is empty, or an option names an unknown body
        """
        if not masses or not initial_state:
            raise ConfigurationError("Mass table and initial state must both be non-empty")
        if set(masses) != set(initial_state):
            raise ConfigurationError(
                f"Mass table and initial state disagree: "
                f"no state for {sorted(set(masses) - set(initial_state))}, "
                f"no mass for {sorted(set(initial_state) - set(masses))}"
            )

        self.system = NBodySystem(masses, order=list(initial_state), mass_convention=mass_convention, units=units)
        self.state = self.system.conform(initial_state)
        if not (np.all(np.isfinite(self.state.positions)) and np.all(np.isfinite(self.state.velocities))):
            raise ConfigurationError("Initial state contains non-finite values")

        self.reference_body = reference_body if reference_body is not None else self.system.names[0]
        self._reference = self.system.index(self.reference_body)
        self.system.mass_ratios(self._reference)

        if probe is None:
            acc = self.system.accelerations(self.state)
            probe = self.system.names[int(np.argmax(np.sum(acc ** 2, axis=1)))]
        self.system.index(probe)
        self.probe = probe

        self._schemes: Dict[int, Integrator] = {
            1: ConstantAccelerationIntegrator(),
            2: PredictorCorrectorIntegrator(probe=probe, tolerance=tolerance, max_iterations=max_iterations),
            3: QuarticFitIntegrator(refinement_passes=refinement_passes),
        }
        self.integrator = self._select_integrator(integrator)
        self.dt = dt
        self.time = epoch
        self.step_count = 0

        # Callbacks
        self.on_step_callback: Optional[Callable] = None

        logger.info(
            "Simulator ready: %d bodies, probe '%s', momentum reference '%s', integrator '%s'",
            self.system.n_bodies, self.probe, self.reference_body, self.integrator.name,
        )

    @classmethod
    def create(cls, masses: Mapping, initial_state: Mapping, **kwargs) -> "Simulator":
        """Build a simulator; keyword options as for the constructor."""
        return cls(masses, initial_state, **kwargs)

    def _select_integrator(self, integrator) -> Integrator:
        if integrator is None:
            return self._schemes[3]
        if isinstance(integrator, Integrator):
            return integrator
        name = resolve_scheme(integrator)
        for scheme in self._schemes.values():
            if scheme.name == name:
                return scheme
        raise ConfigurationError(f"Unknown integrator '{integrator}'")

    @property
    def names(self):
        return self.system.names

    def get_state(self) -> SystemState:
        return self.state

    def accelerations(self, state: Optional[Mapping] = None) -> Dict[str, np.ndarray]:
        """Net gravitational acceleration of every body [AU/day^2].

        Args:
            state: Snapshot to evaluate (default: current state)

        Returns:
            Dictionary body name -> acceleration vector
        """
        state = self.state if state is None else self.system.conform(state)
        acc = self.system.accelerations(state)
        return {name: vector.freeze(acc[i]) for i, name in enumerate(self.system.names)}

    def movement(self, state: Mapping, acc, dt: float) -> SystemState:
        """Move every body in ``state`` holding ``acc`` constant over ``dt``.

        Args:
            state: Starting snapshot
            acc: (n, 3) array in body order, or mapping body name -> vector
            dt: Time increment [days]

        Returns:
            New snapshot; ``state`` is not modified

        Raises:
            ConfigurationError: If ``acc`` covers different bodies than the
                mass table or has the wrong shape
        """
        state = self.system.conform(state)
        if isinstance(acc, Mapping):
            keys = set(acc)
            if keys != set(self.system.names):
                raise ConfigurationError(
                    f"Accelerations and mass table disagree: "
                    f"no mass for {sorted(keys - set(self.system.names))}, "
                    f"no acceleration for {sorted(set(self.system.names) - keys)}"
                )
            acc = [acc[name] for name in self.system.names]
        acc = np.asarray(acc, dtype=np.float64)
        if acc.shape != (self.system.n_bodies, 3):
            raise ConfigurationError(
                f"Expected ({self.system.n_bodies}, 3) acceleration array, got shape {acc.shape}"
            )
        return self.system.movement(state, acc, dt)

    def _advance(self, integrator: Integrator, dt: float) -> SystemState:
        self.state = integrator.step(self.system, self.state, dt)
        self.time += dt
        self.step_count += 1
        if self.on_step_callback is not None:
            self.on_step_callback(self)
        return self.state

    def update1(self, dt: float) -> SystemState:
        """Advance with the explicit constant-acceleration update."""
        return self._advance(self._schemes[1], dt)

    def update2(self, dt: float) -> SystemState:
        """Advance with the averaged predictor-corrector.

        Raises:
            ConvergenceError: If the iteration cap is hit; state is unchanged
        """
        return self._advance(self._schemes[2], dt)

    def update3(self, dt: float) -> SystemState:
        """Advance with the quadratic-acceleration / quartic-position fit."""
        return self._advance(self._schemes[3], dt)

    def step(self, dt: Optional[float] = None) -> SystemState:
        """Advance one step with the default integrator."""
        if dt is None:
            dt = self.dt
        if dt is None:
            raise ConfigurationError("No time step given and no default dt configured")
        return self._advance(self.integrator, dt)

    def run(self, n_steps: int, dt: Optional[float] = None) -> SystemState:
        """Advance ``n_steps`` steps with the default integrator."""
        for _ in range(n_steps):
            self.step(dt)
        return self.state

    def momentum(self) -> np.ndarray:
        """Total linear momentum, normalized by the reference body's mass.

        Because the origin (the barycenter) is an inertial frame, this should
        stay close to zero.
        """
        return vector.freeze(self.system.momentum(self.state, self._reference))

    distance = staticmethod(vector.distance)
