"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod

from gravsim.physics.nbody import NBodySystem
from gravsim.physics.state import SystemState


class Integrator(ABC):
    """Abstract interface for numerical integrators."""

    @abstractmethod
    def step(self, system: NBodySystem, state: SystemState, dt: float) -> SystemState:
        """Advance ``state`` by one time step.

        Args:
            system: Masses and force law
            state: Snapshot at the start of the step, in the system's body order
            dt: Time step [days], may be negative

        Returns:
            New snapshot at the end of the step
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass

    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (1 for explicit, 2 for predictor-corrector, 4 for quartic)."""
        pass
