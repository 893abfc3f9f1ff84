"""Averaged-acceleration predictor-corrector integrator (O(h^2) accuracy)."""

import logging
from typing import Optional, Union

import numpy as np

from gravsim.physics.errors import ConfigurationError, ConvergenceError
from gravsim.physics.integrators.base import Integrator
from gravsim.physics.nbody import NBodySystem
from gravsim.physics.state import SystemState
from gravsim.physics.vector import average, distance

logger = logging.getLogger(__name__)


class PredictorCorrectorIntegrator(Integrator):
    """Iterative predictor-corrector using averaged accelerations.

    Starts like the explicit update, then refines the answer using the
    average of the accelerations at the beginning and the end of the step.
    That changes the estimated end state, which changes the end
    acceleration, so the process repeats until the probe body's position
    stops moving by more than ``tolerance``.

    The probe should be the body with the most curved trajectory (Mercury for
    the Solar System). When ``probe`` is None the body with the largest
    acceleration at the start of each step is used.
    """

    def __init__(
        self,
        probe: Optional[Union[str, int]] = None,
        tolerance: float = 1.0e-15,
        max_iterations: Optional[int] = 1000
    ):
        """Initialize the integrator.

        Args:
            probe: Body name or index used to test convergence
            tolerance: Convergence threshold on the probe position change [AU]
            max_iterations: Refinement cap; None iterates until convergence
        """
        self.probe = probe
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    @property
    def name(self) -> str:
        return "predictor_corrector"

    @property
    def order(self) -> int:
        return 2

    def _probe_index(self, system: NBodySystem, acc: np.ndarray) -> int:
        if self.probe is None:
            return int(np.argmax(np.sum(acc ** 2, axis=1)))
        if isinstance(self.probe, str):
            return system.index(self.probe)
        index = int(self.probe)
        if not 0 <= index < system.n_bodies:
            raise ConfigurationError(
                f"Probe index {self.probe} out of range for {system.n_bodies} bodies"
            )
        return index

    def step(self, system: NBodySystem, state: SystemState, dt: float) -> SystemState:
        acc1 = system.accelerations(state)
        probe = self._probe_index(system, acc1)
        guess = system.movement(state, acc1, dt)

        iterations = 0
        while True:
            # Accelerations at the guessed end state
            acc2 = system.accelerations(guess)
            refined = system.movement(state, average(acc1, acc2), dt)
            diff = float(distance(refined.positions[probe], guess.positions[probe]))
            guess = refined
            iterations += 1

            if diff <= self.tolerance:
                break
            if self.max_iterations is not None and iterations >= self.max_iterations:
                raise ConvergenceError(
                    f"Predictor-corrector did not converge within {iterations} iterations "
                    f"(dt={dt}, last change {diff:.3e} AU for '{system.names[probe]}')",
                    iterations=iterations,
                    difference=diff,
                )

        logger.debug("Predictor-corrector converged in %d iterations (dt=%g)", iterations, dt)
        return guess
