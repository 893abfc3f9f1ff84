"""Quadratic-acceleration / quartic-position integrator (O(h^4) accuracy)."""

from typing import Tuple

import numpy as np

from gravsim.physics.integrators.base import Integrator
from gravsim.physics.nbody import NBodySystem
from gravsim.physics.state import SystemState


def fit_quadratic(acc0: np.ndarray, acc1: np.ndarray, acc2: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Fit a(u) = e*u^2 + f*u + g through samples at u = 0, 1, 2.

    ``u`` is time measured in half-steps, so with h = dt/2 the fit in real
    time is a(t) = E*t^2 + F*t + G where E = e/h^2, F = f/h, G = g.
    Works component-wise on arrays of any matching shape.

    Returns:
        Tuple of coefficient arrays (e, f, g)
    """
    e = (acc2 - 2.0 * acc1 + acc0) / 2.0
    f = (4.0 * acc1 - 3.0 * acc0 - acc2) / 2.0
    g = acc0
    return e, f, g


def integrate_quadratic(
    state: SystemState,
    coefficients: Tuple[np.ndarray, np.ndarray, np.ndarray],
    half: float,
    u: float
) -> SystemState:
    """Evaluate the twice-integrated acceleration fit at u half-steps.

    v(u) = v0 + h*(g*u + f*u^2/2 + e*u^3/3)
    r(u) = r0 + v0*h*u + h^2*(g*u^2/2 + f*u^3/6 + e*u^4/12)

    Args:
        state: Anchor state at u = 0
        coefficients: Output of :func:`fit_quadratic`
        half: Half-step length h [days]
        u: Evaluation time in half-steps

    Returns:
        New snapshot at t = u*h
    """
    e, f, g = coefficients
    u2 = u * u
    u3 = u2 * u
    dv = half * (g * u + f * (u2 / 2.0) + e * (u3 / 3.0))
    dr = (state.velocities * (half * u)
          + (half * half) * (g * (u2 / 2.0) + f * (u3 / 6.0) + e * (u2 * u2 / 12.0)))
    return state.replace(
        positions=state.positions + dr,
        velocities=state.velocities + dv,
    )


class QuarticFitIntegrator(Integrator):
    """Higher-order scheme using three acceleration samples per step.

    Accelerations are sampled at the start, middle and end of the step and
    fitted with a quadratic in time for each body and each component.
    Integrating that fit twice gives a cubic velocity and quartic position.
    The middle and end states are refreshed from those polynomials and the
    accelerations re-sampled, for a fixed number of passes. There is no
    convergence check; two passes are enough for solar-system steps.
    """

    def __init__(self, refinement_passes: int = 2):
        """Initialize the integrator.

        Args:
            refinement_passes: Number of fit/re-sample passes per step
        """
        self.refinement_passes = refinement_passes

    @property
    def name(self) -> str:
        return "quartic"

    @property
    def order(self) -> int:
        return 4

    def step(self, system: NBodySystem, state: SystemState, dt: float) -> SystemState:
        half = dt / 2.0

        # Initial samples from two constant-acceleration half steps
        acc1 = system.accelerations(state)
        state_half = system.movement(state, acc1, half)
        acc2 = system.accelerations(state_half)
        state_full = system.movement(state_half, acc2, half)
        acc3 = system.accelerations(state_full)

        for n in range(self.refinement_passes):
            coefficients = fit_quadratic(acc1, acc2, acc3)
            state_half = integrate_quadratic(state, coefficients, half, 1.0)
            state_full = integrate_quadratic(state, coefficients, half, 2.0)
            if n + 1 < self.refinement_passes:
                acc2 = system.accelerations(state_half)
                acc3 = system.accelerations(state_full)

        return state_full
