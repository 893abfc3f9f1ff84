"""Constant-acceleration integrator (baseline, O(h) accuracy)."""

from gravsim.physics.integrators.base import Integrator
from gravsim.physics.nbody import NBodySystem
from gravsim.physics.state import SystemState


class ConstantAccelerationIntegrator(Integrator):
    """Single-evaluation update.

    Uses the accelerations at the start of the step as if they were constant
    over the whole interval. In reality the accelerations change as the
    bodies move along their orbits, so this under-corrects for curvature.
    Fast but inaccurate; good for baseline comparisons.
    """

    @property
    def name(self) -> str:
        return "explicit"

    @property
    def order(self) -> int:
        return 1

    def step(self, system: NBodySystem, state: SystemState, dt: float) -> SystemState:
        acc = system.accelerations(state)
        return system.movement(state, acc, dt)
