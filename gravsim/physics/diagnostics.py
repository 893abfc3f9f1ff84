"""Diagnostics for N-body simulations."""

from typing import Dict, Tuple

import numpy as np

from gravsim.physics.nbody import NBodySystem
from gravsim.physics.state import SystemState
from gravsim.physics.vector import distance


class Diagnostics:
    """Conservation checks and accuracy comparisons for a gravitating system.

    Energies are reported in GM-scaled units (energy times G), so they work
    the same whichever mass convention the system was built with.
    """

    def __init__(self, system: NBodySystem):
        """Initialize diagnostics.

        Args:
            system: System providing masses and gravitational parameters
        """
        self.system = system

    def momentum(self, state: SystemState, reference: int = 0) -> np.ndarray:
        """Total linear momentum in units of the reference body's mass.

        With the Solar System Barycenter as origin this should stay close to
        zero because momentum is conserved in an inertial frame.
        """
        return self.system.momentum(self.system.conform(state), reference)

    def center_of_mass(self, state: SystemState) -> np.ndarray:
        state = self.system.conform(state)
        gm = self.system.gm
        return np.sum(gm[:, np.newaxis] * state.positions, axis=0) / np.sum(gm)

    def compute_energies(self, state: SystemState) -> Tuple[float, float, float]:
        """Compute kinetic, potential, and total energy.

        K = 0.5 * sum_i GM_i * v_i^2
        U = -sum_{i<j} GM_i * GM_j / r_ij

        Returns:
            Tuple of (kinetic_energy, potential_energy, total_energy)
        """
        state = self.system.conform(state)
        gm = self.system.gm
        positions = state.positions

        v_sq = np.sum(state.velocities ** 2, axis=1)
        K = 0.5 * np.sum(gm * v_sq)

        r_diff = positions[np.newaxis, :, :] - positions[:, np.newaxis, :]
        r = np.sqrt(np.sum(r_diff ** 2, axis=2))
        i, j = np.triu_indices(len(gm), k=1)
        U = -np.sum(gm[i] * gm[j] / r[i, j])

        return float(K), float(U), float(K + U)

    def angular_momentum(self, state: SystemState) -> np.ndarray:
        """Total angular momentum vector sum(GM_i * r_i x v_i)."""
        state = self.system.conform(state)
        return np.sum(self.system.gm[:, np.newaxis] * np.cross(state.positions, state.velocities), axis=0)

    @staticmethod
    def position_errors(state: SystemState, reference: SystemState) -> Dict[str, float]:
        """Distance between simulated and reference positions for every body.

        Only bodies present in both snapshots are compared.

        Returns:
            Dictionary body name -> position error [AU]
        """
        return {
            name: float(distance(state[name].position, reference[name].position))
            for name in state
            if name in reference
        }
