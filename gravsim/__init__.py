"""
gravsim - Solar System gravity simulator.

Features:
- Exact all-pairs Newtonian accelerations
- Three integration schemes (explicit, predictor-corrector, quartic fit)
- Momentum, energy and accuracy diagnostics
- Solar System reference presets and ephemeris loader
- CLI for accuracy comparisons
"""

__version__ = "0.1.0"

from gravsim.physics.errors import ConfigurationError, ConvergenceError, DomainError, GravsimError
from gravsim.physics.simulator import Simulator
from gravsim.physics.state import BodyState, SystemState
from gravsim.physics.units import UnitSystem
from gravsim.physics.vector import distance

__all__ = [
    "BodyState",
    "ConfigurationError",
    "ConvergenceError",
    "DomainError",
    "GravsimError",
    "Simulator",
    "SystemState",
    "UnitSystem",
    "distance",
]
