"""Physics engine for N-body simulations."""

from gravsim.physics.errors import ConfigurationError, ConvergenceError, DomainError, GravsimError
from gravsim.physics.state import BodyState, SystemState
from gravsim.physics.units import UnitSystem
from gravsim.physics.nbody import NBodySystem
from gravsim.physics.simulator import Simulator

__all__ = [
    "BodyState",
    "ConfigurationError",
    "ConvergenceError",
    "DomainError",
    "GravsimError",
    "NBodySystem",
    "Simulator",
    "SystemState",
    "UnitSystem",
]
