"""Numerical integrators for N-body simulations."""

from typing import Union

from gravsim.physics.errors import ConfigurationError
from gravsim.physics.integrators.base import Integrator
from gravsim.physics.integrators.explicit import ConstantAccelerationIntegrator
from gravsim.physics.integrators.predictor_corrector import PredictorCorrectorIntegrator
from gravsim.physics.integrators.quartic import QuarticFitIntegrator

INTEGRATORS = {
    "explicit": ConstantAccelerationIntegrator,
    "predictor_corrector": PredictorCorrectorIntegrator,
    "quartic": QuarticFitIntegrator,
}

SCHEME_NUMBERS = {
    1: "explicit",
    2: "predictor_corrector",
    3: "quartic",
}


def resolve_scheme(scheme: Union[str, int]) -> str:
    """Map a scheme number (1-3), "update<n>" or integrator name to a name."""
    key = scheme
    if isinstance(key, str):
        key = key.lower().strip()
        if key.startswith("update"):
            key = key[len("update"):]
        if key.isdigit():
            key = int(key)
    if isinstance(key, int):
        if key not in SCHEME_NUMBERS:
            raise ConfigurationError(f"Unknown scheme number {scheme}. Available: {sorted(SCHEME_NUMBERS)}")
        return SCHEME_NUMBERS[key]
    if key not in INTEGRATORS:
        raise ConfigurationError(f"Unknown integrator '{scheme}'. Available: {list(INTEGRATORS)}")
    return key


def get_integrator(scheme: Union[str, int], **kwargs) -> Integrator:
    """Get an integrator instance by name or scheme number."""
    return INTEGRATORS[resolve_scheme(scheme)](**kwargs)


__all__ = [
    "Integrator",
    "ConstantAccelerationIntegrator",
    "PredictorCorrectorIntegrator",
    "QuarticFitIntegrator",
    "INTEGRATORS",
    "get_integrator",
    "resolve_scheme",
]
