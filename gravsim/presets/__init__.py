"""Preset scenarios for gravity simulations."""

from gravsim.physics.errors import ConfigurationError
from gravsim.presets.base import Preset
from gravsim.presets.circular import CircularOrbit
from gravsim.presets.solar_system import SolarSystem

PRESETS = {
    "solar_system": SolarSystem,
    "circular": CircularOrbit,
}


def get_preset(name: str, **kwargs) -> Preset:
    """Get preset by name."""
    preset_class = PRESETS.get(name.lower())
    if preset_class is None:
        raise ConfigurationError(f"Unknown preset: {name}. Available: {list(PRESETS.keys())}")
    return preset_class(**kwargs)


__all__ = ["Preset", "CircularOrbit", "SolarSystem", "PRESETS", "get_preset"]
