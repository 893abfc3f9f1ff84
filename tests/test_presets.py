"""Tests for preset scenarios."""

import math

import numpy as np
import pytest
from gravsim.physics.errors import ConfigurationError
from gravsim.physics.simulator import Simulator
from gravsim.presets import CircularOrbit, SolarSystem, get_preset


def test_solar_system():
    """Test Solar System preset."""
    preset = SolarSystem()
    masses, state = preset.generate()

    assert len(state) == 10
    assert set(masses) == set(state)
    assert state.names[0] == "Sun"
    assert preset.name == "solar_system"
    assert preset.duration == 36000.0
    assert set(preset.reference_state()) == set(state)
    assert preset.simulator_options()["probe"] == "Mercury"
    assert preset.simulator_options()["reference_body"] == "Earth"


def test_solar_system_mass_conventions_agree():
    """Test that kg masses and GM values give nearly the same motion."""
    results = []
    for convention in ("gm", "mass"):
        preset = SolarSystem(mass_convention=convention)
        masses, state = preset.generate()
        sim = Simulator(masses, state, **preset.simulator_options())
        for _ in range(10):
            sim.update1(3.6)
        results.append(sim.state["Earth"].position)

    assert np.linalg.norm(results[0] - results[1]) < 1e-4

    with pytest.raises(ConfigurationError):
        SolarSystem(mass_convention="pounds")


def test_circular_orbit():
    """Test circular orbit preset."""
    preset = CircularOrbit(central_gm=4.0, radius=4.0)
    masses, state = preset.generate()

    assert masses == {"Sun": 4.0, "Earth": 0.0}
    assert np.allclose(state["Earth"].velocity, [0.0, 1.0, 0.0])
    assert math.isclose(preset.period, 2.0 * math.pi * 4.0)
    assert preset.reference_state() == state


def test_get_preset():
    """Test preset lookup by name."""
    assert isinstance(get_preset("solar_system"), SolarSystem)
    assert isinstance(get_preset("Circular", radius=2.0), CircularOrbit)
    with pytest.raises(ConfigurationError):
        get_preset("galaxy")
