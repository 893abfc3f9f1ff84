"""Tests for numerical integrators."""

import math

import numpy as np
import pytest
from gravsim.physics.errors import ConfigurationError, ConvergenceError
from gravsim.physics.integrators import (
    ConstantAccelerationIntegrator,
    PredictorCorrectorIntegrator,
    QuarticFitIntegrator,
    get_integrator,
    resolve_scheme,
)
from gravsim.physics.integrators.quartic import fit_quadratic, integrate_quadratic
from gravsim.physics.simulator import Simulator
from gravsim.physics.state import SystemState
from gravsim.presets import CircularOrbit, SolarSystem


def circular_simulator(**kwargs):
    preset = CircularOrbit()
    masses, state = preset.generate()
    return preset, Simulator(masses, state, **preset.simulator_options(), **kwargs)


def exact_circular_position(preset, t):
    angle = 2.0 * math.pi * t / preset.period
    return np.array([math.cos(angle), math.sin(angle), 0.0]) * preset.radius


def test_integrator_properties():
    """Test integrator names and orders."""
    assert ConstantAccelerationIntegrator().name == "explicit"
    assert ConstantAccelerationIntegrator().order == 1
    assert PredictorCorrectorIntegrator().name == "predictor_corrector"
    assert PredictorCorrectorIntegrator().order == 2
    assert QuarticFitIntegrator().name == "quartic"
    assert QuarticFitIntegrator().order == 4


def test_get_integrator():
    """Test lookup by scheme number and name."""
    assert isinstance(get_integrator(1), ConstantAccelerationIntegrator)
    assert isinstance(get_integrator("2"), PredictorCorrectorIntegrator)
    assert isinstance(get_integrator("update3"), QuarticFitIntegrator)
    assert isinstance(get_integrator("quartic", refinement_passes=3), QuarticFitIntegrator)
    assert resolve_scheme("Predictor_Corrector") == "predictor_corrector"
    with pytest.raises(ConfigurationError):
        get_integrator(4)
    with pytest.raises(ConfigurationError):
        get_integrator("leapfrog")


def test_quadratic_fit_reproduces_samples():
    """Test the closed-form fit passes through all three samples."""
    a0, a1, a2 = np.array([1.0, -2.0]), np.array([3.0, 0.5]), np.array([-4.0, 7.0])
    e, f, g = fit_quadratic(a0, a1, a2)
    for u, sample in ((0.0, a0), (1.0, a1), (2.0, a2)):
        assert np.allclose(e * u * u + f * u + g, sample)


def test_quadratic_integration_is_exact_for_quadratic_acceleration():
    """Test the quartic position polynomial against a known trajectory."""
    # a(t) = 6t^2 + 2t + 1 along x  ->  v = 2t^3 + t^2 + t,  r = t^4/2 + t^3/3 + t^2/2
    dt = 0.8
    half = dt / 2.0
    accel = lambda t: np.array([[6 * t * t + 2 * t + 1, 0.0, 0.0]])
    state = SystemState(["X"], [[0.0, 0.0, 0.0]], [[0.0, 0.0, 0.0]])
    coefficients = fit_quadratic(accel(0.0), accel(half), accel(dt))

    end = integrate_quadratic(state, coefficients, half, 2.0)
    assert np.isclose(end.velocities[0, 0], 2 * dt ** 3 + dt ** 2 + dt)
    assert np.isclose(end.positions[0, 0], dt ** 4 / 2 + dt ** 3 / 3 + dt ** 2 / 2)

    middle = integrate_quadratic(state, coefficients, half, 1.0)
    assert np.isclose(middle.positions[0, 0], half ** 4 / 2 + half ** 3 / 3 + half ** 2 / 2)


@pytest.mark.parametrize("method", ["update1", "update2", "update3"])
def test_zero_step_is_identity(method):
    """Test that a zero time step leaves the state unchanged."""
    masses, state = SolarSystem().generate()
    sim = Simulator(masses, state, **SolarSystem().simulator_options())

    result = getattr(sim, method)(0.0)

    assert np.array_equal(result.positions, state.positions)
    assert np.array_equal(result.velocities, state.velocities)
    assert sim.time == 0.0
    assert sim.step_count == 1


@pytest.mark.parametrize("method", ["update1", "update2", "update3"])
def test_momentum_conservation(method):
    """Test that total momentum does not drift."""
    preset = SolarSystem()
    masses, state = preset.generate()
    sim = Simulator(masses, state, **preset.simulator_options())

    initial = sim.momentum()
    for _ in range(50):
        getattr(sim, method)(3.6)

    assert np.linalg.norm(sim.momentum() - initial) < 1e-9


def test_zero_net_momentum_stays_zero():
    """Test that a barycentric two-body system keeps zero momentum."""
    gm_a, gm_b = 3.0e-4, 1.0e-4
    # Bodies placed about their barycenter with equal and opposite momenta
    state = SystemState(
        ["A", "B"],
        [[-0.25, 0.0, 0.0], [0.75, 0.0, 0.0]],
        [[0.0, -0.004, 0.0], [0.0, 0.012, 0.0]],
    )
    sim = Simulator({"A": gm_a, "B": gm_b}, state)
    assert np.linalg.norm(sim.momentum()) < 1e-15

    for method in (sim.update1, sim.update2, sim.update3):
        for _ in range(20):
            method(2.0)
    assert np.linalg.norm(sim.momentum()) < 1e-12


def test_convergence_ordering():
    """Test that error drops from scheme 1 to scheme 2 to scheme 3."""
    errors = []
    for method in ("update1", "update2", "update3"):
        preset, sim = circular_simulator()
        n_steps = 100
        dt = preset.period / 4.0 / n_steps
        for _ in range(n_steps):
            getattr(sim, method)(dt)
        expected = exact_circular_position(preset, preset.period / 4.0)
        errors.append(sim.distance(sim.state[preset.satellite].position, expected))

    assert errors[0] > errors[1] > errors[2]
    assert errors[2] < 1e-6


def test_circular_orbit_full_period():
    """Test one full Keplerian period with the quartic scheme."""
    preset, sim = circular_simulator()
    n_steps = 10000
    dt = preset.period / n_steps
    initial = sim.state[preset.satellite]

    for _ in range(n_steps):
        sim.update3(dt)

    final = sim.state[preset.satellite]
    assert sim.distance(final.position, [1.0, 0.0, 0.0]) < 1e-6
    assert sim.distance(final.velocity, initial.velocity) < 1e-6
    assert sim.step_count == n_steps
    assert np.isclose(sim.time, preset.period)


def test_explicit_reversibility():
    """Test that forward then backward explicit steps return within O(dt^2)."""
    drifts = []
    for dt in (1.0, 0.5):
        preset, sim = circular_simulator()
        start = sim.state
        sim.update1(dt)
        sim.update1(-dt)
        end = sim.state
        position_drift = np.max(np.abs(end.positions - start.positions))
        velocity_drift = np.max(np.abs(end.velocities - start.velocities))
        drifts.append((position_drift, velocity_drift))

    (p1, v1), (p2, v2) = drifts
    assert v1 < 1e-5
    assert p1 < 1e-5
    # Halving dt shrinks the drift at least quadratically
    assert v2 < v1 / 3.0
    assert p2 < p1 / 3.0


def test_backward_integration():
    """Test that negative dt runs the orbit backwards."""
    preset, sim = circular_simulator()
    n_steps = 100
    dt = -preset.period / 4.0 / n_steps
    for _ in range(n_steps):
        sim.update3(dt)
    expected = exact_circular_position(preset, -preset.period / 4.0)
    assert sim.distance(sim.state[preset.satellite].position, expected) < 1e-6
    assert sim.time < 0


def test_predictor_corrector_iteration_cap():
    """Test that a non-converging predictor-corrector raises instead of looping."""
    preset, sim = circular_simulator(tolerance=0.0, max_iterations=3)
    start = sim.state
    with pytest.raises(ConvergenceError) as exc_info:
        sim.update2(10.0)

    assert exc_info.value.iterations == 3
    assert exc_info.value.difference > 0.0
    assert sim.state == start
    assert sim.step_count == 0


def test_predictor_corrector_without_probe():
    """Test the largest-acceleration probe policy outside a simulator."""
    preset, sim = circular_simulator()
    integrator = PredictorCorrectorIntegrator()
    stepped = integrator.step(sim.system, sim.state, 1.0)
    assert np.allclose(stepped.positions, sim.update2(1.0).positions)


def test_refinement_passes_improve_quartic():
    """Test that refinement passes reduce quartic error on a coarse step."""
    errors = []
    for passes in (0, 2):
        preset, sim = circular_simulator(refinement_passes=passes)
        dt = preset.period / 40.0
        for _ in range(10):
            sim.update3(dt)
        expected = exact_circular_position(preset, preset.period / 4.0)
        errors.append(sim.distance(sim.state[preset.satellite].position, expected))
    assert errors[1] < errors[0]


def test_step_and_run_use_default_integrator():
    """Test step() and run() with a configured default integrator and dt."""
    preset, sim = circular_simulator(integrator=1, dt=0.5)
    sim.run(4)
    assert sim.step_count == 4
    assert np.isclose(sim.time, 2.0)

    calls = []
    sim.on_step_callback = lambda s: calls.append(s.step_count)
    sim.step()
    assert calls == [5]

    _, bare = circular_simulator()
    with pytest.raises(ConfigurationError):
        bare.step()


@pytest.mark.parametrize("probe", [-1, 2, 10])
def test_predictor_corrector_probe_index_out_of_range(probe):
    """Test that an out-of-range probe index is rejected."""
    preset, sim = circular_simulator()
    integrator = PredictorCorrectorIntegrator(probe=probe)
    with pytest.raises(ConfigurationError):
        integrator.step(sim.system, sim.state, 1.0)


def test_predictor_corrector_probe_index():
    """Test that a valid probe index matches the probe name."""
    preset, sim = circular_simulator()
    by_index = PredictorCorrectorIntegrator(probe=sim.system.index(preset.satellite))
    by_name = PredictorCorrectorIntegrator(probe=preset.satellite)
    assert by_index.step(sim.system, sim.state, 1.0) == by_name.step(sim.system, sim.state, 1.0)
