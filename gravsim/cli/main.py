"""CLI main entry point."""

import argparse
import dataclasses
import logging
import sys
from typing import Dict, Optional, Tuple

from gravsim.io.ephemeris import load_ephemeris
from gravsim.physics.diagnostics import Diagnostics
from gravsim.physics.errors import ConfigurationError, GravsimError
from gravsim.physics.integrators import SCHEME_NUMBERS, resolve_scheme
from gravsim.physics.simulator import Simulator
from gravsim.physics.state import SystemState
from gravsim.physics.vector import distance
from gravsim.presets import PRESETS, SolarSystem, get_preset
from gravsim.render.orbit_plot import TrajectoryRecorder, plot_orbits
from gravsim.utils.config import Config, load_config

logger = logging.getLogger(__name__)


def load_scenario(config: Config) -> Tuple[Dict[str, float], SystemState, Optional[SystemState], float, Dict]:
    """Resolve the initial conditions a config asks for.

    Returns:
        Tuple of (masses, initial_state, reference_state, duration, simulator_options)
    """
    if config.ephemeris:
        # Reference file supplies the states; masses come from the Solar System table
        ephemeris = load_ephemeris(config.ephemeris)
        if len(ephemeris) == 0:
            raise ConfigurationError(f"Ephemeris {config.ephemeris} has no snapshots")
        preset = SolarSystem(mass_convention=config.mass_convention)
        masses, _ = preset.generate()
        tt0, initial = ephemeris[0]
        if len(ephemeris) > 1:
            tt1, reference = ephemeris[-1]
        else:
            tt1, reference = tt0 + ephemeris.dt, None
        options = preset.simulator_options()
        options["epoch"] = tt0
        return masses, initial, reference, tt1 - tt0, options

    kwargs = {"mass_convention": config.mass_convention} if config.preset == "solar_system" else {}
    preset = get_preset(config.preset, **kwargs)
    masses, initial = preset.generate()
    return masses, initial, preset.reference_state(), preset.duration, preset.simulator_options()


def build_simulator(config: Config) -> Tuple[Simulator, Optional[SystemState]]:
    """Create a simulator for ``config``.

    Returns:
        Tuple of (simulator, reference_state)
    """
    masses, initial, reference, duration, options = load_scenario(config)

    dt = config.dt
    if dt is None:
        if duration is None:
            raise ConfigurationError(f"Preset '{config.preset}' has no natural duration; pass --dt")
        dt = duration / config.n_steps

    if config.probe is not None:
        options["probe"] = config.probe
    if config.reference_body is not None:
        options["reference_body"] = config.reference_body

    sim = Simulator(
        masses,
        initial,
        tolerance=config.tolerance,
        max_iterations=config.max_iterations,
        refinement_passes=config.refinement_passes,
        integrator=config.scheme,
        dt=dt,
        **options
    )
    return sim, reference


def report(sim: Simulator, reference: Optional[SystemState], initial_momentum):
    """Print accuracy of the final state against the reference."""
    focus = "Earth" if "Earth" in sim.state else sim.probe
    print(f"Simulated {focus} pos = {sim.state[focus].position.tolist()}")
    if reference is not None and focus in reference:
        correct = reference[focus].position
        print(f"Correct   {focus} pos = {correct.tolist()}")
        print(f"Error = {distance(sim.state[focus].position, correct):.6e} AU")
        print("Per-body position error [AU]:")
        for name, error in Diagnostics.position_errors(sim.state, reference).items():
            print(f"  {name:<10s} {error:.6e}")
    drift = distance(sim.momentum(), initial_momentum)
    print(f"Momentum drift ({sim.reference_body} masses * AU/day) = {drift:.6e}")
    print()


def run_simulation(config: Config, label: Optional[str] = None) -> Simulator:
    """Run a simulation and print the comparison report."""
    sim, reference = build_simulator(config)
    label = label or sim.integrator.name

    recorder = None
    if config.plot:
        recorder = TrajectoryRecorder(sim.names, every=config.plot_every)
        recorder.record(sim.time, sim.state)
        sim.on_step_callback = recorder

    initial_momentum = sim.momentum()
    print(f"{label}: Simulating {config.n_steps} steps of {sim.dt} days per step.")
    sim.run(config.n_steps)
    report(sim, reference, initial_momentum)

    if recorder is not None:
        path = plot_orbits(recorder, config.plot, reference=reference)
        print(f"Orbit plot saved to {path}")

    return sim


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="gravsim - Solar System gravity simulator")

    parser.add_argument('--config', type=str, default=None,
                        help='Load settings from a .json or .yaml config file')
    parser.add_argument('--preset', type=str, default=None, choices=list(PRESETS),
                        help='Preset scenario (default: solar_system)')
    parser.add_argument('--ephemeris', type=str, default=None,
                        help='Reference ephemeris JSON; first snapshot is the initial state, last is the reference')
    parser.add_argument('--scheme', type=str, default=None,
                        help=f'Integration scheme: number {sorted(SCHEME_NUMBERS)} or name (default: 3)')
    parser.add_argument('--all-schemes', action='store_true',
                        help='Run every scheme in turn and report each')
    parser.add_argument('--steps', type=int, default=None,
                        help='Number of simulation steps (default: 10000)')
    parser.add_argument('--dt', type=float, default=None,
                        help='Time step in days (default: preset duration / steps)')
    parser.add_argument('--mass-convention', type=str, default=None, choices=['gm', 'mass'],
                        help='Use DE-405 GM values or masses in kg')
    parser.add_argument('--probe', type=str, default=None,
                        help='Body used to test predictor-corrector convergence')
    parser.add_argument('--reference-body', type=str, default=None,
                        help='Body whose mass normalizes momentum')
    parser.add_argument('--max-iterations', type=int, default=None,
                        help='Predictor-corrector iteration cap')
    parser.add_argument('--refinement-passes', type=int, default=None,
                        help='Fit passes per quartic step')
    parser.add_argument('--plot', type=str, default=None,
                        help='Write an orbit plot to this image file')
    parser.add_argument('--plot-every', type=int, default=None,
                        help='Record positions for the plot every N steps')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log progress (-v info, -vv debug)')

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')

    try:
        config = load_config(args.config) if args.config else Config()
        overrides = {
            'preset': args.preset,
            'ephemeris': args.ephemeris,
            'scheme': args.scheme,
            'n_steps': args.steps,
            'dt': args.dt,
            'mass_convention': args.mass_convention,
            'probe': args.probe,
            'reference_body': args.reference_body,
            'max_iterations': args.max_iterations,
            'refinement_passes': args.refinement_passes,
            'plot': args.plot,
            'plot_every': args.plot_every,
        }
        config = dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})

        if args.all_schemes:
            for number in sorted(SCHEME_NUMBERS):
                run_simulation(
                    dataclasses.replace(config, scheme=number),
                    label=f"update{number} ({resolve_scheme(number)})",
                )
        else:
            run_simulation(config)
    except GravsimError as e:
        logger.debug("Simulation failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("Simulation complete!")


if __name__ == '__main__':
    main()
